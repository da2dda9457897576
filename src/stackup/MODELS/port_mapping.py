"""
Models for the port bindings discovered after the stack is up.
"""
from typing import Dict, List, Any
from pydantic import BaseModel, Field


class PortMapping(BaseModel):
    """
    One TCP publish binding reported by the runtime.
    Both ports are kept as the decimal strings the runtime printed.
    """
    container_port: str
    host_port: str

    def to_output(self) -> Dict[str, str]:
        return {"containerPort": self.container_port, "hostPort": self.host_port}


# Service name -> bindings, in manifest order.
PortTable = Dict[str, List[PortMapping]]


class OrchestrationResult(BaseModel):
    """
    Outcome of a completed orchestration run.
    """
    services: List[str] = []
    ports: Dict[str, List[PortMapping]] = Field(default_factory=dict)
    web_url: str = ""

    def to_output(self) -> Dict[str, Any]:
        """
        Returns the result in the shape handed back to a calling system.

        :return: A JSON-serializable dictionary with `ports` and `webUrl`.
        """
        return {
            "ports": {
                name: [m.to_output() for m in mappings]
                for name, mappings in self.ports.items()
            },
            "webUrl": self.web_url,
        }
