# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Discovery of the host ports the runtime assigned to each service.
"""
import logging
import shlex
from typing import List, Optional
from ..MODELS.port_mapping import PortMapping, PortTable
from ..PARSERS.port_parser import parse_port_output
from ..RUNNERS.command_runner import CommandRunner
from ..exceptions import CommandTimeoutError


def port_query_script(service: str, docker_bin: str = "docker") -> str:
    """
    Builds the pipeline listing the published ports of every live container
    matching the service.

    :param service: The service name.
    :param docker_bin: The docker CLI to call.
    :return: A shell pipeline.
    """
    docker = shlex.quote(docker_bin)
    name_filter = shlex.quote(f"name={service}")
    return (
        f'{docker} ps --filter {name_filter} --format "{{{{.ID}}}}"'
        f' | xargs -r -n1 {docker} port'
    )


class PortDiscovery:
    """
    Queries the runtime for published ports, one service at a time.
    A service with no live container or no published ports gets an empty
    list; that is not an error.
    """
    def __init__(self,
                 runner: CommandRunner,
                 docker_bin: str = "docker",
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the discovery service.

        :param runner: Runner used for the port queries.
        :param docker_bin: The docker CLI to call.
        :param logger: Sink for docker output.
        """
        self.runner = runner
        self.docker_bin = docker_bin
        self.logger = logger or logging.getLogger("stackup")

    def discover(self, services: List[str]) -> PortTable:
        """
        Builds the port table.

        :param services: Service names in manifest order.
        :return: Service name -> mappings, keyed in the same order.
        """
        table: PortTable = {}
        for service in services:
            table[service] = self.discover_service(service)
        return table

    def discover_service(self, service: str) -> List[PortMapping]:
        """
        Returns the TCP bindings of one service in the order docker reported them.

        :param service: The service name.
        :return: The mappings, possibly empty.
        """
        lines: List[str] = []
        try:
            self.runner.run_shell(
                port_query_script(service, self.docker_bin),
                on_stdout=lines.append,
                on_stderr=lambda line: self.logger.warning(f"DOCKER WARN: {line}"),
            )
        except CommandTimeoutError as e:
            self.logger.warning(f"Port query for {service} did not finish: {e}")
            return []
        return parse_port_output("\n".join(lines))
