"""
Parser for the output of `docker port`.
"""
import re
from typing import List, Optional
from ..MODELS.port_mapping import PortMapping

# e.g. "80/tcp -> 0.0.0.0:32768"
PORT_LINE_RE = re.compile(r'^(\d+)/tcp -> [^:]+:(\d+)$')


def parse_port_line(line: str) -> Optional[PortMapping]:
    """
    Parses one line of `docker port` output.

    :param line: A single output line, with or without its newline.
    :return: A PortMapping, or None if the line is not a TCP binding.
    """
    match = PORT_LINE_RE.match(line.rstrip('\r\n'))
    if not match:
        return None
    return PortMapping(container_port=match.group(1), host_port=match.group(2))


def parse_port_output(output: str) -> List[PortMapping]:
    """
    Parses the full output of one or more `docker port` calls.
    Lines that are not TCP bindings (UDP, IPv6 listeners, blanks, anything
    unexpected) are dropped.

    :param output: Raw text output.
    :return: Mappings in the order they were reported.
    """
    mappings = []
    for line in output.splitlines():
        mapping = parse_port_line(line)
        if mapping is not None:
            mappings.append(mapping)
    return mappings
