"""
Selection of the primary URL of a stack.
"""
from ..MODELS.port_mapping import PortTable


def select_web_url(table: PortTable, host: str = "localhost", scheme: str = "http") -> str:
    """
    Derives the URL from the first mapping of the first service, in table
    order, that published anything.

    :param table: Service name -> mappings, in manifest order.
    :param host: Host to put in the URL.
    :param scheme: Scheme to put in the URL.
    :return: The URL, or an empty string if no service published a port.
    """
    for mappings in table.values():
        if mappings:
            return f"{scheme}://{host}:{mappings[0].host_port}"
    return ""
