"""
Severity classification for lines printed by the docker CLI.
"""
import logging

STDOUT = "stdout"
STDERR = "stderr"

# docker compose narrates routine progress on stderr
RECREATION_TOKENS = ("Creating", "Created", "Recreating", "Recreated")
LOW_SEVERITY_MARKERS = ("level=warning",)


def classify_line(line: str, stream: str = STDERR) -> int:
    """
    Picks the log level for one line of docker output.

    :param line: The output line.
    :param stream: Which stream the line came from, STDOUT or STDERR.
    :return: A logging level (logging.INFO, logging.WARNING or logging.ERROR).
    """
    if stream == STDOUT:
        return logging.INFO
    if any(token in line for token in RECREATION_TOKENS):
        return logging.INFO
    if any(marker in line for marker in LOW_SEVERITY_MARKERS):
        return logging.WARNING
    return logging.ERROR


def prefix_for(level: int) -> str:
    """
    Label prepended to forwarded docker lines.
    """
    if level == logging.ERROR:
        return "DOCKER ERR"
    if level == logging.WARNING:
        return "DOCKER WARN"
    return "DOCKER OUT"
