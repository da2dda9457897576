"""
Shared fixtures: a command runner that records calls instead of running docker.
"""
import logging
import re
import pytest
from stackup.UTILS.logging_setup import HANDLER_NAME

NAME_FILTER_RE = re.compile(r"name=([^\s'\"]+)")


class FakeRunner:
    """
    Stands in for CommandRunner. Records every call and replays canned output.
    """
    def __init__(self, up_exit=0, up_stdout=(), up_stderr=(), port_output=None,
                 removal_stdout=(), removal_stderr=()):
        self.up_exit = up_exit
        self.up_stdout = list(up_stdout)
        self.up_stderr = list(up_stderr)
        self.port_output = port_output or {}
        self.removal_stdout = list(removal_stdout)
        self.removal_stderr = list(removal_stderr)
        self.calls = []

    @property
    def removals(self):
        return [service for kind, service in self._shell_calls() if kind == "rm"]

    @property
    def port_queries(self):
        return [service for kind, service in self._shell_calls() if kind == "port"]

    @property
    def compose_runs(self):
        return [call for call in self.calls if call[0] == "run"]

    def _shell_calls(self):
        for call in self.calls:
            if call[0] != "shell":
                continue
            script = call[1]
            service = NAME_FILTER_RE.search(script).group(1)
            yield ("rm" if "rm -f" in script else "port"), service

    def run(self, command, cwd=None, on_stdout=None, on_stderr=None):
        self.calls.append(("run", list(command), cwd))
        for line in self.up_stdout:
            on_stdout(line)
        for line in self.up_stderr:
            on_stderr(line)
        return self.up_exit

    def run_shell(self, script, cwd=None, on_stdout=None, on_stderr=None):
        self.calls.append(("shell", script))
        service = NAME_FILTER_RE.search(script).group(1)
        if "rm -f" in script:
            for line in self.removal_stdout:
                on_stdout(line)
            for line in self.removal_stderr:
                on_stderr(line)
        else:
            for line in self.port_output.get(service, "").splitlines():
                on_stdout(line)
        return 0


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def write_compose(tmp_path):
    """Writes compose content to tmp_path and returns the file name."""
    def _write(content, name="docker-compose.yml"):
        (tmp_path / name).write_text(content)
        return name
    return _write


@pytest.fixture(autouse=True)
def reset_stackup_logger():
    """Drops the handler the CLI installs, which points at a captured stream."""
    logger = logging.getLogger("stackup")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
    logger.setLevel(level)
