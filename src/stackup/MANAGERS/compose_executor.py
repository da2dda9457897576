"""
Build-and-start step: `docker compose up -d --build`.
"""
import logging
from typing import List, Optional
from ..RUNNERS.command_runner import CommandRunner
from ..RUNNERS.output_classifier import STDERR, classify_line, prefix_for
from ..exceptions import CommandTimeoutError, ComposeUpError


class ComposeExecutor:
    """
    Builds images and starts every service of a compose file, detached.
    Unlike cleanup, a failure here is fatal.
    """
    def __init__(self,
                 runner: CommandRunner,
                 compose_path: str,
                 work_dir: str,
                 docker_bin: str = "docker",
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the executor.

        :param runner: Runner used for the compose command.
        :param compose_path: Resolved path of the compose file.
        :param work_dir: Directory the command runs in.
        :param docker_bin: The docker CLI to call.
        :param logger: Sink for docker output.
        """
        self.runner = runner
        self.compose_path = compose_path
        self.work_dir = work_dir
        self.docker_bin = docker_bin
        self.logger = logger or logging.getLogger("stackup")

    def command(self) -> List[str]:
        return [self.docker_bin, "compose", "-f", self.compose_path, "up", "-d", "--build"]

    def up(self):
        """
        Runs the compose command once and waits for it.

        :raises ComposeUpError: If the command exits non-zero.
        :raises CommandTimeoutError: If the command runs past the runner's timeout.
        """
        self.logger.info("Starting Docker Compose with rebuild...")
        try:
            exit_code = self.runner.run(
                self.command(),
                cwd=self.work_dir,
                on_stdout=lambda line: self.logger.info(f"DOCKER OUT: {line}"),
                on_stderr=self._log_stderr,
            )
        except CommandTimeoutError as e:
            self.logger.error(f"docker compose up did not finish: {e}")
            raise

        if exit_code != 0:
            self.logger.error(f"docker compose up exited with code {exit_code}")
            raise ComposeUpError(exit_code)
        self.logger.info("Docker Compose executed successfully.")

    def _log_stderr(self, line: str):
        if not line.strip():
            return
        # compose mixes progress and real failures on stderr
        level = classify_line(line, STDERR)
        self.logger.log(level, f"{prefix_for(level)}: {line}")
