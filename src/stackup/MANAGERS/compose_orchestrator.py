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
Orchestration of a compose stack: clean up, rebuild, start, report ports.
"""
import logging
import os
from typing import List, Optional
from ..MODELS.port_mapping import OrchestrationResult
from ..MODELS.settings import Settings
from ..PARSERS.compose_parser import ComposeParser
from ..RUNNERS.command_runner import CommandRunner
from .compose_executor import ComposeExecutor
from .container_reclaimer import ContainerReclaimer
from .endpoint_selector import select_web_url
from .port_discovery import PortDiscovery


class ComposeOrchestrator:
    """
    Runs one provisioning pass over a compose file.

    Every stage finishes before the next one starts, and services are
    handled one at a time in the order the compose file declares them.
    """
    def __init__(self,
                 compose_file: str,
                 work_dir: Optional[str] = None,
                 workspace_path: str = ".",
                 settings: Optional[Settings] = None,
                 runner: Optional[CommandRunner] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the orchestrator.

        :param compose_file: Compose file path, relative to the working directory.
        :param work_dir: Working directory. Falls back to workspace_path.
        :param workspace_path: Directory used when no work_dir is given.
        :param settings: Command and URL settings.
        :param runner: Runner for the docker CLI. Built from settings if omitted.
        :param logger: Sink for all progress and docker output.
        """
        self.settings = settings or Settings()
        self.logger = logger or logging.getLogger("stackup")
        self.compose_file = compose_file
        self.work_dir = work_dir if work_dir is not None else workspace_path
        self.compose_path = os.path.join(self.work_dir, compose_file)
        self.runner = runner or CommandRunner(
            shell=self.settings.shell,
            timeout=self.settings.command_timeout
        )

        docker_bin = self.settings.docker_bin
        self.parser = ComposeParser(logger=self.logger)
        self.reclaimer = ContainerReclaimer(self.runner, docker_bin, logger=self.logger)
        self.executor = ComposeExecutor(
            self.runner, self.compose_path, self.work_dir, docker_bin, logger=self.logger
        )
        self.discovery = PortDiscovery(self.runner, docker_bin, logger=self.logger)

    def services(self) -> List[str]:
        """
        Returns the service names declared in the compose file.

        :raises ManifestNotFoundError: If the compose file does not exist.
        """
        self.logger.info(f"composeFile from user: {self.compose_file}")
        self.logger.info(f"Workspace path: {self.work_dir}")
        self.logger.info(f"Resolved composePath: {self.compose_path}")
        return self.parser.extract_service_names(self.compose_path)

    def run(self) -> OrchestrationResult:
        """
        Clears stale containers, runs `docker compose up -d --build`, then
        discovers the published ports.

        :return: The port table and the primary URL.
        :raises ManifestNotFoundError: If the compose file does not exist.
        :raises ComposeUpError: If docker compose up fails.
        :raises CommandTimeoutError: If docker compose up runs past the timeout.
        """
        services = self.services()
        self.reclaimer.reclaim(services)
        self.executor.up()
        return self._report(services)

    def ports(self) -> OrchestrationResult:
        """
        Discovers ports of an already running stack without touching it.

        :raises ManifestNotFoundError: If the compose file does not exist.
        """
        return self._report(self.services())

    def _report(self, services: List[str]) -> OrchestrationResult:
        table = self.discovery.discover(services)
        web_url = select_web_url(table, host=self.settings.web_host, scheme=self.settings.web_scheme)
        result = OrchestrationResult(services=services, ports=table, web_url=web_url)

        self.logger.info(f"Port mappings: {result.to_output()['ports']}")
        if web_url:
            self.logger.info(f"Web URL: {web_url}")
        else:
            self.logger.info("No published ports discovered, no web URL.")
        return result
