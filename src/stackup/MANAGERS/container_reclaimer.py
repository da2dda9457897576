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
Removal of stale containers left behind by earlier runs.
"""
import logging
import shlex
from typing import List, Optional
from ..RUNNERS.command_runner import CommandRunner
from ..exceptions import CommandTimeoutError


def removal_script(service: str, docker_bin: str = "docker") -> str:
    """
    Builds the pipeline that force-removes every container, running or
    stopped, whose name matches the service.

    :param service: The service name.
    :param docker_bin: The docker CLI to call.
    :return: A shell pipeline.
    """
    docker = shlex.quote(docker_bin)
    name_filter = shlex.quote(f"name={service}")
    return (
        f'{docker} ps -a --filter {name_filter} --format "{{{{.Names}}}}"'
        f' | xargs -r {docker} rm -f'
    )


class ContainerReclaimer:
    """
    Best-effort cleanup so a rebuild never collides with leftover containers.
    Exit codes are not inspected: if a conflict survives, `compose up` fails
    on its own.
    """
    def __init__(self,
                 runner: CommandRunner,
                 docker_bin: str = "docker",
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the reclaimer.

        :param runner: Runner used for the removal pipelines.
        :param docker_bin: The docker CLI to call.
        :param logger: Sink for docker output.
        """
        self.runner = runner
        self.docker_bin = docker_bin
        self.logger = logger or logging.getLogger("stackup")

    def reclaim(self, services: List[str]):
        """
        Removes matching containers for each service, one service at a time
        in the order given.

        :param services: Service names in manifest order.
        """
        for service in services:
            self.reclaim_service(service)

    def reclaim_service(self, service: str):
        """
        Removes all containers matching one service. A no-op if none exist.

        :param service: The service name.
        """
        try:
            self.runner.run_shell(
                removal_script(service, self.docker_bin),
                on_stdout=lambda line: self.logger.info(f"DOCKER OUT: {line}"),
                on_stderr=lambda line: self.logger.warning(f"DOCKER WARN: {line}"),
            )
        except CommandTimeoutError as e:
            self.logger.warning(f"Container removal for {service} did not finish: {e}")
            return
        self.logger.info(f"Removed any existing containers matching: {service}")
