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
Exceptions raised by the orchestration pipeline.
"""
from typing import List, Optional


class StackupError(Exception):
    """
    Base class for all fatal orchestration errors.
    """


class ManifestNotFoundError(StackupError):
    """
    Raised when the compose file does not exist at the resolved path.
    Nothing has been touched on the runtime when this is raised.
    """
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Compose file not found: {path}")


class ComposeUpError(StackupError):
    """
    Raised when `docker compose up` finishes with a non-zero exit code.
    """
    def __init__(self, exit_code: int):
        self.exit_code = exit_code
        super().__init__(f"docker compose up exited with code {exit_code}")


class CommandTimeoutError(StackupError):
    """
    Raised when a child process runs past the configured deadline.
    The child has already been killed.
    """
    def __init__(self, command: List[str], timeout: Optional[float]):
        self.command = command
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout}s: {' '.join(command)}")
