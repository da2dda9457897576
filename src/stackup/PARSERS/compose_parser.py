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
Parsers for Docker Compose YAML files.
"""
import logging
import os
from typing import Any, List, Optional
import yaml
from ..exceptions import ManifestNotFoundError


class ComposeParser:
    """
    Reads the service names out of a docker-compose.yml file.
    Only the keys of the top-level `services` mapping are consumed; the
    service definitions themselves are left to docker compose.
    """
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the parser.

        :param logger: Sink for parse warnings.
        """
        self.logger = logger or logging.getLogger("stackup")

    def extract_service_names(self, compose_path: str) -> List[str]:
        """
        Returns the declared service names in document order.

        :param compose_path: Path to the compose file.
        :return: Service names, or an empty list if the file cannot be parsed
            or declares no services.
        :raises ManifestNotFoundError: If the file does not exist.
        """
        if not os.path.isfile(compose_path):
            self.logger.error(f"Compose file NOT FOUND at: {compose_path}")
            raise ManifestNotFoundError(compose_path)

        try:
            with open(compose_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Failed to read compose file for service names: {e}")
            return []
        return self.service_names_from_string(content)

    def service_names_from_string(self, content: str) -> List[str]:
        """
        Returns the declared service names from YAML content.

        :param content: YAML content of the compose file.
        :return: Service names in document order, possibly empty.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            self.logger.warning(f"Failed to parse compose file for service names: {e}")
            return []

        services = self._services_section(data)
        if not services:
            self.logger.warning("No services declared in compose file.")
            return []

        names = [str(name) for name in services.keys()]
        self.logger.info(f"Detected services in compose file: {', '.join(names)}")
        return names

    def _services_section(self, data: Any) -> dict:
        """
        Picks the `services` mapping out of a loaded document.

        :param data: Whatever yaml.safe_load returned.
        :return: The services mapping, or an empty dict if there is none.
        """
        if not isinstance(data, dict):
            return {}
        services = data.get('services')
        if not isinstance(services, dict):
            return {}
        return services
