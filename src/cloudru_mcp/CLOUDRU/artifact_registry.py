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
Client for the Cloud.ru Artifact Registry API.
"""

from typing import List
from urllib.parse import quote

from ..CONFIG.settings import Config
from ..MODELS.registry import DOCKER_REGISTRY_TYPE, DockerRegistry
from .auth import TokenProvider
from .client import AuthenticatedClient
from .mapping import parse_object, unwrap_envelope


class ArtifactRegistryClient(AuthenticatedClient):
    """
    Lists and creates Docker registries. Registries of other types are invisible here.
    """

    @classmethod
    def from_config(cls, config: Config, token_provider: TokenProvider) -> "ArtifactRegistryClient":
        return cls(config.api.artifact, token_provider)

    @staticmethod
    def _registries_path(project_id: str) -> str:
        return f"/v1/projects/{quote(project_id, safe='')}/registries"

    def list_docker_registries(self, project_id: str) -> List[DockerRegistry]:
        """
        Lists the project's registries, keeping only DOCKER ones in upstream order.
        """
        response = self._send("list_docker_registries", "GET", self._registries_path(project_id)).expect(200)
        registries = unwrap_envelope(response, "registries", DockerRegistry, "registries")
        return [r for r in registries if r.registry_type == DOCKER_REGISTRY_TYPE]

    def create_docker_registry(self, project_id: str, name: str, is_public: bool) -> DockerRegistry:
        """
        Creates a Docker registry.

        Args:
            project_id: Cloud.ru project id.
            name: Registry name; also the first label of its hostname.
            is_public: Whether images can be pulled anonymously.
        """
        payload = {"name": name, "isPublic": is_public, "registryType": DOCKER_REGISTRY_TYPE}
        response = self._send(
            "create_docker_registry", "POST", self._registries_path(project_id), payload=payload
        ).expect(200, 201)
        return parse_object(response, DockerRegistry, "registry")
