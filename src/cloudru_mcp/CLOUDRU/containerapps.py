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
Client for the Cloud.ru Container Apps API.
"""

from typing import List, Optional
from urllib.parse import quote

from ..CONFIG.settings import Config
from ..MODELS.container_app import (
    ContainerApp,
    ContainerAppLogEntry,
    ContainerAppLogs,
    ContainerAppSystemLogEntry,
    ContainerAppSystemLogs,
    CreateContainerAppRequest,
)
from .auth import TokenProvider
from .client import AuthenticatedClient
from .mapping import DEFAULTS, ContainerAppDefaults, build_container_app_payload, parse_object, unwrap_envelope
from .transport import HttpTransport


class ContainerAppsClient(AuthenticatedClient):
    """
    Lifecycle operations on Container Apps.
    Resources are created whole and deleted whole; nothing is patched.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        transport: Optional[HttpTransport] = None,
        defaults: ContainerAppDefaults = DEFAULTS,
    ):
        super().__init__(base_url, token_provider, transport)
        self.defaults = defaults

    @classmethod
    def from_config(cls, config: Config, token_provider: TokenProvider) -> "ContainerAppsClient":
        return cls(config.api.containers, token_provider)

    @staticmethod
    def _app_path(version: str, name: str, suffix: str = "") -> str:
        return f"/{version}/containers/{quote(name, safe='')}{suffix}"

    def list_container_apps(self, project_id: str) -> List[ContainerApp]:
        """
        Lists the Container Apps of a project.

        Args:
            project_id: Cloud.ru project id.

        Returns:
            Apps in upstream order; empty when the project has none.
        """
        response = self._send(
            "list_container_apps", "GET", "/v1/containers", params={"projectId": project_id}
        ).expect(200)
        return unwrap_envelope(response, "data", ContainerApp, "containerapps")

    def get_container_app(self, project_id: str, name: str) -> ContainerApp:
        """
        Fetches a single Container App by name.
        """
        response = self._send(
            "get_container_app", "GET", self._app_path("v1", name), params={"projectId": project_id}
        ).expect(200)
        return parse_object(response, ContainerApp, "containerapp")

    def create_container_app(self, request: CreateContainerAppRequest) -> ContainerApp:
        """
        Creates a Container App.

        Args:
            request: Create request. Empty optional fields are filled from
                the client's defaults table before the payload is built.

        Returns:
            The app as echoed back by the API.
        """
        payload = build_container_app_payload(request, self.defaults)
        response = self._send("create_container_app", "POST", "/v2/containers/", payload=payload).expect(200, 201)
        return parse_object(response, ContainerApp, "containerapp")

    def delete_container_app(self, project_id: str, name: str) -> None:
        self._send(
            "delete_container_app", "DELETE", self._app_path("v2", name), params={"projectId": project_id}
        ).expect(200, 204)

    def start_container_app(self, project_id: str, name: str) -> None:
        self._send(
            "start_container_app", "POST", self._app_path("v2", name, ":start"), params={"projectId": project_id}
        ).expect(200)

    def stop_container_app(self, project_id: str, name: str) -> None:
        self._send(
            "stop_container_app", "POST", self._app_path("v2", name, ":stop"), params={"projectId": project_id}
        ).expect(200)

    def get_container_app_logs(self, project_id: str, name: str) -> ContainerAppLogs:
        """
        Application logs of a Container App, oldest first as returned upstream.
        """
        response = self._send(
            "get_container_app_logs", "GET", self._app_path("v2", name, "/logs"), params={"projectId": project_id}
        ).expect(200)
        return ContainerAppLogs(data=unwrap_envelope(response, "data", ContainerAppLogEntry, "container app logs"))

    def get_container_app_system_logs(self, project_id: str, name: str) -> ContainerAppSystemLogs:
        """
        Platform events (scheduling, pulls, restarts) of a Container App.
        """
        response = self._send(
            "get_container_app_system_logs",
            "GET",
            self._app_path("v2", name, "/systemLogs"),
            params={"projectId": project_id},
        ).expect(200)
        return ContainerAppSystemLogs(
            data=unwrap_envelope(response, "data", ContainerAppSystemLogEntry, "container app system logs")
        )
