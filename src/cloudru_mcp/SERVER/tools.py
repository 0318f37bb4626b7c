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
The tool surface: every client operation as a named, parameterized callable.

Tool handlers take the loosely typed argument mapping sent by the agent,
resolve it through the parameter table and return text. Failures come back
as error results, never as exceptions.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..BUILDERS.docker_builder import DockerInvoker
from ..CLOUDRU.artifact_registry import ArtifactRegistryClient
from ..CLOUDRU.auth import TokenProvider
from ..CLOUDRU.containerapps import ContainerAppsClient
from ..CLOUDRU.transport import HttpTransport
from ..CONFIG.settings import Config
from ..MODELS.container_app import CreateContainerAppRequest
from ..MODELS.registry import DockerImage
from ..UTILS.sequences import limit
from ..errors import CloudruError
from .description import render_description
from .fields import FieldResolver, build_field_table

logger = logging.getLogger(__name__)

SYSTEM_LOGS_LIMIT = 200

APP_FIELDS = ("project_id", "containerapp_name")

CREATE_FIELDS = (
    "project_id",
    "containerapp_name",
    "containerapp_port",
    "containerapp_image",
    "containerapp_auto_deployments_enabled",
    "containerapp_auto_deployments_pattern",
    "containerapp_privileged",
    "containerapp_idle_timeout",
    "containerapp_timeout",
    "containerapp_cpu",
    "containerapp_min_instance_count",
    "containerapp_max_instance_count",
    "containerapp_description",
    "containerapp_publicly_accessible",
    "containerapp_protocol",
    "containerapp_environment_variables",
    "containerapp_command",
    "containerapp_args",
)

BUILD_FIELDS = (
    "registry_name",
    "repository_name",
    "image_version",
    "dockerfile_path",
    "dockerfile_target",
    "dockerfile_folder",
    "show_commands",
)

Arguments = Mapping[str, Any]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    fields: Tuple[str, ...]
    handler: Callable[[Arguments], str]


@dataclass(frozen=True)
class ToolResult:
    """Text returned to the agent; ``is_error`` marks a failed call."""

    text: str
    is_error: bool = False


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


class CloudruTools:
    """
    Binds the Cloud.ru clients and the Docker invoker to named tools.
    """

    def __init__(
        self,
        config: Config,
        container_apps: ContainerAppsClient,
        registries: ArtifactRegistryClient,
        docker: DockerInvoker,
        resolver: Optional[FieldResolver] = None,
    ):
        self.config = config
        self.container_apps = container_apps
        self.registries = registries
        self.docker = docker
        self.resolver = resolver or FieldResolver(build_field_table(config))
        self._definitions = {d.name: d for d in self._build_definitions()}

    @classmethod
    def from_config(cls, config: Config, transport: Optional[HttpTransport] = None) -> "CloudruTools":
        """Wires every client from the configuration, sharing one token provider."""
        token_provider = TokenProvider.from_config(config, transport)
        return cls(
            config,
            ContainerAppsClient.from_config(config, token_provider),
            ArtifactRegistryClient.from_config(config, token_provider),
            DockerInvoker.from_config(config, token_provider),
        )

    def _build_definitions(self) -> List[ToolDefinition]:
        return [
            ToolDefinition("cloudru_containerapps_description",
                           "Returns usage instructions for Cloud.ru Container Apps MCP",
                           (), self.describe),
            ToolDefinition("cloudru_docker_login",
                           "Login to Cloud.ru Artifact registry (Docker registry)",
                           ("registry_name",), self.docker_login),
            ToolDefinition("cloudru_docker_build_and_push",
                           "Build and push Docker image to Cloud.ru Artifact Registry (Docker registry)",
                           BUILD_FIELDS, self.docker_build_and_push),
            ToolDefinition("cloudru_get_list_containerapps",
                           "Get list of Container Apps from Cloud.ru. Project ID can be set via "
                           "CLOUDRU_PROJECT_ID environment variable and obtained from console.cloud.ru",
                           ("project_id",), self.list_container_apps),
            ToolDefinition("cloudru_get_containerapp",
                           "Get a specific Container App from Cloud.ru by name",
                           APP_FIELDS, self.get_container_app),
            ToolDefinition("cloudru_create_containerapp",
                           "Create a new Container App in Cloud.ru",
                           CREATE_FIELDS, self.create_container_app),
            ToolDefinition("cloudru_delete_containerapp",
                           "Delete a Container App from Cloud.ru. WARNING: This action cannot be undone!",
                           APP_FIELDS, self.delete_container_app),
            ToolDefinition("cloudru_start_containerapp",
                           "Start a Container App in Cloud.ru",
                           APP_FIELDS, self.start_container_app),
            ToolDefinition("cloudru_stop_containerapp",
                           "Stop a Container App in Cloud.ru",
                           APP_FIELDS, self.stop_container_app),
            ToolDefinition("cloudru_get_containerapp_logs",
                           "Get logs for a specific Container App from Cloud.ru by name",
                           APP_FIELDS, self.get_container_app_logs),
            ToolDefinition("cloudru_get_containerapp_system_logs",
                           f"Get system logs (at most {SYSTEM_LOGS_LIMIT} records) for a specific "
                           f"Container App from Cloud.ru by name",
                           APP_FIELDS, self.get_container_app_system_logs),
            ToolDefinition("cloudru_get_list_docker_registries",
                           "Get list of Docker Registries from Cloud.ru. Project ID can be set via "
                           "CLOUDRU_PROJECT_ID environment variable and obtained from console.cloud.ru",
                           ("project_id",), self.list_docker_registries),
            ToolDefinition("cloudru_create_docker_registry",
                           "Create a new Docker Registry in Cloud.ru",
                           ("project_id", "registry_name", "registry_is_public"), self.create_docker_registry),
            ToolDefinition("cloudru_get_registry_images",
                           "Get list of images from a Docker registry in Cloud.ru",
                           ("registry_name",), self.get_registry_images),
        ]

    def definitions(self) -> List[ToolDefinition]:
        return list(self._definitions.values())

    def input_schema(self, name: str) -> Dict[str, Any]:
        return self.resolver.input_schema(self._definitions[name].fields)

    def call(self, name: str, arguments: Optional[Arguments] = None) -> ToolResult:
        """
        Invokes a tool by name.

        Args:
            name: Tool name.
            arguments: Raw arguments from the agent; missing ones are resolved
                from the environment or defaults.

        Returns:
            The tool output, or an error result carrying the failure message.
        """
        definition = self._definitions.get(name)
        if definition is None:
            return ToolResult(f"Unknown tool: {name}", is_error=True)

        try:
            return ToolResult(definition.handler(arguments or {}))
        except CloudruError as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResult(str(e), is_error=True)

    # Handlers

    def describe(self, arguments: Arguments) -> str:
        return render_description(self.config, SYSTEM_LOGS_LIMIT)

    def docker_login(self, arguments: Arguments) -> str:
        registry_name = self.resolver.value("registry_name", arguments)
        target = self.docker.login(registry_name)
        return f"Successfully login to Cloud.ru Artifact Registry: {target}"

    def docker_build_and_push(self, arguments: Arguments) -> str:
        resolve = self.resolver.value
        image = DockerImage(
            registry_name=resolve("registry_name", arguments),
            repository_name=resolve("repository_name", arguments),
            image_version=resolve("image_version", arguments),
            dockerfile_path=resolve("dockerfile_path", arguments),
            dockerfile_target=resolve("dockerfile_target", arguments),
            dockerfile_folder=resolve("dockerfile_folder", arguments),
        )

        if self.resolver.boolean("show_commands", arguments):
            build_cmd, push_cmd = self.docker.show_commands(image)
            return f"Run Docker build command:\n{build_cmd}\n and then run docker push command:\n{push_cmd}"

        tag = self.docker.build_and_push(image)
        return f"Successfully built and pushed Docker image to Cloud.ru Artifact Registry: {tag}"

    def _app_target(self, arguments: Arguments) -> Tuple[str, str]:
        return (
            self.resolver.value("project_id", arguments),
            self.resolver.value("containerapp_name", arguments),
        )

    def list_container_apps(self, arguments: Arguments) -> str:
        project_id = self.resolver.value("project_id", arguments)
        apps = self.container_apps.list_container_apps(project_id)
        return format_json([app.to_json_dict() for app in apps])

    def get_container_app(self, arguments: Arguments) -> str:
        app = self.container_apps.get_container_app(*self._app_target(arguments))
        return format_json(app.to_json_dict())

    def create_container_app(self, arguments: Arguments) -> str:
        resolve = self.resolver.value
        boolean = self.resolver.boolean
        integer = self.resolver.integer

        request = CreateContainerAppRequest(
            project_id=resolve("project_id", arguments),
            name=resolve("containerapp_name", arguments),
            port=integer("containerapp_port", arguments),
            image=resolve("containerapp_image", arguments),
            auto_deployments_enabled=boolean("containerapp_auto_deployments_enabled", arguments),
            auto_deployments_pattern=resolve("containerapp_auto_deployments_pattern", arguments),
            privileged=boolean("containerapp_privileged", arguments),
            idle_timeout=resolve("containerapp_idle_timeout", arguments),
            timeout=resolve("containerapp_timeout", arguments),
            cpu=resolve("containerapp_cpu", arguments),
            min_instance_count=integer("containerapp_min_instance_count", arguments),
            max_instance_count=integer("containerapp_max_instance_count", arguments),
            description=resolve("containerapp_description", arguments),
            publicly_accessible=boolean("containerapp_publicly_accessible", arguments),
            protocol=resolve("containerapp_protocol", arguments),
            environment_variables=resolve("containerapp_environment_variables", arguments),
            command=resolve("containerapp_command", arguments),
            args=resolve("containerapp_args", arguments),
        )

        app = self.container_apps.create_container_app(request)
        return f"Successfully created Container App: {request.name}\n{format_json(app.to_json_dict())}"

    def delete_container_app(self, arguments: Arguments) -> str:
        project_id, name = self._app_target(arguments)
        self.container_apps.delete_container_app(project_id, name)
        return f"Successfully deleted Container App: {name}"

    def start_container_app(self, arguments: Arguments) -> str:
        project_id, name = self._app_target(arguments)
        self.container_apps.start_container_app(project_id, name)
        return f"Successfully started Container App: {name}"

    def stop_container_app(self, arguments: Arguments) -> str:
        project_id, name = self._app_target(arguments)
        self.container_apps.stop_container_app(project_id, name)
        return f"Successfully stopped Container App: {name}"

    def get_container_app_logs(self, arguments: Arguments) -> str:
        logs = self.container_apps.get_container_app_logs(*self._app_target(arguments))
        return format_json(logs.to_json_dict())

    def get_container_app_system_logs(self, arguments: Arguments) -> str:
        logs = self.container_apps.get_container_app_system_logs(*self._app_target(arguments))
        entries = limit(logs.data, SYSTEM_LOGS_LIMIT)
        return format_json({"data": [entry.to_json_dict() for entry in entries]})

    def list_docker_registries(self, arguments: Arguments) -> str:
        project_id = self.resolver.value("project_id", arguments)
        registries = self.registries.list_docker_registries(project_id)
        return format_json([registry.to_json_dict() for registry in registries])

    def create_docker_registry(self, arguments: Arguments) -> str:
        project_id = self.resolver.value("project_id", arguments)
        registry_name = self.resolver.value("registry_name", arguments)
        is_public = self.resolver.boolean("registry_is_public", arguments)

        registry = self.registries.create_docker_registry(project_id, registry_name, is_public)
        return f"Successfully created Docker Registry: {registry_name}\n{format_json(registry.to_json_dict())}"

    def get_registry_images(self, arguments: Arguments) -> str:
        registry_name = self.resolver.value("registry_name", arguments)
        images = self.docker.get_registry_images(registry_name)
        return format_json([image.to_json_dict() for image in images])
