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
Tool parameter table and the resolution policy that fills missing arguments.

Each parameter is resolved in order: a non-empty value from the caller, the
value configured through the environment, the parameter's literal default.
A required parameter left empty by all three is a validation error.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping

from ..CONFIG.settings import (
    ENV_CONTAINERAPP_NAME,
    ENV_DOCKERFILE,
    ENV_DOCKERFILE_FOLDER,
    ENV_DOCKERFILE_TARGET,
    ENV_PROJECT_ID,
    ENV_REGISTRY_NAME,
    ENV_REPOSITORY_NAME,
    Config,
)
from ..errors import FieldValidationError

TRUE_VALUES = ("true", "1")
FALSE_VALUES = ("false", "0")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class FieldSpec:
    """
    Declaration of one string-typed tool parameter.

    Attributes:
        name: Parameter name as seen by the agent.
        description: Human readable description.
        env_var: Environment variable the fallback value came from, if any.
        env_value: Fallback value taken from configuration.
        default: Literal default used when neither caller nor environment supply one.
        title: Short hint shown by clients, e.g. allowed options.
        required: Whether an empty value is an error.
    """

    name: str
    description: str
    env_var: str = ""
    env_value: str = ""
    default: str = ""
    title: str = ""
    required: bool = False

    @property
    def mandatory_for_caller(self) -> bool:
        """Required and nothing to fall back on, so the caller must supply it."""
        return self.required and not self.env_value and not self.default

    def json_schema(self) -> Dict[str, Any]:
        description = self.description
        if self.env_value:
            description = f"{description} (default from {self.env_var}: {self.env_value})"
        elif self.default:
            description = f"{description} (default: {self.default})"

        schema: Dict[str, Any] = {"type": "string", "description": description}
        if self.title:
            schema["title"] = self.title
        fallback = self.env_value or self.default
        if fallback:
            schema["default"] = fallback
        return schema


def default_repository_name(config: Config) -> str:
    """Working directory name, suffixed with the Dockerfile target when one is configured."""
    if config.dockerfile_target and config.dockerfile_target != "-":
        return f"{config.current_dir}-{config.dockerfile_target}"
    return config.current_dir


def build_field_table(config: Config) -> Dict[str, FieldSpec]:
    """
    Builds the parameter table for all tools from the loaded configuration.
    """
    example_image = f"{config.registry_name}.{config.registry_domain}/{config.repository_name}:latest"
    specs = [
        FieldSpec("project_id", "Project ID for Container Apps (can be set via CLOUDRU_PROJECT_ID environment variable)",
                  env_var=ENV_PROJECT_ID, env_value=config.project_id, required=True),
        FieldSpec("registry_name", "Registry name",
                  env_var=ENV_REGISTRY_NAME, env_value=config.registry_name, required=True),
        FieldSpec("registry_is_public", "Make registry public", default="false"),
        FieldSpec("repository_name", "Repository name",
                  env_var=ENV_REPOSITORY_NAME, env_value=config.repository_name,
                  default=default_repository_name(config), required=True),
        FieldSpec("image_version", "Image version", default="latest",
                  title="For example: latest or v0.0.1", required=True),
        FieldSpec("show_commands", "If true, return Docker build and push commands without executing them",
                  default="true"),
        FieldSpec("dockerfile_path", "Path to the Dockerfile",
                  env_var=ENV_DOCKERFILE, env_value=config.dockerfile, default="Dockerfile"),
        FieldSpec("dockerfile_target", "Dockerfile target stage ('-' for none)",
                  env_var=ENV_DOCKERFILE_TARGET, env_value=config.dockerfile_target, default="-"),
        FieldSpec("dockerfile_folder", "Dockerfile folder (build context)",
                  env_var=ENV_DOCKERFILE_FOLDER, env_value=config.dockerfile_folder, default="."),
        FieldSpec("containerapp_name", "Container App name (can be set via CLOUDRU_CONTAINERAPP_NAME environment variable)",
                  env_var=ENV_CONTAINERAPP_NAME, env_value=config.containerapp_name,
                  default=config.current_dir, title=f"You can use example: {config.current_dir}"),
        FieldSpec("containerapp_port", "Container App port number",
                  title="You can use example: 8000", required=True),
        FieldSpec("containerapp_image", "Container App image",
                  title=f"Example image: {example_image}", required=True),
        FieldSpec("containerapp_auto_deployments_enabled", "Enable auto deployments", default="false"),
        FieldSpec("containerapp_auto_deployments_pattern", "Auto deployments pattern", default="latest"),
        FieldSpec("containerapp_privileged", "Run container in privileged mode", default="false"),
        FieldSpec("containerapp_idle_timeout",
                  "How long a service stays active without receiving any requests before being shut down",
                  default="600s"),
        FieldSpec("containerapp_timeout",
                  "Maximum time allowed for processing a request before it is terminated",
                  default="60s"),
        FieldSpec("containerapp_cpu", "CPU allocation (0.1 CPU - 256 Mi RAM, 0.2 CPU - 512 Mi RAM, ...)",
                  default="0.1", title="Options: 0.1, 0.2, 0.5, 1"),
        FieldSpec("containerapp_min_instance_count", "Minimum number of instances for scaling", default="0"),
        FieldSpec("containerapp_max_instance_count", "Maximum number of instances for scaling", default="1"),
        FieldSpec("containerapp_description", "Description of the container app"),
        FieldSpec("containerapp_publicly_accessible", "Whether the container app is publicly accessible",
                  default="true"),
        FieldSpec("containerapp_protocol", "Protocol for the container app",
                  default="http_1", title="Options: http_1, http_2"),
        FieldSpec("containerapp_environment_variables",
                  "Environment variables in format <name>='<value>';<next_name>='value2'"),
        FieldSpec("containerapp_command", "Command to run in the container (comma-separated values)"),
        FieldSpec("containerapp_args", "Arguments for the command (comma-separated values)"),
    ]
    return {spec.name: spec for spec in specs}


def as_string(raw: Any) -> str:
    """Coerces a loosely typed argument to the string form every parameter uses."""
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)):
        return str(raw)
    return json.dumps(raw)


def scan_int(value: str) -> int:
    """
    Reads the leading integer of ``value``: "8080" -> 8080, "80abc" -> 80.
    Anything without a leading integer scans to 0.
    """
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else 0


class FieldResolver:
    """
    Resolves tool arguments against a parameter table.
    """

    def __init__(self, fields: Mapping[str, FieldSpec]):
        self.fields = dict(fields)

    def value(self, field: str, arguments: Mapping[str, Any]) -> str:
        """
        Raises:
            FieldValidationError: The field is required and nothing supplies it.
        """
        spec = self.fields[field]
        supplied = as_string(arguments.get(field))
        if supplied:
            return supplied
        if spec.env_value:
            return spec.env_value
        if spec.default:
            return spec.default
        if spec.required:
            raise FieldValidationError(field, f"field {field} is empty: {spec.description}")
        return ""

    def boolean(self, field: str, arguments: Mapping[str, Any]) -> bool:
        """
        Accepts "true"/"1" and "false"/"0" only.
        """
        value = self.value(field, arguments)
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise FieldValidationError(field, f"field {field} must be 'true', 'false', '1', or '0', got: {value}")

    def integer(self, field: str, arguments: Mapping[str, Any]) -> int:
        return scan_int(self.value(field, arguments))

    def input_schema(self, fields: Iterable[str]) -> Dict[str, Any]:
        """JSON schema of a tool taking ``fields``."""
        names = list(fields)
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {name: self.fields[name].json_schema() for name in names},
        }
        required = [name for name in names if self.fields[name].mandatory_for_caller]
        if required:
            schema["required"] = required
        return schema
