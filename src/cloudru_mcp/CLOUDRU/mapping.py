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
Request/response mapping between typed models and the upstream JSON shapes.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..MODELS.container_app import CreateContainerAppRequest
from ..PARSERS.env_parser import EnvParser, split_comma_list
from ..errors import ResponseParseError
from .transport import ApiResponse

ModelT = TypeVar("ModelT", bound=BaseModel)

# CPU tier -> memory size. The first entry is the fallback tier.
CPU_MEMORY: Dict[str, str] = {
    "0.1": "256Mi",
    "0.2": "512Mi",
    "0.5": "1Gi",
    "1": "2Gi",
}
FALLBACK_CPU = "0.1"


@dataclass(frozen=True)
class ContainerAppDefaults:
    """
    Values substituted into a create payload when the request leaves them empty.
    """

    idle_timeout: str = "600s"
    timeout: str = "60s"
    cpu: str = FALLBACK_CPU
    min_instance_count: int = 0
    max_instance_count: int = 1
    protocol: str = "http"
    description_template: str = "Container App {name} created via MCP"


DEFAULTS = ContainerAppDefaults()


def resolve_resources(cpu: str) -> Tuple[str, str]:
    """
    Maps a CPU tier to ``(cpu, memory)``.
    Unknown tiers silently become the smallest one.
    """
    if cpu in CPU_MEMORY:
        return cpu, CPU_MEMORY[cpu]
    return FALLBACK_CPU, CPU_MEMORY[FALLBACK_CPU]


def build_container_app_payload(
    request: CreateContainerAppRequest, defaults: ContainerAppDefaults = DEFAULTS
) -> Dict[str, Any]:
    """
    Builds the JSON body for ``POST /v2/containers/``.

    Args:
        request: Create request as resolved by the tool surface.
        defaults: Table of fallbacks for fields still empty.

    Returns:
        The payload as a plain dictionary.
    """
    cpu, memory = resolve_resources(request.cpu or defaults.cpu)
    max_instances = request.max_instance_count or defaults.max_instance_count
    min_instances = request.min_instance_count or defaults.min_instance_count
    description = request.description or defaults.description_template.format(name=request.name)

    container: Dict[str, Any] = {
        "name": request.name,
        "image": request.image,
        "containerPort": request.port,
        "resources": {"cpu": cpu, "memory": memory},
        "env": [
            var.model_dump(by_alias=True)
            for var in EnvParser.parse_from_string(request.environment_variables)
        ],
    }

    command = split_comma_list(request.command)
    if command:
        container["command"] = command
    args = split_comma_list(request.args)
    if args:
        container["args"] = args

    return {
        "name": request.name,
        "projectId": request.project_id,
        "description": description,
        "configuration": {
            "ingress": {"publiclyAccessible": request.publicly_accessible},
            "autoDeployments": {
                "enabled": request.auto_deployments_enabled,
                "pattern": request.auto_deployments_pattern,
            },
            "privileged": request.privileged,
        },
        "template": {
            "timeout": request.timeout or defaults.timeout,
            "idleTimeout": request.idle_timeout or defaults.idle_timeout,
            "protocol": request.protocol or defaults.protocol,
            "scaling": {
                "minInstanceCount": min_instances,
                "maxInstanceCount": max_instances,
            },
            "containers": [container],
        },
    }


def decode_json(response: ApiResponse, label: str) -> Any:
    """Parses the body as JSON, raising ResponseParseError with the body attached."""
    try:
        return json.loads(response.body)
    except ValueError as e:
        raise ResponseParseError(
            f"failed to parse {label} response: {e} body length: {len(response.body)} body: {response.text}",
            body=response.text,
        ) from e


def validate_model(model: Type[ModelT], data: Any, response: ApiResponse, label: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(
            f"failed to parse {label} response: {e} body length: {len(response.body)} body: {response.text}",
            body=response.text,
        ) from e


def parse_object(response: ApiResponse, model: Type[ModelT], label: str) -> ModelT:
    """
    Decodes a non-empty body into ``model``.

    Raises:
        ResponseParseError: On an empty body, invalid JSON or a shape mismatch.
    """
    if response.is_empty:
        raise ResponseParseError(f"API returned empty response body with status {response.status}")
    return validate_model(model, decode_json(response, label), response, label)


def envelope_items(response: ApiResponse, key: str, label: str) -> List[Any]:
    """
    Returns the raw array under ``key`` of a ``{"<key>": [...]}`` body.
    An empty body, a missing key or a null array all give an empty list.
    """
    if response.is_empty:
        return []

    data = decode_json(response, label)
    if not isinstance(data, dict):
        raise ResponseParseError(
            f"failed to parse {label} response: expected an object with '{key}' "
            f"body length: {len(response.body)} body: {response.text}",
            body=response.text,
        )

    items = data.get(key) or []
    if not isinstance(items, list):
        raise ResponseParseError(
            f"failed to parse {label} response: '{key}' is not an array "
            f"body length: {len(response.body)} body: {response.text}",
            body=response.text,
        )
    return items


def unwrap_envelope(response: ApiResponse, key: str, model: Type[ModelT], label: str) -> List[ModelT]:
    """Decodes ``{"<key>": [...]}`` into a list of ``model``."""
    return [validate_model(model, item, response, label) for item in envelope_items(response, key, label)]
