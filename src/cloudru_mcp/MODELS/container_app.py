"""
Models describing Cloud.ru Container Apps, their creation requests and logs.
"""
from typing import Any, List

from pydantic import BaseModel, Field

from .base import CloudruModel


class Ingress(CloudruModel):
    publicly_accessible: bool = False
    public_uri: str = ""


class AutoDeployments(CloudruModel):
    enabled: bool = False
    pattern: str = ""


class Configuration(CloudruModel):
    ingress: Ingress = Field(default_factory=Ingress)
    auto_deployments: AutoDeployments = Field(default_factory=AutoDeployments)
    privileged: bool = False


class ScalingRuleValue(CloudruModel):
    soft: int = 0
    hard: int = 0


class ScalingRule(CloudruModel):
    type: str = ""
    value: ScalingRuleValue = Field(default_factory=ScalingRuleValue)


class Scaling(CloudruModel):
    min_instance_count: int = 0
    max_instance_count: int = 0
    rule: ScalingRule = Field(default_factory=ScalingRule)


class Resources(CloudruModel):
    cpu: str = ""
    memory: str = ""


class EnvVar(CloudruModel):
    """A single container environment variable. Type is "plain" for values set by this tool."""
    name: str = ""
    value: str = ""
    type: str = ""


class VolumeMount(CloudruModel):
    name: str = ""
    mount_path: str = ""
    read_only: bool = False


class Container(CloudruModel):
    """
    One container of a Container App template.
    """
    name: str = ""
    image: str = ""
    resources: Resources = Field(default_factory=Resources)
    container_port: int = 0
    env: List[EnvVar] = []
    command: List[Any] = []
    args: List[Any] = []
    volume_mounts: List[VolumeMount] = []


class VolumeAttributes(CloudruModel):
    bucket_name: str = ""
    tenant_id: str = ""
    region: str = ""
    read_only: str = ""
    entrypoint: str = ""


class Volume(CloudruModel):
    name: str = ""
    type: str = ""
    volume_attributes: VolumeAttributes = Field(default_factory=VolumeAttributes)


class Template(CloudruModel):
    """
    Runtime template of a Container App: timeouts, protocol, scaling and containers.
    """
    timeout: str = ""
    idle_timeout: str = ""
    protocol: str = ""
    scaling: Scaling = Field(default_factory=Scaling)
    containers: List[Container] = []
    init_containers: List[Any] = []
    volumes: List[Volume] = []


class ContainerApp(CloudruModel):
    """
    A Cloud.ru managed serverless container, as returned by the Containers API.
    """
    project_id: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    status: str = ""
    configuration: Configuration = Field(default_factory=Configuration)
    template: Template = Field(default_factory=Template)


class CreateContainerAppRequest(BaseModel):
    """
    Input of the create operation. Environment variables, command and args
    stay in their raw string form and are expanded by the payload mapper.
    """
    project_id: str
    name: str
    port: int = 0
    image: str = ""
    auto_deployments_enabled: bool = False
    auto_deployments_pattern: str = ""
    privileged: bool = False
    idle_timeout: str = ""
    timeout: str = ""
    cpu: str = ""
    min_instance_count: int = 0
    max_instance_count: int = 0
    description: str = ""
    publicly_accessible: bool = True
    protocol: str = ""
    environment_variables: str = ""
    command: str = ""
    args: str = ""


class ContainerAppLogEntry(CloudruModel):
    timestamp: str = ""
    message: str = ""
    version_id: str = ""
    pod_name: str = ""
    level: str = ""
    container_name: str = ""


class ContainerAppSystemLogEntry(CloudruModel):
    event_type: str = ""
    component: str = ""
    reason: str = ""
    message: str = ""
    revision_name: str = ""


class ContainerAppLogs(CloudruModel):
    data: List[ContainerAppLogEntry] = []


class ContainerAppSystemLogs(CloudruModel):
    data: List[ContainerAppSystemLogEntry] = []
