"""
Models for Artifact Registry resources and Docker images pushed to them.
"""
from typing import Optional

from pydantic import BaseModel

from .base import CloudruModel

DOCKER_REGISTRY_TYPE = "DOCKER"
DOCKER_MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"


class DockerRegistry(CloudruModel):
    """
    A registry in Cloud.ru Artifact Registry.
    """
    id: str = ""
    name: str = ""
    created_at: str = ""
    updated_at: str = ""
    registry_type: str = ""
    retention_policy_is_enabled: bool = False
    retention_policy: str = ""
    status: str = ""
    is_public: bool = False
    quarantine_mode: str = ""


class RegistryImage(CloudruModel):
    name: str = ""
    tag: str = ""
    digest: str = ""
    created_at: str = ""
    size: int = 0
    media_type: str = ""


class DockerImage(BaseModel):
    """
    A local Docker build destined for a Cloud.ru registry.
    Never persisted; used to derive the docker CLI invocation and image tag.
    """
    registry_name: str
    repository_name: str
    image_version: str = "latest"
    dockerfile_path: str = "Dockerfile"
    dockerfile_target: Optional[str] = None
    dockerfile_folder: Optional[str] = None

    def tag(self, registry_domain: str) -> str:
        """
        Fully-qualified image tag: ``registry.domain/repository:version``.
        """
        return f"{self.registry_name}.{registry_domain}/{self.repository_name}:{self.image_version}"

    @property
    def build_target(self) -> Optional[str]:
        """Build stage, or None when unset or given as "-"."""
        if self.dockerfile_target and self.dockerfile_target != "-":
            return self.dockerfile_target
        return None

    @property
    def build_context(self) -> str:
        return self.dockerfile_folder or "."
