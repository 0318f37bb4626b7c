"""
Configuration loaded once at startup from the environment and an optional .env file.
"""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from ..errors import ConfigError

ENV_REGISTRY_NAME = "CLOUDRU_REGISTRY_NAME"
ENV_REGISTRY_DOMAIN = "CLOUDRU_REGISTRY_DOMAIN"
ENV_KEY_ID = "CLOUDRU_KEY_ID"
ENV_KEY_SECRET = "CLOUDRU_KEY_SECRET"
ENV_REPOSITORY_NAME = "CLOUDRU_REPOSITORY_NAME"
ENV_PROJECT_ID = "CLOUDRU_PROJECT_ID"
ENV_CONTAINERAPP_NAME = "CLOUDRU_CONTAINERAPP_NAME"
ENV_DOCKERFILE = "CLOUDRU_DOCKERFILE"
ENV_DOCKERFILE_TARGET = "CLOUDRU_DOCKERFILE_TARGET"
ENV_DOCKERFILE_FOLDER = "CLOUDRU_DOCKERFILE_FOLDER"
ENV_CONTAINERS_API = "CLOUDRU_CONTAINERS_API"
ENV_IAM_API = "CLOUDRU_IAM_API"
ENV_ARTIFACT_API = "CLOUDRU_ARTIFACT_API"

DEFAULT_CONTAINERS_API = "https://containers.api.cloud.ru"
DEFAULT_IAM_API = "https://iam.api.cloud.ru"
DEFAULT_ARTIFACT_API = "https://ar.api.cloud.ru"
DEFAULT_REGISTRY_DOMAIN = "cr.cloud.ru"

MISSING_CREDENTIALS_MESSAGE = f"""{ENV_KEY_ID} and {ENV_KEY_SECRET} environment variables must be set.

To obtain access keys for authentication, please follow the instructions at:
https://cloud.ru/docs/console_api/ug/topics/quickstart

You will need a Key ID and Key Secret to use this service."""


@dataclass(frozen=True)
class ApiUrls:
    """Base URLs of the three upstream APIs."""

    containers: str = DEFAULT_CONTAINERS_API
    iam: str = DEFAULT_IAM_API
    artifact: str = DEFAULT_ARTIFACT_API


@dataclass(frozen=True)
class Config:
    """
    Immutable process configuration.

    Only the key pair is mandatory; everything else feeds tool defaults or
    overrides upstream endpoints.
    """

    key_id: str
    key_secret: str
    registry_name: str = ""
    registry_domain: str = DEFAULT_REGISTRY_DOMAIN
    repository_name: str = ""
    project_id: str = ""
    containerapp_name: str = ""
    dockerfile: str = ""
    dockerfile_target: str = ""
    dockerfile_folder: str = ""
    current_dir: str = "default"
    api: ApiUrls = field(default_factory=ApiUrls)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Builds a Config from a mapping of environment variables.

        Args:
            environ: Variables to read. Defaults to os.environ.

        Raises:
            ConfigError: If the key id or secret is missing.
        """
        env = os.environ if environ is None else environ

        key_id = env.get(ENV_KEY_ID, "")
        key_secret = env.get(ENV_KEY_SECRET, "")
        if not key_id or not key_secret:
            raise ConfigError(MISSING_CREDENTIALS_MESSAGE)

        try:
            current_dir = os.path.basename(os.getcwd()) or "default"
        except OSError:
            current_dir = "default"

        return cls(
            key_id=key_id,
            key_secret=key_secret,
            registry_name=env.get(ENV_REGISTRY_NAME, ""),
            registry_domain=env.get(ENV_REGISTRY_DOMAIN) or DEFAULT_REGISTRY_DOMAIN,
            repository_name=env.get(ENV_REPOSITORY_NAME, ""),
            project_id=env.get(ENV_PROJECT_ID, ""),
            containerapp_name=env.get(ENV_CONTAINERAPP_NAME, ""),
            dockerfile=env.get(ENV_DOCKERFILE, ""),
            dockerfile_target=env.get(ENV_DOCKERFILE_TARGET, ""),
            dockerfile_folder=env.get(ENV_DOCKERFILE_FOLDER, ""),
            current_dir=current_dir,
            api=ApiUrls(
                containers=env.get(ENV_CONTAINERS_API) or DEFAULT_CONTAINERS_API,
                iam=env.get(ENV_IAM_API) or DEFAULT_IAM_API,
                artifact=env.get(ENV_ARTIFACT_API) or DEFAULT_ARTIFACT_API,
            ),
        )


def load_config(env_file: Optional[str] = None) -> Config:
    """
    Loads the .env file (its values win over the process environment) and
    builds the Config.

    :param env_file: Explicit .env path. When omitted, python-dotenv searches
        upwards from the working directory.
    """
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True), override=True)
    return Config.from_env()
