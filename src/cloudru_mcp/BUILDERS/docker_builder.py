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
Builds and pushes Docker images to Cloud.ru Artifact Registry through the docker CLI.
"""

import logging
import re
import shlex
import subprocess
from typing import Callable, List, Optional, Tuple

from ..CONFIG.settings import Config
from ..CLOUDRU.auth import TokenProvider
from ..CLOUDRU.mapping import envelope_items, validate_model
from ..CLOUDRU.transport import HttpTransport
from ..MODELS.credentials import Credentials
from ..MODELS.registry import DOCKER_MANIFEST_V2, DockerImage, RegistryImage
from ..errors import (
    AuthenticationError,
    CloudruError,
    DockerCommandError,
    FieldValidationError,
    UpstreamHTTPError,
)

logger = logging.getLogger(__name__)

PLATFORM = "linux/amd64"
# Registry names become the first label of the registry hostname
REGISTRY_NAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")
DOCS_URL = "https://cloud.ru/docs/container-apps-evolution/ug/topics/tutorials__before-work"

LOGIN_HINT = f"""Please ensure:
1. The registry exists in Cloud.ru Evolution Artifact Registry
2. You have created a registry and obtained access keys
3. See documentation: {DOCS_URL}"""

PUSH_HINT = f"""To resolve this issue:
1. Ensure you are logged in to the Docker registry
2. Run the cloudru_docker_login function
3. See documentation: {DOCS_URL}"""

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class DockerInvoker:
    """
    Shells out to ``docker`` for login, build and push.

    The key secret is only ever passed on stdin, never as a process argument.
    """

    def __init__(
        self,
        credentials: Credentials,
        registry_domain: str,
        token_provider: TokenProvider,
        transport: Optional[HttpTransport] = None,
        runner: Runner = subprocess.run,
        docker_binary: str = "docker",
    ):
        """
        :param credentials: Key pair; the key id is the registry user name.
        :param registry_domain: Domain appended to registry names, e.g. cr.cloud.ru.
        :param token_provider: Source of bearer tokens for the registry catalog.
        :param transport: HTTP transport for the catalog request.
        :param runner: Callable with the signature of subprocess.run.
        :param docker_binary: Name or path of the docker executable.
        """
        self.credentials = credentials
        self.registry_domain = registry_domain
        self.token_provider = token_provider
        self.transport = transport or token_provider.transport
        self.runner = runner
        self.docker_binary = docker_binary

    @classmethod
    def from_config(cls, config: Config, token_provider: TokenProvider) -> "DockerInvoker":
        return cls(Credentials(config.key_id, config.key_secret), config.registry_domain, token_provider)

    def registry_host(self, registry_name: str) -> str:
        """
        Raises:
            FieldValidationError: The name is not a single DNS label.
        """
        if not REGISTRY_NAME_PATTERN.fullmatch(registry_name):
            raise FieldValidationError(
                "registry_name", f"field registry_name must be a single DNS label, got: {registry_name}"
            )
        return f"{registry_name}.{self.registry_domain}"

    def _run(self, command: List[str], stdin: Optional[str] = None) -> Tuple[int, str]:
        """Runs a command and returns its exit code with stdout and stderr combined."""
        try:
            completed = self.runner(
                command,
                input=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                shell=False,
            )
        except OSError as e:
            raise DockerCommandError(f"failed to run {command[0]}: {e}") from e
        return completed.returncode, completed.stdout or ""

    def login(self, registry_name: str) -> str:
        """
        Logs the docker CLI in to ``<registry_name>.<domain>``.

        Returns:
            The login target host.

        Raises:
            DockerCommandError: With the command output and a remediation hint.
        """
        target = self.registry_host(registry_name)
        command = [self.docker_binary, "login", target, "-u", self.credentials.key_id, "--password-stdin"]
        code, output = self._run(command, stdin=self.credentials.key_secret)
        if code != 0:
            raise DockerCommandError(
                f"docker login to {target} failed: exit status {code}\nOutput: {output}\n\n{LOGIN_HINT}",
                output=output,
            )
        logger.info("Logged in to Docker registry: %s", target)
        return target

    def build_command(self, image: DockerImage) -> List[str]:
        command = [self.docker_binary, "build", "--platform", PLATFORM, "-t", image.tag(self.registry_domain)]
        if image.build_target:
            command += ["--target", image.build_target]
        command += ["-f", image.dockerfile_path, image.build_context]
        return command

    def push_command(self, image: DockerImage) -> List[str]:
        return [self.docker_binary, "push", "--platform", PLATFORM, image.tag(self.registry_domain)]

    def build_and_push(self, image: DockerImage) -> str:
        """
        Logs in, builds the image and pushes it.

        Returns:
            The pushed image tag.

        Raises:
            DockerCommandError: If any step fails; the message carries the command output.
        """
        self.login(image.registry_name)
        tag = image.tag(self.registry_domain)

        code, output = self._run(self.build_command(image))
        if output:
            logger.info("Docker build output:\n%s", output)
        if code != 0:
            raise DockerCommandError(
                f"failed to build Docker image {tag}: exit status {code}\nOutput: {output}", output=output
            )

        code, output = self._run(self.push_command(image))
        if output:
            logger.info("Docker push output:\n%s", output)
        if code != 0:
            raise DockerCommandError(
                f"docker push failed: exit status {code}\nOutput: {output}\n\n{PUSH_HINT}", output=output
            )

        return tag

    def show_commands(self, image: DockerImage) -> Tuple[str, str]:
        """
        Dry run of build_and_push: logs in, then returns the build and push
        command lines without executing them.
        """
        self.login(image.registry_name)
        return shlex.join(self.build_command(image)), shlex.join(self.push_command(image))

    def get_registry_images(self, registry_name: str) -> List[RegistryImage]:
        """
        Lists repositories through the registry's own ``/v2/_catalog`` endpoint.

        The catalog only reports repository names, so every image is reported
        with tag "latest" and no digest, date or size.
        """
        url = f"https://{self.registry_host(registry_name)}/v2/_catalog"
        try:
            token = self.token_provider.get_access_token()
        except CloudruError as e:
            raise AuthenticationError(f"failed to get access token: {e}") from e

        response = self.transport.request("GET", url, token=token, accept="application/json")
        if response.status != 200:
            raise UpstreamHTTPError(
                response.status,
                response.text,
                f"registry API returned status {response.status}: {response.text}",
            )

        return [
            validate_model(
                RegistryImage,
                {"name": repo, "tag": "latest", "mediaType": DOCKER_MANIFEST_V2},
                response,
                "catalog",
            )
            for repo in envelope_items(response, "repositories", "catalog")
        ]
