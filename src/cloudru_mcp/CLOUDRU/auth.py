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
Exchanges the service account key pair for a short-lived bearer token.
"""

import logging
from typing import Optional

from ..CONFIG.settings import Config
from ..MODELS.credentials import Credentials
from ..errors import ResponseParseError, UpstreamHTTPError
from .mapping import decode_json
from .transport import ApiResponse, HttpTransport

logger = logging.getLogger(__name__)

TOKEN_PATH = "/api/v1/auth/token"


class TokenProvider:
    """
    Requests a fresh access token from the IAM API on every call.
    Tokens are never cached.
    """

    def __init__(self, credentials: Credentials, iam_url: str, transport: Optional[HttpTransport] = None):
        """
        Args:
            credentials: Key pair sent to the IAM API.
            iam_url: Base URL of the IAM API.
            transport: HTTP transport; a default one is created when omitted.
        """
        self.credentials = credentials
        self.iam_url = iam_url.rstrip("/")
        self.transport = transport or HttpTransport()

    @classmethod
    def from_config(cls, config: Config, transport: Optional[HttpTransport] = None) -> "TokenProvider":
        return cls(Credentials(config.key_id, config.key_secret), config.api.iam, transport)

    def get_access_token(self) -> str:
        """
        Returns:
            The bearer token string.

        Raises:
            TransportError: The IAM API could not be reached.
            UpstreamHTTPError: The IAM API did not answer 200.
            ResponseParseError: Empty body, invalid JSON or no access_token.
        """
        response = self.transport.request(
            "POST",
            f"{self.iam_url}{TOKEN_PATH}",
            payload={"keyId": self.credentials.key_id, "secret": self.credentials.key_secret},
        )
        logger.info("get_access_token response - Status: %d", response.status)

        if response.status != 200:
            raise UpstreamHTTPError(
                response.status,
                response.text,
                f"authentication failed with status {response.status}: {response.text}",
            )
        if response.is_empty:
            raise ResponseParseError(
                f"authentication API returned empty response body with status {response.status}"
            )

        return self._extract_token(response)

    @staticmethod
    def _extract_token(response: ApiResponse) -> str:
        data = decode_json(response, "token")
        token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise ResponseParseError(
                f"failed to parse token response: no access_token field "
                f"body length: {len(response.body)} body: {response.text}",
                body=response.text,
            )
        return token
