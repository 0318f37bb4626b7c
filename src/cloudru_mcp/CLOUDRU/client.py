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
Shared plumbing for clients that call Cloud.ru APIs with a bearer token.
"""

import logging
from typing import Any, Dict, Optional

from ..errors import AuthenticationError, CloudruError
from .auth import TokenProvider
from .transport import ApiResponse, HttpTransport

logger = logging.getLogger(__name__)


class AuthenticatedClient:
    """
    Base for the resource clients. Each call fetches a new token first.
    """

    def __init__(self, base_url: str, token_provider: TokenProvider, transport: Optional[HttpTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.transport = transport or token_provider.transport

    def _token(self) -> str:
        try:
            return self.token_provider.get_access_token()
        except CloudruError as e:
            raise AuthenticationError(f"failed to get access token: {e}") from e

    def _send(
        self,
        operation: str,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Any] = None,
    ) -> ApiResponse:
        """
        Authenticates and sends one request to ``base_url + path``.

        :param operation: Name used in log lines.
        :return: The raw response; status checks are left to the caller.
        """
        token = self._token()
        response = self.transport.request(method, f"{self.base_url}{path}", token=token, payload=payload, params=params)
        logger.info("%s response - Status: %d, Body length: %d", operation, response.status, len(response.body))
        logger.debug("%s response body: %s", operation, response.text)
        return response
