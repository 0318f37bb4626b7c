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
Minimal HTTP transport for the Cloud.ru APIs.
Every call is a single blocking round-trip: no retries and no timeout beyond
the interpreter's socket default.
"""

import json
import logging
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any, Dict, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from .. import __version__
from ..errors import TransportError, UpstreamHTTPError

logger = logging.getLogger(__name__)

USER_AGENT = f"cloudru-containerapps-mcp/{__version__}"


@dataclass
class ApiResponse:
    """Status and raw body of an upstream response."""

    status: int
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_empty(self) -> bool:
        return len(self.body) == 0

    def expect(self, *statuses: int) -> "ApiResponse":
        """
        Returns self when the status is one of ``statuses``.

        Raises:
            UpstreamHTTPError: Carrying the status code and raw body otherwise.
        """
        if self.status not in statuses:
            raise UpstreamHTTPError(self.status, self.text)
        return self


class HttpTransport:
    """
    Sends JSON requests with an optional bearer token.

    HTTP error statuses are returned as ordinary responses so callers can
    decide which codes they accept; only transport failures raise.
    """

    def __init__(self, user_agent: str = USER_AGENT):
        self.user_agent = user_agent

    def request(
        self,
        method: str,
        url: str,
        token: Optional[str] = None,
        payload: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None,
        accept: Optional[str] = None,
    ) -> ApiResponse:
        """
        Performs one HTTP request.

        Args:
            method: HTTP method.
            url: Absolute URL without query string.
            token: Bearer token for the Authorization header.
            payload: JSON-serializable request body.
            params: Query parameters.
            accept: Accept header value.

        Returns:
            The response status and body.
        """
        if params:
            url = f"{url}?{urlencode(params)}"

        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        try:
            request = Request(url, data=data, method=method)
        except ValueError as e:
            raise TransportError(f"failed to make request to {method} {url}: {e}") from e
        request.add_header("Content-Type", "application/json")
        request.add_header("User-Agent", self.user_agent)
        if token:
            request.add_header("Authorization", f"Bearer {token}")
        if accept:
            request.add_header("Accept", accept)

        try:
            return self._send(request)
        except URLError as e:
            raise TransportError(f"failed to make request to {method} {url}: {e.reason}") from e
        except (HTTPException, OSError, ValueError) as e:
            # HTTPException covers malformed status lines and truncated bodies
            raise TransportError(f"failed to make request to {method} {url}: {e!r}") from e

    @staticmethod
    def _send(request: Request) -> ApiResponse:
        try:
            with urlopen(request) as response:
                return ApiResponse(status=response.status, body=response.read())
        except HTTPError as e:
            try:
                body = e.read() or b""
            finally:
                e.close()
            return ApiResponse(status=e.code, body=body)
