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
Error types raised by the Cloud.ru clients, the Docker invoker and the tool
surface. Every failure a tool call can hit derives from CloudruError so the
tool surface can turn it into an error result instead of crashing.
"""

from typing import Optional


class CloudruError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(CloudruError):
    """Required configuration is missing at startup."""


class TransportError(CloudruError):
    """The request never produced an HTTP response (DNS, connection refused, ...)."""


class UpstreamHTTPError(CloudruError):
    """
    An upstream API answered with a status code the operation does not accept.

    Attributes:
        status: HTTP status code returned by the upstream.
        body: Raw response body, kept for diagnosis.
    """

    def __init__(self, status: int, body: str, message: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(message or f"API request failed with status {status}: {body}")


class ResponseParseError(CloudruError):
    """The upstream body was empty or could not be decoded into the expected shape."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)


class FieldValidationError(CloudruError):
    """A tool argument is missing or malformed. Raised before any network call."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class DockerCommandError(CloudruError):
    """A docker CLI invocation exited with a non-zero status."""

    def __init__(self, message: str, output: str = ""):
        self.output = output
        super().__init__(message)


class AuthenticationError(CloudruError):
    """A bearer token could not be obtained. The underlying error is chained as __cause__."""
