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
Cloud.ru Container Apps MCP

Exposes Cloud.ru Evolution Container Apps, Artifact Registry and the local
Docker CLI as Model Context Protocol tools for AI agents.
"""

import platform

__version__ = "0.0.1"
__license__ = "Apache-2.0"

SERVER_NAME = "Cloud.ru Container Apps MCP"


def version_info() -> str:
    """Multi-line version banner used by the CLI."""
    return (
        f"{SERVER_NAME}\n"
        f"Version: {__version__}\n"
        f"Python Version: {platform.python_version()}"
    )
