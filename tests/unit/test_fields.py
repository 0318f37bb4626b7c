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
Unit tests for tool parameter resolution.
"""
import pytest

from cloudru_mcp.CONFIG.settings import Config
from cloudru_mcp.SERVER.fields import (
    FieldResolver,
    as_string,
    build_field_table,
    default_repository_name,
    scan_int,
)
from cloudru_mcp.errors import FieldValidationError


def make_resolver(**config_values):
    values = dict(key_id="kid", key_secret="secret", current_dir="myapp")
    values.update(config_values)
    return FieldResolver(build_field_table(Config(**values)))


class TestFieldResolver:
    """Tests for the caller -> environment -> default order."""

    def test_caller_value_wins(self):
        resolver = make_resolver(project_id="env-proj")
        assert resolver.value("project_id", {"project_id": "caller-proj"}) == "caller-proj"

    def test_environment_fallback(self):
        resolver = make_resolver(project_id="env-proj")
        assert resolver.value("project_id", {}) == "env-proj"
        assert resolver.value("project_id", {"project_id": ""}) == "env-proj"

    def test_literal_default(self):
        resolver = make_resolver()
        assert resolver.value("image_version", {}) == "latest"
        assert resolver.value("dockerfile_target", {}) == "-"
        assert resolver.value("containerapp_name", {}) == "myapp"

    def test_required_missing(self):
        resolver = make_resolver()
        with pytest.raises(FieldValidationError) as exc_info:
            resolver.value("project_id", {})
        assert exc_info.value.field == "project_id"
        assert str(exc_info.value).startswith("field project_id is empty")

    def test_optional_missing_is_empty(self):
        assert make_resolver().value("containerapp_description", {}) == ""

    def test_boolean(self):
        resolver = make_resolver()
        assert resolver.boolean("registry_is_public", {"registry_is_public": "true"}) is True
        assert resolver.boolean("registry_is_public", {"registry_is_public": "1"}) is True
        assert resolver.boolean("registry_is_public", {"registry_is_public": False}) is False
        assert resolver.boolean("registry_is_public", {}) is False
        assert resolver.boolean("containerapp_publicly_accessible", {}) is True

    def test_boolean_rejects_other_values(self):
        with pytest.raises(FieldValidationError, match="must be 'true', 'false', '1', or '0', got: yes"):
            make_resolver().boolean("containerapp_privileged", {"containerapp_privileged": "yes"})

    def test_integer(self):
        resolver = make_resolver()
        assert resolver.integer("containerapp_port", {"containerapp_port": "8080"}) == 8080
        assert resolver.integer("containerapp_port", {"containerapp_port": 8000}) == 8000
        assert resolver.integer("containerapp_max_instance_count", {}) == 1

    def test_input_schema(self):
        resolver = make_resolver(project_id="env-proj")
        schema = resolver.input_schema(["project_id", "containerapp_name", "containerapp_port"])

        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"project_id", "containerapp_name", "containerapp_port"}
        assert schema["properties"]["project_id"]["default"] == "env-proj"
        assert "CLOUDRU_PROJECT_ID" in schema["properties"]["project_id"]["description"]
        # Only required parameters with nothing to fall back on are mandatory
        assert schema["required"] == ["containerapp_port"]


class TestHelpers:

    def test_as_string(self):
        assert as_string(None) == ""
        assert as_string(True) == "true"
        assert as_string(0) == "0"
        assert as_string("x") == "x"

    @pytest.mark.parametrize("value,expected", [("8080", 8080), ("80abc", 80), ("abc", 0), ("", 0), ("-3", -3)])
    def test_scan_int(self, value, expected):
        assert scan_int(value) == expected

    def test_default_repository_name(self):
        assert default_repository_name(Config("k", "s", current_dir="svc")) == "svc"
        assert default_repository_name(Config("k", "s", current_dir="svc", dockerfile_target="prod")) == "svc-prod"
        assert default_repository_name(Config("k", "s", current_dir="svc", dockerfile_target="-")) == "svc"

    def test_table_covers_every_parameter(self):
        table = build_field_table(Config("k", "s"))
        assert len(table) == 26
