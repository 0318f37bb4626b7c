"""
Unit tests for the upstream entity models.
"""
from cloudru_mcp.MODELS.container_app import ContainerApp, ContainerAppSystemLogs
from cloudru_mcp.MODELS.credentials import Credentials
from cloudru_mcp.MODELS.registry import DockerImage, DockerRegistry

APP = {
    "projectId": "proj-1",
    "id": "c1",
    "name": "app",
    "status": "RUNNING",
    "configuration": {
        "ingress": {"publiclyAccessible": True, "publicUri": "https://app.example"},
        "autoDeployments": {"enabled": True, "pattern": "latest"},
    },
    "template": {
        "idleTimeout": "600s",
        "scaling": {"minInstanceCount": 0, "maxInstanceCount": 2, "rule": {"type": "concurrency", "value": {"soft": 10, "hard": 20}}},
        "containers": [
            {
                "name": "app",
                "image": "myreg.cr.cloud.ru/app:latest",
                "containerPort": 8080,
                "resources": {"cpu": "0.5", "memory": "1Gi"},
                "env": [{"name": "A", "value": "1", "type": "plain"}],
                "command": None,
            }
        ],
        "volumes": [{"name": "data", "type": "s3", "volumeAttributes": {"bucketName": "b", "readOnly": "true"}}],
        "somethingNew": {"ignored": True},
    },
}


class TestContainerApp:

    def test_parse_camel_case(self):
        app = ContainerApp.model_validate(APP)

        assert app.project_id == "proj-1"
        assert app.configuration.ingress.public_uri == "https://app.example"
        assert app.template.scaling.rule.value.hard == 20
        container = app.template.containers[0]
        assert container.container_port == 8080
        assert container.resources.memory == "1Gi"
        assert container.command == []
        assert app.template.volumes[0].volume_attributes.bucket_name == "b"

    def test_dump_uses_upstream_names(self):
        data = ContainerApp.model_validate(APP).to_json_dict()

        assert data["projectId"] == "proj-1"
        assert data["template"]["containers"][0]["containerPort"] == 8080
        assert data["configuration"]["autoDeployments"] == {"enabled": True, "pattern": "latest"}

    def test_missing_sections_default(self):
        app = ContainerApp.model_validate({"name": "bare", "template": None})
        assert app.template.containers == []
        assert app.configuration.privileged is False

    def test_system_logs(self):
        logs = ContainerAppSystemLogs.model_validate(
            {"data": [{"eventType": "Normal", "reason": "Started", "revisionName": "rev-1"}]}
        )
        assert logs.data[0].event_type == "Normal"
        assert logs.data[0].revision_name == "rev-1"


class TestRegistryModels:

    def test_docker_registry(self):
        registry = DockerRegistry.model_validate(
            {"id": "r1", "name": "myreg", "registryType": "DOCKER", "isPublic": True, "retentionPolicyIsEnabled": None}
        )
        assert registry.registry_type == "DOCKER"
        assert registry.is_public is True
        assert registry.retention_policy_is_enabled is False

    def test_image_tag(self):
        image = DockerImage(registry_name="myreg", repository_name="app")
        assert image.tag("cr.cloud.ru") == "myreg.cr.cloud.ru/app:latest"
        assert image.build_target is None
        assert image.build_context == "."


def test_credentials_repr_hides_secret():
    assert "topsecret" not in repr(Credentials("kid", "topsecret"))
