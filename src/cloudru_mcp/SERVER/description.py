"""
Usage instructions returned by the description tool.
"""
from ..CONFIG.settings import Config
from ..UTILS.masking import mask_sensitive

DESCRIPTION_TEMPLATE = """Cloud.ru Container Apps MCP provides functions to interact with Cloud.ru Container Apps and Artifact Registry:

1. cloudru_containerapps_description() - Returns usage instructions for this MCP
2. cloudru_docker_login(registry_name) - Login to Cloud.ru Artifact registry (Docker registry)
3. cloudru_docker_build_and_push(registry_name, repository_name, image_version, dockerfile_path, dockerfile_target, dockerfile_folder, show_commands) - Build and push Docker image to Cloud.ru Artifact Registry (Docker registry)
4. cloudru_get_list_containerapps(project_id) - Get list of Container Apps from Cloud.ru
5. cloudru_get_containerapp(project_id, containerapp_name) - Get a specific Container App from Cloud.ru by name
6. cloudru_create_containerapp(project_id, containerapp_name, containerapp_port, containerapp_image, ...) - Create a new Container App in Cloud.ru
7. cloudru_delete_containerapp(project_id, containerapp_name) - Delete a Container App from Cloud.ru. WARNING: This action cannot be undone!
8. cloudru_start_containerapp(project_id, containerapp_name) - Start a Container App in Cloud.ru
9. cloudru_stop_containerapp(project_id, containerapp_name) - Stop a Container App in Cloud.ru
10. cloudru_get_containerapp_logs(project_id, containerapp_name) - Get logs for a specific Container App
11. cloudru_get_containerapp_system_logs(project_id, containerapp_name) - Get system logs for a specific Container App (at most {system_logs_limit} records)
12. cloudru_get_list_docker_registries(project_id) - Get list of Docker Registries from Cloud.ru
13. cloudru_create_docker_registry(project_id, registry_name, registry_is_public) - Create a new Docker Registry in Cloud.ru
14. cloudru_get_registry_images(registry_name) - Get list of images from a Docker registry in Cloud.ru

Project ID can be obtained from console.cloud.ru. Environment variables are used as fallbacks for parameters.

**Required environment variables:**
- CLOUDRU_KEY_ID: Service account key ID for authentication
- CLOUDRU_KEY_SECRET: Service account key secret for authentication

To obtain access keys for authentication, please follow the instructions at:
https://cloud.ru/docs/console_api/ug/topics/quickstart

**Optional environment variables:**
- CLOUDRU_REGISTRY_NAME: Registry name
- CLOUDRU_REGISTRY_DOMAIN: Registry domain (defaults to "cr.cloud.ru")
- CLOUDRU_PROJECT_ID: Project ID for Container Apps
- CLOUDRU_CONTAINERAPP_NAME: Container App name
- CLOUDRU_REPOSITORY_NAME: Repository name (defaults to current directory name if not set)
- CLOUDRU_DOCKERFILE: Path to Dockerfile (defaults to "Dockerfile" if not set)
- CLOUDRU_DOCKERFILE_TARGET: Dockerfile target stage (defaults to "-" which means no target)
- CLOUDRU_DOCKERFILE_FOLDER: Dockerfile folder (build context, defaults to "." which means current directory)
- CLOUDRU_CONTAINERS_API, CLOUDRU_IAM_API, CLOUDRU_ARTIFACT_API: API endpoint overrides

Current configuration values:
- CLOUDRU_REGISTRY_NAME: ({registry_name}) (Registry for storing Docker images)
- CLOUDRU_REPOSITORY_NAME: ({repository_name}) (Name of the repository in the registry)
- CLOUDRU_PROJECT_ID: ({project_id}) (Project ID for Container Apps)
- CLOUDRU_DOCKERFILE: ({dockerfile}) (Path to the Dockerfile to build the image, by default Dockerfile)
- CLOUDRU_KEY_ID: ({key_id}) (Authentication key identifier)
- CLOUDRU_KEY_SECRET: ({key_secret}) (Authentication key secret)
- Current directory: {current_dir} (Name of the current working directory)

For more details see: https://cloud.ru/docs/container-apps-evolution/ug/topics/tutorials__before-work"""


def render_description(config: Config, system_logs_limit: int = 200) -> str:
    """
    Renders the usage text with the current configuration; credentials are masked.
    """
    return DESCRIPTION_TEMPLATE.format(
        system_logs_limit=system_logs_limit,
        registry_name=config.registry_name,
        repository_name=config.repository_name,
        project_id=config.project_id,
        dockerfile=config.dockerfile,
        key_id=mask_sensitive(config.key_id),
        key_secret=mask_sensitive(config.key_secret),
        current_dir=config.current_dir,
    )
