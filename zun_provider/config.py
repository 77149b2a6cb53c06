"""Provider configuration management."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from kubernetes.utils import parse_quantity
from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CPU = "20"
DEFAULT_MEMORY = "100Gi"
DEFAULT_PODS = "20"
DEFAULT_DAEMON_ENDPOINT_PORT = 10250
DEFAULT_ZUN_API_VERSION = "1.32"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is incomplete."""

    pass


class ProviderConfig(BaseModel):
    """Static node settings; none of these are read from the remote engine."""
    provider: str = "openstack"
    node_name: str = "virtual-kubelet"
    operating_system: str = "Linux"
    daemon_endpoint_port: int = DEFAULT_DAEMON_ENDPOINT_PORT
    cpu: str = DEFAULT_CPU
    memory: str = DEFAULT_MEMORY
    pods: str = DEFAULT_PODS

    @field_validator("cpu", "memory", "pods", mode="before")
    @classmethod
    def validate_quantity(cls, value: Any) -> str:
        value = str(value)
        # Raises ValueError, which pydantic reports as a validation error
        parse_quantity(value)
        return value


# Environment variable mappings for ProviderConfig fields
PROVIDER_ENV_VARS = {
    "provider": "VK_PROVIDER",
    "node_name": "VK_NODE_NAME",
    "operating_system": "VK_OPERATING_SYSTEM",
    "daemon_endpoint_port": "VK_DAEMON_ENDPOINT_PORT",
}


def get_provider_config_path() -> Optional[Path]:
    """
    Get the provider configuration file path.

    Priority order:
    1. VK_PROVIDER_CONFIG environment variable
    2. /etc/zun-provider/config.yaml (container mount)

    Returns:
        Path to the config file, or None if neither exists
    """
    env_path = os.getenv("VK_PROVIDER_CONFIG")
    if env_path:
        return Path(env_path)

    mounted_path = Path("/etc/zun-provider/config.yaml")
    if mounted_path.exists():
        return mounted_path

    return None


def load_provider_config(config_path: Optional[Path] = None) -> ProviderConfig:
    """
    Load provider configuration from a YAML file and the environment.

    Environment variables override values from the file. Capacity values
    that are not set fall back to 20 CPUs, 100Gi memory and 20 pods.

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    data: Dict[str, Any] = {}
    path = config_path or get_provider_config_path()
    if path is not None:
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load provider config from {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Provider config is not a mapping: {path}")
        logger.info(f"Loaded provider configuration from {path}")

    for key, env_var in PROVIDER_ENV_VARS.items():
        env_value = os.getenv(env_var)
        if env_value:
            data[key] = env_value

    try:
        return ProviderConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid provider configuration: {e}")


def get_openstack_auth_config() -> dict:
    """
    Get OpenStack authentication settings from OS_* environment variables.

    Returns:
        dict: auth_url, username, password, project and domain names, region

    Raises:
        ConfigError: If a required variable is missing
    """
    auth = {
        "auth_url": os.getenv("OS_AUTH_URL"),
        "username": os.getenv("OS_USERNAME"),
        "password": os.getenv("OS_PASSWORD"),
        "project_name": os.getenv("OS_PROJECT_NAME") or os.getenv("OS_TENANT_NAME"),
        "project_id": os.getenv("OS_PROJECT_ID") or os.getenv("OS_TENANT_ID"),
        "user_domain_name": os.getenv("OS_USER_DOMAIN_NAME", "Default"),
        "project_domain_name": os.getenv("OS_PROJECT_DOMAIN_NAME", "Default"),
        "region_name": os.getenv("OS_REGION_NAME"),
        "interface": os.getenv("OS_INTERFACE", "public"),
        "zun_api_version": os.getenv("ZUN_API_VERSION", DEFAULT_ZUN_API_VERSION),
    }

    missing = [
        env_var
        for key, env_var in (
            ("auth_url", "OS_AUTH_URL"),
            ("username", "OS_USERNAME"),
            ("password", "OS_PASSWORD"),
        )
        if not auth[key]
    ]
    if not auth["project_name"] and not auth["project_id"]:
        missing.append("OS_PROJECT_NAME")
    if missing:
        raise ConfigError(
            f"Missing OpenStack authentication settings: {', '.join(missing)}"
        )

    return auth
