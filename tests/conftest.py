"""Pytest configuration and shared fixtures for provider tests."""

import pytest
from datetime import datetime, timezone
from typing import Any, Dict
from unittest.mock import Mock

from zun_provider.config import ProviderConfig
from zun_provider.models.pod import (
    Container,
    EnvVar,
    ObjectMeta,
    Pod,
    PodSpec,
    ResourceRequirements,
)
from zun_provider.providers.zun import ZunProvider
from zun_provider.services.zun_client import ZunClient

NODE_NAME = "vk-zun"


# ============================================================================
# Pod Fixtures
# ============================================================================


@pytest.fixture
def sample_pod() -> Pod:
    """
    Provides a single-container pod scheduled onto the virtual node.

    Returns:
        Pod: ns1/web running nginx with 500m CPU and 256Mi memory limits
    """
    return Pod(
        metadata=ObjectMeta(
            name="web",
            namespace="ns1",
            uid="7c1b2a4e-0f7a-4b8c-9d3e-1a2b3c4d5e6f",
            cluster_name="cluster-a",
            creation_timestamp=datetime(2024, 5, 1, 9, 59, tzinfo=timezone.utc),
        ),
        spec=PodSpec(
            node_name=NODE_NAME,
            restart_policy="OnFailure",
            containers=[
                Container(
                    name="c1",
                    image="nginx",
                    command=["nginx"],
                    args=["-g", "daemon off;"],
                    working_dir="/srv",
                    image_pull_policy="IfNotPresent",
                    env=[EnvVar(name="MODE", value="prod")],
                    resources=ResourceRequirements(
                        limits={"cpu": "500m", "memory": "256Mi"}
                    ),
                )
            ],
        ),
    )


# ============================================================================
# Capsule Fixtures
# ============================================================================


def make_capsule_record(
    name: str = "web",
    namespace: str = "ns1",
    node_name: str = NODE_NAME,
    status: str = "Running",
    container_status: str = "Running",
) -> Dict[str, Any]:
    """Build a capsule record as returned by the Zun capsule API."""
    return {
        "uuid": f"uuid-{namespace}-{name}",
        "meta_name": f"{namespace}-{name}",
        "meta_labels": {
            "PodName": name,
            "Namespace": namespace,
            "ClusterName": "cluster-a",
            "NodeName": node_name,
            "UID": f"uid-{name}",
            "CreationTimestamp": "2024-05-01T09:59:00+00:00",
        },
        "status": status,
        "created_at": "2024-05-01T10:00:00+00:00",
        "updated_at": "2024-05-01T10:05:00+00:00",
        "addresses": {
            "private-net": [
                {"addr": "fd00::5", "version": 6},
                {"addr": "10.0.0.5", "version": 4},
            ]
        },
        "containers": [
            {
                "uuid": "ctr-uuid-1",
                "name": "c1",
                "image": "nginx",
                "command": "nginx -g 'daemon off;'",
                "status": container_status,
                "status_detail": "Up 5 minutes",
                "cpu": 0.5,
                "memory": "512M",
                "container_id": "abc123",
                "created_at": "2024-05-01T10:00:30+00:00",
                "updated_at": "2024-05-01T10:04:00+00:00",
            }
        ],
    }


@pytest.fixture
def capsule_record() -> Dict[str, Any]:
    return make_capsule_record()


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(node_name=NODE_NAME, daemon_endpoint_port=10250)


@pytest.fixture
def mock_zun_client() -> Mock:
    """
    Provides a mock Zun client with the capsule API surface.

    Returns:
        Mock: Mock constrained to ZunClient's methods
    """
    return Mock(spec=ZunClient)


@pytest.fixture
def zun_provider(mock_zun_client, provider_config) -> ZunProvider:
    return ZunProvider(mock_zun_client, provider_config)
