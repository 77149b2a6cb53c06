"""Pod provider backed by OpenStack Zun capsules."""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from zun_provider.config import ProviderConfig
from zun_provider.core.errors import TranslationError
from zun_provider.core.labels import NODE_NAME_LABEL, build_capsule_name
from zun_provider.core.translation import capsule_to_pod, pod_to_capsule_request
from zun_provider.models.pod import (
    DaemonEndpoint,
    NodeAddress,
    NodeCondition,
    NodeDaemonEndpoints,
    Pod,
    PodStatus,
)
from zun_provider.services.zun_client import ZunClient, ZunNotFoundError, parse_capsule

logger = logging.getLogger(__name__)

LOGS_NOT_SUPPORTED = "not support in Zun Provider"

# (type, status, reason, message)
_NODE_CONDITIONS = (
    ("Ready", "True", "KubeletReady", "kubelet is ready."),
    ("OutOfDisk", "False", "KubeletHasSufficientDisk", "kubelet has sufficient disk space available"),
    ("MemoryPressure", "False", "KubeletHasSufficientMemory", "kubelet has sufficient memory available"),
    ("DiskPressure", "False", "KubeletHasNoDiskPressure", "kubelet has no disk pressure"),
    ("NetworkUnavailable", "False", "RouteCreated", "RouteController created a route"),
)


class ZunProvider:
    """
    Runs pods as Zun capsules.

    Holds no state beyond its configuration and the Zun client; every call
    goes to the remote API. Remote errors are not retried.
    """

    def __init__(self, zun_client: ZunClient, config: ProviderConfig):
        self.zun_client = zun_client
        self.config = config

    @property
    def node_name(self) -> str:
        return self.config.node_name

    def get_pod(self, namespace: str, name: str) -> Optional[Pod]:
        """
        Fetch the capsule for a pod and translate it.

        Raises:
            ZunNotFoundError: If the capsule does not exist
            ZunClientError: For any other remote failure
            TranslationError: If the capsule is malformed or cannot be translated
        """
        capsule = self.zun_client.get_capsule(build_capsule_name(namespace, name))
        return capsule_to_pod(capsule)

    def get_pods(self) -> List[Pod]:
        """
        List every capsule and return the pods that belong to this node.

        Capsules labelled for another node are skipped. Capsules that fail
        to parse or translate are logged and skipped.
        """
        pods: List[Pod] = []
        for page in self.zun_client.list_capsule_pages():
            for record in page:
                if not isinstance(record, dict):
                    logger.warning(f"Skipping malformed capsule record: {record!r}")
                    continue
                labels = record.get("meta_labels") or {}
                if not isinstance(labels, dict):
                    logger.warning(
                        f"Skipping capsule with malformed labels: {labels!r}",
                        extra={"capsule": record.get("meta_name") or record.get("uuid")},
                    )
                    continue
                if labels.get(NODE_NAME_LABEL) != self.node_name:
                    continue
                try:
                    pod = capsule_to_pod(parse_capsule(record))
                except TranslationError as e:
                    logger.warning(
                        f"Skipping capsule that failed translation: {e}",
                        extra={"capsule": record.get("meta_name") or record.get("uuid")},
                    )
                    continue
                pods.append(pod)
        return pods

    def get_pod_status(self, namespace: str, name: str) -> Optional[PodStatus]:
        try:
            pod = self.get_pod(namespace, name)
        except ZunNotFoundError:
            logger.info(f"Pod {namespace}/{name} not found in Zun.")
            return None

        return pod.status

    def create_pod(self, pod: Pod) -> None:
        """
        Translate a pod into a capsule and submit it.

        Translation completes before any remote call; errors from either
        step reach the caller unchanged.
        """
        template = pod_to_capsule_request(pod)
        self.zun_client.create_capsule(template)
        logger.info(f"Created capsule {template.name} for pod {pod.metadata.namespace}/{pod.metadata.name}")

    def update_pod(self, pod: Pod) -> None:
        # Zun has no live update for capsules
        logger.debug(f"Ignoring update for pod {pod.metadata.namespace}/{pod.metadata.name}")

    def delete_pod(self, pod: Pod) -> None:
        self.zun_client.delete_capsule(
            build_capsule_name(pod.metadata.namespace, pod.metadata.name)
        )

    def get_container_logs(
        self, namespace: str, pod_name: str, container_name: str, tail: int
    ) -> str:
        return LOGS_NOT_SUPPORTED

    def capacity(self) -> Dict[str, str]:
        return {
            "cpu": self.config.cpu,
            "memory": self.config.memory,
            "pods": self.config.pods,
        }

    def node_conditions(self) -> List[NodeCondition]:
        now = datetime.now(timezone.utc)
        return [
            NodeCondition(
                type=condition_type,
                status=status,
                last_heartbeat_time=now,
                last_transition_time=now,
                reason=reason,
                message=message,
            )
            for condition_type, status, reason, message in _NODE_CONDITIONS
        ]

    def node_addresses(self) -> List[NodeAddress]:
        return []

    def node_daemon_endpoints(self) -> NodeDaemonEndpoints:
        return NodeDaemonEndpoints(
            kubelet_endpoint=DaemonEndpoint(port=self.config.daemon_endpoint_port)
        )

    def operating_system(self) -> str:
        return self.config.operating_system
