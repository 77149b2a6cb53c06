"""PodProvider protocol definition."""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from zun_provider.models.pod import (
    NodeAddress,
    NodeCondition,
    NodeDaemonEndpoints,
    Pod,
    PodStatus,
)


@runtime_checkable
class PodProvider(Protocol):
    """
    Protocol for virtual-node pod providers.

    Providers are responsible for:
    - Running pods on a remote container engine
    - Reporting pods and pod status back in control-plane terms
    - Describing the virtual node (capacity, conditions, endpoints)

    The control plane dispatches through this set of operations only, so
    backends are interchangeable and selected by configuration.
    """

    def get_pod(self, namespace: str, name: str) -> Optional[Pod]:
        """Return the pod with the given namespace and name."""
        ...

    def get_pods(self) -> List[Pod]:
        """Return every pod running on this node."""
        ...

    def get_pod_status(self, namespace: str, name: str) -> Optional[PodStatus]:
        """Return the status of a pod, or None if the pod does not exist."""
        ...

    def create_pod(self, pod: Pod) -> None:
        ...

    def update_pod(self, pod: Pod) -> None:
        ...

    def delete_pod(self, pod: Pod) -> None:
        ...

    def get_container_logs(
        self, namespace: str, pod_name: str, container_name: str, tail: int
    ) -> str:
        ...

    def capacity(self) -> Dict[str, str]:
        ...

    def node_conditions(self) -> List[NodeCondition]:
        ...

    def node_addresses(self) -> List[NodeAddress]:
        ...

    def node_daemon_endpoints(self) -> NodeDaemonEndpoints:
        ...

    def operating_system(self) -> str:
        ...
