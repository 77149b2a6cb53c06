"""Capsule naming and the label scheme that ties a capsule back to its pod.

The capsule name is derived from namespace and pod name only, so create, get
and delete always address the same remote object. The labels written at
creation time are the sole source of pod identity on the read path; the
capsule name is never parsed.

The CreationTimestamp label is written for operators inspecting capsules but
is not read back: a translated pod takes its creation time from the
capsule created_at field.
"""

from dataclasses import dataclass
from typing import Dict

from zun_provider.core.errors import CapsuleIntegrityError
from zun_provider.models.pod import Pod

POD_NAME_LABEL = "PodName"
CLUSTER_NAME_LABEL = "ClusterName"
NODE_NAME_LABEL = "NodeName"
NAMESPACE_LABEL = "Namespace"
UID_LABEL = "UID"
CREATION_TIMESTAMP_LABEL = "CreationTimestamp"

REQUIRED_LABELS = (
    POD_NAME_LABEL,
    NAMESPACE_LABEL,
    CLUSTER_NAME_LABEL,
    NODE_NAME_LABEL,
    UID_LABEL,
)


@dataclass(frozen=True)
class PodIdentity:
    name: str
    namespace: str
    cluster_name: str
    node_name: str
    uid: str


def build_capsule_name(namespace: str, name: str) -> str:
    return f"{namespace}-{name}"


def build_labels(pod: Pod) -> Dict[str, str]:
    """Capture the pod identity fields as capsule labels."""
    meta = pod.metadata
    created = meta.creation_timestamp.isoformat() if meta.creation_timestamp else ""
    return {
        POD_NAME_LABEL: meta.name,
        CLUSTER_NAME_LABEL: meta.cluster_name,
        NODE_NAME_LABEL: pod.spec.node_name,
        NAMESPACE_LABEL: meta.namespace,
        UID_LABEL: str(meta.uid),
        CREATION_TIMESTAMP_LABEL: created,
    }


def read_identity(capsule_name: str, labels: Dict[str, str]) -> PodIdentity:
    """
    Recover pod identity from capsule labels.

    Raises:
        CapsuleIntegrityError: If any correlation label is absent
    """
    missing = [key for key in REQUIRED_LABELS if key not in labels]
    if missing:
        raise CapsuleIntegrityError(capsule_name, missing)

    return PodIdentity(
        name=labels[POD_NAME_LABEL],
        namespace=labels[NAMESPACE_LABEL],
        cluster_name=labels[CLUSTER_NAME_LABEL],
        node_name=labels[NODE_NAME_LABEL],
        uid=labels[UID_LABEL],
    )
