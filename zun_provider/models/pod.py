"""Pod-side models in the JSON shape the control plane speaks.

Field names are snake_case in Python and camelCase on the wire, matching the
Kubernetes core/v1 API. Only the fields the provider reads or writes are
modelled; anything else the control plane sends is ignored.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class K8sModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class PodPhase(str, Enum):
    """Enumeration of pod phases understood by the control plane"""
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class ObjectMeta(K8sModel):
    name: str = ""
    namespace: str = "default"
    uid: str = ""
    cluster_name: str = ""
    creation_timestamp: Optional[datetime] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class EnvVar(K8sModel):
    name: str
    value: str = ""


class ResourceRequirements(K8sModel):
    limits: Optional[Dict[str, str]] = None
    requests: Optional[Dict[str, str]] = None


class Container(K8sModel):
    name: str = ""
    image: str = ""
    command: List[str] = Field(default_factory=list)
    args: List[str] = Field(default_factory=list)
    working_dir: str = ""
    image_pull_policy: str = ""
    env: List[EnvVar] = Field(default_factory=list)
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)


class Volume(K8sModel):
    name: str


class PodSpec(K8sModel):
    node_name: str = ""
    restart_policy: str = "Always"
    containers: List[Container] = Field(default_factory=list)
    volumes: List[Volume] = Field(default_factory=list)


class ContainerStateWaiting(K8sModel):
    reason: str = ""
    message: str = ""


class ContainerStateRunning(K8sModel):
    started_at: Optional[datetime] = None


class ContainerStateTerminated(K8sModel):
    exit_code: int = 0
    reason: str = ""
    message: str = ""
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


class ContainerState(K8sModel):
    """Exactly one of waiting, running or terminated is set."""
    waiting: Optional[ContainerStateWaiting] = None
    running: Optional[ContainerStateRunning] = None
    terminated: Optional[ContainerStateTerminated] = None


class ContainerStatus(K8sModel):
    name: str
    state: ContainerState = Field(default_factory=ContainerState)
    last_state: ContainerState = Field(default_factory=ContainerState)
    ready: bool = False
    restart_count: int = 0
    image: str = ""
    image_id: str = Field(default="", alias="imageID")
    container_id: str = Field(default="", alias="containerID")


class PodCondition(K8sModel):
    type: str
    status: str


class PodStatus(K8sModel):
    phase: PodPhase = PodPhase.PENDING
    conditions: List[PodCondition] = Field(default_factory=list)
    message: str = ""
    reason: str = ""
    host_ip: str = Field(default="", alias="hostIP")
    pod_ip: str = Field(default="", alias="podIP")
    start_time: Optional[datetime] = None
    container_statuses: List[ContainerStatus] = Field(default_factory=list)


class Pod(K8sModel):
    kind: str = "Pod"
    api_version: str = "v1"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)
    status: PodStatus = Field(default_factory=PodStatus)


class NodeCondition(K8sModel):
    type: str
    status: str
    last_heartbeat_time: datetime
    last_transition_time: datetime
    reason: str
    message: str


class NodeAddress(K8sModel):
    type: str
    address: str


class DaemonEndpoint(K8sModel):
    port: int = Field(alias="Port")


class NodeDaemonEndpoints(K8sModel):
    kubelet_endpoint: DaemonEndpoint
