"""Translation between pods and Zun capsules."""

from zun_provider.core.errors import PodTranslationError
from zun_provider.core.labels import build_capsule_name, build_labels, read_identity
from zun_provider.core.resources import capsule_limits, pod_resources
from zun_provider.core.states import capsule_phase, container_phase, container_state
from zun_provider.models.capsule import (
    Capsule,
    CapsuleContainerTemplate,
    CapsuleTemplate,
)
from zun_provider.models.pod import (
    Container,
    ContainerStatus,
    ObjectMeta,
    Pod,
    PodPhase,
    PodSpec,
    PodStatus,
)

CAPSULE_VERSION = "beta"


def _container_template(container: Container) -> CapsuleContainerTemplate:
    if not container.name:
        raise PodTranslationError("Container is missing a name")
    if not container.image:
        raise PodTranslationError(f"Container {container.name!r} is missing an image")

    env = {}
    for var in container.env:
        env[var.name] = var.value

    resources = {}
    sizing = capsule_limits(container.resources)
    if sizing:
        # Zun sizes capsule containers from "requests"; the values are the pod limits
        resources["requests"] = sizing

    return CapsuleContainerTemplate(
        name=container.name,
        image=container.image,
        command=[*container.command, *container.args],
        work_dir=container.working_dir or None,
        image_pull_policy=container.image_pull_policy or None,
        env=env,
        resources=resources,
    )


def pod_to_capsule_request(pod: Pod) -> CapsuleTemplate:
    """
    Build the capsule creation request for a pod.

    Every container is translated before anything is returned, so a single
    malformed container fails the whole pod without side effects.

    Raises:
        PodTranslationError: If the pod has no containers or a container is malformed
        ResourceConversionError: If a resource limit cannot be parsed
    """
    if not pod.spec.containers:
        raise PodTranslationError(
            f"Pod {pod.metadata.namespace}/{pod.metadata.name} has no containers"
        )

    containers = [_container_template(c) for c in pod.spec.containers]

    return CapsuleTemplate(
        capsule_version=CAPSULE_VERSION,
        restart_policy=pod.spec.restart_policy,
        metadata={
            "name": build_capsule_name(pod.metadata.namespace, pod.metadata.name),
            "labels": build_labels(pod),
        },
        containers=containers,
    )


def _pod_ip(capsule: Capsule) -> str:
    for addresses in capsule.addresses.values():
        for address in addresses:
            if address.version == 4:
                return address.addr
    return ""


def capsule_to_pod(capsule: Capsule) -> Pod:
    """
    Build a pod, including its status, from a capsule record.

    Identity comes from the capsule labels only. Zun does not track a start
    time separate from the last update, nor restart counts.

    Raises:
        CapsuleIntegrityError: If the capsule lacks correlation labels
        ResourceConversionError: If a container reports unparseable sizing
    """
    identity = read_identity(capsule.meta_name, capsule.meta_labels)

    containers = []
    container_statuses = []
    for c in capsule.containers:
        containers.append(
            Container(
                name=c.name,
                image=c.image,
                command=[c.command] if c.command else [],
                resources=pod_resources(c.cpu, c.memory),
            )
        )
        state = container_state(c)
        container_statuses.append(
            ContainerStatus(
                name=c.name,
                state=state,
                # Zun doesn't record a previous termination state
                last_state=state,
                ready=container_phase(c.status) == PodPhase.RUNNING,
                restart_count=0,
                image=c.image,
                image_id="",
                container_id=c.container_id or "",
            )
        )

    return Pod(
        metadata=ObjectMeta(
            name=identity.name,
            namespace=identity.namespace,
            cluster_name=identity.cluster_name,
            uid=identity.uid,
            creation_timestamp=capsule.created_at,
        ),
        spec=PodSpec(
            node_name=identity.node_name,
            volumes=[],
            containers=containers,
        ),
        status=PodStatus(
            phase=capsule_phase(capsule.status),
            pod_ip=_pod_ip(capsule),
            start_time=capsule.updated_at,
            container_statuses=container_statuses,
        ),
    )

