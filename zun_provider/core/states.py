"""Mapping of Zun container and capsule statuses onto pod lifecycle states.

Zun container statuses: Error, Running, Stopped, Paused, Unknown, Creating,
Created, Deleted, Deleting, Rebuilding, Dead, Restarting.
Zun capsule statuses: Running, Succeeded, Failed, Error, Pending, Unknown.
The two vocabularies are mapped separately.
"""

from zun_provider.models.capsule import CapsuleContainer
from zun_provider.models.pod import (
    ContainerState,
    ContainerStateRunning,
    ContainerStateTerminated,
    ContainerStateWaiting,
    PodPhase,
)

RUNNING_STATUSES = frozenset({"Running", "Stopped"})
TERMINATED_STATUSES = frozenset({"Error", "Dead"})
TRANSITIONAL_STATUSES = frozenset(
    {"Creating", "Created", "Restarting", "Rebuilding", "Paused", "Deleting", "Deleted"}
)

_CONTAINER_PHASES = {
    "Running": PodPhase.RUNNING,
    "Stopped": PodPhase.SUCCEEDED,
    "Error": PodPhase.FAILED,
    "Dead": PodPhase.FAILED,
    **{status: PodPhase.PENDING for status in TRANSITIONAL_STATUSES},
}

_CAPSULE_PHASES = {
    "Running": PodPhase.RUNNING,
    "Succeeded": PodPhase.SUCCEEDED,
    "Failed": PodPhase.FAILED,
    # Zun reports a capsule whose containers failed to start as Error
    "Error": PodPhase.FAILED,
    "Pending": PodPhase.PENDING,
}


def container_state(container: CapsuleContainer) -> ContainerState:
    """
    Map a capsule container onto a single container lifecycle state.

    Zun records no separate start time or exit code, so a running container
    reports its creation time as start time and a terminated one exit code 0
    with its last update as finish time. Any status not known to be running
    or terminated is reported as waiting.
    """
    if container.status in RUNNING_STATUSES:
        return ContainerState(
            running=ContainerStateRunning(started_at=container.created_at)
        )

    if container.status in TERMINATED_STATUSES:
        return ContainerState(
            terminated=ContainerStateTerminated(
                exit_code=0,
                reason=container.status,
                message=container.status_detail or "",
                started_at=container.created_at,
                finished_at=container.updated_at,
            )
        )

    return ContainerState(
        waiting=ContainerStateWaiting(
            reason=container.status,
            message=container.status_detail or "",
        )
    )


def container_phase(status: str) -> PodPhase:
    return _CONTAINER_PHASES.get(status, PodPhase.UNKNOWN)


def capsule_phase(status: str) -> PodPhase:
    return _CAPSULE_PHASES.get(status, PodPhase.UNKNOWN)
