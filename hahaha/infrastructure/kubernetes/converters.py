"""
Conversion from Kubernetes API objects to domain snapshots.
"""
from kubernetes.client import V1ContainerStatus, V1Pod

from hahaha.domain.value_objects import (
    ContainerState,
    ContainerStatus,
    OwnerReference,
    PodSnapshot,
)


def container_state(status: V1ContainerStatus) -> ContainerState:
    """Map a V1ContainerStatus to its run state."""
    state = status.state
    if state is None:
        return ContainerState.UNKNOWN
    if state.running is not None:
        return ContainerState.RUNNING
    if state.terminated is not None:
        return ContainerState.TERMINATED
    if state.waiting is not None:
        return ContainerState.WAITING
    return ContainerState.UNKNOWN


def snapshot_from_pod(pod: V1Pod) -> PodSnapshot:
    """
    Build a PodSnapshot from a V1Pod.

    Missing metadata or status fields become empty values; a missing
    namespace stays None so the caller can apply its default.
    """
    metadata = pod.metadata
    statuses = (pod.status.container_statuses if pod.status else None) or []

    return PodSnapshot(
        name=metadata.name,
        namespace=metadata.namespace,
        uid=metadata.uid,
        labels=dict(metadata.labels or {}),
        owner_references=tuple(
            OwnerReference(kind=ref.kind, name=ref.name, controller=bool(ref.controller))
            for ref in (metadata.owner_references or [])
        ),
        container_statuses=tuple(
            ContainerStatus(name=status.name, state=container_state(status))
            for status in statuses
        ),
    )
