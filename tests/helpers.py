"""
Test helpers for building pod snapshots.
"""

from typing import Optional

from hahaha.domain.value_objects import (
    ContainerState,
    ContainerStatus,
    OwnerReference,
    PodSnapshot,
)


def make_pod(
    name: str = "job-7-abcde",
    namespace: Optional[str] = "team-a",
    job: Optional[str] = "job-7",
    running=(),
    terminated=("main",),
    labels=None,
) -> PodSnapshot:
    """Build a pod snapshot owned by ``job`` with the given container states."""
    statuses = [ContainerStatus(name=c, state=ContainerState.TERMINATED) for c in terminated]
    statuses += [ContainerStatus(name=c, state=ContainerState.RUNNING) for c in running]
    owners = (OwnerReference(kind="Job", name=job, controller=True),) if job else ()
    return PodSnapshot(
        name=name,
        namespace=namespace,
        uid="0b5e5a4e-1111-2222-3333-444455556666",
        labels=labels or {},
        owner_references=owners,
        container_statuses=tuple(statuses),
    )
