"""
Sidecar Extraction

Pure functions that pick the still-running containers out of a pod
snapshot and derive the labels used for events and metrics.
"""

from typing import List, Optional

from hahaha.domain.value_objects import PodSnapshot, SidecarCandidate


# Owner kinds that identify the workload a pod belongs to, in order of preference
WORKLOAD_OWNER_KINDS = ("Job", "CronJob")

# Fallback label carrying the application (workload) name
WORKLOAD_LABEL = "app"


def extract_running_sidecars(pod: PodSnapshot) -> List[SidecarCandidate]:
    """
    Return the running containers of a pod, in pod-reported order.

    The registry is not consulted here: a running container that no action
    is known for is reported later as an unrecognized sidecar.

    Args:
        pod: Observed pod snapshot

    Returns:
        Candidates for every container whose state is running
    """
    return [
        SidecarCandidate(name=status.name)
        for status in pod.container_statuses
        if status.is_running
    ]


def resolve_namespace(pod: PodSnapshot, default_namespace: str) -> str:
    """Namespace of the pod, or the configured default when the snapshot has none."""
    return pod.namespace or default_namespace


def resolve_workload(pod: PodSnapshot) -> Optional[str]:
    """
    Derive the workload identifier used to label events and metrics.

    Looks for an owning Job first (controller references win), then falls
    back to the ``app`` label.

    Returns:
        Workload name, or None if the pod carries no usable reference
    """
    owners = sorted(
        (ref for ref in pod.owner_references if ref.kind in WORKLOAD_OWNER_KINDS),
        key=lambda ref: (not ref.controller, WORKLOAD_OWNER_KINDS.index(ref.kind)),
    )
    for ref in owners:
        if ref.name:
            return ref.name

    label = pod.labels.get(WORKLOAD_LABEL)
    if label:
        return label
    return None
