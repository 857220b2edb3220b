"""
Domain Layer

Value objects, the action registry and sidecar extraction rules.
"""

from .registry import ActionRegistry, DEFAULT_ACTIONS
from .sidecars import extract_running_sidecars, resolve_namespace, resolve_workload
from .value_objects import (
    CommandExec,
    ContainerState,
    ContainerStatus,
    DispatchOutcome,
    EventType,
    HttpReply,
    HttpSignal,
    OutcomeKind,
    OwnerReference,
    PodIdentity,
    PodSnapshot,
    ShutdownAction,
    SidecarCandidate,
)

__all__ = [
    "ActionRegistry",
    "DEFAULT_ACTIONS",
    "extract_running_sidecars",
    "resolve_namespace",
    "resolve_workload",
    "CommandExec",
    "ContainerState",
    "ContainerStatus",
    "DispatchOutcome",
    "EventType",
    "HttpReply",
    "HttpSignal",
    "OutcomeKind",
    "OwnerReference",
    "PodIdentity",
    "PodSnapshot",
    "ShutdownAction",
    "SidecarCandidate",
]
