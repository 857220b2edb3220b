"""
Shared error types.
"""
from .infrastructure import (
    InfrastructureError,
    KubernetesError,
    ExecError,
    TunnelError,
    EventPublishError,
    WatchError,
)

__all__ = [
    "InfrastructureError",
    "KubernetesError",
    "ExecError",
    "TunnelError",
    "EventPublishError",
    "WatchError",
]
