"""
Infrastructure Errors

Error types raised by the adapters that talk to the cluster.
"""
from typing import Optional


class InfrastructureError(Exception):
    """Base class for infrastructure errors"""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class KubernetesError(InfrastructureError):
    """Kubernetes API error"""
    pass


class ExecError(KubernetesError):
    """Exec into a container failed"""
    pass


class TunnelError(KubernetesError):
    """Port-forward tunnel or the HTTP exchange over it failed"""
    pass


class EventPublishError(KubernetesError):
    """Audit event could not be posted"""
    pass


class WatchError(KubernetesError):
    """Pod watch subscription failed"""
    pass
