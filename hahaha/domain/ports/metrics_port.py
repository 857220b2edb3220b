"""
Metrics Port Interface

Defines the counters updated by the outcome reporter.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod


class IShutdownMetricsPort(ABC):
    """
    Port interface for the shutdown counters.

    Every labelled counter is keyed by (container, workload, namespace).
    Implementations must be safe to increment from one task while another
    reads them.
    """

    @abstractmethod
    def record_shutdown(self, container: str, workload: str, namespace: str) -> None:
        """Count a successful sidecar shutdown."""
        pass

    @abstractmethod
    def record_failed_shutdown(self, container: str, workload: str, namespace: str) -> None:
        """Count a failed sidecar shutdown."""
        pass

    @abstractmethod
    def record_unsupported_sidecar(self, container: str, workload: str, namespace: str) -> None:
        """Count a running container no shutdown action is known for."""
        pass

    @abstractmethod
    def record_failed_event_post(self) -> None:
        """Count an audit event that could not be published."""
        pass
