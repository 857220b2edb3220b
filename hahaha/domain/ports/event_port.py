"""
Event Port Interface

Defines the contract for publishing audit events about a pod.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod

from hahaha.domain.value_objects import EventType, PodIdentity


class IEventPort(ABC):
    """Port interface for the cluster's audit trail."""

    @abstractmethod
    async def publish(
        self,
        pod: PodIdentity,
        event_type: EventType,
        reason: str,
        message: str,
    ) -> None:
        """
        Attach an audit event to a pod.

        Args:
            pod: Pod the event is about
            event_type: Normal or Warning
            reason: Short machine readable reason, e.g. "Killing"
            message: Human readable description

        Raises:
            EventPublishError: If the event could not be posted
        """
        pass
