"""
Outcome Reporter

Turns dispatch outcomes into audit events and counter increments.
"""

import structlog

from hahaha.domain.ports import IEventPort, IShutdownMetricsPort
from hahaha.domain.value_objects import DispatchOutcome, EventType, OutcomeKind, PodIdentity


logger = structlog.get_logger(__name__)

EVENT_REASON = "Killing"


class OutcomeReporter:
    """
    Publishes one audit event and increments one counter per outcome.

    Publishing is best effort: a failed post is counted and logged, never
    raised, so it cannot abort the reconciliation loop.
    """

    def __init__(self, event_port: IEventPort, metrics: IShutdownMetricsPort):
        """
        Args:
            event_port: Port for publishing audit events
            metrics: Shutdown counters
        """
        self._event_port = event_port
        self._metrics = metrics

    async def report(
        self,
        outcome: DispatchOutcome,
        pod: PodIdentity,
        container: str,
        workload: str,
        namespace: str,
    ) -> None:
        """
        Report the outcome of one sidecar shutdown attempt.

        Args:
            outcome: Result of the dispatch (or UnrecognizedSidecar)
            pod: Pod hosting the sidecar
            container: Sidecar container name
            workload: Workload identifier used as job_name label
            namespace: Namespace label
        """
        if outcome.kind == OutcomeKind.SUCCESS:
            await self._publish(
                pod,
                EventType.NORMAL,
                f"Successfully shut down container {container}",
            )
            self._metrics.record_shutdown(container, workload, namespace)

        elif outcome.kind == OutcomeKind.TRANSPORT_FAILURE:
            await self._publish(
                pod,
                EventType.WARNING,
                f"Unsuccessfully shut down container {container}: {outcome.detail}",
            )
            self._metrics.record_failed_shutdown(container, workload, namespace)

        elif outcome.kind == OutcomeKind.UNRECOGNIZED_SIDECAR:
            logger.warning(
                "Don't know how to shut down sidecar",
                container=container,
                pod=pod.name,
                namespace=namespace,
            )
            self._metrics.record_unsupported_sidecar(container, workload, namespace)

    async def _publish(self, pod: PodIdentity, event_type: EventType, message: str) -> bool:
        """
        Publish an audit event, counting the failure instead of raising it.

        Returns:
            True if the event was posted, False otherwise
        """
        try:
            await self._event_port.publish(pod, event_type, EVENT_REASON, message)
            return True
        except Exception as e:
            logger.warning(
                "Failed to publish event",
                pod=pod.name,
                namespace=pod.namespace,
                event_type=event_type.value,
                error=str(e),
            )
            self._metrics.record_failed_event_post()
            return False
