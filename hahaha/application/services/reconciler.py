"""
Reconciliation Loop

Consumes the pod stream and, for every pod whose sidecars are still
running, looks up, dispatches and reports a shutdown per sidecar.
Pods and sidecars are processed strictly one at a time.
"""

from typing import AsyncIterable

import structlog

from hahaha.application.services.dispatcher import ActionDispatcher
from hahaha.application.services.reporter import OutcomeReporter
from hahaha.domain.registry import ActionRegistry
from hahaha.domain.sidecars import extract_running_sidecars, resolve_namespace, resolve_workload
from hahaha.domain.value_objects import DispatchOutcome, PodIdentity, PodSnapshot


logger = structlog.get_logger(__name__)


class Reconciler:
    """
    Sequential consumer of pod snapshots.

    Namespace policy: a snapshot without a namespace is treated as living
    in ``default_namespace``. Workload policy: the workload is the owning
    Job (or CronJob); a pod without one falls back to its ``app`` label, and
    a pod with neither is skipped entirely.
    """

    def __init__(
        self,
        registry: ActionRegistry,
        dispatcher: ActionDispatcher,
        reporter: OutcomeReporter,
        default_namespace: str = "default",
    ):
        self._registry = registry
        self._dispatcher = dispatcher
        self._reporter = reporter
        self._default_namespace = default_namespace

    async def run(self, snapshots: AsyncIterable[PodSnapshot]) -> int:
        """
        Reconcile every snapshot until the stream ends.

        Stream errors are not caught and end the loop.

        Returns:
            Number of snapshots processed
        """
        processed = 0
        async for pod in snapshots:
            await self.reconcile(pod)
            processed += 1
        logger.info("Pod stream ended", processed=processed)
        return processed

    async def reconcile(self, pod: PodSnapshot) -> None:
        """
        Shut down the running sidecars of one pod.

        Args:
            pod: Observed pod snapshot
        """
        namespace = resolve_namespace(pod, self._default_namespace)

        running_sidecars = extract_running_sidecars(pod)
        if not running_sidecars:
            return

        workload = resolve_workload(pod)
        if workload is None:
            logger.warning(
                "Cannot determine workload for pod, skipping",
                pod=pod.name,
                namespace=namespace,
            )
            return

        identity = PodIdentity(name=pod.name, namespace=namespace, uid=pod.uid)
        logger.info(
            "Pod needs help shutting down residual containers",
            pod=pod.name,
            namespace=namespace,
            workload=workload,
            sidecars=[sidecar.name for sidecar in running_sidecars],
        )

        for sidecar in running_sidecars:
            action = self._registry.lookup(sidecar.name)
            if action is None:
                outcome = DispatchOutcome.unrecognized_sidecar()
            else:
                outcome = await self._dispatcher.dispatch(action, identity, sidecar.name)
            await self._reporter.report(outcome, identity, sidecar.name, workload, namespace)
