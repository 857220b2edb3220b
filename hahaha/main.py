"""
Process bootstrap

Wires settings, logging, the Kubernetes adapters and the application
services together, then runs the reconciliation loop next to the metrics
server until the pod stream ends.
"""

import asyncio
import signal
import sys
from typing import Optional

from hahaha import __version__
from hahaha.application.services import ActionDispatcher, OutcomeReporter, Reconciler
from hahaha.domain.ports import IPodWatchPort
from hahaha.domain.registry import ActionRegistry
from hahaha.infrastructure.config import Settings, get_settings
from hahaha.infrastructure.kubernetes import (
    KubernetesEventRecorder,
    KubernetesPodClient,
    KubernetesPodWatcher,
    create_core_v1_api,
)
from hahaha.infrastructure.logging import configure_logging, get_logger
from hahaha.infrastructure.monitoring import ShutdownMetrics
from hahaha.interfaces.http import MetricsServer
from hahaha.shared.errors import WatchError


logger = get_logger(__name__)


async def run(
    reconciler: Reconciler,
    watcher: IPodWatchPort,
    metrics_server: MetricsServer,
) -> None:
    """
    Run the reconciliation loop and the metrics server side by side.

    When the pod stream ends, normally or with an error, the metrics server
    is asked to shut down and awaited before returning (or re-raising).
    """
    shutdown = asyncio.Event()
    metrics_task = asyncio.create_task(metrics_server.serve(shutdown))

    try:
        await reconciler.run(watcher.snapshots())
    finally:
        shutdown.set()
        await metrics_task


def build(settings: Settings):
    """
    Construct every collaborator from settings.

    Returns:
        Tuple of (reconciler, watcher, metrics_server)
    """
    core_v1 = create_core_v1_api(settings.kube_config_path)

    registry = ActionRegistry.default()
    metrics = ShutdownMetrics(prefix=settings.metrics_prefix)

    dispatcher = ActionDispatcher(
        KubernetesPodClient(
            core_v1,
            http_timeout=settings.http_signal_timeout_seconds,
            request_timeout=settings.kube_request_timeout_seconds,
        )
    )
    reporter = OutcomeReporter(
        KubernetesEventRecorder(
            core_v1,
            controller=settings.reporting_controller,
            instance=settings.reporting_instance,
        ),
        metrics,
    )
    reconciler = Reconciler(
        registry,
        dispatcher,
        reporter,
        default_namespace=settings.default_namespace,
    )
    watcher = KubernetesPodWatcher(
        core_v1,
        label_selector=settings.label_selector,
        timeout_seconds=settings.watch_timeout_seconds,
    )
    metrics_server = MetricsServer(
        metrics,
        host=settings.metrics_host,
        port=settings.metrics_port,
        log_level=settings.log_level,
    )

    logger.info(
        "hahaha starting",
        version=__version__,
        label_selector=settings.label_selector,
        sidecars=sorted(registry),
        instance=settings.reporting_instance,
    )
    return reconciler, watcher, metrics_server


async def _main(settings: Settings) -> None:
    reconciler, watcher, metrics_server = build(settings)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, watcher.stop)

    await run(reconciler, watcher, metrics_server)


def main(settings: Optional[Settings] = None) -> int:
    """Console entry point."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    try:
        asyncio.run(_main(settings))
    except WatchError as e:
        logger.error("Pod watch failed, exiting", error=str(e))
        return 1

    logger.info("hahaha stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
