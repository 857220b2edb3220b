"""
Prometheus counters for sidecar shutdowns.

Each ShutdownMetrics instance owns its own CollectorRegistry so that it
can be injected explicitly and exercised in isolation.
"""

from typing import Iterable, Iterator

from prometheus_client import CollectorRegistry, Counter, generate_latest
from prometheus_client.core import Metric
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from hahaha.domain.ports import IShutdownMetricsPort


LABELS = ("container", "job_name", "namespace")


class PlainCounterCollector:
    """
    Exposes counters under their bare names.

    Only the running total of each counter is emitted, as ``<name>{...} N``
    typed ``unknown``; the ``_total`` suffix and ``_created`` series that
    prometheus_client adds for counters are left out.
    """

    def __init__(self, counters: Iterable[Counter]):
        self._counters = tuple(counters)

    def collect(self) -> Iterator[Metric]:
        for counter in self._counters:
            for family in counter.collect():
                metric = Metric(family.name, family.documentation, "unknown")
                total = f"{family.name}_total"
                for sample in family.samples:
                    if sample.name == total:
                        metric.add_sample(family.name, sample.labels, sample.value)
                yield metric


class ShutdownMetrics(IShutdownMetricsPort):
    """
    The four shutdown counters.

    prometheus_client counters are thread safe, so the reconciliation
    loop can increment them while the metrics endpoint renders them.
    The counters themselves are not registered anywhere; ``registry``
    only holds the collector that renders them.

    Examples:
        >>> metrics = ShutdownMetrics(prefix="hahaha")
        >>> metrics.record_shutdown("istio-proxy", "job-7", "team-a")
        >>> metrics.sample("sidecar_shutdowns", "istio-proxy", "job-7", "team-a")
        1.0
    """

    def __init__(self, prefix: str = "hahaha", registry: CollectorRegistry = None):
        self.prefix = prefix
        self.registry = registry if registry is not None else CollectorRegistry()

        self.sidecar_shutdowns = Counter(
            f"{prefix}_sidecar_shutdowns",
            "Number of sidecar shutdowns",
            LABELS,
            registry=None,
        )
        self.failed_sidecar_shutdowns = Counter(
            f"{prefix}_failed_sidecar_shutdowns",
            "Number of failed sidecar shutdowns",
            LABELS,
            registry=None,
        )
        self.unsupported_sidecars = Counter(
            f"{prefix}_unsupported_sidecars",
            "Number of unsupported sidecars, by sidecar",
            LABELS,
            registry=None,
        )
        self.total_unsuccessful_event_posts = Counter(
            f"{prefix}_total_unsuccessful_event_posts",
            "Total number of unsuccessful Kubernetes Event posts",
            registry=None,
        )

        self.registry.register(PlainCounterCollector([
            self.sidecar_shutdowns,
            self.failed_sidecar_shutdowns,
            self.unsupported_sidecars,
            self.total_unsuccessful_event_posts,
        ]))

    def record_shutdown(self, container: str, workload: str, namespace: str) -> None:
        self.sidecar_shutdowns.labels(container, workload, namespace).inc()

    def record_failed_shutdown(self, container: str, workload: str, namespace: str) -> None:
        self.failed_sidecar_shutdowns.labels(container, workload, namespace).inc()

    def record_unsupported_sidecar(self, container: str, workload: str, namespace: str) -> None:
        self.unsupported_sidecars.labels(container, workload, namespace).inc()

    def record_failed_event_post(self) -> None:
        self.total_unsuccessful_event_posts.inc()

    def sample(self, name: str, container: str = None, workload: str = None, namespace: str = None) -> float:
        """
        Current value of a counter, 0.0 if it was never incremented.

        Args:
            name: Counter name without prefix, e.g. "sidecar_shutdowns"
            container: Container label (omit for the unlabelled counter)
            workload: Workload label
            namespace: Namespace label
        """
        labels = {}
        if container is not None:
            labels = {"container": container, "job_name": workload, "namespace": namespace}
        value = self.registry.get_sample_value(f"{self.prefix}_{name}", labels)
        return value or 0.0

    def render(self) -> bytes:
        """Text exposition of every counter in the registry."""
        return generate_latest(self.registry)

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST
