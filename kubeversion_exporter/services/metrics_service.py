"""Prometheus metrics service for published version information.

Unlike the usual module-level gauges, all version metrics live in an explicit
``CollectorRegistry`` owned by this service. The service itself is registered
as a custom collector: it keeps each metric set as an immutable tuple and the
reconciliation loop replaces a whole tuple at once, so a scrape never sees a
mix of two cycles' records for the same kind of entity.
"""

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

logger = logging.getLogger(__name__)

METRICS_NAMESPACE = "kubeversion"

IMAGE_LABELS = ("image", "running_version", "current_version")
CLUSTER_LABELS = ("running_version", "current_version")


@dataclass(frozen=True)
class MetricRecord:
    """One gauge sample: its labels and whether a newer version exists."""

    labels: Mapping[str, str]
    status: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))


@dataclass(frozen=True)
class CycleCounters:
    """Outcome counts of one image check."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0


@dataclass(frozen=True)
class MetricsSnapshot:
    """Everything currently exposed for scraping."""

    cluster_records: tuple[MetricRecord, ...] = ()
    image_records: tuple[MetricRecord, ...] = ()
    image_counters: CycleCounters = field(default_factory=CycleCounters)


class VersionMetricsService(Collector):
    """Owns the version metrics registry and the published metric sets."""

    def __init__(self, namespace: str = METRICS_NAMESPACE):
        """Initialize the metrics service.

        Args:
            namespace: Prefix for every exported metric name.
        """
        self.namespace = namespace
        self._lock = threading.Lock()
        self._snapshot = MetricsSnapshot()

        self.registry = CollectorRegistry()
        self.registry.register(self)

    def snapshot(self) -> MetricsSnapshot:
        """Return the currently published state."""
        with self._lock:
            return self._snapshot

    def replace_cluster_records(self, records: Iterable[MetricRecord]) -> None:
        """Swap in a new platform metric set."""
        new_records = tuple(records)
        with self._lock:
            self._snapshot = replace(self._snapshot, cluster_records=new_records)
        logger.debug(
            "Published cluster metrics", extra={"records": len(new_records)}
        )

    def publish_image_result(
        self,
        counters: CycleCounters,
        records: Iterable[MetricRecord] | None = None,
    ) -> None:
        """Swap in the counters and records of one image check at once.

        Without records the previously published image metric set is kept and
        only the counters change.
        """
        new_records = tuple(records or ())
        with self._lock:
            if new_records:
                self._snapshot = replace(
                    self._snapshot, image_counters=counters, image_records=new_records
                )
            else:
                self._snapshot = replace(self._snapshot, image_counters=counters)
        logger.debug(
            "Published image metrics",
            extra={"records": len(new_records), "images": counters.total},
        )

    def get_metrics_text(self) -> str:
        """Generate metrics in Prometheus text format."""
        return generate_latest(self.registry).decode("utf-8")

    def collect(self) -> Iterator[Metric]:
        """Yield metric families built from one consistent snapshot."""
        snapshot = self.snapshot()

        yield GaugeMetricFamily(
            f"{self.namespace}_images_total",
            "Total number of images",
            value=snapshot.image_counters.total,
        )
        yield GaugeMetricFamily(
            f"{self.namespace}_images_success_total",
            "Total number of successfully processed images",
            value=snapshot.image_counters.succeeded,
        )
        yield GaugeMetricFamily(
            f"{self.namespace}_images_error_total",
            "Total number of images with an error during the processing",
            value=snapshot.image_counters.failed,
        )

        image_info = GaugeMetricFamily(
            f"{self.namespace}_image_info",
            "Information for the image",
            labels=IMAGE_LABELS,
        )
        for record in snapshot.image_records:
            image_info.add_metric(
                [record.labels[label] for label in IMAGE_LABELS], record.status
            )
        yield image_info

        cluster_info = GaugeMetricFamily(
            f"{self.namespace}_cluster_info",
            "Information for the cluster",
            labels=CLUSTER_LABELS,
        )
        for record in snapshot.cluster_records:
            cluster_info.add_metric(
                [record.labels[label] for label in CLUSTER_LABELS], record.status
            )
        yield cluster_info
