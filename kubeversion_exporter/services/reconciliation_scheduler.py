"""Background loop that periodically reconciles published version metrics.

One cycle runs the cluster check, then the image check, and swaps their
results into the metrics service. The loop then waits for the configured
interval, counted from the end of the cycle, so a slow cycle delays the next
one instead of overlapping it.
"""

import logging
import threading
import time

from kubeversion_exporter.services.cluster_version_check import ClusterVersionCheck
from kubeversion_exporter.services.image_version_check import ImageVersionCheck
from kubeversion_exporter.services.metrics_service import VersionMetricsService
from kubeversion_exporter.utils.lifecycle_coordinator import LifecycleCoordinatorProtocol

logger = logging.getLogger(__name__)


class ReconciliationScheduler:
    """Runs version check cycles on a background thread.

    Example usage:
        scheduler = container.reconciliation_scheduler()
        scheduler.start()
    """

    def __init__(
        self,
        cluster_check: ClusterVersionCheck,
        image_check: ImageVersionCheck,
        metrics_service: VersionMetricsService,
        lifecycle_coordinator: LifecycleCoordinatorProtocol,
        interval_seconds: int = 3600,
    ):
        """Initialize the scheduler.

        Args:
            cluster_check: Platform version check run first in each cycle
            image_check: Image version check run second in each cycle
            metrics_service: Receives the results of each cycle
            lifecycle_coordinator: Stops the loop during graceful shutdown
            interval_seconds: Wait after a finished cycle before the next one
        """
        self.cluster_check = cluster_check
        self.image_check = image_check
        self.metrics_service = metrics_service
        self.interval_seconds = interval_seconds

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        lifecycle_coordinator.register_shutdown_waiter(
            "ReconciliationScheduler", self._wait_for_stop
        )

    def start(self) -> None:
        """Start the background loop; the first cycle runs immediately."""
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Reconciliation scheduler already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run_forever,
            daemon=True,
            name="ReconciliationScheduler",
        )
        self._thread.start()
        logger.info(
            "Started reconciliation scheduler",
            extra={"interval_seconds": self.interval_seconds},
        )

    def stop(self, timeout: float = 5.0) -> None:
        """Prevent further cycles and wait briefly for the loop to exit.

        A cycle in progress is not interrupted; the daemon thread is left
        behind if it does not finish within the timeout.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
            logger.info("Stopped reconciliation scheduler")

    def run_forever(self) -> None:
        """Run cycles until the stop event is set."""
        while not self._stop_event.is_set():
            self.run_cycle()

            if self._stop_event.wait(self.interval_seconds):
                break

    def run_cycle(self) -> None:
        """Run one complete cycle synchronously."""
        start = time.perf_counter()

        for step in (self._check_cluster, self._check_images):
            try:
                step()
            except Exception as e:
                logger.error(
                    "Reconciliation step failed",
                    exc_info=True,
                    extra={"step": step.__name__, "error": str(e)},
                )

        logger.debug(
            "Finished reconciliation cycle",
            extra={"duration_seconds": round(time.perf_counter() - start, 3)},
        )

    def _check_cluster(self) -> None:
        logger.info("Start checking Kubernetes for newer version")

        record = self.cluster_check.run()
        if record is not None:
            self.metrics_service.replace_cluster_records([record])

        logger.info("Finished checking Kubernetes for new version")

    def _check_images(self) -> None:
        logger.info("Start checking images for new versions")

        result = self.image_check.run()
        if result is not None:
            self.metrics_service.publish_image_result(result.counters, result.records)
            if not result.records:
                logger.warning(
                    "No image could be checked, keeping previous image metrics",
                    extra={"images": result.counters.total},
                )

        logger.info("Finished checking images for new versions")

    def _wait_for_stop(self, timeout: float) -> bool:
        """Shutdown waiter: stop the loop, give a running cycle until timeout."""
        thread = self._thread
        self.stop(timeout=timeout)
        return thread is None or not thread.is_alive()
