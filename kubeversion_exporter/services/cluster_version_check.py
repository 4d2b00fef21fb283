"""Check whether a newer platform release than the running one exists."""

import logging

from kubeversion_exporter.exceptions import InventoryException, ReleaseFeedException
from kubeversion_exporter.services.metrics_service import MetricRecord
from kubeversion_exporter.services.protocols import InventoryProtocol, ReleaseFeedProtocol
from kubeversion_exporter.utils.versions import decide

logger = logging.getLogger(__name__)


class ClusterVersionCheck:
    """Compares the running platform version with the latest release."""

    def __init__(self, inventory: InventoryProtocol, release_feed: ReleaseFeedProtocol):
        self.inventory = inventory
        self.release_feed = release_feed

    def run(self) -> MetricRecord | None:
        """Run the check once.

        Returns:
            The cluster_info record, or None when either version could not be
            obtained. The caller keeps the previously published record then.
        """
        try:
            running_version = self.inventory.get_platform_version()
        except InventoryException as e:
            logger.error(
                "Could not get running Kubernetes version",
                extra={"error": e.message, "error_code": e.error_code},
            )
            return None

        try:
            latest_version = self.release_feed.get_latest_release()
        except ReleaseFeedException as e:
            logger.error(
                "Could not get current Kubernetes version",
                extra={"error": e.message, "error_code": e.error_code},
            )
            return None

        decision = decide(running_version, latest_version)

        logger.info(
            "Received versions",
            extra={
                "running_version": decision.running,
                "current_version": decision.latest,
            },
        )

        return MetricRecord(
            labels={
                "running_version": decision.running,
                "current_version": decision.latest,
            },
            status=decision.is_newer,
        )
