"""Check every running image for a newer tag in its registry.

Each image is processed in isolation: a malformed reference, an unknown
registry layout, an unreachable registry or an empty tag list only marks that
one image as failed. The other images of the cycle are still checked and
published.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from kubeversion_exporter.exceptions import (
    InventoryException,
    RegistryException,
    VersionCheckException,
)
from kubeversion_exporter.services.metrics_service import CycleCounters, MetricRecord
from kubeversion_exporter.services.protocols import InventoryProtocol, RegistryProtocol
from kubeversion_exporter.utils.registry_coordinates import resolve, split_image_reference
from kubeversion_exporter.utils.versions import decide, sort_versions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageCheckResult:
    """Records of the images that succeeded, in inventory order, and the counts."""

    records: tuple[MetricRecord, ...]
    counters: CycleCounters


class ImageVersionCheck:
    """Looks up the newest published tag of every running image."""

    def __init__(
        self,
        inventory: InventoryProtocol,
        registry: RegistryProtocol,
        max_workers: int = 1,
    ):
        """Initialize the check.

        Args:
            inventory: Source of the running image references
            registry: Source of the published tags per repository
            max_workers: Images checked concurrently; 1 checks them one by one
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.inventory = inventory
        self.registry = registry
        self.max_workers = max_workers

    def run(self) -> ImageCheckResult | None:
        """Run the check once.

        Returns:
            The outcome of the cycle, or None when the running images could
            not be listed. Counters and records are left alone by the caller
            in that case.
        """
        try:
            images = self.inventory.list_running_images()
        except InventoryException as e:
            logger.error(
                "Could not get running images in the Kubernetes cluster",
                extra={"error": e.message, "error_code": e.error_code},
            )
            return None

        logger.debug("Received images", extra={"images": images})

        outcomes = self._check_all(images)

        records = tuple(record for record in outcomes if record is not None)
        counters = CycleCounters(
            total=len(images),
            succeeded=len(records),
            failed=len(images) - len(records),
        )
        return ImageCheckResult(records=records, counters=counters)

    def _check_all(self, images: Sequence[str]) -> list[MetricRecord | None]:
        if self.max_workers == 1 or len(images) <= 1:
            return [self.check_image(image) for image in images]

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="ImageVersionCheck"
        ) as executor:
            return list(executor.map(self.check_image, images))

    def check_image(self, image: str) -> MetricRecord | None:
        """Check a single image reference.

        Returns:
            The image_info record, or None when the image failed.
        """
        try:
            return self._check_image(image)
        except VersionCheckException as e:
            logger.error(
                f"Could not check the image {image}",
                extra={"image": image, "error": e.message, "error_code": e.error_code},
            )
        except Exception as e:
            logger.error(
                f"Unexpected error while checking the image {image}",
                exc_info=True,
                extra={"image": image, "error": str(e)},
            )
        return None

    def _check_image(self, image: str) -> MetricRecord:
        reference = split_image_reference(image)
        logger.debug(
            f"Split image {image}",
            extra={"image": reference.name, "tag": reference.tag},
        )

        coordinate = resolve(reference.name)
        logger.debug(
            f"Get registry and repository for {reference.name}",
            extra={"registry": coordinate.endpoint, "repository": coordinate.repository},
        )

        tags = self.registry.list_tags(coordinate.repository, coordinate.endpoint)
        if not tags:
            raise RegistryException(
                coordinate.repository, coordinate.endpoint, "no tags are published"
            )

        sorted_tags = sort_versions(tags)
        logger.debug(f"Sorted tags for image {image}", extra={"tags": sorted_tags})

        decision = decide(reference.tag, sorted_tags[-1])

        logger.info(
            f"Received version for image {image}",
            extra={
                "running_version": decision.running,
                "current_version": decision.latest,
            },
        )

        return MetricRecord(
            labels={
                "image": image,
                "running_version": decision.running,
                "current_version": decision.latest,
            },
            status=decision.is_newer,
        )
