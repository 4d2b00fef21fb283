"""Dependency injection container for the exporter."""

from dependency_injector import containers, providers

from kubeversion_exporter.config import Settings
from kubeversion_exporter.services.cluster_version_check import ClusterVersionCheck
from kubeversion_exporter.services.image_version_check import ImageVersionCheck
from kubeversion_exporter.services.inventory_service import KubernetesInventoryService
from kubeversion_exporter.services.metrics_service import VersionMetricsService
from kubeversion_exporter.services.reconciliation_scheduler import ReconciliationScheduler
from kubeversion_exporter.services.registry_service import RegistryTagService
from kubeversion_exporter.services.release_feed_service import ReleaseFeedService
from kubeversion_exporter.utils.lifecycle_coordinator import LifecycleCoordinator


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration - must be overridden
    config = providers.Dependency(instance_of=Settings)

    # Lifecycle coordinator - manages graceful shutdown
    lifecycle_coordinator = providers.Singleton(
        LifecycleCoordinator,
        graceful_shutdown_timeout=config.provided.graceful_shutdown_timeout,
    )

    # Metrics service - owns the registry served on the metrics path
    metrics_service = providers.Singleton(VersionMetricsService)

    # Collaborators
    inventory_service = providers.Singleton(
        KubernetesInventoryService,
        in_cluster=config.provided.in_cluster,
        kubeconfig=config.provided.kubeconfig,
    )
    release_feed_service = providers.Singleton(
        ReleaseFeedService,
        release_url=config.provided.release_url,
        http_timeout=config.provided.release_timeout,
    )
    registry_service = providers.Singleton(
        RegistryTagService,
        http_timeout=config.provided.registry_timeout,
    )

    # Version checks
    cluster_version_check = providers.Factory(
        ClusterVersionCheck,
        inventory=inventory_service,
        release_feed=release_feed_service,
    )
    image_version_check = providers.Factory(
        ImageVersionCheck,
        inventory=inventory_service,
        registry=registry_service,
        max_workers=config.provided.image_check_workers,
    )

    # Reconciliation loop
    reconciliation_scheduler = providers.Singleton(
        ReconciliationScheduler,
        cluster_check=cluster_version_check,
        image_check=image_version_check,
        metrics_service=metrics_service,
        lifecycle_coordinator=lifecycle_coordinator,
        interval_seconds=config.provided.interval,
    )
