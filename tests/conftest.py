"""Pytest fixtures for the exporter tests.

No test talks to a real cluster or registry: the three version sources are
replaced by the in-memory fakes from tests/testing_utils.py.
"""

from collections.abc import Generator

import pytest
from dependency_injector import providers
from flask.testing import FlaskClient

from kubeversion_exporter import create_app
from kubeversion_exporter.app import App
from kubeversion_exporter.config import Settings
from kubeversion_exporter.container import ServiceContainer
from kubeversion_exporter.services.cluster_version_check import ClusterVersionCheck
from kubeversion_exporter.services.image_version_check import ImageVersionCheck
from kubeversion_exporter.services.metrics_service import VersionMetricsService
from kubeversion_exporter.services.reconciliation_scheduler import ReconciliationScheduler
from tests.testing_utils import (
    FakeInventory,
    FakeRegistry,
    FakeReleaseFeed,
    StubLifecycleCoordinator,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(interval=1, listen_address="127.0.0.1:9637")


@pytest.fixture
def inventory() -> FakeInventory:
    return FakeInventory(
        images=["nginx:1.20.0", "quay.io/myorg/myimage:v2.0.0"],
        platform_version="v1.24.3",
    )


@pytest.fixture
def release_feed() -> FakeReleaseFeed:
    return FakeReleaseFeed("v1.25.0")


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry(
        {
            "library/nginx": ["1.19.0", "1.20.0", "1.21.0", "latest"],
            "myorg/myimage": ["v1.0.0", "v2.0.0"],
        }
    )


@pytest.fixture
def metrics_service() -> VersionMetricsService:
    return VersionMetricsService()


@pytest.fixture
def lifecycle_coordinator() -> StubLifecycleCoordinator:
    return StubLifecycleCoordinator()


@pytest.fixture
def scheduler(
    inventory: FakeInventory,
    release_feed: FakeReleaseFeed,
    registry: FakeRegistry,
    metrics_service: VersionMetricsService,
    lifecycle_coordinator: StubLifecycleCoordinator,
) -> Generator[ReconciliationScheduler, None, None]:
    scheduler = ReconciliationScheduler(
        cluster_check=ClusterVersionCheck(inventory, release_feed),
        image_check=ImageVersionCheck(inventory, registry),
        metrics_service=metrics_service,
        lifecycle_coordinator=lifecycle_coordinator,
        interval_seconds=1,
    )
    yield scheduler
    scheduler.stop()


@pytest.fixture
def container(
    inventory: FakeInventory,
    release_feed: FakeReleaseFeed,
    registry: FakeRegistry,
    metrics_service: VersionMetricsService,
    lifecycle_coordinator: StubLifecycleCoordinator,
) -> ServiceContainer:
    container = ServiceContainer()
    container.inventory_service.override(providers.Object(inventory))
    container.release_feed_service.override(providers.Object(release_feed))
    container.registry_service.override(providers.Object(registry))
    container.metrics_service.override(providers.Object(metrics_service))
    container.lifecycle_coordinator.override(providers.Object(lifecycle_coordinator))
    return container


@pytest.fixture
def app(settings: Settings, container: ServiceContainer) -> Generator[App, None, None]:
    app = create_app(settings, container=container)
    app.config.update(TESTING=True)
    yield app
    container.unwire()


@pytest.fixture
def client(app: App) -> FlaskClient:
    return app.test_client()
