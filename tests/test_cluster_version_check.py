"""Tests for the platform version check."""

import logging

from kubeversion_exporter.exceptions import InventoryException
from kubeversion_exporter.services.cluster_version_check import ClusterVersionCheck
from tests.testing_utils import FakeInventory, FakeReleaseFeed


class TestClusterVersionCheck:
    def test_newer_release_available(self):
        check = ClusterVersionCheck(FakeInventory(platform_version="v1.24.3"), FakeReleaseFeed("v1.25.0"))

        record = check.run()

        assert record is not None
        assert dict(record.labels) == {"running_version": "1.24.3", "current_version": "1.25.0"}
        assert record.status == 1

    def test_up_to_date(self):
        check = ClusterVersionCheck(FakeInventory(platform_version="v1.24.3"), FakeReleaseFeed("v1.24.3"))

        record = check.run()

        assert record is not None
        assert record.status == 0

    def test_platform_version_unavailable(self, caplog):
        inventory = FakeInventory()
        inventory.platform_version = InventoryException("get server version", "timeout")
        check = ClusterVersionCheck(inventory, FakeReleaseFeed())

        with caplog.at_level(logging.ERROR):
            assert check.run() is None

        assert "Could not get running Kubernetes version" in caplog.text

    def test_release_feed_unavailable(self, caplog):
        release_feed = FakeReleaseFeed()
        release_feed.fail()
        check = ClusterVersionCheck(FakeInventory(), release_feed)

        with caplog.at_level(logging.ERROR):
            assert check.run() is None

        assert "Could not get current Kubernetes version" in caplog.text
