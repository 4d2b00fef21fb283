"""Tests for version normalization and ordering."""

import pytest

from kubeversion_exporter.utils.versions import compare, decide, normalize, sort_versions


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize(
        "version,expected",
        [
            ("v1.24.3", "1.24.3"),
            ("1.21", "1.21.0"),
            ("2", "2.0.0"),
            ("1.2.3.4", "1.2.3.4"),
            ("1.0.0-RC1", "1.0.0-rc.1"),
            ("1.0.0beta2", "1.0.0-beta.2"),
            ("1.0.0a", "1.0.0-alpha"),
            ("1.0.0-pl3", "1.0.0-patch.3"),
            ("1.0.0-stable", "1.0.0"),
            ("  v3.1.0+build.7 ", "3.1.0"),
        ],
    )
    def test_canonical_form(self, version, expected):
        assert normalize(version) == expected

    def test_is_idempotent(self):
        for version in ("v1.24.3", "1.0.0-RC1", "1.2", "latest", "3.18-alpine"):
            once = normalize(version)
            assert normalize(once) == once

    def test_unparseable_is_returned_trimmed(self):
        assert normalize(" latest ") == "latest"
        assert normalize("3.18-alpine+sha") == "3.18-alpine"


class TestCompare:
    """Tests for compare() and sort_versions()."""

    def test_numeric_not_lexical(self):
        assert compare("1.10.0", "1.9.0") == 1
        assert compare("1.9.0", "1.10.0") == -1

    def test_equal_after_normalization(self):
        assert compare("v1.2", "1.2.0") == 0

    def test_stability_ordering(self):
        ordered = ["1.0.0-dev", "1.0.0-alpha.1", "1.0.0-beta", "1.0.0-rc.2", "1.0.0", "1.0.0-p1"]
        assert sort_versions(reversed(ordered)) == ordered

    def test_unparseable_sorts_below_versions(self):
        assert sort_versions(["1.21.0", "latest", "1.19.0", "alpine"]) == [
            "alpine",
            "latest",
            "1.19.0",
            "1.21.0",
        ]

    def test_sort_keeps_input_order_of_equal_versions(self):
        assert sort_versions(["v1.0", "1.0.0", "1.0"]) == ["v1.0", "1.0.0", "1.0"]

    def test_sort_of_empty_list(self):
        assert sort_versions([]) == []


class TestDecide:
    """Tests for decide()."""

    def test_newer_available(self):
        decision = decide("1.20.0", "1.21.0")

        assert decision.running == "1.20.0"
        assert decision.latest == "1.21.0"
        assert decision.is_newer == 1

    def test_up_to_date_after_normalization(self):
        decision = decide("v1.24.3", "1.24.3")

        assert decision.running == "1.24.3"
        assert decision.latest == "1.24.3"
        assert decision.is_newer == 0

    def test_running_ahead_of_latest(self):
        assert decide("1.25.0", "v1.24.9").is_newer == 0

    def test_prerelease_running(self):
        assert decide("1.25.0-rc.1", "1.25.0").is_newer == 1

    def test_unparseable_running_version(self):
        decision = decide("latest", "1.21.0")

        assert decision.running == "latest"
        assert decision.is_newer == 1
