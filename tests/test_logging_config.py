"""Tests for log rendering."""

import json
import logging

import pytest

from kubeversion_exporter.logging_config import (
    configure_logging,
    create_formatter,
    get_log_level,
)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="kubeversion_exporter.test",
        level=logging.ERROR,
        pathname="/src/kubeversion_exporter/test.py",
        lineno=42,
        msg=msg,
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestGetLogLevel:
    @pytest.mark.parametrize(
        "name,level",
        [
            ("trace", logging.DEBUG),
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("warn", logging.WARNING),
            ("error", logging.ERROR),
            ("fatal", logging.CRITICAL),
            ("panic", logging.CRITICAL),
            ("unknown", logging.INFO),
        ],
    )
    def test_mapping(self, name, level):
        assert get_log_level(name) == level


class TestFormatters:
    def test_plain_includes_location(self):
        line = create_formatter("plain").format(_record("Could not check the image"))

        assert "[ERROR]" in line
        assert "test.py:42" in line
        assert line.endswith("Could not check the image")

    def test_json_is_one_object_with_extra_fields(self):
        line = create_formatter("json").format(
            _record("Could not check the image", image="nginx", error_code="REGISTRY_UNAVAILABLE")
        )

        payload = json.loads(line)
        assert payload["event"] == "Could not check the image"
        assert payload["level"] == "error"
        assert payload["logger"] == "kubeversion_exporter.test"
        assert payload["image"] == "nginx"
        assert payload["error_code"] == "REGISTRY_UNAVAILABLE"
        assert payload["lineno"] == 42
        assert "timestamp" in payload


class TestConfigureLogging:
    def test_replaces_root_handlers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            configure_logging("warn", "json")
            configure_logging("debug", "plain")

            assert len(root.handlers) == 1
            assert root.level == logging.DEBUG
            assert logging.getLogger("urllib3").level == logging.WARNING
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
