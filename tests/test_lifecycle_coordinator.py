"""Tests for the lifecycle coordinator."""

import signal
from unittest.mock import MagicMock, patch

from kubeversion_exporter.utils.lifecycle_coordinator import LifecycleCoordinator, LifecycleEvent


class TestLifecycleCoordinator:
    """Test suite for LifecycleCoordinator."""

    def test_initialize_installs_signal_handlers(self):
        coordinator = LifecycleCoordinator(graceful_shutdown_timeout=5)

        with patch("signal.signal") as mock_signal:
            coordinator.initialize()

        mock_signal.assert_any_call(signal.SIGTERM, coordinator._handle_sigterm)
        mock_signal.assert_any_call(signal.SIGINT, coordinator._handle_sigterm)

    def test_shutdown_raises_events_in_order(self):
        coordinator = LifecycleCoordinator(graceful_shutdown_timeout=5)
        events: list[LifecycleEvent] = []
        coordinator.register_lifecycle_notification(events.append)

        coordinator.shutdown()

        assert events == [
            LifecycleEvent.PREPARE_SHUTDOWN,
            LifecycleEvent.SHUTDOWN,
            LifecycleEvent.AFTER_SHUTDOWN,
        ]
        assert coordinator.is_shutting_down()

    def test_waiters_run_between_prepare_and_shutdown(self):
        coordinator = LifecycleCoordinator(graceful_shutdown_timeout=5)
        calls: list[str] = []
        coordinator.register_lifecycle_notification(lambda event: calls.append(event.value))

        def waiter(timeout: float) -> bool:
            calls.append("waiter")
            assert 0 < timeout <= 5
            return True

        coordinator.register_shutdown_waiter("test", waiter)
        coordinator.shutdown()

        assert calls == ["prepare-shutdown", "waiter", "shutdown", "after-shutdown"]

    def test_second_shutdown_is_ignored(self):
        coordinator = LifecycleCoordinator(graceful_shutdown_timeout=5)
        callback = MagicMock()
        coordinator.register_lifecycle_notification(callback)

        coordinator.shutdown()
        coordinator.shutdown()

        assert callback.call_count == 3

    def test_failing_waiter_and_callback_do_not_block_shutdown(self):
        coordinator = LifecycleCoordinator(graceful_shutdown_timeout=5)
        events: list[LifecycleEvent] = []

        def broken_callback(event: LifecycleEvent) -> None:
            raise RuntimeError("callback failed")

        def broken_waiter(timeout: float) -> bool:
            raise RuntimeError("waiter failed")

        coordinator.register_lifecycle_notification(broken_callback)
        coordinator.register_lifecycle_notification(events.append)
        coordinator.register_shutdown_waiter("broken", broken_waiter)
        coordinator.register_shutdown_waiter("slow", lambda timeout: False)

        coordinator.shutdown()

        assert events[-1] == LifecycleEvent.AFTER_SHUTDOWN

    def test_signal_handler_triggers_shutdown(self):
        coordinator = LifecycleCoordinator(graceful_shutdown_timeout=5)

        coordinator._handle_sigterm(signal.SIGTERM, None)

        assert coordinator.is_shutting_down()
