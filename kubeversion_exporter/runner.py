"""Exporter runner with graceful shutdown support."""

import logging
import threading

from paste.translogger import TransLogger  # type: ignore[import-untyped]
from waitress import serve

from kubeversion_exporter import create_app, version
from kubeversion_exporter.config import Settings
from kubeversion_exporter.exceptions import InventoryException
from kubeversion_exporter.logging_config import configure_logging
from kubeversion_exporter.utils.lifecycle_coordinator import LifecycleEvent

logger = logging.getLogger(__name__)


def run(settings: Settings) -> int:
    """Run the exporter until it is shut down.

    This handles:
    - Logging setup
    - Kubernetes client creation (fatal on failure)
    - Starting the reconciliation loop
    - Serving the HTTP surface with Waitress
    - Graceful shutdown coordination

    Returns:
        The process exit code: 0 after a signal-driven shutdown, 1 when the
        Kubernetes client cannot be created or the HTTP server dies.
    """
    configure_logging(settings.log_level, settings.log_output)

    logger.info(f"Starting kubeversion-exporter {version.info()}")
    logger.info(f"Build context {version.build_context()}")

    app = create_app(settings)
    container = app.container

    try:
        scheduler = container.reconciliation_scheduler()
    except InventoryException as e:
        logger.critical(
            "Could not create API client for the Kubernetes cluster",
            extra={"error": e.message, "error_code": e.error_code},
        )
        return 1

    lifecycle_coordinator = container.lifecycle_coordinator()
    lifecycle_coordinator.initialize()

    scheduler.start()

    stopped = threading.Event()

    def signal_shutdown(lifecycle_event: LifecycleEvent) -> None:
        if lifecycle_event == LifecycleEvent.AFTER_SHUTDOWN:
            stopped.set()

    lifecycle_coordinator.register_lifecycle_notification(signal_shutdown)

    def runner() -> None:
        wsgi = TransLogger(app, setup_console_handler=False)
        logger.info(
            f"Server listen on: {settings.listen_address}",
            extra={"threads": settings.waitress_threads},
        )
        try:
            serve(
                wsgi,
                host=settings.listen_host,
                port=settings.listen_port,
                threads=settings.waitress_threads,
                ident="kubeversion-exporter",
            )
        except Exception as e:
            logger.critical(
                "HTTP server died unexpected", exc_info=True, extra={"error": str(e)}
            )
        finally:
            stopped.set()

    # Run server in daemon thread so the lifecycle coordinator controls exit
    thread = threading.Thread(target=runner, daemon=True, name="HTTPServer")
    thread.start()

    stopped.wait()

    if lifecycle_coordinator.is_shutting_down():
        return 0

    logger.critical("HTTP server stopped without a shutdown request")
    scheduler.stop()
    return 1
