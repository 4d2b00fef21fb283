"""kubeversion-exporter: Prometheus exporter for available Kubernetes and image updates."""

from kubeversion_exporter.app import App
from kubeversion_exporter.config import Settings
from kubeversion_exporter.container import ServiceContainer


def create_app(
    settings: "Settings | None" = None,
    container: "ServiceContainer | None" = None,
) -> App:
    """Create and configure the Flask application.

    Only the HTTP surface is set up here. The reconciliation loop and the
    Kubernetes client are started by the runner, so tests and tools can build
    the app without cluster access.

    Args:
        settings: Settings to use; loaded from the environment if omitted
        container: Prebuilt container, e.g. with overridden providers in tests
    """
    app = App(__name__)

    if settings is None:
        settings = Settings.load()

    settings.validate_config()

    if container is None:
        container = ServiceContainer()
    container.config.override(settings)

    # Wire container to all API modules via package scanning
    container.wire(packages=["kubeversion_exporter.api"])

    app.container = container

    from kubeversion_exporter.api.index import index_bp
    from kubeversion_exporter.api.metrics import metrics_bp

    app.register_blueprint(index_bp)
    app.register_blueprint(metrics_bp, url_prefix=settings.metrics_path)

    return app
