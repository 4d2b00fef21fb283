"""Custom Flask application class with container reference."""

from flask import Flask

from kubeversion_exporter.container import ServiceContainer


class App(Flask):
    """Custom Flask application with typed container attribute.

    This class extends Flask to provide type-safe access to the
    dependency injection container.
    """

    container: ServiceContainer
