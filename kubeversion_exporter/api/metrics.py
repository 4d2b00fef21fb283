"""Metrics API endpoint for Prometheus scraping."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, Response

from kubeversion_exporter.services.metrics_service import VersionMetricsService

# Registered under the configured telemetry path.
metrics_bp = Blueprint("metrics", __name__)


@metrics_bp.route("", methods=["GET"])
@inject
def get_metrics(
    metrics_service: VersionMetricsService = Provide["metrics_service"],
) -> Any:
    """Return metrics in Prometheus text format.

    Returns:
        Response with metrics data in Prometheus exposition format
    """
    metrics_text = metrics_service.get_metrics_text()

    return Response(
        metrics_text,
        content_type="text/plain; version=0.0.4; charset=utf-8",
    )
