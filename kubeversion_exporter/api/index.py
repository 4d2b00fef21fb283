"""Informational landing page."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, render_template_string

from kubeversion_exporter.config import Settings
from kubeversion_exporter.version import get_build_info

index_bp = Blueprint("index", __name__)

INDEX_TEMPLATE = """<html>
<head><title>kubeversion-exporter</title></head>
<body>
<h1>kubeversion-exporter</h1>
<p><a href='{{ metrics_path }}'>Metrics</a></p>
<p>
<ul>
<li>version: {{ build.version }}</li>
<li>branch: {{ build.branch }}</li>
<li>revision: {{ build.revision }}</li>
<li>python version: {{ build.python_version }}</li>
<li>build user: {{ build.build_user }}</li>
<li>build date: {{ build.build_date }}</li>
</ul>
</p>
</body>
</html>"""


@index_bp.route("/", methods=["GET"])
@inject
def index(settings: Settings = Provide["config"]) -> Any:
    return render_template_string(
        INDEX_TEMPLATE,
        metrics_path=settings.metrics_path,
        build=get_build_info(),
    )
