"""Build information of the running exporter.

The package version comes from the installed distribution metadata. Revision,
branch, build user and build date are injected by the image build through
environment variables and default to "unknown" for local runs.
"""

import os
import platform
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "kubeversion-exporter"


@dataclass(frozen=True)
class BuildInfo:
    version: str
    revision: str
    branch: str
    build_user: str
    build_date: str
    python_version: str


def get_build_info() -> BuildInfo:
    try:
        package_version = version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        package_version = "unknown"

    return BuildInfo(
        version=package_version,
        revision=os.getenv("BUILD_REVISION", "unknown"),
        branch=os.getenv("BUILD_BRANCH", "unknown"),
        build_user=os.getenv("BUILD_USER", "unknown"),
        build_date=os.getenv("BUILD_DATE", "unknown"),
        python_version=platform.python_version(),
    )


def info(build: BuildInfo | None = None) -> str:
    """One-line version summary for the startup log."""
    build = build or get_build_info()
    return f"(version={build.version}, branch={build.branch}, revision={build.revision})"


def build_context(build: BuildInfo | None = None) -> str:
    """One-line build environment summary for the startup log."""
    build = build or get_build_info()
    return (
        f"(python={build.python_version}, user={build.build_user}, "
        f"date={build.build_date})"
    )


def print_version(program: str, build: BuildInfo | None = None) -> str:
    """Multi-line version report for the version command."""
    build = build or get_build_info()
    return "\n".join(
        [
            f"{program}, version {build.version} "
            f"(branch: {build.branch}, revision: {build.revision})",
            f"  build user:       {build.build_user}",
            f"  build date:       {build.build_date}",
            f"  python version:   {build.python_version}",
        ]
    )
