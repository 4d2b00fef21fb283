"""Configuration management using Pydantic settings.

Two-layer configuration system:
1. Environment: Loads raw values from environment variables (UPPER_CASE)
2. Settings: Clean application settings with lowercase fields and derived values

Command line flags are applied on top of the loaded Settings by the CLI.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kubeversion_exporter.services.release_feed_service import DEFAULT_RELEASE_URL

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "fatal", "panic")
LOG_OUTPUTS = ("plain", "json")


class Environment(BaseSettings):
    """Raw environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Kubernetes ─────────────────────────────────────────────────────

    IN_CLUSTER: bool = Field(default=False)
    KUBECONFIG: str | None = Field(default=None)

    # ── Reconciliation ─────────────────────────────────────────────────

    INTERVAL: int = Field(default=3600)
    RELEASE_URL: str = Field(default=DEFAULT_RELEASE_URL)
    RELEASE_TIMEOUT: float = Field(default=10.0)
    REGISTRY_TIMEOUT: float = Field(default=10.0)
    IMAGE_CHECK_WORKERS: int = Field(default=1)

    # ── Logging ────────────────────────────────────────────────────────

    LOG_LEVEL: str = Field(default="info")
    LOG_OUTPUT: str = Field(default="plain")

    # ── Web ────────────────────────────────────────────────────────────

    LISTEN_ADDRESS: str = Field(default=":9637")
    METRICS_PATH: str = Field(default="/metrics")
    WAITRESS_THREADS: int = Field(default=4)
    GRACEFUL_SHUTDOWN_TIMEOUT: int = Field(default=5)


class Settings(BaseModel):
    """Application settings with lowercase fields and derived values."""

    model_config = ConfigDict(from_attributes=True)

    in_cluster: bool = False
    kubeconfig: str | None = None

    interval: int = 3600
    release_url: str = DEFAULT_RELEASE_URL
    release_timeout: float = 10.0
    registry_timeout: float = 10.0
    image_check_workers: int = 1

    log_level: str = "info"
    log_output: str = "plain"

    listen_address: str = ":9637"
    metrics_path: str = "/metrics"
    waitress_threads: int = 4
    graceful_shutdown_timeout: int = 5

    @property
    def listen_host(self) -> str:
        host = self.listen_address.rpartition(":")[0].strip("[]")
        return host or "0.0.0.0"

    @property
    def listen_port(self) -> int:
        return int(self.listen_address.rpartition(":")[2])

    def validate_config(self) -> None:
        from kubeversion_exporter.exceptions import ConfigurationError

        errors: list[str] = []

        if self.interval <= 0:
            errors.append("interval must be a positive number of seconds")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"loglevel must be one of: {', '.join(LOG_LEVELS)}")

        if self.log_output not in LOG_OUTPUTS:
            errors.append(f"logoutput must be one of: {', '.join(LOG_OUTPUTS)}")

        if not self.metrics_path.startswith("/") or self.metrics_path == "/":
            errors.append("web.telemetry-path must start with '/' and not be the root path")

        try:
            port = self.listen_port
        except ValueError:
            port = -1
        if ":" not in self.listen_address or not 0 <= port <= 65535:
            errors.append("web.listen-address must have the form [host]:port")

        if self.image_check_workers < 1:
            errors.append("IMAGE_CHECK_WORKERS must be at least 1")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

    @classmethod
    def load(cls, env: "Environment | None" = None) -> "Settings":
        if env is None:
            env = Environment()

        return cls(
            # Kubernetes
            in_cluster=env.IN_CLUSTER,
            kubeconfig=env.KUBECONFIG or None,

            # Reconciliation
            interval=env.INTERVAL,
            release_url=env.RELEASE_URL,
            release_timeout=env.RELEASE_TIMEOUT,
            registry_timeout=env.REGISTRY_TIMEOUT,
            image_check_workers=env.IMAGE_CHECK_WORKERS,

            # Logging
            log_level=env.LOG_LEVEL.lower(),
            log_output=env.LOG_OUTPUT.lower(),

            # Web
            listen_address=env.LISTEN_ADDRESS,
            metrics_path=env.METRICS_PATH,
            waitress_threads=env.WAITRESS_THREADS,
            graceful_shutdown_timeout=env.GRACEFUL_SHUTDOWN_TIMEOUT,
        )
