"""Command line interface of the exporter."""

import argparse
import sys
from collections.abc import Sequence
from typing import Any, NoReturn

from dotenv import load_dotenv

from kubeversion_exporter import version
from kubeversion_exporter.config import LOG_LEVELS, LOG_OUTPUTS, Settings
from kubeversion_exporter.exceptions import ConfigurationError

PROGRAM_NAME = "kubeversion-exporter"

# Flag destination -> Settings field
FLAG_SETTINGS = {
    "cluster": "in_cluster",
    "kubeconfig": "kubeconfig",
    "interval": "interval",
    "loglevel": "log_level",
    "logoutput": "log_output",
    "listen_address": "listen_address",
    "metrics_path": "metrics_path",
}


def _flags_parser() -> argparse.ArgumentParser:
    # Defaults are suppressed so that unset flags leave the environment
    # settings alone, and subcommand parsers do not overwrite root values.
    flags = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    flags.add_argument(
        "--cluster",
        action="store_true",
        help="Authenticating inside the Kubernetes cluster.",
    )
    flags.add_argument(
        "--kubeconfig",
        help="Path to the kubeconfig file to use for CLI requests.",
    )
    flags.add_argument(
        "--interval",
        type=int,
        help="Interval in which to check for new image versions in seconds (default: 3600).",
    )
    flags.add_argument(
        "--loglevel",
        choices=LOG_LEVELS,
        help="Set the log level (default: info).",
    )
    flags.add_argument(
        "--logoutput",
        choices=LOG_OUTPUTS,
        help="Set the output format of the log line (default: plain).",
    )
    flags.add_argument(
        "--web.listen-address",
        dest="listen_address",
        help="Address to listen on for web interface and telemetry (default: :9637).",
    )
    flags.add_argument(
        "--web.telemetry-path",
        dest="metrics_path",
        help="Path under which to expose metrics (default: /metrics).",
    )
    return flags


def create_parser() -> argparse.ArgumentParser:
    flags = _flags_parser()

    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description=(
            f"{PROGRAM_NAME} - exports the running version of an image in a "
            "Kubernetes cluster and if available the new version of the image."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[flags],
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "run",
        help="Run the exporter (default).",
        parents=[flags],
    )
    subparsers.add_parser(
        "version",
        help=f"Print version information for {PROGRAM_NAME}.",
        parents=[flags],
    )

    return parser


def build_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply the given command line flags on top of the environment settings."""
    if base is None:
        base = Settings.load()

    overrides: dict[str, Any] = {
        setting: getattr(args, flag)
        for flag, setting in FLAG_SETTINGS.items()
        if hasattr(args, flag)
    }

    settings = base.model_copy(update=overrides)
    settings.validate_config()
    return settings


def handle_version() -> None:
    print(version.print_version(PROGRAM_NAME))


def handle_run(settings: Settings) -> int:
    # Imported here so that the version command does not load the server stack
    from kubeversion_exporter.runner import run

    return run(settings)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "version":
        handle_version()
        sys.exit(0)

    try:
        settings = build_settings(args)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    sys.exit(handle_run(settings))


if __name__ == "__main__":
    main()
