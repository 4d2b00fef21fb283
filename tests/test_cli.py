"""Tests for the command line interface."""

import pytest

import kubeversion_exporter.cli as cli
from kubeversion_exporter.config import Settings


class TestBuildSettings:
    """Flags are applied on top of the environment settings."""

    def test_no_flags_keep_base(self):
        base = Settings(interval=120, log_level="debug")
        args = cli.create_parser().parse_args([])

        settings = cli.build_settings(args, base)

        assert settings == base

    def test_flags_override_base(self):
        base = Settings(interval=120)
        args = cli.create_parser().parse_args(
            [
                "--cluster",
                "--kubeconfig", "/etc/kubeconfig",
                "--interval", "30",
                "--loglevel", "warn",
                "--logoutput", "json",
                "--web.listen-address", "127.0.0.1:9000",
                "--web.telemetry-path", "/custom",
            ]
        )

        settings = cli.build_settings(args, base)

        assert settings.in_cluster is True
        assert settings.kubeconfig == "/etc/kubeconfig"
        assert settings.interval == 30
        assert settings.log_level == "warn"
        assert settings.log_output == "json"
        assert settings.listen_address == "127.0.0.1:9000"
        assert settings.metrics_path == "/custom"

    def test_flags_after_run_subcommand(self):
        args = cli.create_parser().parse_args(["run", "--interval", "45"])

        assert args.command == "run"
        assert cli.build_settings(args, Settings()).interval == 45

    def test_invalid_loglevel_is_rejected_by_parser(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.create_parser().parse_args(["--loglevel", "verbose"])

        assert exc_info.value.code == 2


class TestMain:
    def test_version_exits_zero(self, monkeypatch, capsys):
        run_calls = []
        monkeypatch.setattr(cli, "handle_run", lambda settings: run_calls.append(settings))

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["version"])

        assert exc_info.value.code == 0
        assert "kubeversion-exporter, version" in capsys.readouterr().out
        assert run_calls == []

    def test_invalid_config_exits_one(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "handle_run", lambda settings: 0)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--interval", "0"])

        assert exc_info.value.code == 1
        assert "interval must be a positive number" in capsys.readouterr().err

    def test_run_exit_code_is_passed_through(self, monkeypatch):
        received: list[Settings] = []

        def fake_run(settings: Settings) -> int:
            received.append(settings)
            return 1

        monkeypatch.setattr(cli, "handle_run", fake_run)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--web.telemetry-path", "/custom"])

        assert exc_info.value.code == 1
        assert received[0].metrics_path == "/custom"
