"""Tests for help and config commands."""
import json
from pathlib import Path

from click.testing import CliRunner

from apps.cli.config import CliConfig, load_config
from apps.cli.main import cli


def _write_snapshot(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps(
            {
                "fans": [{"id": "f1", "displayName": "Aoi", "residenceArea": "KOBE"}],
                "records": [
                    {
                        "id": "log-1",
                        "date": "2025-03-01T18:00:00",
                        "fanId": "f1",
                        "eventType": "FreeLive",
                        "venueArea": "KOBE",
                        "attendCount": 1,
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_help_top_level(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config-path", str(tmp_path / "config.json"), "help"])
    assert result.exit_code == 0
    assert "Usage" in result.output
    assert "ranking" in result.output


def test_help_subcommand(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config-path", str(tmp_path / "config.json"), "help", "ranking"])
    assert result.exit_code == 0
    assert "--mode" in result.output


def test_help_nested_subcommand(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config-path", str(tmp_path / "config.json"), "help", "config", "set-snapshot"])
    assert result.exit_code == 0
    assert "snapshot path" in result.output


def test_help_unknown_command(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config-path", str(tmp_path / "config.json"), "help", "unknown"])
    assert result.exit_code != 0
    assert "Unknown command" in result.output


def test_missing_config_uses_defaults(tmp_path):
    assert load_config(tmp_path / "absent") == CliConfig()


def test_yaml_config(tmp_path):
    cfg = tmp_path / "config"
    cfg.write_text("snapshot_path: /data/snapshot.yaml\nmode: cumulative\n", encoding="utf-8")
    config = load_config(cfg)
    assert config.snapshot_path == "/data/snapshot.yaml"
    assert config.mode == "cumulative"


def test_invalid_mode_in_config(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"mode": "weekly"}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config-path", str(cfg), "help"])
    assert result.exit_code != 0
    assert "Invalid `mode`" in result.output


def test_set_snapshot_persists_and_is_used(tmp_path):
    snapshot = _write_snapshot(tmp_path)
    cfg = tmp_path / "conf" / "config.json"
    runner = CliRunner()

    result = runner.invoke(cli, ["--config-path", str(cfg), "config", "set-snapshot", str(snapshot)])
    assert result.exit_code == 0, result.output
    assert json.loads(cfg.read_text(encoding="utf-8"))["snapshot_path"] == str(snapshot.resolve())

    result = runner.invoke(cli, ["--config-path", str(cfg), "ranking", "--month", "2025-03", "--json-output"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)[0]["fan_id"] == "f1"


def test_set_snapshot_rejects_missing_file(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--config-path", str(tmp_path / "config.json"), "config", "set-snapshot", str(tmp_path / "nope.json")]
    )
    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_set_mode_changes_default(tmp_path):
    snapshot = _write_snapshot(tmp_path)
    cfg = tmp_path / "config.json"
    runner = CliRunner()

    result = runner.invoke(cli, ["--config-path", str(cfg), "config", "set-mode", "cumulative"])
    assert result.exit_code == 0, result.output
    assert load_config(cfg).mode == "cumulative"

    result = runner.invoke(cli, ["--config-path", str(cfg), "--snapshot", str(snapshot), "ranking", "--json-output"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)[0]["fan_id"] == "f1"


def test_set_mode_reports_unwritable_config(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["--config-path", str(blocker / "config.json"), "config", "set-mode", "cumulative"])

    assert result.exit_code == 1
    assert "Failed to write config file" in result.output
