import io
import json
import re
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from staticecho import __version__, output
from staticecho.cli import app


@pytest.fixture(autouse=True)
def temp_config_home(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr("staticecho.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("staticecho.config.CONFIG_FILE", config_file)
    return config_file


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setattr("staticecho.cli.console", Console(width=400))


@pytest.fixture
def fake_server(monkeypatch):
    captured: dict[str, object] = {}

    def fake_builder(name):
        def _build(root, port, **kwargs):
            captured["builder"] = name
            captured["root"] = root
            captured["port"] = port
            captured.update(kwargs)
            return f"{name}-server"

        return _build

    def fake_serve(server):
        captured["served"] = server

    monkeypatch.setattr("staticecho.cli.build_file_server", fake_builder("file"))
    monkeypatch.setattr("staticecho.cli.build_chat_server", fake_builder("chat"))
    monkeypatch.setattr("staticecho.cli.serve_until_interrupted", fake_serve)
    return captured


def test_help_flags_exit_zero():
    runner = CliRunner()
    for flag in ("-h", "--help"):
        result = runner.invoke(app, [flag])
        assert result.exit_code == 0
        assert "serve" in result.stdout
        assert "chat" in result.stdout


def test_serve_help_shows_usage():
    runner = CliRunner()
    result = runner.invoke(app, ["serve", "-h"])
    assert result.exit_code == 0
    assert "ROOT_FOLDER" in result.stdout


def test_version_flag_prints_version():
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"staticecho v{__version__}" in result.stdout


def test_serve_accepts_attached_port_and_root(tmp_path, fake_server):
    runner = CliRunner()

    result = runner.invoke(app, ["serve", "-p9000", str(tmp_path)])

    assert result.exit_code == 0
    assert fake_server["builder"] == "file"
    assert fake_server["port"] == 9000
    assert fake_server["root"] == tmp_path
    assert fake_server["refresh_interval"] == 5.0
    assert fake_server["cache_max_age"] == 300
    assert fake_server["served"] == "file-server"


def test_serve_defaults(tmp_path, fake_server, monkeypatch):
    (tmp_path / "public").mkdir()
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["serve"])

    assert result.exit_code == 0
    assert fake_server["port"] == 8080
    assert str(fake_server["root"]) == "public"
    assert fake_server["host"] == ""


def test_chat_uses_chat_port(tmp_path, fake_server):
    runner = CliRunner()

    result = runner.invoke(app, ["chat", str(tmp_path)])

    assert result.exit_code == 0
    assert fake_server["builder"] == "chat"
    assert fake_server["port"] == 8081


def test_serve_options_override_config(tmp_path, fake_server, temp_config_home):
    temp_config_home.parent.mkdir(parents=True)
    temp_config_home.write_text(
        json.dumps({"port": 7000, "refresh_interval": 2.5, "host": "127.0.0.1"}),
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(app, ["serve", str(tmp_path)])
    assert result.exit_code == 0
    assert fake_server["port"] == 7000
    assert fake_server["refresh_interval"] == 2.5
    assert fake_server["host"] == "127.0.0.1"

    result = runner.invoke(
        app,
        ["serve", "--port", "7100", "--refresh-interval", "1", "--host", "0.0.0.0", str(tmp_path)],
    )
    assert result.exit_code == 0
    assert fake_server["port"] == 7100
    assert fake_server["refresh_interval"] == 1.0
    assert fake_server["host"] == "0.0.0.0"


def test_serve_falls_back_to_configured_root(tmp_path, fake_server, monkeypatch):
    (tmp_path / "public").mkdir()
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["serve", str(tmp_path / "missing")])

    assert result.exit_code == 0
    assert "using public instead" in result.stdout
    assert fake_server["root"] == Path("public")
    assert fake_server["served"] == "file-server"


def test_serve_ignores_file_given_as_root(tmp_path, fake_server, monkeypatch):
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["chat", "notes.txt"])

    assert result.exit_code == 0
    assert fake_server["root"] == Path("public")
    assert "serving an empty index" in result.stdout


def test_serve_bind_failure_exits_with_one(tmp_path, monkeypatch):
    def failing_builder(*_args, **_kwargs):
        raise OSError(98, "Address already in use")

    error_stream = io.StringIO()
    monkeypatch.setattr(
        "staticecho.output.error_console",
        Console(file=error_stream, width=400, log_path=False, log_time_format=output.LOG_TIME_FORMAT),
    )
    monkeypatch.setattr("staticecho.cli.build_file_server", failing_builder)
    runner = CliRunner()

    result = runner.invoke(app, ["serve", "-p8080", str(tmp_path)])

    assert result.exit_code == 1
    logged = error_stream.getvalue()
    assert re.search(r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] Error starting server", logged)
    assert "Address already in use" in logged
    assert "Error starting server" not in result.stdout


def test_bare_invocation_prints_usage():
    runner = CliRunner()

    result = runner.invoke(app, [])

    # Click 8.2+ exits with 2 here; older releases exit with 0.
    assert result.exit_code in (0, 2)
    assert "serve" in result.output
    assert "chat" in result.output


def test_serve_rejects_bad_port(tmp_path, fake_server):
    runner = CliRunner()

    result = runner.invoke(app, ["serve", "-p70000", str(tmp_path)])

    assert result.exit_code == 2
    assert "served" not in fake_server


def test_serve_rejects_non_numeric_port(tmp_path, fake_server):
    runner = CliRunner()

    result = runner.invoke(app, ["serve", "-pabc", str(tmp_path)])

    assert result.exit_code == 2


def test_serve_reports_broken_config(tmp_path, fake_server, temp_config_home):
    temp_config_home.parent.mkdir(parents=True)
    temp_config_home.write_text("{not json", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["serve", str(tmp_path)])

    assert result.exit_code == 1
    assert "is not valid JSON" in result.stdout


def test_serve_reports_bad_config_value(tmp_path, fake_server, temp_config_home):
    temp_config_home.parent.mkdir(parents=True)
    temp_config_home.write_text(json.dumps({"port": None}), encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["serve", str(tmp_path)])

    assert result.exit_code == 1
    assert "holds an invalid value" in result.stdout
    assert "served" not in fake_server


def test_index_lists_request_paths(tmp_path):
    (tmp_path / "css").mkdir()
    (tmp_path / "index.html").write_text("<h1>hi</h1>", encoding="utf-8")
    (tmp_path / "css" / "site.css").write_text("body {}", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["index", str(tmp_path)])

    assert result.exit_code == 0
    assert "/index.html" in result.stdout
    assert "/css/site.css" in result.stdout
    assert "text/css" in result.stdout
    assert "./css/site.css" in result.stdout


def test_index_empty_folder(tmp_path):
    runner = CliRunner()

    result = runner.invoke(app, ["index", str(tmp_path)])

    assert result.exit_code == 0
    assert "No files found" in result.stdout


def test_config_set_and_show(temp_config_home):
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "config",
            "--set-port",
            "9001",
            "--set-chat-port",
            "9002",
            "--set-root",
            "site",
            "--set-refresh-interval",
            "2.5",
        ],
    )
    assert result.exit_code == 0
    assert "Default port set to 9001." in result.stdout
    assert "Default chat port set to 9002." in result.stdout
    assert "Default root folder set to site." in result.stdout
    assert "Default refresh interval set to 2.5s." in result.stdout

    stored = json.loads(temp_config_home.read_text(encoding="utf-8"))
    assert stored["port"] == 9001
    assert stored["chat_port"] == 9002
    assert stored["root"] == "site"

    result = runner.invoke(app, ["config", "--show"])
    assert result.exit_code == 0
    assert "Port: 9001" in result.stdout
    assert "Chat port: 9002" in result.stdout
    assert "Root folder: site" in result.stdout
    assert "Host: all interfaces" in result.stdout


def test_config_reset(temp_config_home):
    runner = CliRunner()
    runner.invoke(app, ["config", "--set-port", "9001"])

    result = runner.invoke(app, ["config", "--reset"])

    assert result.exit_code == 0
    assert "Configuration reset to defaults." in result.stdout
    assert json.loads(temp_config_home.read_text(encoding="utf-8"))["port"] == 8080


def test_config_rejects_invalid_values(temp_config_home):
    runner = CliRunner()

    assert runner.invoke(app, ["config", "--set-port", "0"]).exit_code == 2
    assert runner.invoke(app, ["config", "--set-refresh-interval", "0"]).exit_code == 2
    assert not temp_config_home.exists()


def test_config_without_flags_prints_hint():
    runner = CliRunner()

    result = runner.invoke(app, ["config"])

    assert result.exit_code == 0
    assert "Nothing to update" in result.stdout
