import pytest
from fastapi.testclient import TestClient

from json_server.core.config import DATA_DIR_ENV_VAR, LOG_LEVEL_ENV_VAR, PORT_ENV_VAR, load_settings
from json_server.core.startup import prepare_server_config
from json_server.domain.errors import StartupError
from json_server.domain.models import ServerConfig
from json_server.main import create_app
from json_server import cli


# -----------------------------
# prepare_server_config
# -----------------------------
def test_prepare_server_config(data_dir):
    config = prepare_server_config(data_dir)

    assert isinstance(config, ServerConfig)
    assert config.data_dir == data_dir
    assert set(config.index.names) == {"articles", "starwars", "nested"}


def test_prepare_missing_directory(tmp_path):
    with pytest.raises(StartupError, match="does not exist"):
        prepare_server_config(tmp_path / "nope")


def test_prepare_path_is_a_file(tmp_path):
    f = tmp_path / "file.json"
    f.write_text("{}", encoding="utf-8")

    with pytest.raises(StartupError, match="not a directory"):
        prepare_server_config(f)


def test_prepare_directory_without_json(tmp_path):
    (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")

    with pytest.raises(StartupError, match="does not contain any json files"):
        prepare_server_config(tmp_path)


def test_app_indexes_on_startup_from_env(data_dir, monkeypatch):
    monkeypatch.setenv(DATA_DIR_ENV_VAR, str(data_dir))

    with TestClient(create_app()) as c:
        r = c.get("/api/starwars")
        assert r.status_code == 200
        assert r.json()["name"] == "Luke Skywalker"


# -----------------------------
# Settings
# -----------------------------
def test_settings_defaults():
    settings = load_settings(environ={})

    assert settings.port == 3000
    assert str(settings.data_dir) == "data"
    assert settings.host == "127.0.0.1"
    assert settings.log_level == "INFO"


def test_settings_from_env():
    settings = load_settings(
        environ={DATA_DIR_ENV_VAR: "/srv/fixtures", PORT_ENV_VAR: "8080", LOG_LEVEL_ENV_VAR: "debug"}
    )

    assert str(settings.data_dir) == "/srv/fixtures"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"


def test_overrides_beat_env():
    settings = load_settings(
        {"port": 9000, "data_dir": None},
        environ={PORT_ENV_VAR: "8080", DATA_DIR_ENV_VAR: "/srv/fixtures"},
    )

    assert settings.port == 9000
    assert str(settings.data_dir) == "/srv/fixtures"


@pytest.mark.parametrize("port", [0, 70000])
def test_settings_reject_bad_port(port):
    with pytest.raises(ValueError):
        load_settings({"port": port}, environ={})


def test_settings_reject_unknown_log_level():
    with pytest.raises(ValueError):
        load_settings({"log_level": "chatty"}, environ={})


# -----------------------------
# Command line
# -----------------------------
def test_parser_flags():
    args = cli.build_parser().parse_args(["-p", "4000", "-d", "fixtures/"])

    assert args.port == 4000
    assert args.data_dir == "fixtures/"
    assert args.host is None


def test_main_exits_1_on_missing_directory(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **k: calls.append((a, k)))

    assert cli.main(["--data-dir", str(tmp_path / "missing")]) == 1
    assert calls == []


def test_main_exits_1_on_empty_directory(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **k: calls.append((a, k)))

    assert cli.main(["--data-dir", str(tmp_path)]) == 1
    assert calls == []


def test_main_runs_uvicorn(data_dir, monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **k: calls.append((a, k)))

    assert cli.main(["--data-dir", str(data_dir), "--port", "4321"]) == 0

    (app,), kwargs = calls[0]
    assert kwargs["port"] == 4321
    assert kwargs["host"] == "127.0.0.1"
    assert set(app.state.server_config.index.names) == {"articles", "starwars", "nested"}


def test_main_rejects_invalid_port(monkeypatch):
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **k: None)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--port", "0"])
    assert exc_info.value.code == 2
