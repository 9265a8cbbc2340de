from pathlib import Path

from waterx_admin.config import DEFAULT_API_URL, DEFAULT_API_TIMEOUT
from waterx_admin.settings_manager import LocalSettings, ServerConfig, SessionRecord, resolve_server
from waterx_admin.stores import AuthSession


def test_defaults_when_ini_missing(tmp_path: Path):
    store = LocalSettings(tmp_path / "settings.ini")
    store.load()
    assert store.get_server() == ServerConfig(DEFAULT_API_URL, DEFAULT_API_TIMEOUT)
    assert store.get_session() is None


def test_server_roundtrip(tmp_path: Path):
    path = tmp_path / "nested" / "settings.ini"
    store = LocalSettings(path)
    store.update_server("https://api.waterx.io/", 12.5)
    store.save()

    loaded = LocalSettings(path)
    loaded.load()
    assert loaded.get_server() == ServerConfig("https://api.waterx.io", 12.5)


def test_bad_timeout_falls_back(tmp_path: Path):
    path = tmp_path / "settings.ini"
    path.write_text("[server]\nbase_url = http://h\ntimeout = soon\n", encoding="utf-8")
    store = LocalSettings(path)
    store.load()
    assert store.get_server().timeout == DEFAULT_API_TIMEOUT


def test_environment_overrides_ini():
    ini = ServerConfig("http://from-ini", 5.0)
    resolved = resolve_server(env={"WATERX_API_URL": "http://from-env/", "WATERX_API_TIMEOUT": "9"}, ini=ini)
    assert resolved == ServerConfig("http://from-env", 9.0)
    assert resolve_server(env={}, ini=ini) == ini


def test_session_is_remembered(tmp_path: Path):
    path = tmp_path / "settings.ini"
    store = LocalSettings(path)
    AuthSession(store).login("emp-1", "Ada Admin", "admin")

    reloaded = LocalSettings(path)
    reloaded.load()
    assert reloaded.get_session() == SessionRecord("emp-1", "Ada Admin", "admin")
    assert AuthSession(reloaded).user.name == "Ada Admin"


def test_logout_forgets_session(tmp_path: Path):
    path = tmp_path / "settings.ini"
    store = LocalSettings(path)
    session = AuthSession(store)
    session.login("emp-1", "Ada Admin", "admin")
    session.logout()

    reloaded = LocalSettings(path)
    reloaded.load()
    assert reloaded.get_session() is None
    assert session.user is None
