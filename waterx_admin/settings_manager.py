from __future__ import annotations
import os, sys, configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from waterx_admin.config import APP_NAME, DEFAULT_API_URL, DEFAULT_API_TIMEOUT

INI_BASENAME = "settings.ini"
ENV_API_URL = "WATERX_API_URL"
ENV_API_TIMEOUT = "WATERX_API_TIMEOUT"

def _platform_config_dir() -> Path:
    if sys.platform.startswith("win"):
        base = os.getenv("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(base) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path.home() / ".config" / APP_NAME

def default_ini_path() -> Path:
    return _platform_config_dir() / INI_BASENAME

@dataclass
class ServerConfig:
    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_API_TIMEOUT

@dataclass
class SessionRecord:
    user_id: str = ""
    name: str = ""
    role: str = ""

class LocalSettings:
    """Client-side INI settings: backend location and the last signed-in user."""

    def __init__(self, ini_path: Optional[Path] = None) -> None:
        self.ini_path = Path(ini_path or default_ini_path())
        self.cfg = configparser.ConfigParser()

    @classmethod
    def load_default(cls) -> "LocalSettings":
        store = cls()
        store.load()
        return store

    def load(self) -> None:
        self.cfg.clear()
        if self.ini_path.exists():
            self.cfg.read(self.ini_path, encoding="utf-8")

    def save(self) -> None:
        self.ini_path.parent.mkdir(parents=True, exist_ok=True)
        with self.ini_path.open("w", encoding="utf-8") as f:
            self.cfg.write(f)

    def get_server(self) -> ServerConfig:
        s = self.cfg["server"] if self.cfg.has_section("server") else {}
        return ServerConfig(
            base_url=(s.get("base_url", "") or DEFAULT_API_URL).rstrip("/"),
            timeout=_f(s.get("timeout", ""), DEFAULT_API_TIMEOUT),
        )

    def update_server(self, base_url: str, timeout: float = DEFAULT_API_TIMEOUT) -> None:
        if not self.cfg.has_section("server"):
            self.cfg.add_section("server")
        self.cfg.set("server", "base_url", (base_url or "").strip())
        self.cfg.set("server", "timeout", str(timeout))

    def get_session(self) -> Optional[SessionRecord]:
        if not self.cfg.has_section("session"):
            return None
        s = self.cfg["session"]
        record = SessionRecord(
            user_id=s.get("user_id", ""),
            name=s.get("name", ""),
            role=s.get("role", ""),
        )
        return record if record.user_id else None

    def update_session(self, record: Optional[SessionRecord]) -> None:
        if record is None:
            self.cfg.remove_section("session")
            return
        if not self.cfg.has_section("session"):
            self.cfg.add_section("session")
        self.cfg.set("session", "user_id", str(record.user_id))
        self.cfg.set("session", "name", record.name or "")
        self.cfg.set("session", "role", record.role or "")

def _f(v: str, default: float) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return default

def resolve_server(env: Optional[dict] = None, ini: Optional[ServerConfig] = None) -> ServerConfig:
    env = os.environ if env is None else env
    ini = ini or ServerConfig()
    url = env.get(ENV_API_URL) or ini.base_url
    timeout = _f(env.get(ENV_API_TIMEOUT), ini.timeout) if env.get(ENV_API_TIMEOUT) else ini.timeout
    return ServerConfig(base_url=url.rstrip("/"), timeout=timeout)

def bootstrap_settings():
    store = LocalSettings.load_default()
    return store, resolve_server(ini=store.get_server())
