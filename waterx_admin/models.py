"""
Data models for WaterX Admin
State snapshots, form values and the restore lifecycle
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Setting:
    """A named configuration value persisted server-side"""
    key: str
    value: str

    @classmethod
    def from_payload(cls, key: str, payload: Any) -> "Setting":
        if isinstance(payload, dict):
            return cls(key=payload.get("key", key), value=payload.get("value") or "")
        return cls(key=key, value="")


@dataclass(frozen=True)
class SettingsState:
    logo_url: Optional[str] = None
    is_loading: bool = False
    error: Optional[str] = None

    def evolve(self, **changes) -> "SettingsState":
        return replace(self, **changes)


@dataclass(frozen=True)
class AuthUser:
    id: str
    name: str
    role: str


@dataclass
class ProfileFormValues:
    name: str = ""
    email: str = ""
    password: str = ""

    def to_payload(self) -> Dict[str, str]:
        """Outgoing body; password only when one was typed"""
        data = {"name": self.name, "email": self.email}
        if self.password:
            data["password"] = self.password
        return data


@dataclass
class BrandingFormValues:
    logo_url: str = ""


class RestoreState(Enum):
    IDLE = "idle"
    EXPORTING = "exporting"
    FILE_SELECTED = "file_selected"
    CONFIRM_PENDING = "confirm_pending"
    RESTORING = "restoring"
    RELOADING = "reloading"


# Notification levels carried by every notify(level, message) signal
NOTIFY_SUCCESS = "success"
NOTIFY_ERROR = "error"
NOTIFY_WARNING = "warning"
NOTIFY_INFO = "info"
