"""
Application constants for WaterX Admin
Endpoint paths, backup format keys, navigation and UI timings
"""

APP_NAME = "WaterX"
APP_TITLE = f"{APP_NAME} Admin"
VERSION = "1.0.0"

# ============================================================================
# BACKEND ENDPOINTS
# ============================================================================
DEFAULT_API_URL = "http://localhost:8787"
DEFAULT_API_TIMEOUT = 30.0

BACKUP_ENDPOINT = "/api/backup"
RESTORE_ENDPOINT = "/api/restore"
LOGO_SETTING_KEY = "logoUrl"
SETTINGS_ENDPOINT = "/api/settings/{key}"
EMPLOYEES_ENDPOINT = "/api/employees"
PROFILE_ENDPOINT = "/api/employees/profile/{user_id}"


def setting_path(key: str) -> str:
    return SETTINGS_ENDPOINT.format(key=key)


def profile_path(user_id) -> str:
    return PROFILE_ENDPOINT.format(user_id=user_id)


# ============================================================================
# BACKUP / RESTORE
# ============================================================================
# Keys a backup must carry at top level; values are not inspected client-side
REQUIRED_BACKUP_KEYS = ("customers", "products", "orders")
BACKUP_FILENAME_PREFIX = "waterx-backup"
BACKUP_FILE_FILTER = "Backup files (*.json)"
RELOAD_DELAY_MS = 2000


def backup_filename(day) -> str:
    """waterx-backup-YYYY-MM-DD.json for the given date"""
    return f"{BACKUP_FILENAME_PREFIX}-{day.isoformat()}.json"


# ============================================================================
# NAVIGATION
# ============================================================================
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_STAFF = "staff"

NAV_LINKS = [
    {"href": "/dashboard", "label": "Dashboard", "icon": "📊", "roles": [ROLE_ADMIN, ROLE_MANAGER, ROLE_STAFF]},
    {"href": "/customers", "label": "Customers", "icon": "👥", "roles": [ROLE_ADMIN, ROLE_MANAGER, ROLE_STAFF]},
    {"href": "/products", "label": "Products", "icon": "💧", "roles": [ROLE_ADMIN, ROLE_MANAGER]},
    {"href": "/orders", "label": "Orders", "icon": "🧾", "roles": [ROLE_ADMIN, ROLE_MANAGER, ROLE_STAFF]},
    {"href": "/transactions", "label": "Transactions", "icon": "💳", "roles": [ROLE_ADMIN, ROLE_MANAGER]},
    {"href": "/employees", "label": "Employees", "icon": "🪪", "roles": [ROLE_ADMIN]},
    {"href": "/settings", "label": "Settings", "icon": "⚙️", "roles": [ROLE_ADMIN]},
]


def visible_links(role):
    """Navigation links the given role may see, in declaration order"""
    if not role:
        return []
    return [link for link in NAV_LINKS if role in link["roles"]]


# ============================================================================
# UI
# ============================================================================
TOAST_SUCCESS_MS = 3000
TOAST_ERROR_MS = 4000
TOAST_WARNING_MS = 3500
SIDEBAR_WIDTH = 240
LOGO_PREVIEW_HEIGHT = 64
NAV_LOGO_HEIGHT = 24

APP_QSS = """
QMainWindow, QWidget#page { background: #0f172a; color: #e2e8f0; }
QFrame#card {
    background: rgba(30, 41, 59, 0.9);
    border: 1px solid rgba(148, 163, 184, 0.2);
    border-radius: 12px;
}
QLabel#cardTitle { font-size: 16px; font-weight: 700; color: #f8fafc; }
QLabel#cardDescription { color: #94a3b8; }
QLabel#fieldError { color: #f87171; font-size: 12px; }
QLabel#destructive { color: #f87171; font-weight: 600; }
QLineEdit {
    background: #1e293b; color: #e2e8f0;
    border: 1px solid #334155; border-radius: 6px; padding: 6px 8px;
}
QLineEdit:focus { border: 1px solid #3b82f6; }
QFrame#sidebar { background: #111827; border-right: 1px solid #1f2937; }
QPushButton#navButton {
    text-align: left; padding: 8px 12px; border: none; border-radius: 6px;
    color: #cbd5e1; background: transparent;
}
QPushButton#navButton:checked { background: #1e3a8a; color: white; }
"""
