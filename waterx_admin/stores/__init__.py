"""
State stores for WaterX Admin
Each store owns one slice of client state and announces changes via signals
"""

from .settings_store import SettingsStore
from .auth_store import AuthSession
from .employee_store import EmployeeStore

__all__ = ['SettingsStore', 'AuthSession', 'EmployeeStore']
