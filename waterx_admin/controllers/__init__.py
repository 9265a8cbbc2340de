"""
Controllers package for WaterX Admin
UI-independent orchestration behind the settings page
"""

from .backup_restore import BackupRestoreController
from .settings_page import SettingsPageController

__all__ = ['BackupRestoreController', 'SettingsPageController']
