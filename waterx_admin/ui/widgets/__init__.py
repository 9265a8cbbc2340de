"""
Reusable widgets for WaterX Admin
"""

from .glass_toast import GlassToast
from .logo_label import LogoLabel
from .backup_restore_card import BackupRestoreCard, Card

__all__ = ['GlassToast', 'LogoLabel', 'BackupRestoreCard', 'Card']
