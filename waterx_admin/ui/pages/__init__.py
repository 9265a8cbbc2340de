"""
Pages package for WaterX Admin
"""

from .settings import SettingsPage
from .placeholder import PlaceholderPage

__all__ = ['SettingsPage', 'PlaceholderPage']
