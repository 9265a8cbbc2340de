"""
Validators package for WaterX Admin.
Contains validators for profile fields, URLs and backup payloads.
"""

from .email_validator import EmailValidator
from .name_validator import NameValidator
from .password_validator import PasswordValidator
from .url_validator import UrlValidator
from .backup_validator import BackupValidator, BackupFormatError

__all__ = [
    'EmailValidator',
    'NameValidator',
    'PasswordValidator',
    'UrlValidator',
    'BackupValidator',
    'BackupFormatError'
]
