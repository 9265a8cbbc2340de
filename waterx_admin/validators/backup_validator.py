"""Backup payload validator"""

from typing import Any, Dict, List

from waterx_admin.config import REQUIRED_BACKUP_KEYS

INVALID_BACKUP_MESSAGE = "Invalid backup file format."


class BackupFormatError(ValueError):
    """Raised when a parsed backup lacks the required top-level shape"""


class BackupValidator:
    """
    Shallow structural check of a backup payload.

    Only the presence of the required top-level keys is verified; record
    contents are accepted or rejected by the server.
    """

    @staticmethod
    def missing_keys(value: Any) -> List[str]:
        if not isinstance(value, dict):
            return list(REQUIRED_BACKUP_KEYS)
        return [key for key in REQUIRED_BACKUP_KEYS if key not in value]

    @staticmethod
    def is_valid_backup(value: Any) -> bool:
        return not BackupValidator.missing_keys(value)

    @staticmethod
    def validate_backup(value: Any) -> Dict[str, Any]:
        """
        Return the payload unchanged when valid

        Raises:
            BackupFormatError: value is not an object or misses a required key
        """
        missing = BackupValidator.missing_keys(value)
        if missing:
            raise BackupFormatError(INVALID_BACKUP_MESSAGE)
        return value
