"""Name Validator"""

from typing import Tuple

MIN_NAME_LENGTH = 2


class NameValidator:
    """Name validation"""

    @staticmethod
    def validate_name(name: str, field_name: str = "Name") -> Tuple[bool, str]:
        """Validate name field"""
        if len(name or "") < MIN_NAME_LENGTH:
            return False, f"{field_name} must be at least {MIN_NAME_LENGTH} characters."

        return True, ""
