"""Password Validator"""

from typing import Tuple

MIN_PASSWORD_LENGTH = 6


class PasswordValidator:

    @staticmethod
    def validate_password(password: str) -> Tuple[bool, str]:
        """Blank keeps the current password; anything typed must meet the minimum"""
        if not password:
            return True, ""

        if len(password) < MIN_PASSWORD_LENGTH:
            return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters."

        return True, ""
