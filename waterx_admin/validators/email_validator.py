"""Email Validator"""

import re
from typing import Tuple

# Email regex pattern
EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


class EmailValidator:
    """Email shape validation"""

    @staticmethod
    def validate_email(email: str) -> Tuple[bool, str]:
        """Validate email format; the address is required"""
        email = (email or "").strip()
        if not EMAIL_RE.match(email):
            return False, "Invalid email address."

        # Consecutive dots are not allowed in either part
        if ".." in email:
            return False, "Invalid email address."

        return True, ""
