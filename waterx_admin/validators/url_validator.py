"""URL Validator"""

from typing import Tuple
from urllib.parse import urlparse

# Schemes whose URLs are meaningless without a host
HOST_SCHEMES = ("http", "https", "ftp", "ws", "wss")


class UrlValidator:
    """Absolute URL validation for branding fields"""

    @staticmethod
    def validate_url(url: str) -> Tuple[bool, str]:
        """
        Empty clears the value; otherwise the URL needs a scheme and must parse.
        Scheme-only forms such as data: URLs are accepted; web schemes also need a host.
        """
        if url == "":
            return True, ""

        try:
            parsed = urlparse(url)
        except ValueError:
            return False, "Please enter a valid URL."

        scheme = parsed.scheme.lower()
        if not scheme or any(c.isspace() for c in url):
            return False, "Please enter a valid URL."
        if scheme in HOST_SCHEMES:
            if not parsed.hostname:
                return False, "Please enter a valid URL."
        elif not url.split(":", 1)[1]:
            return False, "Please enter a valid URL."

        return True, ""
