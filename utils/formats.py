"""Format predicates shared by schema validation and theme resolution."""
import re
from urllib.parse import urlparse

# #RGB or #RRGGBB, either case
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and _HEX_COLOR_RE.match(value) is not None


def is_https_url(value: object) -> bool:
    """True for absolute ``https://`` URLs with a host. Other schemes are rejected."""
    if not isinstance(value, str) or not value.strip():
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme.lower() == "https" and bool(parsed.netloc)


def is_non_empty_string(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())
