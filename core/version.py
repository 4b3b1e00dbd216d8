"""Bridge firmware version gate."""

from core.errors import InvalidVersionFormat

# Oldest bridge firmware exposing the CLIP v2 API
MINIMUM_BRIDGE_VERSION = 1948086000


def parse_version(reported_version: str) -> int:
    """Parse a bridge `swversion` string as an unsigned integer.

    Raises:
        InvalidVersionFormat: if the value is not made of ASCII digits only
    """
    if not isinstance(reported_version, str):
        raise InvalidVersionFormat(reported_version)

    # str.isdigit() alone also accepts superscripts and other unicode digits
    if not reported_version or not reported_version.isascii() or not reported_version.isdigit():
        raise InvalidVersionFormat(reported_version)

    return int(reported_version)


def is_supported(reported_version: str, minimum: int = MINIMUM_BRIDGE_VERSION) -> bool:
    """Check whether the reported firmware version is at least `minimum`.

    Comparison is numeric, never lexicographic.
    """
    return parse_version(reported_version) >= minimum
