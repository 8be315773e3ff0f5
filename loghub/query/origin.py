"""
Classification of the ``origin`` routing filter of a log request.
"""
from enum import Enum
from typing import Iterable, Tuple

ORIGIN_KEY = "origin"


class Origin(str, Enum):
    SYSTEM = "system"              # origin=sls, platform-wide system logs
    ORGANIZATION = "organization"  # origin=dice, the org's own deployments
    UNRECOGNIZED = "unrecognized"  # any other value, matches nothing
    UNSPECIFIED = "unspecified"    # no origin filter


_KNOWN = {
    "sls": Origin.SYSTEM,
    "dice": Origin.ORGANIZATION,
}


def classify_origin(filters: Iterable[Tuple[str, str]]) -> Origin:
    """Map request filters to an Origin; the last ``origin`` filter wins"""
    value = ""
    for key, val in filters:
        if key == ORIGIN_KEY:
            value = val or ""
    if not value:
        return Origin.UNSPECIFIED
    return _KNOWN.get(value, Origin.UNRECOGNIZED)
