from typing import Iterable, List

# log versions
LOG_VERSION_1 = "1.0.0"
LOG_VERSION_2 = "2.0.0"

LOG_VERSION_1_PREFIX = "spotlogs-"
LOG_VERSION_2_PREFIX = "rlogs-"

SYSTEM_INDICES = "sls-*"
DEFAULT_INDICES = LOG_VERSION_2_PREFIX + "*"
NOT_EXIST_INDICES = "__not-exist__*"


def get_log_indices(prefix: str, org_id: str = "", addons: Iterable[str] = ()) -> List[str]:
    """Index patterns for one deployment.

    Each addon yields its exact index plus the dated ``-*`` variant, in input
    order and without deduplication. Without addons the org scope is used, and
    without an org scope everything under ``prefix``.
    """
    addons = list(addons)
    if addons:
        indices = []
        for addon in addons:
            indices.extend([prefix + addon, prefix + addon + "-*"])
        return indices
    if org_id:
        return [prefix + org_id]
    return [prefix + "*"]
