"""
Addon sibling groups.

Addons deployed to the same (cluster, project, workspace) share physical
storage, so a query against one of them spans the whole group.
"""
import logging
from typing import List, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class GroupKey(NamedTuple):
    cluster_name: str
    project_id: str
    workspace: str


def find_group_key(instance_store, addon: str) -> Optional[GroupKey]:
    """Group key of the instance registered for ``addon``, None when unknown"""
    try:
        instance = instance_store.get_by_log_key(addon)
    except SQLAlchemyError as e:
        logger.warning("fail to get logInstance for logKey: %s: %s", addon, e)
        return None
    if instance is None:
        return None
    return GroupKey(instance.cluster_name, instance.project_id, instance.workspace)


def list_group_members(instance_store, key: GroupKey) -> List[str]:
    """Log keys in the group, deduplicated in first-seen order"""
    try:
        instances = instance_store.list_by_cluster_project_workspace(*key)
    except SQLAlchemyError as e:
        logger.warning("fail to get logInstances of group %s: %s", key, e)
        return []
    seen = set()
    members = []
    for instance in instances:
        if instance.log_key in seen:
            continue
        seen.add(instance.log_key)
        members.append(instance.log_key)
    return members


def resolve_addon_group(instance_store, addon: str) -> List[str]:
    """Expand an addon key to all keys co-located with it.

    An addon without a registered instance is a group of its own.
    """
    if not addon:
        return []
    key = find_group_key(instance_store, addon)
    if key is None:
        return [addon]
    return list_group_members(instance_store, key)
