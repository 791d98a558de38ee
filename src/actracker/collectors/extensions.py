# Copyright 2025 Animals Code Apache 2.0
# Installed extension inventory, grouped into active and inactive.

from typing import Any, Dict, Mapping, Tuple

from actracker.core.types import HostPlatform
from actracker.collectors.common import strip_tags

# Fields copied from source metadata when present
EXTENSION_FIELDS = ("name", "version", "author", "network", "plugin_uri")

Inventory = Dict[str, Dict[str, str]]


def format_extension(meta: Mapping[str, Any]) -> Dict[str, str]:
    formatted = {}
    for key in EXTENSION_FIELDS:
        if meta.get(key) is not None:
            formatted[key] = strip_tags(meta[key])
    return formatted


def split_extensions(installed: Mapping[str, Mapping[str, Any]], active_ids) -> Tuple[Inventory, Inventory]:
    """
    Visits every installed extension once. Active ones move out of the
    inventory into their own mapping; what remains is the inactive set.
    """
    active_ids = set(active_ids or ())
    inactive: Inventory = dict(installed or {})
    active: Inventory = {}

    for ext_id, meta in list(inactive.items()):
        formatted = format_extension(meta or {})
        if ext_id in active_ids:
            del inactive[ext_id]
            active[ext_id] = formatted
        else:
            inactive[ext_id] = formatted

    return active, inactive


def get_all_plugins(host: HostPlatform) -> Dict[str, Inventory]:
    active, inactive = split_extensions(host.list_installed_extensions(), host.active_extension_ids())
    return {"active_plugins": active, "inactive_plugins": inactive}
