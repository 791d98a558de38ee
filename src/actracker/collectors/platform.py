# Copyright 2025 Animals Code Apache 2.0
# Host platform details: version, locale, memory, debug and multisite flags.

from typing import Any, Dict

from actracker.core.types import HostPlatform
from actracker.core.units import let_to_num, size_format
from actracker.collectors.common import collect, yes_no


def get_wordpress_info(host: HostPlatform) -> Dict[str, Any]:
    wp_data: Dict[str, Any] = {}

    collect(wp_data, "memory_limit", lambda: size_format(let_to_num(host.memory_limit())))
    collect(wp_data, "debug_mode", lambda: yes_no(host.debug_mode()))
    collect(wp_data, "locale", host.locale)
    collect(wp_data, "version", host.version)
    collect(wp_data, "multisite", lambda: yes_no(host.is_multisite()))

    return wp_data
