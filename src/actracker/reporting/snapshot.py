# Copyright 2025 Animals Code Apache 2.0
# Snapshot aggregation: one point-in-time view of the installation.

import logging
from typing import Any, Dict, Optional

from actracker.core import hooks as hook_names
from actracker.core.config import TrackerConfig
from actracker.core.hooks import HookTable, option_hook
from actracker.core.store import SettingsStore
from actracker.core.types import HostPlatform
from actracker.collectors.common import collect
from actracker.collectors.extensions import get_all_plugins
from actracker.collectors.platform import get_wordpress_info
from actracker.collectors.server import get_server_info
from actracker.collectors.theme import get_theme_info
from actracker.collectors.users import get_user_counts

logger = logging.getLogger(__name__)


def get_all_options_values(
    config: TrackerConfig,
    hooks: HookTable,
    store: Optional[SettingsStore] = None,
) -> Dict[str, Any]:
    """
    Settings subset reported to the service: plugin version and key first,
    then any extra keys configured in tracked_settings (read from the store).
    """
    options: Dict[str, Any] = {
        "plugin_version": config.plugin_version,
        "plugin_key": config.plugin_key,
    }
    for key in config.tracked_settings or ():
        if key not in options:
            options[key] = store.get_option(key) if store else None

    resolved = {key: hooks.apply(option_hook(key), value) for key, value in options.items()}
    return hooks.apply(hook_names.GET_ALL_OPTIONS, resolved)


def build_snapshot(
    host: HostPlatform,
    hooks: HookTable,
    config: TrackerConfig,
    store: Optional[SettingsStore] = None,
) -> Dict[str, Any]:
    """
    Gathers site, platform, theme, server, extension, settings and user data.
    Sections that cannot be produced are left out.
    """
    data: Dict[str, Any] = {}

    # 1. General site info
    collect(data, "url", lambda: hooks.apply(hook_names.URL, host.home_url()))
    collect(data, "email", lambda: hooks.apply(hook_names.ADMIN_EMAIL, host.admin_email()))
    collect(data, "theme", lambda: hooks.apply(hook_names.THEME_INFO, get_theme_info(host)))

    # 2. Platform and server
    collect(data, "wp", lambda: hooks.apply(hook_names.WP_INFO, get_wordpress_info(host)))
    collect(data, "server", lambda: hooks.apply(hook_names.SERVER_INFO, get_server_info(host)))

    # 3. Extensions
    try:
        plugins = get_all_plugins(host)
    except Exception as e:
        logger.debug(f"Extension inventory unavailable: {e}")
        plugins = {"active_plugins": {}, "inactive_plugins": {}}
    data["active_plugins"] = hooks.apply(hook_names.ACTIVE_PLUGINS, plugins["active_plugins"])
    data["inactive_plugins"] = hooks.apply(hook_names.INACTIVE_PLUGINS, plugins["inactive_plugins"])

    # 4. Settings and users
    collect(data, "settings", lambda: get_all_options_values(config, hooks, store))
    collect(data, "users", lambda: hooks.apply(hook_names.USER_COUNTS, get_user_counts(host)))

    return hooks.apply(hook_names.DATA, data)
