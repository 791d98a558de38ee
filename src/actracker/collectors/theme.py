# Copyright 2025 Animals Code Apache 2.0
from typing import Any, Dict

from actracker.core.types import HostPlatform, ThemeInfo
from actracker.collectors.common import collect, yes_no

# Themes can opt in explicitly by declaring this feature.
SUPPORT_FEATURE = "animals_code"

# Old default themes that predate the plugin and never declare support.
LEGACY_THEMES = (
    "twentyfifteen",
    "twentyfourteen",
    "twentythirteen",
    "twentyeleven",
    "twentytwelve",
    "twentyten",
)


def is_theme_supported(theme: ThemeInfo) -> bool:
    """Compatible unless the theme is a legacy default that declares nothing."""
    return theme.declares(SUPPORT_FEATURE) or theme.template not in LEGACY_THEMES


def get_theme_info(host: HostPlatform) -> Dict[str, Any]:
    """Current theme name, version, child-theme and compatibility flags."""
    theme = host.active_theme()

    info: Dict[str, Any] = {}
    collect(info, "name", lambda: theme.name)
    collect(info, "version", lambda: theme.version)
    collect(info, "child_theme", lambda: yes_no(theme.is_child))
    collect(info, "ac_supported", lambda: yes_no(is_theme_supported(theme)))
    return info
