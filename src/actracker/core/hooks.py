# Copyright 2025 Animals Code Apache 2.0
# Named interception points. External code replaces any reported value here.

import logging
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

PREFIX = "animals_code_tracker_"

# --- Control ---
SEND_OVERRIDE = PREFIX + "send_override"
LAST_SEND_INTERVAL = PREFIX + "last_send_interval"
LAST_SEND_TIME = PREFIX + "last_send_time"

# --- Payload ---
DATA = PREFIX + "data"
URL = PREFIX + "url"
ADMIN_EMAIL = PREFIX + "admin_email"
GET_ALL_OPTIONS = PREFIX + "get_all_options"
THEME_INFO = PREFIX + "theme_info"
WP_INFO = PREFIX + "wp_info"
SERVER_INFO = PREFIX + "server_info"
ACTIVE_PLUGINS = PREFIX + "active_plugins"
INACTIVE_PLUGINS = PREFIX + "inactive_plugins"
USER_COUNTS = PREFIX + "user_counts"

# --- Actions ---
SEND_EVENT = PREFIX + "send_event"

FILTERS = (
    SEND_OVERRIDE, LAST_SEND_INTERVAL, LAST_SEND_TIME,
    DATA, URL, ADMIN_EMAIL, GET_ALL_OPTIONS, THEME_INFO, WP_INFO,
    SERVER_INFO, ACTIVE_PLUGINS, INACTIVE_PLUGINS, USER_COUNTS,
)


def option_hook(key: str) -> str:
    """Per-setting filter name, e.g. animals_code_tracker_option_plugin_key."""
    return f"{PREFIX}option_{key}"


class HookTable:
    """
    Explicit table of filters and actions, keyed by hook name.
    Callbacks on the same hook run in ascending priority, then registration order.
    """

    def __init__(self):
        self._filters: Dict[str, List[Tuple[int, int, Callable]]] = {}
        self._actions: Dict[str, List[Tuple[int, int, Callable]]] = {}
        self._seq = 0

    def _add(self, table, name: str, callback: Callable, priority: int):
        self._seq += 1
        entries = table.setdefault(name, [])
        entries.append((priority, self._seq, callback))
        entries.sort(key=lambda e: (e[0], e[1]))

    def add_filter(self, name: str, callback: Callable, priority: int = 10):
        self._add(self._filters, name, callback, priority)

    def add_action(self, name: str, callback: Callable, priority: int = 10):
        self._add(self._actions, name, callback, priority)

    def remove_filter(self, name: str, callback: Callable) -> bool:
        entries = self._filters.get(name, [])
        kept = [e for e in entries if e[2] is not callback]
        if len(kept) == len(entries):
            return False
        self._filters[name] = kept
        return True

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def names(self) -> List[str]:
        """All hook names with at least one callback."""
        return sorted(n for n, e in {**self._filters, **self._actions}.items() if e)

    def apply(self, name: str, value: Any, *args) -> Any:
        """Threads value through every filter on name; the last return wins."""
        for _, _, callback in self._filters.get(name, []):
            value = callback(value, *args)
        return value

    def do_action(self, name: str, *args):
        for _, _, callback in self._actions.get(name, []):
            callback(*args)

    def add_constant(self, name: str, constant: Any, priority: int = 10):
        """Registers a filter that ignores its input and returns constant."""
        self.add_filter(name, lambda _value, *_args: constant, priority)

    @classmethod
    def from_mapping(cls, overrides: Dict[str, Any]) -> "HookTable":
        """Builds a table of constant overrides, e.g. from the config 'filters:' section."""
        table = cls()
        for name, constant in (overrides or {}).items():
            if not name.startswith(PREFIX):
                logger.warning(f"Ignoring unknown hook in config: {name}")
                continue
            table.add_constant(name, constant)
        return table
