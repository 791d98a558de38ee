# Copyright 2025 Animals Code Apache 2.0
# Read-only view of the host installation that the collectors introspect.

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set


@dataclass
class ThemeInfo:
    name: str = ""
    version: str = ""
    template: str = ""
    is_child: bool = False
    supports: Set[str] = field(default_factory=set)

    def declares(self, feature: str) -> bool:
        return feature in self.supports


@dataclass
class UserCounts:
    total_users: int = 0
    avail_roles: Dict[str, int] = field(default_factory=dict)


class HostPlatform(ABC):
    """
    Narrow read-only contract over the host CMS.
    Every method may return partial or empty data; collectors tolerate both.
    """

    # --- Site ---
    @abstractmethod
    def home_url(self) -> str: ...

    @abstractmethod
    def admin_email(self) -> Optional[str]: ...

    @abstractmethod
    def doing_ajax(self) -> bool:
        """True while serving an asynchronous in-page request."""

    # --- Platform ---
    @abstractmethod
    def version(self) -> str: ...

    @abstractmethod
    def locale(self) -> str: ...

    @abstractmethod
    def memory_limit(self) -> str:
        """Shorthand size string, e.g. '40M'."""

    @abstractmethod
    def debug_mode(self) -> bool: ...

    @abstractmethod
    def is_multisite(self) -> bool: ...

    @abstractmethod
    def active_theme(self) -> ThemeInfo: ...

    # --- Server ---
    @abstractmethod
    def server_software(self) -> Optional[str]: ...

    @abstractmethod
    def interpreter_version(self) -> Optional[str]: ...

    @abstractmethod
    def ini_available(self) -> bool:
        """Whether runtime settings can be read at all."""

    @abstractmethod
    def ini_get(self, key: str) -> Optional[str]:
        """Runtime setting lookup. None when the key is unset or ini access is unavailable."""

    @abstractmethod
    def extension_loaded(self, name: str) -> bool: ...

    @abstractmethod
    def has_capability(self, name: str) -> bool:
        """Server capabilities: 'soap', 'fsockopen', 'curl'."""

    @abstractmethod
    def db_version(self) -> Optional[str]: ...

    @abstractmethod
    def max_upload_size(self) -> Optional[int]:
        """Effective upload limit in bytes."""

    @abstractmethod
    def default_timezone(self) -> str: ...

    # --- Inventory ---
    @abstractmethod
    def list_installed_extensions(self) -> Dict[str, Dict[str, str]]:
        """{id: {name, version, author, network, plugin_uri}}, fields optional."""

    @abstractmethod
    def active_extension_ids(self) -> Iterable[str]: ...

    @abstractmethod
    def count_users(self) -> UserCounts: ...
