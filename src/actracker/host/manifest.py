# Copyright 2025 Animals Code Apache 2.0
# HostPlatform backed by a YAML site manifest.
#
# The manifest describes what the CMS would report about itself. Server
# details it leaves out are taken from the running process.

import os
import time
import socket
import logging
import platform
import importlib.util
import yaml
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from actracker.core.types import HostPlatform, ThemeInfo, UserCounts
from actracker.core.units import let_to_num

logger = logging.getLogger(__name__)

# Capability -> module whose presence provides it locally
LOCAL_CAPABILITIES = {
    "soap": "zeep",
    "curl": "pycurl",
}


class ManifestError(Exception):
    pass


class ManifestLoader(yaml.SafeLoader):
    """SafeLoader that keeps dotted numbers as text, so version 6.10 stays '6.10'."""


ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:float"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ManifestHost(HostPlatform):
    def __init__(self, data: Dict[str, Any]):
        self.data = data or {}
        self.site = self.data.get("site") or {}
        self.server = self.data.get("server") or {}

    @classmethod
    def from_file(cls, path: Path) -> "ManifestHost":
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.load(f, Loader=ManifestLoader)
        except (OSError, yaml.YAMLError) as e:
            raise ManifestError(f"Cannot read manifest {path}: {e}") from e
        if data is not None and not isinstance(data, dict):
            raise ManifestError(f"Manifest {path} must be a mapping")
        logger.debug(f"Loaded site manifest from {path}")
        return cls(data)

    # --- Site ---
    def home_url(self) -> str:
        return self.site.get("url") or ""

    def admin_email(self) -> Optional[str]:
        return self.site.get("admin_email")

    def doing_ajax(self) -> bool:
        return bool(self.site.get("doing_ajax", False))

    # --- Platform ---
    def version(self) -> str:
        return str(self.site.get("version", ""))

    def locale(self) -> str:
        return self.site.get("locale", "en_US")

    def memory_limit(self) -> str:
        return str(self.site.get("memory_limit", "40M"))

    def debug_mode(self) -> bool:
        return bool(self.site.get("debug", False))

    def is_multisite(self) -> bool:
        return bool(self.site.get("multisite", False))

    def active_theme(self) -> ThemeInfo:
        theme = self.data.get("theme") or {}
        return ThemeInfo(
            name=theme.get("name", ""),
            version=str(theme.get("version", "")),
            template=theme.get("template", ""),
            is_child=bool(theme.get("child", False)),
            supports=set(theme.get("supports") or ()),
        )

    # --- Server ---
    def server_software(self) -> Optional[str]:
        return self.server.get("software") or os.environ.get("SERVER_SOFTWARE")

    def interpreter_version(self) -> Optional[str]:
        return self.server.get("interpreter_version") or platform.python_version()

    def ini_available(self) -> bool:
        return self.server.get("ini") is not None

    def ini_get(self, key: str) -> Optional[str]:
        ini = self.server.get("ini")
        if ini is None:
            return None
        value = ini.get(key)
        return None if value is None else str(value)

    def extension_loaded(self, name: str) -> bool:
        return name in (self.server.get("extensions") or ())

    def has_capability(self, name: str) -> bool:
        declared = self.server.get("capabilities")
        if declared is not None:
            return name in declared
        if name == "fsockopen":
            return hasattr(socket, "create_connection")
        module = LOCAL_CAPABILITIES.get(name)
        return bool(module and importlib.util.find_spec(module))

    def db_version(self) -> Optional[str]:
        value = self.server.get("db_version")
        return None if value is None else str(value)

    def max_upload_size(self) -> Optional[int]:
        """Explicit value, else the smaller of the upload and post ini limits."""
        value = self.server.get("max_upload_size")
        if value is not None:
            return int(let_to_num(value))
        limits = [self.ini_get(k) for k in ("upload_max_filesize", "post_max_size")]
        limits = [int(let_to_num(v)) for v in limits if v is not None]
        return min(limits) if limits else None

    def default_timezone(self) -> str:
        return self.server.get("timezone") or os.environ.get("TZ") or time.tzname[0]

    # --- Inventory ---
    def list_installed_extensions(self) -> Dict[str, Dict[str, str]]:
        return {k: dict(v or {}) for k, v in (self.data.get("plugins") or {}).items()}

    def active_extension_ids(self) -> Iterable[str]:
        return list(self.data.get("active_plugins") or [])

    def count_users(self) -> UserCounts:
        roles = {role: int(n) for role, n in (self.data.get("users") or {}).items()}
        return UserCounts(total_users=sum(roles.values()), avail_roles=roles)
