import pytest
from typing import Dict, Optional

from actracker.core.config import TrackerConfig
from actracker.core.hooks import HookTable
from actracker.core.store import SettingsStore
from actracker.core.types import HostPlatform, ThemeInfo, UserCounts


class FakeHost(HostPlatform):
    """In-memory host. Tests tweak attributes directly."""

    def __init__(self):
        self.url = "https://shop.example.com"
        self.email = "admin@example.com"
        self.ajax = False
        self.theme = ThemeInfo(name="Storefront", version="4.5.0", template="storefront")
        self.ini: Optional[Dict[str, str]] = {
            "post_max_size": "8M",
            "max_execution_time": "30",
            "max_input_vars": "1000",
        }
        self.capabilities = {"fsockopen", "curl"}
        self.plugins = {
            "akismet/akismet.php": {"name": "Akismet", "version": "5.3", "author": "<a href='x'>Automattic</a>"},
            "hello.php": {"name": "Hello Dolly", "version": "1.7.2"},
        }
        self.active_ids = ["akismet/akismet.php"]
        self.users = UserCounts(total_users=3, avail_roles={"administrator": 1, "subscriber": 2})

    def home_url(self): return self.url
    def admin_email(self): return self.email
    def doing_ajax(self): return self.ajax
    def version(self): return "6.4.2"
    def locale(self): return "en_GB"
    def memory_limit(self): return "40M"
    def debug_mode(self): return False
    def is_multisite(self): return False
    def active_theme(self): return self.theme
    def server_software(self): return "nginx/1.24.0"
    def interpreter_version(self): return "8.2.12"

    def ini_available(self): return self.ini is not None

    def ini_get(self, key):
        if self.ini is None:
            return None
        return self.ini.get(key)

    def extension_loaded(self, name): return False
    def has_capability(self, name): return name in self.capabilities
    def db_version(self): return "8.0.35"
    def max_upload_size(self): return 2 * 1024 * 1024
    def default_timezone(self): return "UTC"
    def list_installed_extensions(self): return {k: dict(v) for k, v in self.plugins.items()}
    def active_extension_ids(self): return list(self.active_ids)
    def count_users(self): return self.users


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def hooks():
    return HookTable()


@pytest.fixture
def config():
    return TrackerConfig(
        api_key="ck_test",
        api_secret_key="cs_test",
        plugin_key="animals-shop",
        plugin_version="2.1.0",
        blocking=True,
    )


@pytest.fixture
def store(tmp_path):
    s = SettingsStore(tmp_path / "options.db")
    yield s
    s.close()
