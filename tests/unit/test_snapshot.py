import pytest
from actracker.core import hooks as hook_names
from actracker.core.hooks import option_hook
from actracker.collectors.server import get_server_info
from actracker.collectors.platform import get_wordpress_info
from actracker.collectors.users import get_user_counts
from actracker.reporting.snapshot import build_snapshot, get_all_options_values

REQUIRED_KEYS = {"url", "email", "theme", "wp", "server", "active_plugins", "inactive_plugins", "settings", "users"}

def test_snapshot_sections(host, hooks, config, store):
    data = build_snapshot(host, hooks, config, store)

    assert REQUIRED_KEYS <= set(data)
    assert data["url"] == "https://shop.example.com"
    assert data["email"] == "admin@example.com"
    assert data["users"] == {"total": 3, "administrator": 1, "subscriber": 2}
    assert data["settings"] == {"plugin_version": "2.1.0", "plugin_key": "animals-shop"}
    assert set(data["active_plugins"]).isdisjoint(data["inactive_plugins"])

def test_platform_info(host):
    assert get_wordpress_info(host) == {
        "memory_limit": "40 MB",
        "debug_mode": "No",
        "locale": "en_GB",
        "version": "6.4.2",
        "multisite": "No",
    }

def test_server_info(host):
    server = get_server_info(host)
    assert server["software"] == "nginx/1.24.0"
    assert server["php_version"] == "8.2.12"
    assert server["php_post_max_size"] == "8 MB"
    assert server["php_time_limt"] == "30"
    assert server["php_max_input_vars"] == "1000"
    assert server["php_suhosin"] == "No"
    assert server["mysql_version"] == "8.0.35"
    assert server["php_max_upload_size"] == "2 MB"
    assert server["php_default_timezone"] == "UTC"
    assert server["php_soap"] == "No"
    assert server["php_fsockopen"] == "Yes"
    assert server["php_curl"] == "Yes"

def test_server_info_without_ini_access(host):
    host.ini = None
    server = get_server_info(host)
    for key in ("php_post_max_size", "php_time_limt", "php_max_input_vars", "php_suhosin"):
        assert key not in server
    assert server["php_version"] == "8.2.12"

def test_server_info_with_partial_ini(host):
    """A missing ini key drops only its own field."""
    host.ini = {"max_execution_time": "30", "max_input_vars": "1000"}
    server = get_server_info(host)
    assert "php_post_max_size" not in server
    assert server["php_time_limt"] == "30"
    assert server["php_max_input_vars"] == "1000"
    assert server["php_suhosin"] == "No"

def test_failing_collector_omits_only_its_field(host, hooks, config, store, mocker):
    mocker.patch.object(host, "db_version", side_effect=RuntimeError("db gone"))
    mocker.patch.object(host, "memory_limit", return_value="unlimited")

    data = build_snapshot(host, hooks, config, store)

    assert "mysql_version" not in data["server"]
    assert data["server"]["php_version"] == "8.2.12"
    assert "memory_limit" not in data["wp"]
    assert data["wp"]["locale"] == "en_GB"

def test_failing_section_is_omitted(host, hooks, config, store, mocker):
    mocker.patch.object(host, "count_users", side_effect=RuntimeError("no users table"))
    mocker.patch.object(host, "list_installed_extensions", side_effect=OSError("plugins dir missing"))

    data = build_snapshot(host, hooks, config, store)

    assert "users" not in data
    assert data["active_plugins"] == {}
    assert data["inactive_plugins"] == {}
    assert data["theme"]["name"] == "Storefront"

def test_every_section_hook_overrides(host, hooks, config, store):
    hooks.add_filter(hook_names.URL, lambda v: "https://masked.example")
    hooks.add_filter(hook_names.ADMIN_EMAIL, lambda v: "ops@example.com")
    hooks.add_filter(hook_names.THEME_INFO, lambda v: {**v, "name": "Renamed"})
    hooks.add_filter(hook_names.WP_INFO, lambda v: {**v, "locale": "fr_FR"})
    hooks.add_filter(hook_names.SERVER_INFO, lambda v: {})
    hooks.add_filter(hook_names.ACTIVE_PLUGINS, lambda v: {})
    hooks.add_filter(hook_names.INACTIVE_PLUGINS, lambda v: {"x": {}})
    hooks.add_filter(hook_names.USER_COUNTS, lambda v: {"total": 0})

    data = build_snapshot(host, hooks, config, store)

    assert data["url"] == "https://masked.example"
    assert data["email"] == "ops@example.com"
    assert data["theme"]["name"] == "Renamed"
    assert data["wp"]["locale"] == "fr_FR"
    assert data["server"] == {}
    assert data["active_plugins"] == {}
    assert data["inactive_plugins"] == {"x": {}}
    assert data["users"] == {"total": 0}

def test_final_payload_hook(host, hooks, config, store):
    hooks.add_filter(hook_names.DATA, lambda data: {**data, "extra": True})
    assert build_snapshot(host, hooks, config, store)["extra"] is True

def test_settings_subset_and_hooks(hooks, config, store):
    config.tracked_settings = ["shop_currency", "plugin_key"]
    store.update_option("shop_currency", "EUR")
    store.update_option("unlisted_secret", "never reported")
    hooks.add_filter(option_hook("plugin_key"), lambda v: v.upper())
    hooks.add_filter(hook_names.GET_ALL_OPTIONS, lambda opts: {**opts, "plugin_version": "9.9"})

    options = get_all_options_values(config, hooks, store)

    assert options == {"plugin_version": "9.9", "plugin_key": "ANIMALS-SHOP", "shop_currency": "EUR"}

def test_user_counts(host):
    assert get_user_counts(host) == {"total": 3, "administrator": 1, "subscriber": 2}
