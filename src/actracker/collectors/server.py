# Copyright 2025 Animals Code Apache 2.0
# Server environment: software, interpreter, runtime limits and capabilities.
#
# Key names follow the v1 collection schema, including 'php_time_limt'.

from typing import Any, Dict

from actracker.core.types import HostPlatform
from actracker.core.units import let_to_num, size_format
from actracker.collectors.common import collect, yes_no


def get_server_info(host: HostPlatform) -> Dict[str, Any]:
    server_data: Dict[str, Any] = {}

    # Empty software strings are as good as missing
    collect(server_data, "software", lambda: host.server_software() or None)
    collect(server_data, "php_version", host.interpreter_version)

    # Runtime limits are only reported when ini access works at all
    if _ini_available(host):
        collect(server_data, "php_post_max_size", lambda: _ini_size(host, "post_max_size"))
        collect(server_data, "php_time_limt", lambda: host.ini_get("max_execution_time"))
        collect(server_data, "php_max_input_vars", lambda: host.ini_get("max_input_vars"))
        collect(server_data, "php_suhosin", lambda: yes_no(host.extension_loaded("suhosin")))

    collect(server_data, "mysql_version", host.db_version)
    collect(server_data, "php_max_upload_size", lambda: size_format(host.max_upload_size()))
    collect(server_data, "php_default_timezone", host.default_timezone)
    collect(server_data, "php_soap", lambda: yes_no(host.has_capability("soap")))
    collect(server_data, "php_fsockopen", lambda: yes_no(host.has_capability("fsockopen")))
    collect(server_data, "php_curl", lambda: yes_no(host.has_capability("curl")))

    return server_data


def _ini_available(host: HostPlatform) -> bool:
    try:
        return bool(host.ini_available())
    except Exception:
        return False


def _ini_size(host: HostPlatform, key: str):
    value = host.ini_get(key)
    if value is None:
        return None
    return size_format(let_to_num(value))
