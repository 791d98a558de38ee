# Copyright 2025 Animals Code Apache 2.0
# Telemetry Client: throttle gate, snapshot submission, scheduled trigger.

import requests
import logging
import json
import time
import hashlib
import threading
from typing import Any, Dict, Optional

from actracker.core import hooks as hook_names
from actracker.core.config import TrackerConfig, WEEK_IN_SECONDS
from actracker.core.hooks import HookTable
from actracker.core.store import SettingsStore, LAST_SEND_OPTION
from actracker.core.types import HostPlatform
from actracker.reporting.snapshot import build_snapshot

logger = logging.getLogger(__name__)

USER_AGENT_PREFIX = "AnimalsCodeTracker"

# Minimum gap between forced sends, so double clicks don't report twice.
OVERRIDE_COOLDOWN = 60 * 60


def should_send(
    override: bool,
    last_send: Optional[int],
    now: int,
    interval: int = WEEK_IN_SECONDS,
) -> bool:
    """
    Throttle predicate. Nothing sent yet always passes; otherwise the last
    send must be older than interval (routine) or the cooldown (override).
    """
    if not last_send:
        return True
    window = OVERRIDE_COOLDOWN if override else interval
    return now - int(last_send) > window


def get_last_send_time(store: SettingsStore, hooks: HookTable) -> Optional[int]:
    return hooks.apply(hook_names.LAST_SEND_TIME, store.get_option(LAST_SEND_OPTION, None))


def user_agent(home_url: str) -> str:
    """Identifies the site by a hash of its canonical home URL, never the URL itself."""
    canonical = (home_url or "").rstrip("/") + "/"
    digest = hashlib.md5(canonical.encode("utf-8")).hexdigest()
    return f"{USER_AGENT_PREFIX}/{digest};"


def submit(
    snapshot: Dict[str, Any],
    config: TrackerConfig,
    home_url: str,
    blocking: Optional[bool] = None,
):
    """
    POSTs the snapshot to the collection endpoint. Fire-and-forget: the
    response is never inspected and transport errors are swallowed.
    """
    headers = {
        "user-agent": user_agent(home_url),
        "api_key": config.api_key,
        "api_secret_key": config.api_secret_key,
    }
    try:
        body = json.dumps(snapshot)
    except (TypeError, ValueError) as e:
        logger.debug(f"Telemetry payload not serializable: {e}")
        return

    if blocking is None:
        blocking = config.blocking
    if blocking:
        _post(config.api_url, body, headers, config.timeout, config.redirection)
        return

    threading.Thread(
        target=_post,
        args=(config.api_url, body, headers, config.timeout, config.redirection),
        name="actracker-submit",
        daemon=True,
    ).start()


def _post(url: str, body: str, headers: Dict[str, str], timeout: int, redirection: int):
    try:
        with requests.Session() as session:
            session.max_redirects = redirection
            response = session.post(url, data=body, headers=headers, timeout=timeout, cookies={})
            logger.debug(f"Telemetry sent to {url}: {response.status_code}")
    except requests.exceptions.RequestException as e:
        # Fail-open: telemetry must never affect the site
        logger.debug(f"Telemetry unreachable: {e}")


def send_tracking_data(
    override: bool = False,
    *,
    host: HostPlatform,
    hooks: HookTable,
    store: SettingsStore,
    config: TrackerConfig,
    now: Optional[int] = None,
) -> bool:
    """
    Decides whether to send tracking data and sends it.
    Returns True when a report was dispatched.
    """
    # Never from inside an asynchronous page request
    if host.doing_ajax():
        logger.debug("Skipping telemetry during async request")
        return False

    now = int(time.time()) if now is None else now
    if not is_send_due(override, hooks=hooks, store=store, config=config, now=now):
        logger.debug("Telemetry throttled")
        return False

    # Record the time first so a failed or interrupted send is not repeated
    store.update_option(LAST_SEND_OPTION, now)

    try:
        params = build_snapshot(host, hooks, config, store)
        submit(params, config, _home_url(host, params))
    except Exception as e:
        logger.debug(f"Telemetry report abandoned: {e}")
        return False
    return True


def is_send_due(
    override: bool,
    *,
    hooks: HookTable,
    store: SettingsStore,
    config: TrackerConfig,
    now: int,
) -> bool:
    """should_send with the override, interval and last send time resolved through hooks."""
    override = hooks.apply(hook_names.SEND_OVERRIDE, override)
    interval = hooks.apply(hook_names.LAST_SEND_INTERVAL, config.send_interval)
    last_send = get_last_send_time(store, hooks)
    return should_send(bool(override), last_send, now, interval)


def _home_url(host: HostPlatform, params: Dict[str, Any]) -> str:
    try:
        return host.home_url()
    except Exception as e:
        logger.debug(f"Home URL unavailable, using reported url: {e}")
        return params.get("url") or ""


def init(host: HostPlatform, hooks: HookTable, store: SettingsStore, config: TrackerConfig):
    """Hooks send_tracking_data into the scheduled send event."""

    def _on_send_event(override: bool = False):
        send_tracking_data(override, host=host, hooks=hooks, store=store, config=config)

    hooks.add_action(hook_names.SEND_EVENT, _on_send_event)
    return _on_send_event
