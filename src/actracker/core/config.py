# Copyright 2025 Animals Code Apache 2.0
# Tracker configuration: YAML file, then environment overrides.

import os
import logging
import yaml
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://tracking.animalscode.com/v1/"
WEEK_IN_SECONDS = 7 * 24 * 60 * 60

ENV_OVERRIDES = {
    "ACTRACKER_API_URL": "api_url",
    "ACTRACKER_API_KEY": "api_key",
    "ACTRACKER_API_SECRET_KEY": "api_secret_key",
    "ACTRACKER_PLUGIN_KEY": "plugin_key",
}


@dataclass
class TrackerConfig:
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    api_secret_key: str = ""
    # Must match the key issued by the tracker service.
    plugin_key: str = ""
    plugin_version: str = ""
    send_interval: int = WEEK_IN_SECONDS
    timeout: int = 45
    redirection: int = 5
    blocking: bool = False
    # Settings reported beyond plugin_version/plugin_key, read from the store.
    tracked_settings: List[str] = field(default_factory=list)
    store_path: Optional[str] = None
    manifest_path: Optional[str] = None
    # Constant hook overrides: {hook_name: value}
    filters: Dict[str, Any] = field(default_factory=dict)


class ConfigLoader:
    """
    Loads tracker configuration.
    Priority order:
    1. Explicit path (--config)
    2. Project file (./actracker.yaml)
    3. User file (~/.actracker/config.yaml)
    4. Hardcoded defaults
    Environment variables (ACTRACKER_*) override whatever was loaded.
    """

    @staticmethod
    def candidate_paths(path: Optional[Path] = None) -> List[Path]:
        paths = [Path.cwd() / "actracker.yaml", Path.home() / ".actracker" / "config.yaml"]
        if path:
            paths.insert(0, Path(path))
        return paths

    @classmethod
    def load(cls, path: Optional[Path] = None) -> TrackerConfig:
        config = TrackerConfig()

        for candidate in cls.candidate_paths(path):
            if not candidate.exists():
                continue
            try:
                with open(candidate, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                if isinstance(data, dict):
                    cls._apply(config, data)
                logger.debug(f"Loaded config from {candidate}")
                break
            except (yaml.YAMLError, OSError) as e:
                # The first file found decides; a broken one means defaults
                logger.warning(f"Failed to load config from {candidate}, using defaults: {e}")
                break

        for env_name, attr in ENV_OVERRIDES.items():
            if os.environ.get(env_name):
                setattr(config, attr, os.environ[env_name])

        return config

    @staticmethod
    def _apply(config: TrackerConfig, data: Dict[str, Any]):
        known = {f.name for f in fields(TrackerConfig)}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown config key ignored: {key}")
                continue
            if key in ("send_interval", "timeout", "redirection"):
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    logger.warning(f"Invalid integer for {key}: {value!r}")
                    continue
            setattr(config, key, value)
