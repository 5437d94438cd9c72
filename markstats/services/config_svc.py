#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from defaults, YAML and env vars
#  - Caches composed config
#  - Provides reload() for runtime changes
# ======================================================================

from __future__ import annotations

import contextlib
import copy
import logging
import os
import re
from typing import Any

import yaml

from markstats.__version__ import __version__

ENV_PREFIX = "MARKSTATS_"
CONFIG_PATH_ENV = "MARKSTATS_CONFIG_PATH"

_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?(\d+\.\d*|\.\d+)$")


class ConfigService:
    """
    Service for loading and caching configuration.

    Loads config from multiple sources (defaults → YAML → env → overrides),
    caches the result, and provides reload capability.
    """

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        """
        Initialize ConfigService with empty cache.

        Args:
            overrides: Values applied last, over YAML and environment variables
        """
        self._config: dict[str, Any] | None = None
        self._overrides = overrides or {}
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose()
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("stats_path")
            '/stats'
            >>> service.get("stats_button.poll_interval", 1.0)
            1.0
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/markstats/config.yaml  (if present)
          3) ./config/config.yaml
          4) $MARKSTATS_CONFIG_PATH (if set)
          5) Environment variables (MARKSTATS_<KEY>, nested keys joined with "__")
          6) overrides passed to the constructor (CLI flags)
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml("/etc/markstats/config.yaml"))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv(CONFIG_PATH_ENV)
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        self._apply_env_overrides(cfg)

        if self._overrides:
            self._deep_merge(cfg, copy.deepcopy(self._overrides))

        with contextlib.suppress(Exception):
            self._logger.debug("compose() loaded config; keys: %s", list(cfg.keys()))

        return cfg

    def _default_config(self) -> dict[str, Any]:
        """
        Base defaults; all fields present so no KeyErrors downstream.
        """
        return {
            "plugin_id": "markstats",
            "version": __version__,
            # Catalog access
            "graphql_url": "http://localhost:9999/graphql",
            "request_timeout": 30,
            # Stats page mount
            "stats_path": "/stats",
            "anchor_selector": "div.container-fluid div.mt-5",
            "tag_chart_limit": 15,
            # Rendering collaborator; empty disables charts (text notice instead)
            "chartjs_url": "https://cdn.jsdelivr.net/npm/chart.js",
            # Navbar button + modal
            "stats_button": {
                "enabled": True,
                "parent_selector": ".navbar-buttons",
                "poll_interval": 1.0,  # seconds between page checks
                "debounce": 0.25,  # quiet period before injecting
            },
            "log_level": "INFO",
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(loaded, dict):
            self._logger.warning(f"Ignoring config file {path}: top level is not a mapping")
            return {}
        return loaded

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides of the form:
          MARKSTATS_GRAPHQL_URL=http://stash:9999/graphql
          MARKSTATS_TAG_CHART_LIMIT=20
          MARKSTATS_STATS_BUTTON__ENABLED=false
        """
        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX) or k == CONFIG_PATH_ENV:
                continue
            path = [part for part in k[len(ENV_PREFIX) :].lower().split("__") if part]
            if not path:
                continue

            node = cfg
            for part in path[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            node[path[-1]] = _parse_scalar(v)


def _parse_scalar(value: str) -> Any:
    """Parse env strings into bool/int/float where they look like one."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value
