"""
Configuration for the engine, stored as JSON.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

from .. import __version__

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "browser": {
        "home_page": "http://example.com",
    },
    "network": {
        "timeout": 30,
        "retries": 3,
        "user_agent": f"puppy-engine/{__version__}",
    },
    "style": {
        "user_agent_stylesheet": True,
    },
}


def get_default_config_path() -> str:
    return os.path.join(os.path.expanduser("~"), ".puppy_engine", "config.json")


class Config:
    """
    Configuration manager.

    Values are addressed with dotted keys such as "network.timeout". Keys
    missing from the file fall back to DEFAULT_CONFIG.
    """

    def __init__(self, config_path: Optional[str] = None, load: bool = True):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the config file, ~/.puppy_engine/config.json by default
            load: Whether to read the file now
        """
        self.config_path = config_path or get_default_config_path()
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._lock = threading.Lock()

        if load:
            self.load()

        logger.debug(f"Configuration initialized (config_path: {self.config_path})")

    def load(self) -> None:
        """
        Load configuration from file, merged over the defaults.

        A missing file leaves the defaults in place; an unreadable or invalid
        file is logged and ignored.
        """
        if not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration from {self.config_path}: {e}")
            return

        if not isinstance(loaded, dict):
            logger.error(f"Ignoring configuration in {self.config_path}: top level is not an object")
            return

        with self._lock:
            self.config = _merge(copy.deepcopy(DEFAULT_CONFIG), loaded)
        logger.debug(f"Configuration loaded from {self.config_path}")

    def save(self) -> None:
        """Save configuration to file."""
        with self._lock:
            config_copy = copy.deepcopy(self.config)

        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dotted configuration key, e.g. 'browser.home_page'
            default: Value returned when the key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            node: Any = self.config
            for part in key.split('.'):
                if not isinstance(node, dict) or part not in node:
                    return default
                node = node[part]
            return node

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value, creating intermediate sections.

        Args:
            key: Dotted configuration key
            value: Configuration value
        """
        *parents, leaf = key.split('.')
        with self._lock:
            node = self.config
            for part in parents:
                if not isinstance(node.get(part), dict):
                    node[part] = {}
                node = node[part]
            node[leaf] = value

    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.

        Args:
            key: Dotted configuration key

        Returns:
            bool: True if key was removed
        """
        *parents, leaf = key.split('.')
        with self._lock:
            node = self.config
            for part in parents:
                if not isinstance(node.get(part), dict):
                    return False
                node = node[part]
            if leaf in node:
                del node[leaf]
                return True
            return False

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self.config)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base
