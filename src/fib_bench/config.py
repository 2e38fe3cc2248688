"""
Configuration management for fib_bench.

Settings come from a YAML file (``$FIB_BENCH_CONFIG`` or ``fib-bench.yaml``
in the working directory) merged over built-in defaults. String values may
reference environment variables as ``${VAR}`` or ``${VAR:-default}``.
"""

import copy
import logging
import os
import re
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'FIB_BENCH_CONFIG'
DEFAULT_CONFIG_FILE = 'fib-bench.yaml'

DEFAULT_CONFIG: Dict[str, Any] = {
    'benchmark': {
        'n': 40,
        'repeat': 1,
        'warmup': 0,
    },
    'output': {
        'precision': None,
        'report': None,
    },
    'logging': {
        'level': 'WARNING',
    },
}

_ENV_PATTERN = re.compile(r'\$\{([^:}]+)(?::-([^}]*))?\}')


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Loads and serves fib_bench settings"""

    def __init__(self, path: Optional[str] = None):
        """
        Initializes the manager and loads the configuration.

        Args:
            path: Explicit config file path. Falls back to ``$FIB_BENCH_CONFIG``,
                then ``fib-bench.yaml`` in the current directory.
        """
        self.path = path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE
        self._config: Dict[str, Any] = {}
        self.reload()

    def reload(self):
        """Re-read the config file, falling back to defaults if it is absent"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            logger.info({"event": "config_load", "status": "missing", "path": self.path})
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            return
        except OSError as e:
            logger.error({"event": "config_load", "status": "failed", "path": self.path, "error": str(e)})
            raise ConfigError(f"Cannot read {self.path}: {e}") from e
        except yaml.YAMLError as e:
            logger.error({"event": "config_load", "status": "failed", "path": self.path, "error": str(e)})
            raise ConfigError(f"Invalid YAML in {self.path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Top level of {self.path} must be a mapping, got {type(loaded).__name__}")

        self._config = _deep_merge(DEFAULT_CONFIG, self._expand_env_vars(loaded))
        logger.info({"event": "config_load", "status": "success", "path": self.path})

    def _expand_env_vars(self, config: Any) -> Any:
        """Expand ${VAR:-default} references inside string values"""
        if isinstance(config, dict):
            return {k: self._expand_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._expand_env_vars(item) for item in config]
        elif isinstance(config, str):
            def replacer(match):
                return os.environ.get(match.group(1), match.group(2) or '')
            return _ENV_PATTERN.sub(replacer, config)
        else:
            return config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Look up a nested value using dot notation.

        Args:
            key_path: Dotted key, e.g. ``"benchmark.n"``.
            default: Returned when any segment is missing.

        Returns:
            The configured value or ``default``.
        """
        value = self._config
        try:
            for key in key_path.split('.'):
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def update_runtime(self, key_path: str, value: Any):
        """Override a value in memory only; the file is left untouched"""
        keys = key_path.split('.')
        config = self._config
        for key in keys[:-1]:
            config = config.setdefault(key, {})
        config[keys[-1]] = value
        logger.debug({"event": "config_override", "key": key_path, "value": value})

    @property
    def config(self) -> Dict[str, Any]:
        """A copy of the merged configuration"""
        return copy.deepcopy(self._config)


_config_manager: Optional[ConfigManager] = None


def get_config(path: Optional[str] = None) -> ConfigManager:
    """Return the shared ConfigManager, creating it on first use or when a path is given"""
    global _config_manager
    if _config_manager is None or path is not None:
        _config_manager = ConfigManager(path)
    return _config_manager
