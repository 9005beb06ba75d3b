"""
Config system - layered settings for the AutoConfig engine.

Lets a host application keep its namespace prefixes in configuration
instead of code.
"""

from dataclasses import dataclass
from glob import glob
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import os

import yaml
from dotenv import dotenv_values

from .faults import ConfigurationFault
from .scanner import normalize_packages

logger = logging.getLogger("autowire.config")


@dataclass(frozen=True)
class AutoConfigSettings:
    """Validated engine settings."""
    packages: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "packages", normalize_packages(self.packages))


class SettingsLoader:
    """
    Loads and merges settings from multiple sources with precedence:
    overrides > environment variables > .env file > config files
    """

    SECTION = "autowire"

    def __init__(self, env_prefix: str = "AUTOWIRE_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[List[str]] = None,
        env_prefix: str = "AUTOWIRE_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "SettingsLoader":
        """
        Load settings from every source.

        Args:
            paths: Config file paths (glob patterns supported; YAML or JSON)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Populated SettingsLoader
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        matches = sorted(glob(pattern))
        if not matches:
            logger.debug(f"No config files match {pattern}")
        for path_str in matches:
            path = Path(path_str)
            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                raise ConfigurationFault(f"unsupported config file type '{path.suffix}'", key=str(path))

    def _load_json_file(self, path: Path):
        with open(path) as f:
            data = json.load(f)
        self._merge_file_data(path, data)

    def _load_yaml_file(self, path: Path):
        with open(path) as f:
            data = yaml.safe_load(f)
        self._merge_file_data(path, data)

    def _merge_file_data(self, path: Path, data: Any):
        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigurationFault("top level must be a mapping", key=str(path))
        # Files may nest settings under an "autowire" section.
        section = data.get(self.SECTION, data)
        if not isinstance(section, dict):
            raise ConfigurationFault("section must be a mapping", key=self.SECTION)
        self._merge_dict(self.config_data, section)
        logger.debug(f"Loaded settings from {path}")

    def _load_env_file(self, path: str):
        env_path = Path(path)
        if not env_path.exists():
            return
        for key, value in dotenv_values(env_path).items():
            if key.startswith(self.env_prefix) and value is not None:
                self._set_nested(key, value)

    def _load_from_env(self):
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert AUTOWIRE_A__B to {"a": {"b": value}}."""
        key = key[len(self.env_prefix):]
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data
        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def get_settings(self) -> AutoConfigSettings:
        """
        Build validated engine settings.

        Raises:
            ConfigurationFault: If ``packages`` is missing or ill-typed
        """
        packages = self.get("packages")
        if packages is None:
            raise ConfigurationFault("required setting is missing", key="packages")
        if isinstance(packages, str):
            packages = [p for p in (item.strip() for item in packages.split(",")) if p]
        elif not isinstance(packages, (list, tuple)):
            raise ConfigurationFault(
                f"expected a list or comma-separated string, got {type(packages).__name__}",
                key="packages",
            )
        return AutoConfigSettings(packages=tuple(packages))

    def to_dict(self) -> dict:
        """Export all settings as dictionary."""
        return self.config_data.copy()
