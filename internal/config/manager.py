"""
Configuration loading for the Easemob client.

Configuration is a main TOML file plus any number of config directories.
Every `.toml` file found in a directory is merged over the main file, in
sorted path order. `${VAR}` placeholders are resolved from the environment
after merging, so a `.env` file can provide credentials.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils

logger = logging.getLogger(__name__)

ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")
REQUIRED_EASEMOB_KEYS = ("org-name", "app-name")


def substituteEnvVars(value: Any) -> Any:
    """Resolve ${VAR_NAME} placeholders in strings, walking dicts and lists.

    Unset variables keep their placeholder as-is.
    """
    if isinstance(value, str):
        return ENV_PLACEHOLDER_RE.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substituteEnvVars(v) for v in value]
    return value


def mergeConfigs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge `override` into a copy of `base`, dood!

    Tables are merged key by key, any other value (arrays included) replaces
    the old one.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = mergeConfigs(current, value)
        else:
            merged[key] = value
    return merged


def findConfigFiles(directory: str) -> List[Path]:
    """Collect .toml files under `directory` recursively, sorted by path."""
    root = Path(directory)
    if not root.is_dir():
        logger.warning(f"Config directory {directory} is missing or not a directory, skipping, dood!")
        return []

    found = sorted(path for path in root.rglob("*.toml") if path.is_file())
    for path in found:
        logger.debug(f"Found config file: {path}")
    return found


def loadTomlFile(path: Path) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomli.load(f)


class ConfigManager:
    """Loads, merges and validates client configuration."""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        self.config_path = configPath
        self.config_dirs = configDirs or []
        if Path(dotEnvFile).is_file():
            utils.load_dotenv(path=dotEnvFile)

        config = substituteEnvVars(self._loadConfig())
        self._validate(config)
        self.config: Dict[str, Any] = config
        logger.info("Configuration loaded, dood!")

    def _loadConfig(self) -> Dict[str, Any]:
        """Read the main file and merge config directories over it.

        A missing or unreadable main file is fatal unless config directories
        were given. Broken files inside directories are logged and skipped.
        """
        mainFile = Path(self.config_path)
        config: Dict[str, Any] = {}

        if mainFile.exists():
            try:
                config = loadTomlFile(mainFile)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {mainFile}: {e}")
                sys.exit(1)
            logger.info(f"Loaded main config from {mainFile}")
        elif not self.config_dirs:
            logger.error(f"Configuration file {self.config_path} not found!")
            sys.exit(1)

        for configDir in self.config_dirs:
            files = findConfigFiles(configDir)
            logger.info(f"Found {len(files)} .toml files in {configDir}")
            for path in files:
                try:
                    config = mergeConfigs(config, loadTomlFile(path))
                except (OSError, tomli.TOMLDecodeError) as e:
                    logger.error(f"Skipping config file {path}: {e}")
                    continue
                logger.debug(f"Merged config from {path}")

        return config

    def _validate(self, config: Dict[str, Any]) -> None:
        section = config.get("easemob")
        if not isinstance(section, dict):
            logger.error("No [easemob] section in configuration!")
            sys.exit(1)

        missing = [key for key in REQUIRED_EASEMOB_KEYS if not section.get(key)]
        if missing:
            logger.error(f"Missing {', '.join(missing)} in [easemob] configuration!")
            sys.exit(1)

    def get(self, key: str, default=None) -> Any:
        """Get top-level configuration value by key."""
        return self.config.get(key, default)

    def getEasemobConfig(self) -> Dict[str, Any]:
        """Get the [easemob] section: org/app names, credentials and transport settings."""
        return self.get("easemob", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        return self.get("logging", {})
