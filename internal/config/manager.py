"""
Configuration management for Geonorge place lookup.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils
from lib.geonorge.models import DEFAULT_EPSG

logger = logging.getLogger(__name__)


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholders with actual values.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in strings, dicts and lists."""
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Manages configuration loading for Geonorge place lookup.

    All sections are optional, a missing config file means defaults everywhere.
    """

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.configPath = configPath
        self.configDirs = configDirs or []
        utils.load_dotenv(path=dotEnvFile)
        self.config = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, dood!"""
        tomlFiles: List[Path] = []
        dirPath = Path(directory)

        if not dirPath.is_dir():
            logger.warning(f"Config directory {directory} does not exist or is not a directory, skipping, dood!")
            return tomlFiles

        for tomlFile in dirPath.rglob("*.toml"):
            if tomlFile.is_file():
                tomlFiles.append(tomlFile)
                logger.debug(f"Found config file: {tomlFile}")

        return sorted(tomlFiles)  # Sort for consistent ordering

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, dood!"""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories.

        Raises:
            SystemExit: If the main config file exists but can not be parsed
        """
        config: Dict[str, Any] = {}
        configFile = Path(self.configPath)
        if configFile.exists():
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {self.configPath}: {e}")
                sys.exit(1)
            logger.info(f"Loaded main config from {self.configPath}")
        else:
            logger.info(f"Configuration file {self.configPath} not found, using defaults")

        for configDir in self.configDirs:
            tomlFiles = self._findTomlFilesRecursive(configDir)
            logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

            for tomlFile in tomlFiles:
                try:
                    with open(tomlFile, "rb") as f:
                        dirConfig = tomli.load(f)
                except (OSError, tomli.TOMLDecodeError) as e:
                    # Continue with other files instead of exiting
                    logger.error(f"Failed to load config file {tomlFile}: {e}")
                    continue

                config = self._mergeConfigs(config, dirConfig)
                logger.info(f"Merged config from {tomlFile}")

        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getApplicationConfig(self) -> Dict[str, Any]:
        """Get application-wide configuration."""
        return self.get("application", {})

    def isProduction(self) -> bool:
        """Whether diagnostic error logs of swallowed failures are suppressed."""
        return bool(self.getApplicationConfig().get("production", False))

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getGeonorgeConfig(self) -> Dict[str, Any]:
        """
        Get Geonorge services configuration, with defaults filled in.

        Keys:
            - epsg: EPSG code passed to all upstream calls (default: "4258")
            - request-timeout: HTTP timeout in seconds (default: 10)
            - place-search-radius: Radius in meters for places by point (default: 500)
            - place-search-hits: Max places by point (default: 15)
            - elevation-service: "hoydedata" or "wps" (default: "hoydedata")
            - default-limit: Max results of name search (default: 10)
        """
        defaults: Dict[str, Any] = {
            "epsg": DEFAULT_EPSG,
            "request-timeout": 10,
            "place-search-radius": 500,
            "place-search-hits": 15,
            "elevation-service": "hoydedata",
            "default-limit": 10,
        }
        config = self._mergeConfigs(defaults, self.get("geonorge", {}))
        config["epsg"] = str(config["epsg"])
        return config
