"""
Logging utilities for Geonorge place lookup.

Log records always go to stderr or files: stdout is reserved for GeoJSON output.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers, kept at WARNING unless configured explicitly
NOISY_LOGGERS = ("httpx", "httpcore")


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = getattr(logging, levelStr.upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def _handlerLevel(config: Dict[str, Any], key: str, fallback: int) -> int:
    if key not in config:
        return fallback
    level = getLogLevelByStr(config[key], fallback)
    return fallback if level is None else level


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from `[logging]` style config section.

    Supported keys: level, propagate, format, console, console-level,
    file, file-level, rotate.
    """
    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))

    # Clear existing handlers to avoid duplicates
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleHandler = logging.StreamHandler(sys.stderr)
        consoleHandler.setLevel(_handlerLevel(config, "console-level", logLevel))
        consoleHandler.setFormatter(formatter)
        localLogger.addHandler(consoleHandler)
        logger.debug(f"Logging {localLogger.name} to stderr, logLevel: {consoleHandler.level}")

    if "file" in config:
        logFile = config["file"]
        try:
            Path(logFile).parent.mkdir(parents=True, exist_ok=True)

            fileHandler: logging.Handler
            if config.get("rotate", False):
                fileHandler = TimedRotatingFileHandler(
                    filename=logFile,
                    when="midnight",
                    interval=1,
                    backupCount=7,
                    encoding="utf-8",
                )
            else:
                fileHandler = logging.FileHandler(logFile, encoding="utf-8")

            fileHandler.setLevel(_handlerLevel(config, "file-level", logLevel))
            fileHandler.setFormatter(formatter)
            localLogger.addHandler(fileHandler)
            logger.debug(f"Logging {localLogger.name} to file: {logFile}, logLevel: {fileHandler.level}")
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")


def initLogging(config: Dict[str, Any], production: bool = False) -> None:
    """Configure logging from config file settings.

    Args:
        config: `[logging]` config section, may contain per-logger `[logging.logger.<name>]` tables
        production: Default root level is WARNING instead of INFO
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.WARNING if production else logging.INFO)

    rootConfig = dict(config)
    rootConfig.setdefault("console", True)
    configureLogger(rootLogger, rootConfig)
    logLevel = rootLogger.getEffectiveLevel()

    # Avoid all GET requests being logged
    if logLevel < logging.WARNING:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.debug(f"Logging configured: root level={logLevel}")
