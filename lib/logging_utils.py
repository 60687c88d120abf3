"""
Logging setup for the Easemob client.

Handlers are configured from the `[logging]` config section. Every handler
gets a `BearerTokenFilter`, so access tokens never reach logs in full.
"""

import logging
import re
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
NOISY_LOGGERS = ("httpx", "httpcore")

BEARER_RE = re.compile(r"(Bearer\s+)([A-Za-z0-9._~+/=-]+)")


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Map a level name like "debug" to its logging constant."""
    level = logging.getLevelName(levelStr.upper())
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


class BearerTokenFilter(logging.Filter):
    """Redacts `Bearer <token>` values in log messages, dood!"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = BEARER_RE.sub(lambda m: f"{m.group(1)}{m.group(2)[:6]}...", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def makeConsoleHandler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(BearerTokenFilter())
    return handler


def makeFileHandler(
    logFile: str, level: int, formatter: logging.Formatter, rotate: bool = False, backupCount: int = 7
) -> logging.Handler:
    """Create plain or daily-rotated file handler, making parent dirs as needed."""
    Path(logFile).parent.mkdir(parents=True, exist_ok=True)

    handler: logging.Handler
    if rotate:
        handler = TimedRotatingFileHandler(logFile, when="midnight", backupCount=backupCount, encoding="utf-8")
    else:
        handler = logging.FileHandler(logFile, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(BearerTokenFilter())
    return handler


def configureLogger(target: logging.Logger, config: Dict[str, Any]) -> None:
    """Apply one logging table to `target`, replacing its handlers.

    Keys: level, propagate, format, console, console-level, file, file-level,
    rotate, backup-count.
    """
    if "propagate" in config:
        target.propagate = bool(config["propagate"])
    if "level" in config:
        level = getLogLevelByStr(config["level"])
        if level is not None:
            target.setLevel(level)

    effective = target.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_FORMAT))

    for handler in list(target.handlers):
        target.removeHandler(handler)

    if config.get("console", False):
        level = getLogLevelByStr(config["console-level"], effective) if "console-level" in config else effective
        target.addHandler(makeConsoleHandler(level or effective, formatter))
        logger.info(f"Logging {target.name} to console, level {level}")

    logFile = config.get("file")
    if logFile:
        level = getLogLevelByStr(config["file-level"], effective) if "file-level" in config else effective
        try:
            handler = makeFileHandler(
                logFile,
                level or effective,
                formatter,
                rotate=bool(config.get("rotate", False)),
                backupCount=int(config.get("backup-count", 7)),
            )
        except OSError as e:
            logger.error(f"Failed to setup file logging for {target.name}: {e}")
        else:
            target.addHandler(handler)
            logger.info(f"Logging {target.name} to file {logFile}, level {level}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure root and named loggers from the [logging] config section.

    Named loggers live in the `logger` sub-table, e.g. [logging.logger."lib.easemob"].
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    configureLogger(root, config)

    rootLevel = root.getEffectiveLevel()
    # httpx logs every request at INFO
    if rootLevel < logging.WARNING:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    for name, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{name}': {loggerConfig}")
        configureLogger(logging.getLogger(name), loggerConfig)

    logger.info(f"Logging configured, root level {logging.getLevelName(rootLevel)}")
