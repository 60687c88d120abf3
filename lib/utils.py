"""
Common utilities for the Easemob client.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    """Dump to JSON with sorted keys and non-ASCII kept as-is.

    Output is compact unless `indent` is given or `compact=False` is passed.
    Values JSON can't handle are dumped via str().
    """
    if compact is None:
        compact = "indent" not in kwargs

    options: Dict[str, Any] = {"ensure_ascii": False, "default": str, "sort_keys": True}
    if compact:
        options["separators"] = (",", ":")
    options.update(kwargs)
    return json.dumps(data, **options)


def parseDotEnvLine(line: str) -> Optional[tuple[str, str]]:
    """Parse `KEY=value` line, None for blanks, comments and junk.

    Supports an `export ` prefix and single or double quoted values.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :]

    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to populate os.environ (default True).
            Variables already set in the environment are not overridden.

    Returns:
        Dictionary of key-value pairs from .env file
    """
    ret: Dict[str, str] = {}
    with open(path, "rt", encoding="utf-8") as f:
        for line in f:
            parsed = parseDotEnvLine(line)
            if parsed is not None:
                ret[parsed[0]] = parsed[1]

    if populateEnv:
        for k, v in ret.items():
            os.environ.setdefault(k, v)
    logger.debug(f"Loaded {len(ret)} variables from {path}")
    return ret
