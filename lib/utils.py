"""
Common utilities for Geonorge place lookup.
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    dumpKwargs = {
        "ensure_ascii": False,
        "default": str,
        "sort_keys": True,
    }

    if compact is None:
        # If indent is passed, then user want pretty-printed JSON,
        #  no need to use compact separators
        compact = "indent" not in kwargs

    if compact:
        dumpKwargs["separators"] = (",", ":")
    dumpKwargs.update(kwargs)
    return json.dumps(data, **dumpKwargs)


def parseDotenvLine(line: str) -> Optional[Tuple[str, str]]:
    """Parse `KEY=value` line of .env file, returns None for comments and garbage"""
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, value = line.split("=", 1)
    key = key.strip()
    if key.startswith("export "):
        key = key[len("export ") :].strip()
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def load_dotenv(path: str = ".env", populateEnv: bool = True, override: bool = True) -> Dict[str, str]:
    """
    Load KEY=value pairs from .env file, dood!

    Args:
        path: Path to .env file (default ".env"), missing file is ignored
        populateEnv: Whether to put loaded values into os.environ (default True)
        override: Whether loaded values replace variables already set in environment

    Returns:
        Dictionary of key-value pairs from .env file
    """
    if not os.path.isfile(path):
        logger.debug(f"No dotenv file at {path}")
        return {}

    values: Dict[str, str] = {}
    with open(path, "rt", encoding="utf-8") as f:
        for lineNo, line in enumerate(f, start=1):
            parsed = parseDotenvLine(line)
            if parsed is None:
                if line.strip() and not line.lstrip().startswith("#"):
                    logger.warning(f"Ignoring malformed line {lineNo} in {path}")
                continue
            values[parsed[0]] = parsed[1]

    if populateEnv:
        for key, value in values.items():
            if override or key not in os.environ:
                os.environ[key] = value

    return values
