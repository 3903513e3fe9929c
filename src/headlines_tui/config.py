from __future__ import annotations

import json
import logging
import os
from dataclasses import fields, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from rich.color import Color, ColorParseError
from rich.errors import StyleSyntaxError
from rich.style import Style

from .datamodels import QuerySpec
from .errors import ConfigError, MissingCredentialsError
from .render import RenderStyle

# --- Configuration ---
NEWSAPI_BASE_URL = "https://newsapi.org/v2"
BATCH_SIZE = 10
DEFAULT_QUERY_DAYS = 10

FALLBACK_DETAIL = "No description available"
PLACEHOLDER_TEXT = "Loading..."

CONFIG_PATH = os.path.expanduser("~/.config/headlines/config.json")

REQUEST_HEADERS = {"User-Agent": "headlines/0.1.0"}
RETRY_TOTAL = 3
RETRY_BACKOFF = 0.3

DEFAULT_CONFIG: Dict[str, Any] = {
    "source": "newsapi",
    "batch_size": BATCH_SIZE,
    "workers": 1,
    "http_timeout": None,
    "query": {
        "q": None,
        "category": None,
        "language": "en",
        "days": DEFAULT_QUERY_DAYS,
        "sort_by": "popularity",
        "endpoint": "everything",
    },
    "sources": {
        # News API search terms; RSS treats "q" as a title filter
        "newsapi": {"query": {"q": "Trump America"}},
        "rss": {"feeds": {}},
    },
    "style": {},
}

# RenderStyle fields holding full style definitions rather than one colour
STYLE_SETTINGS = {"header", "selected"}

# --- Logging ---
logger = logging.getLogger("headlines")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> Optional[str]:
    """Configure logging.

    The terminal is in raw mode while the reader runs, so records only ever go
    to a file. Returns the path of that file, or None when logging is off.
    """
    if debug:
        ts = datetime.now().strftime("%Y%m%dT%H%M%S")
        pid = os.getpid()
        path = log_file or f"/tmp/headlines_debug_{ts}_{pid}.log"
        level = logging.DEBUG
    elif log_file:
        path = log_file
        level = logging.INFO
    else:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    logging.basicConfig(level=level, filename=path, filemode="a", format=LOG_FORMAT)
    logger.debug("Logging enabled to %s", path)
    return path


def ensure_config_file_exists() -> None:
    """Write the default config file if the user's config file is not found."""
    if not os.path.exists(CONFIG_PATH):
        logger.info("Config file not found at %s, creating default.", CONFIG_PATH)
        save_config(DEFAULT_CONFIG)


def load_config() -> Dict[str, Any]:
    """Load the main configuration file.

    An unreadable file, or one whose top level is not a JSON object, counts as
    an empty config, so every setting falls back to ``DEFAULT_CONFIG``.
    """
    ensure_config_file_exists()
    try:
        with open(CONFIG_PATH, "r") as f:
            config = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", CONFIG_PATH, e)
        return {}
    if not isinstance(config, dict):
        logger.error("Ignoring config at %s: expected a JSON object", CONFIG_PATH)
        return {}
    logger.info("Loaded config from %s (source: %s)", CONFIG_PATH, config.get("source", "newsapi"))
    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(CONFIG_PATH), exist_ok=True)
        with open(CONFIG_PATH, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", CONFIG_PATH)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", CONFIG_PATH, e)


def get_int_setting(config: Dict[str, Any], key: str, default: int) -> int:
    """Return a positive integer setting, or ``default`` when it is unset."""
    value = config.get(key)
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Config setting '{key}' must be a whole number, got {value!r}")
    if number < 1:
        raise ConfigError(f"Config setting '{key}' must be at least 1, got {value!r}")
    return number


def load_api_key(config: Dict[str, Any]) -> str:
    """Return the NewsAPI key from the environment (or .env), else the config."""
    load_dotenv(override=False)
    key = os.environ.get("NEWSAPI_KEY") or config.get("api_key")
    if not key:
        raise MissingCredentialsError(
            "NEWSAPI_KEY is not set (environment, .env file or config 'api_key')"
        )
    return key


def query_from_config(
    config: Dict[str, Any],
    overrides: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
    source_name: Optional[str] = None,
) -> QuerySpec:
    """Build the feed query.

    Layers, lowest first: the shared ``query`` block, the ``query`` block of
    the chosen source under ``sources``, then CLI overrides.
    """
    settings = dict(DEFAULT_CONFIG["query"])
    settings.update(config.get("query") or {})
    if source_name:
        source_config = (config.get("sources") or {}).get(source_name) or {}
        settings.update(source_config.get("query") or {})
    settings.update({k: v for k, v in (overrides or {}).items() if v is not None})

    batch_size = get_int_setting(config, "batch_size", BATCH_SIZE)
    date_from = date_to = None
    if settings.get("days"):
        days = get_int_setting(settings, "days", DEFAULT_QUERY_DAYS)
        date_to = now or datetime.now(timezone.utc)
        date_from = date_to - timedelta(days=days)

    return QuerySpec(
        q=settings.get("q") or None,
        category=settings.get("category") or None,
        language=settings.get("language") or None,
        date_from=date_from,
        date_to=date_to,
        sort_by=settings.get("sort_by") or None,
        endpoint=settings.get("endpoint") or "everything",
        page_size=batch_size,
    )


def load_render_style(config: Dict[str, Any]) -> RenderStyle:
    """Apply the ``style`` overrides from the config to the default palette.

    ``header`` and ``selected`` take full rich style definitions, the other
    settings a single colour. Anything rich cannot parse is dropped.
    """
    overrides = config.get("style") or {}
    known = {f.name for f in fields(RenderStyle)}
    valid = {}
    for name, value in overrides.items():
        if name not in known or not isinstance(value, str):
            logger.warning("Ignoring unknown style setting '%s'", name)
            continue
        try:
            if name in STYLE_SETTINGS:
                Style.parse(value)
            else:
                Color.parse(value)
        except (StyleSyntaxError, ColorParseError) as e:
            logger.warning("Ignoring invalid style setting '%s': %s", name, e)
            continue
        valid[name] = value
    return replace(RenderStyle(), **valid)
