"""Connection settings from the environment and persistent UI preferences.

Credentials come from environment variables, optionally seeded from a
``.env`` file. UI preferences live in a JSON file under the platform config
directory; unreadable or unwritable files fall back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_config_dir, user_log_dir

from .errors import ConfigurationMissing

logger = logging.getLogger(__name__)

APP_NAME = "acli"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "acli.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

ENV_FILE_VAR = "ACLI_ENV_FILE"
URL_VAR = "ATLASSIAN_URL"
USERNAME_VAR = "ATLASSIAN_USERNAME"
TOKEN_VAR = "ATLASSIAN_TOKEN"
TOKEN_ALIAS_VAR = "ATLASSIAN_API_TOKEN"


@dataclass(frozen=True)
class Settings:
    base_url: str
    username: str
    api_token: str

    def __repr__(self) -> str:
        return f"Settings(base_url={self.base_url!r}, username={self.username!r}, api_token='***')"


def load_env_file(environ: Mapping[str, str] | None = None) -> bool:
    """Load ``$ACLI_ENV_FILE`` (or ``./.env``) without overriding set variables."""
    source = os.environ if environ is None else environ
    env_path = source.get(ENV_FILE_VAR)
    dotenv_path = Path(env_path).expanduser() if env_path else Path.cwd() / ".env"
    loaded = load_dotenv(dotenv_path, override=False)
    if loaded:
        logger.debug("loaded environment from %s", dotenv_path)
    return loaded


def _require(source: Mapping[str, str], *names: str) -> str:
    for name in names:
        value = source.get(name, "").strip()
        if value:
            return value
    raise ConfigurationMissing(f"{names[0]} environment variable not set")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Return connection settings, raising ``ConfigurationMissing`` for absent values.

    When ``environ`` is omitted the process environment is used, after
    loading the ``.env`` file into it. An explicit mapping is read as-is.
    """
    if environ is None:
        load_env_file()
        environ = os.environ
    return Settings(
        base_url=_require(environ, URL_VAR),
        username=_require(environ, USERNAME_VAR),
        api_token=_require(environ, TOKEN_VAR, TOKEN_ALIAS_VAR),
    )


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object, or ``{}`` when unusable."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring write errors."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("could not save config to %s: %s", CONFIG_PATH, exc)


def load_theme_name() -> str | None:
    value = load_config().get("theme")
    return value if isinstance(value, str) and value.strip() else None


def save_theme_name(name: str) -> None:
    config = load_config()
    config["theme"] = name
    save_config(config)
