"""Configuration management for evned."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import yaml

DEFAULT_CONFIG_PATH = Path("~/.evned").expanduser()
DEFAULT_TOKEN = "none"
DEVTOKEN_HELP_URL = "http://dev.evernote.com/start/core/authentication.php#devtoken"

AskFunc = Callable[..., str]
SayFunc = Callable[[str], None]
EditorResolver = Callable[[], str]

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class InvalidConfigError(ConfigError):
    """Raised when the configuration file holds malformed values."""


@dataclass(slots=True)
class EvnedConfig:
    """In-memory representation of the evned configuration file."""

    token: str | None = None
    editor: str | None = None
    sandbox: bool = False
    source_path: Path | None = None


def default_editor_resolver() -> str:
    """Return the path of ``vim`` on ``PATH`` or an empty string."""

    return shutil.which("vim") or ""


def ensure_config_file(path: Path) -> bool:
    """Create an empty config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    return True


def read_settings(path: Path) -> dict[str, Any]:
    """Load the key-value document stored at ``path``.

    Keys written by the Ruby version of the tool carry a leading colon
    (``:token:``); they are normalized to plain names.
    """

    text = path.read_text(encoding="utf-8")
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfigError(f"Configuration at {path} is not valid YAML") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise InvalidConfigError("Configuration root must be a mapping")

    return {str(key).lstrip(":"): value for key, value in raw.items()}


def write_settings(path: Path, settings: dict[str, Any]) -> None:
    payload = yaml.safe_dump(settings, sort_keys=False)
    path.write_text(payload, encoding="utf-8")


def load_config(
    path: Path | None = None,
    *,
    ask: AskFunc,
    say: SayFunc,
    resolve_editor: EditorResolver = default_editor_resolver,
) -> EvnedConfig:
    """Load configuration from ``path`` or the default location.

    Missing ``token`` and ``editor`` entries are collected through ``ask``
    and written back, so the setup questions are only asked once.

    Raises
    ------
    InvalidConfigError
        If the file is malformed or holds values of the wrong type.
    OSError
        If the file cannot be created, read or written.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if ensure_config_file(config_path):
        logger.debug("Created empty configuration at %s", config_path)

    settings = read_settings(config_path)

    if settings.get("token") is None:
        settings["token"] = _ask_token(ask, say)
        write_settings(config_path, settings)

    if settings.get("editor") is None:
        settings["editor"] = _ask_editor(ask, resolve_editor)
        write_settings(config_path, settings)

    token = settings["token"]
    if not isinstance(token, str):
        raise InvalidConfigError("'token' must be a string")

    editor = settings["editor"]
    if not isinstance(editor, str):
        raise InvalidConfigError("'editor' must be a string")

    sandbox = settings.get("sandbox", False)
    if not isinstance(sandbox, bool):
        raise InvalidConfigError("'sandbox' must be a boolean when provided")

    return EvnedConfig(
        token=token.strip(),
        editor=editor.strip(),
        sandbox=sandbox,
        source_path=config_path,
    )


def _ask_token(ask: AskFunc, say: SayFunc) -> str:
    say("You will need a developer token to use this editor.")
    say(f"More information: {DEVTOKEN_HELP_URL}")
    return str(ask("Please enter your developer token", default=DEFAULT_TOKEN))


def _ask_editor(ask: AskFunc, resolve_editor: EditorResolver) -> str:
    default = resolve_editor().strip()
    return str(
        ask(
            "Please enter the editor command you would like to use",
            default=default or None,
        )
    )
