"""Application bootstrap and context container for evned."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .config import (
    AskFunc,
    ConfigError,
    EditorResolver,
    EvnedConfig,
    SayFunc,
    default_editor_resolver,
    load_config,
)
from .remote import NoteStore, RemoteNoteClient

StoreFactory = Callable[[EvnedConfig], NoteStore]

_SDK_PACKAGES = ("evernote", "thrift")


@dataclass(slots=True)
class AppContext:
    """Aggregates the loaded configuration and the note service client."""

    config: EvnedConfig
    client: RemoteNoteClient


def evernote_store_factory(config: EvnedConfig) -> NoteStore:
    """Build the Evernote-backed note store for ``config``."""

    adapter_name = f"{__package__}.evernote_store"
    try:
        adapter = importlib.import_module(adapter_name)
    except ModuleNotFoundError as exc:
        missing = (exc.name or "").split(".")[0]
        if exc.name != adapter_name and missing not in _SDK_PACKAGES:
            raise
        raise ConfigError(
            "The Evernote SDK is not installed. Install 'evned[evernote]'."
        ) from exc

    return adapter.EvernoteNoteStore(config.token or "", sandbox=config.sandbox)


def bootstrap(
    config_path: Path | None,
    *,
    ask: AskFunc,
    say: SayFunc,
    resolve_editor: EditorResolver = default_editor_resolver,
    sandbox: bool = False,
    store_factory: StoreFactory = evernote_store_factory,
) -> AppContext:
    """Load configuration and build the note service client."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(
        config_path, ask=ask, say=say, resolve_editor=resolve_editor
    )
    if sandbox:
        config.sandbox = True

    client = RemoteNoteClient(store_factory(config))
    return AppContext(config=config, client=client)
