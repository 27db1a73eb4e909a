"""Shared helpers for evned CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import click

from ..app import AppContext, bootstrap, evernote_store_factory
from ..config import ConfigError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


class EvnedCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")

    try:
        app = bootstrap(
            config_path_opt,
            ask=click.prompt,
            say=click.echo,
            sandbox=ctx.obj.get("sandbox", False),
            store_factory=evernote_store_factory,
        )
    except (ConfigError, OSError) as exc:
        raise EvnedCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app


def choose_from_menu(prompt: str, labels: Sequence[str]) -> int:
    """Print a numbered menu and return the zero-based index picked."""

    for number, label in enumerate(labels, start=1):
        click.echo(f"{number}. {label}")
    choice = click.prompt(prompt, type=click.IntRange(1, len(labels)))
    return choice - 1
