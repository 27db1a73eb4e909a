"""evned CLI package."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from ..editor import EditorError, open_editor
from ..services.notes import create_via_editor, edit_via_search
from ..utils.tags import parse_tag_list
from ._common import (
    CONTEXT_SETTINGS,
    EvnedCliError,
    choose_from_menu,
    configure_logging,
    get_app,
)

__all__ = ["cli", "main", "EvnedCliError"]


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("title", required=False)
@click.argument("tags", required=False)
@click.option(
    "-e",
    "--edit",
    "edit_mode",
    is_flag=True,
    help="Search for notes matching TITLE instead of creating a new one.",
)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration YAML file (default: ~/.evned).",
)
@click.option(
    "--sandbox",
    is_flag=True,
    help="Talk to the Evernote sandbox service.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    title: str | None,
    tags: str | None,
    edit_mode: bool,
    config_path_opt: Path | None,
    sandbox: bool,
    verbose: bool,
) -> None:
    """Write a note in your editor and publish it to Evernote.

    TITLE names the new note; TAGS is an optional comma-separated list.
    """

    configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path_opt
    ctx.obj["sandbox"] = sandbox

    if edit_mode:
        term = (title or "").strip()
        if not term:
            raise EvnedCliError("A title is required to search for notes.")

        app = get_app(ctx)
        edit_via_search(app, term, say=click.echo, choose=choose_from_menu)
        return

    app = get_app(ctx)
    try:
        create_via_editor(
            app,
            title,
            parse_tag_list(tags),
            say=click.echo,
            edit_fn=open_editor,
        )
    except (EditorError, OSError) as exc:
        raise EvnedCliError(str(exc)) from exc


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        return cli.main(args=args, prog_name="evned", standalone_mode=False) or 0
    except click.ClickException as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
