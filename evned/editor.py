"""Utilities for launching an editor to capture note content."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

import click

TEMP_PREFIX = "evned"
TEMP_SUFFIX = ".markdown"

# Flags that keep GUI editors in the foreground until the buffer is closed.
_BLOCKING_FLAGS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^[gm]vim"), "--nofork"),
    (re.compile(r"^jedit"), "-wait"),
    (re.compile(r"^(mate|subl)"), "-w"),
)

logger = logging.getLogger(__name__)


class EditorError(RuntimeError):
    """Raised when the external editor cannot be run to completion."""


def blocking_flag(editor: str) -> str | None:
    """Return the flag forcing ``editor`` to block, if one is known."""

    name = os.path.basename(editor.strip())
    for pattern, flag in _BLOCKING_FLAGS:
        if pattern.match(name):
            return flag
    return None


def editor_command(editor: str) -> str:
    flag = blocking_flag(editor)
    if flag is None:
        return editor.strip()
    return f"{editor.strip()} {flag}"


def open_editor(initial_content: str = "", editor: str | None = None) -> str:
    """Open ``initial_content`` in ``editor`` and return the saved text.

    The content round-trips through a temporary ``.markdown`` file that is
    removed once the editor exits. A file that is not valid UTF-8 is left in
    place so the text can be recovered.
    """

    with tempfile.NamedTemporaryFile(
        "w",
        prefix=TEMP_PREFIX,
        suffix=TEMP_SUFFIX,
        encoding="utf-8",
        delete=False,
    ) as fh:
        fh.write(initial_content)
        temp_path = Path(fh.name)

    command = editor_command(editor) if editor else None
    logger.debug("Launching editor %r on %s", command, temp_path)

    try:
        click.edit(filename=str(temp_path), editor=command)
    except click.ClickException as exc:
        temp_path.unlink(missing_ok=True)
        raise EditorError(exc.format_message()) from exc

    try:
        content = temp_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise EditorError(
            f"Edited note is not valid UTF-8; your text was kept at {temp_path}"
        ) from exc

    temp_path.unlink(missing_ok=True)
    return content
