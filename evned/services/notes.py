"""High-level note workflows used by the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from ..app import AppContext
from ..editor import open_editor as default_open_editor
from ..markup import note_markup
from ..remote import RemoteNote, ServiceFailure
from ..utils.datetime_fmt import from_epoch_millis, now_local_label, to_user_friendly_utc
from ..utils.tags import dedupe_tags

SayFunc = Callable[[str], None]
EditFunc = Callable[..., str]
ChooseFunc = Callable[[str, Sequence[str]], int]

BEGIN_MARKER = "--BEGIN--"
END_MARKER = "--END--"
MENU_PROMPT = "Which note would you like to edit"
NONE_CHOICE = "None"

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NoteDraft:
    """Title, tags and markdown body of a note before submission."""

    title: str
    tags: tuple[str, ...] = ()
    body_markdown: str = ""


def default_title() -> str:
    return f"Untitled note - {now_local_label()}"


def create_via_editor(
    ctx: AppContext,
    title: str | None,
    tags: Iterable[str] = (),
    *,
    say: SayFunc,
    edit_fn: EditFunc | None = None,
) -> str | ServiceFailure:
    """Capture a note body in the editor and submit it as a new note.

    Returns the new note's guid, or the ``ServiceFailure`` after the
    authored markdown has been echoed back to the user.
    """

    ef = edit_fn or default_open_editor

    draft = NoteDraft(title=title or default_title(), tags=dedupe_tags(tags))
    draft.body_markdown = ef("", editor=ctx.config.editor)

    result = ctx.client.create(
        draft.title, note_markup(draft.body_markdown), draft.tags
    )
    if isinstance(result, ServiceFailure):
        graceful_failure(draft.body_markdown, result, say=say)
        return result

    say(f"Successfully created a new note (GUID: {result})")
    return result


def graceful_failure(markdown: str, failure: ServiceFailure, *, say: SayFunc) -> None:
    """Report ``failure`` and print ``markdown`` so no work is lost."""

    say(f"Sorry, an error occurred saving the note to Evernote ({failure.message})")
    say("Here's the markdown you were trying to save:")
    say("")
    say(BEGIN_MARKER)
    say(markdown)
    say(END_MARKER)
    say("")


def edit_via_search(
    ctx: AppContext,
    title: str,
    *,
    say: SayFunc,
    choose: ChooseFunc,
) -> RemoteNote | None:
    """Search notes by ``title`` and let the user pick one.

    Only the selection is displayed; notes are listed in the order the
    service returned them.
    """

    found = ctx.client.search(title)
    if isinstance(found, ServiceFailure):
        say(f"Sorry, an error occurred searching Evernote ({found.message})")
        return None

    if not found:
        say(f"No notes were found matching '{title}'")
        return None

    labels = [menu_label(note) for note in found]
    labels.append(NONE_CHOICE)
    index = choose(MENU_PROMPT, labels)

    if index >= len(found):
        say("None!")
        return None

    selected = found[index]
    logger.debug("Selected note %s", selected.guid)
    say(repr(selected))
    return selected


def menu_label(note: RemoteNote) -> str:
    updated = to_user_friendly_utc(from_epoch_millis(note.updated))
    return f"{updated} {note.title}"
