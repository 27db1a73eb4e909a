"""Evernote implementation of the ``NoteStore`` protocol."""

from __future__ import annotations

import logging
from http.client import HTTPException
from typing import Sequence

from evernote.api.client import EvernoteClient
from evernote.edam.error.ttypes import (
    EDAMErrorCode,
    EDAMNotFoundException,
    EDAMSystemException,
    EDAMUserException,
)
from evernote.edam.notestore.ttypes import NoteFilter
from evernote.edam.type.ttypes import Note
from thrift.transport.TTransport import TTransportException

from .remote import (
    NoteServiceError,
    RemoteNote,
    ServiceNotFoundError,
    ServiceSystemError,
    ServiceUserError,
)

logger = logging.getLogger(__name__)

_EDAM_ERRORS = (EDAMSystemException, EDAMUserException, EDAMNotFoundException)
_TRANSPORT_ERRORS = (TTransportException, HTTPException, OSError)


class EvernoteNoteStore:
    """Authenticated note store calls against Evernote's NoteStore service."""

    def __init__(self, token: str, *, sandbox: bool = False) -> None:
        self.token = token
        self.sandbox = sandbox
        self._note_store = None

    @property
    def note_store(self):
        if self._note_store is None:
            client = EvernoteClient(token=self.token, sandbox=self.sandbox)
            self._note_store = client.get_note_store()
        return self._note_store

    def find_notes(self, words: str, limit: int) -> list[RemoteNote]:
        """Find notes whose title contains ``words``."""

        note_filter = NoteFilter(words=title_query(words))
        try:
            result = self.note_store.findNotes(self.token, note_filter, 0, limit)
        except _EDAM_ERRORS + _TRANSPORT_ERRORS as exc:
            raise _translate(exc) from exc

        return [
            RemoteNote(guid=n.guid, title=n.title or "", updated=n.updated or 0)
            for n in (result.notes or [])
        ]

    def create_note(self, title: str, content: str, tags: Sequence[str]) -> str:
        note = Note(title=title, content=content, tagNames=list(tags) or None)
        try:
            created = self.note_store.createNote(self.token, note)
        except _EDAM_ERRORS + _TRANSPORT_ERRORS as exc:
            raise _translate(exc) from exc
        logger.info("Created Evernote note %s", created.guid)
        return created.guid


def title_query(term: str) -> str:
    """Build an Evernote search restricted to note titles.

    The search grammar has no escape for double quotes, so they are dropped.
    """

    phrase = " ".join(term.replace('"', " ").split())
    return f'intitle:"{phrase}"'


def _translate(exc: Exception) -> NoteServiceError:
    if isinstance(exc, _TRANSPORT_ERRORS):
        return ServiceSystemError(f"network error: {exc}")

    if isinstance(exc, EDAMNotFoundException):
        detail = exc.identifier or "object"
        if exc.key:
            detail = f"{detail} {exc.key}"
        return ServiceNotFoundError(f"not found: {detail}")

    code = EDAMErrorCode._VALUES_TO_NAMES.get(exc.errorCode, str(exc.errorCode))
    if isinstance(exc, EDAMUserException):
        if exc.parameter:
            return ServiceUserError(f"{code}: {exc.parameter}")
        return ServiceUserError(code)

    if exc.message:
        return ServiceSystemError(f"{code}: {exc.message}")
    return ServiceSystemError(code)
