"""Boundary between note workflows and the remote note service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, runtime_checkable

DEFAULT_SEARCH_LIMIT = 10

logger = logging.getLogger(__name__)


class NoteServiceError(RuntimeError):
    """Base error raised by note store implementations."""

    kind = "system"


class ServiceSystemError(NoteServiceError):
    """The service failed on its side (outage, rate limit, quota...)."""

    kind = "system"


class ServiceUserError(NoteServiceError):
    """The request was rejected (bad token, invalid ENML, missing field...)."""

    kind = "user"


class ServiceNotFoundError(NoteServiceError):
    """A referenced object does not exist on the service."""

    kind = "not_found"


@dataclass(frozen=True, slots=True)
class RemoteNote:
    """Read-only reference to a note stored on the service."""

    guid: str
    title: str
    updated: int


@dataclass(frozen=True, slots=True)
class ServiceFailure:
    """Outcome of a remote call that the service rejected."""

    kind: str
    message: str


@runtime_checkable
class NoteStore(Protocol):
    def find_notes(self, words: str, limit: int) -> Sequence[RemoteNote]:
        ...

    def create_note(self, title: str, content: str, tags: Sequence[str]) -> str:
        ...


class RemoteNoteClient:
    """Run note store calls and turn service errors into ``ServiceFailure``.

    Socket-level errors raised by a store become system failures.
    """

    def __init__(self, store: NoteStore) -> None:
        self.store = store

    def search(
        self, term: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[RemoteNote] | ServiceFailure:
        logger.debug("Searching notes for %r (limit %d)", term, limit)
        try:
            return list(self.store.find_notes(term, limit))
        except (NoteServiceError, OSError) as exc:
            return _failure(exc)

    def create(
        self, title: str, markup: str, tags: Iterable[str] = ()
    ) -> str | ServiceFailure:
        logger.debug("Creating note %r", title)
        try:
            return self.store.create_note(title, markup, tuple(tags))
        except (NoteServiceError, OSError) as exc:
            return _failure(exc)


def _failure(exc: Exception) -> ServiceFailure:
    logger.debug("Note service call failed", exc_info=exc)
    if isinstance(exc, NoteServiceError):
        return ServiceFailure(kind=exc.kind, message=str(exc))
    return ServiceFailure(kind="system", message=f"network error: {exc}")
