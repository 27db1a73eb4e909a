"""Compose notes in a local editor and publish them to Evernote."""

__version__ = "0.1.0"
