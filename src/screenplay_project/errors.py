from __future__ import annotations


class ScreenplayError(Exception):
    """Base class for errors surfaced by the screenplay tooling."""


class ManuscriptError(ScreenplayError, ValueError):
    """The caller handed over something that is not manuscript text."""


class ManuscriptLoadError(ScreenplayError):
    """A manuscript file could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
