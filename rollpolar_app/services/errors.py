"""
Error kinds raised while reading the control file and loading polar datasets.

Messages are meant to be shown to the user verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PolarDataError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class ConfigReadError(PolarDataError):
    """Control file could not be read or decoded."""


class DirectoryNotFound(PolarDataError):
    """A required folder or file of the polar database is missing."""


class NoMatchFound(PolarDataError):
    """No candidate folder or file carried a parseable parameter value."""


class MalformedDataFile(PolarDataError):
    """Binary polar file is truncated or inconsistent with its header."""


@dataclass(slots=True)
class CaseValidationError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message
