"""Core types."""

from __future__ import annotations
from dataclasses import dataclass

# Placeholder for a token slot that has not been filled yet
BLANK = " "


class MaskConfigError(ValueError):
    """Raised at setup time when a field cannot be formatted at all."""


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of an edit: the new masked text and where the caret goes."""
    text: str
    caret: int


# ── Edit operations ──────────────────────────────────────────────────
# One per kind of event an input widget produces.  ``at=None`` means
# "wherever the caret currently is".

@dataclass(frozen=True, slots=True)
class Insert:
    text: str
    at: int | None = None


@dataclass(frozen=True, slots=True)
class Paste:
    text: str
    at: int | None = None


@dataclass(frozen=True, slots=True)
class DeleteRange:
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Backspace:
    at: int | None = None


@dataclass(frozen=True, slots=True)
class FocusSnap:
    requested: int = 0


EditOperation = Insert | Paste | DeleteRange | Backspace | FocusSnap
