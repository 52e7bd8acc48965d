# squeaker/errors.py
from __future__ import annotations

from typing import Dict, Optional


class SqueakerError(ValueError):
    """
    Fail-closed error for a transcript run.

    Every failure aborts the whole conversion; no partial document is produced.
    `token` is the offending label / predicate / id / quote text when one exists.
    """
    kind = "SqueakerError"

    def __init__(self, message: str, token: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.token = token

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "kind": self.kind,
            "message": self.message,
            "token": self.token,
        }


class StructureError(SqueakerError):
    """A line expected to be a speaker header has no colon."""
    kind = "StructureError"


class ValidationError(SqueakerError):
    """A command is malformed, or a fact ends up without a quote-derived proof."""
    kind = "ValidationError"


class ReferenceLookupError(SqueakerError, LookupError):
    """A quote or an id could not be found among already-parsed utterances."""
    kind = "LookupError"
