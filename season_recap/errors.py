from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class InvalidSnapshotError(ValueError):
    """Structured error for snapshots that break the engine's input invariants.

    The server layer maps these to HTTP 400 while keeping a stable
    machine-readable code for the client.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


# Error codes (stable API surface)
RATING_UNKNOWN_PERSON = "RATING_UNKNOWN_PERSON"
RATING_UNKNOWN_ENTRY = "RATING_UNKNOWN_ENTRY"
RATING_DUPLICATE = "RATING_DUPLICATE"
ENTRY_BAD_GROUP = "ENTRY_BAD_GROUP"
ENTRY_BAD_POSITION = "ENTRY_BAD_POSITION"
PAYLOAD_MALFORMED = "PAYLOAD_MALFORMED"
