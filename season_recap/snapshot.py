from __future__ import annotations

"""Snapshot construction and invariant checks.

Callers hand over whatever their storage produced (dataclass records or
JSON-like rows) and get back one immutable `FactSnapshot`. This is the only
place that raises `InvalidSnapshotError`; once a snapshot exists, every
downstream computation is total.

Checked here:
- every rating references a known person and a known entry
- at most one rating per (person, entry)
- group numbers and positions are >= 1

Score ranges, id formats and form structure are the ingestion side's job.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from . import config as r_cfg
from .errors import (
    ENTRY_BAD_GROUP,
    ENTRY_BAD_POSITION,
    PAYLOAD_MALFORMED,
    RATING_DUPLICATE,
    RATING_UNKNOWN_ENTRY,
    RATING_UNKNOWN_PERSON,
    InvalidSnapshotError,
)
from .types import Entry, FactSnapshot, Movie, Person, Rating

logger = logging.getLogger(__name__)


def _fail(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> InvalidSnapshotError:
    logger.warning("invalid snapshot %s: %s", code, message)
    return InvalidSnapshotError(code=code, message=message, details=details)


def _check_entries(entries: Iterable[Entry]) -> None:
    for e in entries:
        if e.group_number < r_cfg.FIRST_ROUND:
            raise _fail(
                ENTRY_BAD_GROUP,
                f"entry {e.id} has group number {e.group_number}",
                {"entry_id": e.id, "group_number": e.group_number},
            )
        if e.position < r_cfg.FIRST_POSITION:
            raise _fail(
                ENTRY_BAD_POSITION,
                f"entry {e.id} has position {e.position}",
                {"entry_id": e.id, "position": e.position},
            )


def _check_ratings(
    ratings: Iterable[Rating],
    persons_by_id: Mapping[str, Person],
    entries_by_id: Mapping[str, Entry],
) -> None:
    seen: Set[Tuple[str, str]] = set()
    for r in ratings:
        if r.person_id not in persons_by_id:
            raise _fail(
                RATING_UNKNOWN_PERSON,
                f"rating on entry {r.entry_id} references unknown person {r.person_id}",
                {"person_id": r.person_id, "entry_id": r.entry_id},
            )
        if r.entry_id not in entries_by_id:
            raise _fail(
                RATING_UNKNOWN_ENTRY,
                f"rating by person {r.person_id} references unknown entry {r.entry_id}",
                {"person_id": r.person_id, "entry_id": r.entry_id},
            )
        key = (r.person_id, r.entry_id)
        if key in seen:
            raise _fail(
                RATING_DUPLICATE,
                f"person {r.person_id} rated entry {r.entry_id} more than once",
                {"person_id": r.person_id, "entry_id": r.entry_id},
            )
        seen.add(key)


def build_snapshot(
    persons: Iterable[Person] = (),
    entries: Iterable[Entry] = (),
    ratings: Iterable[Rating] = (),
    movies: Iterable[Movie] = (),
) -> FactSnapshot:
    """Validate facts and freeze them in canonical order."""

    persons_t = tuple(sorted(persons, key=lambda p: p.id))
    entries_t = tuple(sorted(entries, key=lambda e: e.id))
    movies_t = tuple(sorted(movies, key=lambda m: m.id))
    ratings_t = tuple(sorted(ratings, key=lambda r: (r.entry_id, r.person_id)))

    persons_by_id = {p.id: p for p in persons_t}
    entries_by_id = {e.id: e for e in entries_t}
    movies_by_id = {m.id: m for m in movies_t}

    _check_entries(entries_t)
    _check_ratings(ratings_t, persons_by_id, entries_by_id)

    return FactSnapshot(
        persons=persons_t,
        entries=entries_t,
        ratings=ratings_t,
        movies=movies_t,
        persons_by_id=MappingProxyType(persons_by_id),
        entries_by_id=MappingProxyType(entries_by_id),
        movies_by_id=MappingProxyType(movies_by_id),
    )


# ----------------------------
# JSON-like payloads
# ----------------------------


def _required(row: Mapping[str, Any], key: str, kind: str) -> Any:
    value = row.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise _fail(PAYLOAD_MALFORMED, f"{kind} row is missing {key!r}", {"kind": kind, "field": key})
    return value


def _to_int(value: Any, key: str, kind: str) -> int:
    """Whole numbers only: 3, 3.0 and "3" pass; True, 3.5, "3.5" and "abc" do not."""
    try:
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(value)
        return int(value)
    except (TypeError, ValueError) as e:
        raise _fail(PAYLOAD_MALFORMED, f"{kind} field {key!r} must be an integer", {"kind": kind, "field": key}) from e


def _required_int(row: Mapping[str, Any], key: str, kind: str) -> int:
    return _to_int(_required(row, key, kind), key, kind)


def _required_float(row: Mapping[str, Any], key: str, kind: str) -> float:
    value = _required(row, key, kind)
    if isinstance(value, bool):
        raise _fail(PAYLOAD_MALFORMED, f"{kind} field {key!r} must be a number", {"kind": kind, "field": key})
    try:
        return float(value)
    except (TypeError, ValueError):
        raise _fail(PAYLOAD_MALFORMED, f"{kind} field {key!r} must be a number", {"kind": kind, "field": key})


def _optional_int(row: Mapping[str, Any], key: str, kind: str) -> Optional[int]:
    """Absent, null and 0 mean unknown; anything else must be a whole number."""
    value = row.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return _to_int(value, key, kind) or None


def _optional_str(row: Mapping[str, Any], key: str) -> Optional[str]:
    value = row.get(key)
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _rows(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    rows_any = payload.get(key) or []
    if not isinstance(rows_any, (list, tuple)):
        raise _fail(PAYLOAD_MALFORMED, f"{key!r} must be a list", {"field": key})
    rows: List[Mapping[str, Any]] = []
    for row in rows_any:
        if not isinstance(row, Mapping):
            raise _fail(PAYLOAD_MALFORMED, f"{key!r} rows must be objects", {"field": key})
        rows.append(row)
    return rows


def person_from_row(row: Mapping[str, Any]) -> Person:
    name = str(_required(row, "name", "person"))
    initial = _optional_str(row, "initial") or name[:1].upper()
    return Person(id=str(_required(row, "id", "person")), initial=initial, name=name)


def movie_from_row(row: Mapping[str, Any]) -> Movie:
    return Movie(
        id=str(_required(row, "id", "movie")),
        title=str(_required(row, "title", "movie")),
        release_year=_optional_int(row, "releaseYear", "movie"),
        runtime_minutes=_optional_int(row, "runtimeMinutes", "movie"),
    )


def entry_from_row(row: Mapping[str, Any]) -> Entry:
    return Entry(
        id=str(_required(row, "id", "entry")),
        movie_id=str(_required(row, "movieId", "entry")),
        group_number=_required_int(row, "groupNumber", "entry"),
        position=_required_int(row, "position", "entry"),
        picked_by_person_id=_optional_str(row, "pickedByPersonId"),
        watched_at=_optional_str(row, "watchedAt"),
        created_at=_optional_str(row, "createdAt"),
    )


def rating_from_row(row: Mapping[str, Any]) -> Rating:
    return Rating(
        person_id=str(_required(row, "personId", "rating")),
        entry_id=str(_required(row, "entryId", "rating")),
        score=_required_float(row, "score", "rating"),
        created_at=_optional_str(row, "createdAt"),
        updated_at=_optional_str(row, "updatedAt"),
    )


def snapshot_from_payload(payload: Mapping[str, Any]) -> FactSnapshot:
    """Build a snapshot from a JSON-like mapping with camelCase row keys.

    Shape:

        {
          "persons": [{"id", "initial", "name"}],
          "entries": [{"id", "movieId", "groupNumber", "position", "pickedByPersonId"?, "watchedAt"?, "createdAt"?}],
          "ratings": [{"personId", "entryId", "score"}],
          "movies":  [{"id", "title", "releaseYear"?, "runtimeMinutes"?}]
        }
    """

    if not isinstance(payload, Mapping):
        raise _fail(PAYLOAD_MALFORMED, "snapshot payload must be an object")

    return build_snapshot(
        persons=[person_from_row(r) for r in _rows(payload, "persons")],
        entries=[entry_from_row(r) for r in _rows(payload, "entries")],
        ratings=[rating_from_row(r) for r in _rows(payload, "ratings")],
        movies=[movie_from_row(r) for r in _rows(payload, "movies")],
    )
