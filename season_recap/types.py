from __future__ import annotations

"""Typed containers used by the season recap engine.

Input facts arrive from the ingestion side (database rows, JSON payloads) and
are normalized by `season_recap.snapshot` into a `FactSnapshot`:

    persons  -> Person(id, initial, name)
    entries  -> Entry(id, movie_id, group_number, position, picked_by_person_id, ...)
    ratings  -> Rating(person_id, entry_id, score, ...)
    movies   -> Movie(id, title, release_year, runtime_minutes)

Everything downstream of the snapshot is a *derived view* recomputed on every
call (`PersonStats`, `Award`, `MovieAward`, `Leaderboard`, `StatsReport`).

Design goal: keep the boundary between "recorded facts" and "derived view"
explicit. All records are frozen; nothing in the engine mutates them.
"""

from dataclasses import dataclass, field
from statistics import mean, pstdev
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple


# ----------------------------
# Recorded facts
# ----------------------------


@dataclass(frozen=True, slots=True)
class Person:
    id: str
    initial: str
    name: str


@dataclass(frozen=True, slots=True)
class Movie:
    """Movie metadata. Only title, release year and runtime feed the recap."""

    id: str
    title: str
    release_year: Optional[int] = None
    runtime_minutes: Optional[int] = None

    def formatted_runtime(self) -> str:
        if self.runtime_minutes is None:
            return ""
        hours, minutes = divmod(int(self.runtime_minutes), 60)
        if hours > 0:
            return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"
        return f"{minutes}m"


@dataclass(frozen=True, slots=True)
class Entry:
    """One pick: a movie placed into a round (group) at a position.

    Notes:
        - `position` 1 is the first pick of the round; the max is the last pick.
        - `picked_by_person_id` may be None for entries nobody claimed.
        - Timestamps are carried through as ISO strings and never interpreted.
    """

    id: str
    movie_id: str
    group_number: int
    position: int
    picked_by_person_id: Optional[str] = None
    watched_at: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Rating:
    person_id: str
    entry_id: str
    score: float
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class FactSnapshot:
    """Immutable view of the club's facts at one point in time.

    Tuples are stored in canonical order (persons/entries/movies by id, ratings
    by (entry_id, person_id)) so that the caller's row order never leaks into
    the report. Build instances with `season_recap.snapshot.build_snapshot`.
    """

    persons: Tuple[Person, ...] = ()
    entries: Tuple[Entry, ...] = ()
    ratings: Tuple[Rating, ...] = ()
    movies: Tuple[Movie, ...] = ()
    persons_by_id: Mapping[str, Person] = field(default_factory=_empty_mapping, compare=False, repr=False)
    entries_by_id: Mapping[str, Entry] = field(default_factory=_empty_mapping, compare=False, repr=False)
    movies_by_id: Mapping[str, Movie] = field(default_factory=_empty_mapping, compare=False, repr=False)

    def person(self, person_id: Optional[str]) -> Optional[Person]:
        if person_id is None:
            return None
        return self.persons_by_id.get(person_id)

    def movie_for(self, entry: Entry) -> Optional[Movie]:
        return self.movies_by_id.get(entry.movie_id)


# ----------------------------
# Derived view
# ----------------------------


@dataclass(frozen=True, slots=True)
class PersonStats:
    """Per-person season metrics.

    Counts default to 0. Averages are None when no contributing data exists
    ("undefined"); awards and leaderboards exclude on None, never on a
    sentinel number.
    """

    person: Person
    total_picks: int = 0
    movies_rated: int = 0
    avg_rating_given: Optional[float] = None
    avg_rating_received: Optional[float] = None
    first_pick_count: int = 0
    last_pick_count: int = 0
    rating_std_dev: Optional[float] = None
    avg_deviation_from_group: Optional[float] = None
    self_lowest_count: int = 0
    total_runtime_picked: int = 0
    avg_release_year: Optional[float] = None


@dataclass(frozen=True, slots=True)
class MovieWithStats:
    """A fully-rated entry with its rating mean and spread."""

    entry: Entry
    movie: Optional[Movie]
    picker: Optional[Person]
    avg_rating: float
    rating_std_dev: float


@dataclass(frozen=True, slots=True)
class Award:
    id: str
    title: str
    description: str
    icon: str
    winner: Person
    formatted_value: str


@dataclass(frozen=True, slots=True)
class MovieAward:
    id: str
    title: str
    description: str
    icon: str
    movie: Optional[Movie]
    entry: Entry
    picker: Optional[Person]
    formatted_value: str


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    person: Person
    value: float
    label: str


@dataclass(frozen=True, slots=True)
class Leaderboard:
    id: str
    title: str
    icon: str
    entries: Tuple[LeaderboardEntry, ...]
    max_value: float  # for bar widths


@dataclass(frozen=True, slots=True)
class AdvantageResult:
    holder: Optional[Person]
    advantage_round: int  # round whose last pick granted the advantage; 0 if none


@dataclass(frozen=True, slots=True)
class StatsReport:
    advantage_holder: Optional[Person]
    advantage_round: int
    current_round: int
    awards: Tuple[Award, ...]
    movie_awards: Tuple[MovieAward, ...]
    leaderboards: Tuple[Leaderboard, ...]
    person_stats: Tuple[PersonStats, ...]
    total_entries: int
    total_runtime_minutes: int
    total_rounds: int
    fully_rated_count: int


# ----------------------------
# Helpers
# ----------------------------


def mean_std(values: Sequence[float]) -> Tuple[float, float]:
    """Mean and population standard deviation (divisor N). (0, 0) when empty.

    `statistics` sums exactly, so identical values give a spread of exactly
    0.0 and the result does not depend on input order.
    """
    if not values:
        return 0.0, 0.0
    return float(mean(values)), float(pstdev(values))


def mean_or_none(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return float(mean(values))
