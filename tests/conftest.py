from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import pytest

from season_recap import Entry, FactSnapshot, Movie, Person, Rating, build_snapshot


@pytest.fixture
def people():
    return {
        "a": Person(id="p-a", initial="A", name="Alice"),
        "b": Person(id="p-b", initial="B", name="Bob"),
        "c": Person(id="p-c", initial="C", name="Cara"),
    }


@pytest.fixture
def scenario(people) -> FactSnapshot:
    """Two people, one round, two fully-rated picks.

    e1: pos 1, picked by A, rated A=8 B=6
    e2: pos 2, picked by B, rated A=4 B=4
    """
    a, b = people["a"], people["b"]
    return build_snapshot(
        persons=[a, b],
        entries=[
            Entry(id="e1", movie_id="m1", group_number=1, position=1, picked_by_person_id=a.id),
            Entry(id="e2", movie_id="m2", group_number=1, position=2, picked_by_person_id=b.id),
        ],
        ratings=[
            Rating(person_id=a.id, entry_id="e1", score=8),
            Rating(person_id=b.id, entry_id="e1", score=6),
            Rating(person_id=a.id, entry_id="e2", score=4),
            Rating(person_id=b.id, entry_id="e2", score=4),
        ],
        movies=[
            Movie(id="m1", title="Heat", release_year=1995, runtime_minutes=170),
            Movie(id="m2", title="Arrival", release_year=2016, runtime_minutes=116),
        ],
    )


@pytest.fixture
def snapshot_of():
    """Compact builder: entries as (id, group, position, picker_id), ratings as (person_id, entry_id, score)."""

    def _build(
        persons: Sequence[Person],
        entries: Iterable[Tuple[str, int, int, Optional[str]]] = (),
        ratings: Iterable[Tuple[str, str, float]] = (),
        movies: Iterable[Movie] = (),
    ) -> FactSnapshot:
        return build_snapshot(
            persons=persons,
            entries=[
                Entry(id=eid, movie_id=f"m-{eid}", group_number=g, position=pos, picked_by_person_id=picker)
                for eid, g, pos, picker in entries
            ],
            ratings=[Rating(person_id=pid, entry_id=eid, score=s) for pid, eid, s in ratings],
            movies=movies,
        )

    return _build


@pytest.fixture
def scenario_payload():
    return {
        "persons": [
            {"id": "p-a", "initial": "A", "name": "Alice"},
            {"id": "p-b", "initial": "B", "name": "Bob"},
        ],
        "entries": [
            {"id": "e1", "movieId": "m1", "groupNumber": 1, "position": 1, "pickedByPersonId": "p-a"},
            {"id": "e2", "movieId": "m2", "groupNumber": 1, "position": 2, "pickedByPersonId": "p-b"},
        ],
        "ratings": [
            {"personId": "p-a", "entryId": "e1", "score": 8},
            {"personId": "p-b", "entryId": "e1", "score": 6},
            {"personId": "p-a", "entryId": "e2", "score": 4},
            {"personId": "p-b", "entryId": "e2", "score": 4},
        ],
        "movies": [
            {"id": "m1", "title": "Heat", "releaseYear": 1995, "runtimeMinutes": 170},
            {"id": "m2", "title": "Arrival", "releaseYear": 2016, "runtimeMinutes": 116},
        ],
    }
