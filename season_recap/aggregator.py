from __future__ import annotations

"""Per-person season metrics.

This module turns one `FactSnapshot` into a read-only mapping
person_id -> PersonStats.

Completeness filters differ per metric:
- avg given / stddev / avg received / self-lowest: fully-rated entries only
- avg deviation from group: every rated entry
- pick counts, first/last picks, runtime, release year: every entry

An entry is fully rated when each person in the snapshot rated it, so the
threshold follows the live participant count.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Tuple

from .types import Entry, FactSnapshot, PersonStats, mean_or_none, mean_std


# ----------------------------
# Shared indexes
# ----------------------------


def entry_score_index(snapshot: FactSnapshot) -> Mapping[str, Tuple[Tuple[str, float], ...]]:
    """entry_id -> ((person_id, score), ...) in person-id order."""

    idx: Dict[str, List[Tuple[str, float]]] = defaultdict(list)
    for r in snapshot.ratings:
        idx[r.entry_id].append((r.person_id, float(r.score)))
    return MappingProxyType({eid: tuple(rows) for eid, rows in idx.items()})


def fully_rated_entry_ids(snapshot: FactSnapshot) -> FrozenSet[str]:
    participants = len(snapshot.persons)
    if participants == 0:
        return frozenset()
    raters: Dict[str, set] = defaultdict(set)
    for r in snapshot.ratings:
        raters[r.entry_id].add(r.person_id)
    return frozenset(eid for eid, who in raters.items() if len(who) == participants)


def round_bounds(snapshot: FactSnapshot) -> Mapping[int, Tuple[Entry, Entry]]:
    """group_number -> (first-pick entry, last-pick entry).

    Bounds are taken over every entry in the round, picked or not. A round
    with a single entry has the same entry at both ends.
    """

    by_group: Dict[int, List[Entry]] = defaultdict(list)
    for e in snapshot.entries:
        by_group[e.group_number].append(e)

    out: Dict[int, Tuple[Entry, Entry]] = {}
    for g in sorted(by_group):
        rows = by_group[g]
        first = min(rows, key=lambda e: (e.position, e.id))
        last = max(rows, key=lambda e: (e.position, e.id))
        out[g] = (first, last)
    return MappingProxyType(out)


# ----------------------------
# Aggregation
# ----------------------------


def aggregate_person_stats(snapshot: FactSnapshot) -> Mapping[str, PersonStats]:
    """Compute PersonStats for every known person, keyed by person id."""

    scores_by_entry = entry_score_index(snapshot)
    fully_rated = fully_rated_entry_ids(snapshot)
    bounds = round_bounds(snapshot)

    entry_avg: Dict[str, float] = {}
    entry_min: Dict[str, float] = {}
    for eid, rows in scores_by_entry.items():
        values = [s for _pid, s in rows]
        entry_avg[eid], _std = mean_std(values)
        entry_min[eid] = min(values)

    picks: Dict[str, List[Entry]] = defaultdict(list)
    for e in snapshot.entries:
        if e.picked_by_person_id is not None:
            picks[e.picked_by_person_id].append(e)

    first_counts: Dict[str, int] = defaultdict(int)
    last_counts: Dict[str, int] = defaultdict(int)
    for first, last in bounds.values():
        if first.picked_by_person_id is not None:
            first_counts[first.picked_by_person_id] += 1
        if last.picked_by_person_id is not None:
            last_counts[last.picked_by_person_id] += 1

    given_all: Dict[str, int] = defaultdict(int)
    given_full: Dict[str, List[float]] = defaultdict(list)
    deviations: Dict[str, List[float]] = defaultdict(list)
    own_score: Dict[Tuple[str, str], float] = {}
    for r in snapshot.ratings:
        score = float(r.score)
        given_all[r.person_id] += 1
        deviations[r.person_id].append(abs(score - entry_avg[r.entry_id]))
        if r.entry_id in fully_rated:
            given_full[r.person_id].append(score)
        own_score[(r.person_id, r.entry_id)] = score

    out: Dict[str, PersonStats] = {}
    for person in snapshot.persons:
        pid = person.id
        my_picks = picks.get(pid, [])

        received: List[float] = []
        self_lowest = 0
        runtime_total = 0
        years: List[float] = []
        for e in my_picks:
            if e.id in fully_rated:
                received.extend(s for _rater, s in scores_by_entry[e.id])
                mine = own_score.get((pid, e.id))
                if mine is not None and mine == entry_min[e.id]:
                    self_lowest += 1
            movie = snapshot.movie_for(e)
            if movie is None:
                continue
            if movie.runtime_minutes is not None:
                runtime_total += int(movie.runtime_minutes)
            if movie.release_year is not None:
                years.append(float(movie.release_year))

        given = given_full.get(pid, [])
        if given:
            avg_given, std_given = mean_std(given)
        else:
            avg_given, std_given = None, None

        out[pid] = PersonStats(
            person=person,
            total_picks=len(my_picks),
            movies_rated=given_all.get(pid, 0),
            avg_rating_given=avg_given,
            avg_rating_received=mean_or_none(received),
            first_pick_count=first_counts.get(pid, 0),
            last_pick_count=last_counts.get(pid, 0),
            rating_std_dev=std_given,
            avg_deviation_from_group=mean_or_none(deviations.get(pid, [])),
            self_lowest_count=self_lowest,
            total_runtime_picked=runtime_total,
            avg_release_year=mean_or_none(years),
        )

    return MappingProxyType(out)
