from __future__ import annotations

"""Season recap assembly.

Runs every component over one snapshot and bundles the results, with the
summary counts, into a `StatsReport`.
"""

import logging
from typing import Optional

from .advantage import current_round, resolve_advantage
from .aggregator import aggregate_person_stats, fully_rated_entry_ids
from .awards import select_awards, select_movie_awards
from .divisiveness import rank_by_divisiveness
from .leaders import build_leaderboards
from .types import FactSnapshot, StatsReport

logger = logging.getLogger(__name__)


def total_runtime_minutes(snapshot: FactSnapshot) -> int:
    total = 0
    for e in snapshot.entries:
        movie = snapshot.movie_for(e)
        if movie is not None and movie.runtime_minutes is not None:
            total += int(movie.runtime_minutes)
    return total


def build_stats_report(snapshot: FactSnapshot, *, round_number: Optional[int] = None) -> StatsReport:
    """Recompute the full season recap from one snapshot.

    `round_number` defaults to the current (highest) round and only affects
    the advantage lookup.
    """

    person_stats = aggregate_person_stats(snapshot)
    ranked = rank_by_divisiveness(snapshot)

    awards = select_awards(person_stats)
    movie_awards = select_movie_awards(ranked)
    leaderboards = build_leaderboards(person_stats)

    rnd = current_round(snapshot) if round_number is None else int(round_number)
    advantage = resolve_advantage(snapshot, rnd)

    logger.debug(
        "season recap: persons=%d entries=%d ratings=%d awards=%d movie_awards=%d",
        len(snapshot.persons),
        len(snapshot.entries),
        len(snapshot.ratings),
        len(awards),
        len(movie_awards),
    )

    return StatsReport(
        advantage_holder=advantage.holder,
        advantage_round=advantage.advantage_round,
        current_round=rnd,
        awards=awards,
        movie_awards=movie_awards,
        leaderboards=leaderboards,
        person_stats=tuple(person_stats[p.id] for p in snapshot.persons),
        total_entries=len(snapshot.entries),
        total_runtime_minutes=total_runtime_minutes(snapshot),
        total_rounds=max((e.group_number for e in snapshot.entries), default=0),
        fully_rated_count=len(fully_rated_entry_ids(snapshot)),
    )
