from __future__ import annotations

"""Rating dispersion per movie.

Only fully-rated entries take part: a movie two people have rated says
nothing yet about how divisive it is for the whole club.
"""

from typing import List, Tuple

from .aggregator import entry_score_index, fully_rated_entry_ids
from .types import FactSnapshot, MovieWithStats, mean_std


def rank_by_divisiveness(snapshot: FactSnapshot) -> Tuple[MovieWithStats, ...]:
    """Fully-rated entries ordered by rating stddev (desc), entry id (asc) on ties."""

    scores_by_entry = entry_score_index(snapshot)
    fully_rated = fully_rated_entry_ids(snapshot)

    rows: List[MovieWithStats] = []
    for entry in snapshot.entries:
        if entry.id not in fully_rated:
            continue
        avg, std = mean_std([s for _pid, s in scores_by_entry[entry.id]])
        rows.append(
            MovieWithStats(
                entry=entry,
                movie=snapshot.movie_for(entry),
                picker=snapshot.person(entry.picked_by_person_id),
                avg_rating=avg,
                rating_std_dev=std,
            )
        )

    rows.sort(key=lambda m: (-m.rating_std_dev, m.entry.id))
    return tuple(rows)
