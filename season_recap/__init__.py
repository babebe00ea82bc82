"""Season recap for a household movie club.

Recomputes, from one immutable snapshot of picks and ratings, the club's
per-person metrics, superlative awards, movie awards, leaderboards and the
current pick-advantage holder. Pure computation: no I/O, no clock, no state.

Public API
----------
- build_snapshot / snapshot_from_payload
- build_stats_report
- report_to_dict

Implementation details live in season_recap.aggregator, .awards,
.divisiveness, .leaders and .advantage.
"""

from .errors import InvalidSnapshotError
from .report import build_stats_report
from .serialize import report_to_dict
from .snapshot import build_snapshot, snapshot_from_payload
from .types import Entry, FactSnapshot, Movie, Person, Rating, StatsReport

__all__ = [
    "Entry",
    "FactSnapshot",
    "InvalidSnapshotError",
    "Movie",
    "Person",
    "Rating",
    "StatsReport",
    "build_snapshot",
    "build_stats_report",
    "report_to_dict",
    "snapshot_from_payload",
]
