from __future__ import annotations

"""JSON projection of a StatsReport.

Runtime code upstream of this module works on frozen dataclasses; the HTTP
layer and golden-output tests want plain dicts with camelCase keys. Key order
is fixed so `json.dumps` output is byte-stable for a given report.
"""

from typing import Any, Dict, Optional

from .types import (
    Award,
    Entry,
    Leaderboard,
    Movie,
    MovieAward,
    Person,
    PersonStats,
    StatsReport,
)


def person_out(p: Optional[Person]) -> Optional[Dict[str, Any]]:
    if p is None:
        return None
    return {"id": p.id, "initial": p.initial, "name": p.name}


def movie_out(m: Optional[Movie]) -> Optional[Dict[str, Any]]:
    if m is None:
        return None
    return {
        "id": m.id,
        "title": m.title,
        "releaseYear": m.release_year,
        "runtimeMinutes": m.runtime_minutes,
        "formattedRuntime": m.formatted_runtime(),
    }


def entry_out(e: Entry) -> Dict[str, Any]:
    return {
        "id": e.id,
        "movieId": e.movie_id,
        "groupNumber": e.group_number,
        "position": e.position,
        "pickedByPersonId": e.picked_by_person_id,
        "watchedAt": e.watched_at,
    }


def award_out(a: Award) -> Dict[str, Any]:
    return {
        "id": a.id,
        "title": a.title,
        "description": a.description,
        "icon": a.icon,
        "winner": person_out(a.winner),
        "formattedValue": a.formatted_value,
    }


def movie_award_out(a: MovieAward) -> Dict[str, Any]:
    return {
        "id": a.id,
        "title": a.title,
        "description": a.description,
        "icon": a.icon,
        "movie": movie_out(a.movie),
        "entry": entry_out(a.entry),
        "picker": person_out(a.picker),
        "formattedValue": a.formatted_value,
    }


def leaderboard_out(b: Leaderboard) -> Dict[str, Any]:
    return {
        "id": b.id,
        "title": b.title,
        "icon": b.icon,
        "entries": [
            {"person": person_out(r.person), "value": r.value, "label": r.label}
            for r in b.entries
        ],
        "maxValue": b.max_value,
    }


def person_stats_out(ps: PersonStats) -> Dict[str, Any]:
    return {
        "person": person_out(ps.person),
        "totalPicks": ps.total_picks,
        "moviesRated": ps.movies_rated,
        "avgRatingGiven": ps.avg_rating_given,
        "avgRatingReceived": ps.avg_rating_received,
        "firstPickCount": ps.first_pick_count,
        "lastPickCount": ps.last_pick_count,
        "ratingStdDev": ps.rating_std_dev,
        "avgDeviationFromGroup": ps.avg_deviation_from_group,
        "selfLowestCount": ps.self_lowest_count,
        "totalRuntimePicked": ps.total_runtime_picked,
        "avgReleaseYear": ps.avg_release_year,
    }


def report_to_dict(report: StatsReport) -> Dict[str, Any]:
    return {
        "advantageHolder": person_out(report.advantage_holder),
        "advantageRound": report.advantage_round,
        "currentRound": report.current_round,
        "awards": [award_out(a) for a in report.awards],
        "movieAwards": [movie_award_out(a) for a in report.movie_awards],
        "leaderboards": [leaderboard_out(b) for b in report.leaderboards],
        "personStats": [person_stats_out(ps) for ps in report.person_stats],
        "summary": {
            "totalEntries": report.total_entries,
            "totalRuntimeMinutes": report.total_runtime_minutes,
            "totalRounds": report.total_rounds,
            "fullyRatedCount": report.fully_rated_count,
        },
    }
