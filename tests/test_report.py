from __future__ import annotations

import json
import random

import pytest

from season_recap import (
    Entry,
    Movie,
    Person,
    Rating,
    build_snapshot,
    build_stats_report,
    report_to_dict,
)

RATING_AWARDS = {
    "corporate_darling",
    "harsh_critic",
    "easy_pleaser",
    "critical_outlier",
    "movie_masochist",
    "steady_hand",
    "wildcard",
}


def _club_facts():
    persons = [Person(id=f"p{i}", initial=c, name=n) for i, (c, n) in enumerate(
        [("A", "Ann"), ("B", "Ben"), ("C", "Cy"), ("D", "Dee")]
    )]
    movies = [
        Movie(id=f"m{i}", title=f"Movie {i}", release_year=1970 + 7 * i, runtime_minutes=85 + 11 * i)
        for i in range(9)
    ]
    entries = []
    pickers = ["p0", "p1", "p2", "p3", "p1", "p0", "p3", "p2", None]
    for i in range(9):
        group, pos = divmod(i, 3)
        entries.append(
            Entry(id=f"e{i}", movie_id=f"m{i}", group_number=group + 1, position=pos + 1, picked_by_person_id=pickers[i])
        )
    ratings = []
    for i in range(9):
        raters = persons if i % 4 else persons[:3]  # e0, e4, e8 are partially rated
        for j, p in enumerate(raters):
            ratings.append(Rating(person_id=p.id, entry_id=f"e{i}", score=float((i * 3 + j * 5) % 11)))
    return persons, entries, ratings, movies


def _dump(report) -> str:
    return json.dumps(report_to_dict(report), sort_keys=True, ensure_ascii=False)


def test_scenario_report(scenario):
    report = build_stats_report(scenario)

    assert report.current_round == 1
    assert report.advantage_holder is None
    assert report.advantage_round == 0
    assert report.total_entries == 2
    assert report.total_rounds == 1
    assert report.total_runtime_minutes == 286
    assert report.fully_rated_count == 2
    assert [m.id for m in report.movie_awards] == ["hype_train", "unifier"]
    assert [ps.person.id for ps in report.person_stats] == ["p-a", "p-b"]


def test_scenario_advantage_for_round_two(scenario):
    report = build_stats_report(scenario, round_number=2)
    assert report.advantage_holder.id == "p-b"
    assert report.advantage_round == 1


def test_report_uses_highest_round_for_advantage():
    persons, entries, ratings, movies = _club_facts()
    report = build_stats_report(build_snapshot(persons, entries, ratings, movies))

    assert report.current_round == 3
    # last pick of round 2 is e5, picked by p0
    assert report.advantage_holder.id == "p0"
    assert report.advantage_round == 2


def test_report_is_deterministic_under_reordering():
    persons, entries, ratings, movies = _club_facts()
    baseline = _dump(build_stats_report(build_snapshot(persons, entries, ratings, movies)))

    rng = random.Random(7)
    for _ in range(5):
        shuffled = [list(x) for x in (persons, entries, ratings, movies)]
        for seq in shuffled:
            rng.shuffle(seq)
        again = _dump(build_stats_report(build_snapshot(*shuffled)))
        assert again == baseline


def test_report_repeated_runs_identical(scenario):
    assert _dump(build_stats_report(scenario)) == _dump(build_stats_report(scenario))


def test_empty_snapshot_report():
    report = build_stats_report(build_snapshot())

    assert report.awards == ()
    assert report.movie_awards == ()
    assert report.leaderboards == ()
    assert report.person_stats == ()
    assert report.advantage_holder is None
    assert report.current_round == 1
    assert (report.total_entries, report.total_runtime_minutes, report.total_rounds, report.fully_rated_count) == (0, 0, 0, 0)


def test_no_ratings_excludes_rating_outputs():
    persons, entries, _ratings, movies = _club_facts()
    report = build_stats_report(build_snapshot(persons, entries, [], movies))

    assert RATING_AWARDS.isdisjoint(a.id for a in report.awards)
    assert report.movie_awards == ()
    assert [b.id for b in report.leaderboards] == ["total_picks"]
    for ps in report.person_stats:
        assert ps.movies_rated == 0
        assert ps.avg_rating_given is None
        assert ps.avg_rating_received is None
        assert ps.rating_std_dev is None
        assert ps.avg_deviation_from_group is None
        assert ps.self_lowest_count == 0


def test_summary_counts():
    persons, entries, ratings, movies = _club_facts()
    report = build_stats_report(build_snapshot(persons, entries, ratings, movies))

    assert report.total_entries == 9
    assert report.total_rounds == 3
    assert report.total_runtime_minutes == sum(m.runtime_minutes for m in movies)
    assert report.fully_rated_count == 6


def test_report_to_dict_shape(scenario):
    out = report_to_dict(build_stats_report(scenario))

    assert list(out) == [
        "advantageHolder",
        "advantageRound",
        "currentRound",
        "awards",
        "movieAwards",
        "leaderboards",
        "personStats",
        "summary",
    ]
    assert out["summary"] == {"totalEntries": 2, "totalRuntimeMinutes": 286, "totalRounds": 1, "fullyRatedCount": 2}
    headliner = out["awards"][0]
    assert headliner["id"] == "headliner"
    assert headliner["winner"] == {"id": "p-a", "initial": "A", "name": "Alice"}
    assert headliner["formattedValue"] == "1 first picks"

    hype = out["movieAwards"][0]
    assert hype["movie"]["formattedRuntime"] == "2h 50m"
    assert hype["entry"]["position"] == 1
    assert hype["picker"]["id"] == "p-a"

    stats_a = out["personStats"][0]
    assert stats_a["avgRatingGiven"] == pytest.approx(6.0)
    assert stats_a["ratingStdDev"] == pytest.approx(2.0)
    assert stats_a["firstPickCount"] == 1

    json.dumps(out)
