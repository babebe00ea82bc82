from __future__ import annotations

"""Season superlatives.

Person awards are defined in a registry of `AwardRule`s (single source of
truth for ids, copy, icons, direction and formatting). Each rule reads one
metric from `PersonStats`; a person whose metric is undefined (None, or 0 for
rules with `exclude_zero`) is not a candidate.

Selection is deterministic: candidates are scanned in ascending person-id
order and only a strictly better value replaces the current leader, so a tie
always goes to the smallest id.

Movie awards read the divisiveness ordering produced by
`season_recap.divisiveness.rank_by_divisiveness`.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from . import config as r_cfg
from .types import Award, MovieAward, MovieWithStats, Person, PersonStats

Direction = Literal["max", "min"]


@dataclass(frozen=True)
class AwardRule:
    """Definition of a single person award."""

    id: str
    title: str
    description: str
    icon: str
    metric: Callable[[PersonStats], Optional[float]]
    direction: Direction
    exclude_zero: bool
    formatter: Callable[[float], str]

    def candidate_value(self, ps: PersonStats) -> Optional[float]:
        value = self.metric(ps)
        if value is None:
            return None
        value = float(value)
        if self.exclude_zero and value <= 0.0:
            return None
        return value


# ----------------------------
# Formatters
# ----------------------------


def _fmt_avg(suffix: str) -> Callable[[float], str]:
    return lambda v: f"{v:.{r_cfg.VALUE_DECIMALS}f} {suffix}"


def _fmt_count(suffix: str) -> Callable[[float], str]:
    return lambda v: f"{int(v)} {suffix}"


def _fmt_year(v: float) -> str:
    return f"avg year: {v:.{r_cfg.YEAR_DECIMALS}f}"


def format_runtime_total(minutes: float) -> str:
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m total"


def _fmt_spread(v: float) -> str:
    return f"Rating spread: {v:.{r_cfg.VALUE_DECIMALS}f}"


# ----------------------------
# Metric readers
# ----------------------------


def _received_on_picks(ps: PersonStats) -> Optional[float]:
    if ps.total_picks == 0:
        return None
    return ps.avg_rating_received


def _release_year_on_picks(ps: PersonStats) -> Optional[float]:
    if ps.total_picks == 0:
        return None
    return ps.avg_release_year


def build_award_registry() -> Tuple[AwardRule, ...]:
    """Return the person-award rules in display order."""

    return (
        AwardRule(
            "headliner", "The Headliner", "Always opening night material", "\U0001F451",
            lambda ps: ps.first_pick_count, "max", True, _fmt_count("first picks"),
        ),
        AwardRule(
            "biggest_loser", "The Biggest Loser", "The comeback kid (3 entries next time!)", "\U0001F3B0",
            lambda ps: ps.last_pick_count, "max", True, _fmt_count("last picks"),
        ),
        AwardRule(
            "corporate_darling", "Corporate Darling", "The family always approves", "\U0001F4BC",
            _received_on_picks, "max", True, _fmt_avg("avg on picks"),
        ),
        AwardRule(
            "harsh_critic", "The Harsh Critic", "Tough crowd, party of one", "\U0001F9D0",
            lambda ps: ps.avg_rating_given, "min", False, _fmt_avg("avg given"),
        ),
        AwardRule(
            "easy_pleaser", "The Easy Pleaser", "Everything's a 10 with popcorn", "\U0001F60A",
            lambda ps: ps.avg_rating_given, "max", True, _fmt_avg("avg given"),
        ),
        AwardRule(
            "critical_outlier", "The Critical Outlier", "Marching to their own projector", "\U0001F3AD",
            lambda ps: ps.avg_deviation_from_group, "max", True, _fmt_avg("points different on average"),
        ),
        AwardRule(
            "movie_masochist", "The Movie Masochist", "Picks 'em, then roasts 'em", "\U0001F605",
            lambda ps: ps.self_lowest_count, "max", True, _fmt_count("times"),
        ),
        AwardRule(
            "steady_hand", "The Steady Hand", "You always know what you're getting", "\U0001F4CF",
            lambda ps: ps.rating_std_dev, "min", False, _fmt_avg("rating spread"),
        ),
        AwardRule(
            "wildcard", "The Wildcard", "10 or 2, no in-between", "\U0001F3B2",
            lambda ps: ps.rating_std_dev, "max", True, _fmt_avg("rating spread"),
        ),
        AwardRule(
            "throwback_royalty", "Throwback Royalty", "They don't make 'em like they used to", "\U0001F4FC",
            _release_year_on_picks, "min", False, _fmt_year,
        ),
        AwardRule(
            "fresh_picker", "The Fresh Picker", "First in line at the multiplex", "\U0001F37F",
            _release_year_on_picks, "max", True, _fmt_year,
        ),
        AwardRule(
            "marathon_runner", "The Marathon Runner", "Bladder of steel", "\u23F1\uFE0F",
            lambda ps: ps.total_runtime_picked, "max", True, format_runtime_total,
        ),
    )


def _ordered(person_stats: Mapping[str, PersonStats]) -> List[PersonStats]:
    return [person_stats[pid] for pid in sorted(person_stats)]


def select_award(rule: AwardRule, person_stats: Mapping[str, PersonStats]) -> Optional[Award]:
    """Evaluate one rule; None when nobody qualifies."""

    winner: Optional[Person] = None
    best: Optional[float] = None
    for ps in _ordered(person_stats):
        value = rule.candidate_value(ps)
        if value is None:
            continue
        better = best is None or (value > best if rule.direction == "max" else value < best)
        if better:
            best = value
            winner = ps.person

    if winner is None or best is None:
        return None
    return Award(
        id=rule.id,
        title=rule.title,
        description=rule.description,
        icon=rule.icon,
        winner=winner,
        formatted_value=rule.formatter(best),
    )


def select_awards(
    person_stats: Mapping[str, PersonStats],
    *,
    rules: Optional[Sequence[AwardRule]] = None,
) -> Tuple[Award, ...]:
    """Evaluate every rule in registry order, omitting awards without a winner."""

    out: List[Award] = []
    for rule in rules if rules is not None else build_award_registry():
        award = select_award(rule, person_stats)
        if award is not None:
            out.append(award)
    return tuple(out)


# ----------------------------
# Movie awards
# ----------------------------


MOVIE_AWARD_COPY: Dict[str, Tuple[str, str, str]] = {
    "hype_train": ("The Hype Train", "Love it or hate it", "\U0001F682"),
    "unifier": ("The Unifier", "Rare family consensus", "\U0001F91D"),
}


def _movie_award(award_id: str, row: MovieWithStats) -> MovieAward:
    title, description, icon = MOVIE_AWARD_COPY[award_id]
    return MovieAward(
        id=award_id,
        title=title,
        description=description,
        icon=icon,
        movie=row.movie,
        entry=row.entry,
        picker=row.picker,
        formatted_value=_fmt_spread(row.rating_std_dev),
    )


def select_movie_awards(ranked: Sequence[MovieWithStats]) -> Tuple[MovieAward, ...]:
    """Hype Train (most divisive, spread > 0) and Unifier (least divisive, >= 2 movies).

    `ranked` must be ordered by spread descending, as produced by
    `rank_by_divisiveness`.
    """

    if not ranked:
        return ()

    out: List[MovieAward] = []
    hype = ranked[0]
    if hype.rating_std_dev > 0.0:
        out.append(_movie_award("hype_train", hype))
    if len(ranked) > 1:
        out.append(_movie_award("unifier", ranked[-1]))
    return tuple(out)
