from __future__ import annotations

"""Leaderboard generation.

This module turns PersonStats into display-ready ranked lists.

Key features:
- One board definition per metric (value reader, eligibility, label format)
- Deterministic ordering: value descending, person id ascending on ties
- Boards without eligible rows are dropped instead of rendered empty
- `max_value` is carried so the presentation layer can scale bars
"""

from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from . import config as r_cfg
from .types import Leaderboard, LeaderboardEntry, PersonStats


@dataclass(frozen=True)
class BoardSpec:
    id: str
    title: str
    icon: str
    value: Callable[[PersonStats], Optional[float]]
    eligible: Callable[[PersonStats], bool]
    label: Callable[[float], str]


def _fmt_decimal(v: float) -> str:
    return f"{v:.{r_cfg.VALUE_DECIMALS}f}"


def _fmt_int(v: float) -> str:
    return f"{int(v)}"


def build_board_specs() -> Tuple[BoardSpec, ...]:
    return (
        BoardSpec(
            "generosity", "Generosity Index", "\U0001F381",
            value=lambda ps: ps.avg_rating_given,
            eligible=lambda ps: ps.movies_rated > 0,
            label=_fmt_decimal,
        ),
        BoardSpec(
            "pick_success", "Pick Success Rate", "\U0001F3AF",
            value=lambda ps: ps.avg_rating_received,
            eligible=lambda ps: ps.total_picks > 0 and (ps.avg_rating_received or 0.0) > 0.0,
            label=_fmt_decimal,
        ),
        BoardSpec(
            "total_picks", "Total Picks", "\U0001F3AC",
            value=lambda ps: ps.total_picks,
            eligible=lambda ps: ps.total_picks > 0,
            label=_fmt_int,
        ),
    )


def _stable_sort_key(row: LeaderboardEntry) -> Tuple[float, str]:
    return (-row.value, row.person.id)


def compute_leaderboard(spec: BoardSpec, person_stats: Mapping[str, PersonStats]) -> Optional[Leaderboard]:
    rows: List[LeaderboardEntry] = []
    for pid in sorted(person_stats):
        ps = person_stats[pid]
        if not spec.eligible(ps):
            continue
        raw = spec.value(ps)
        if raw is None:
            continue
        value = float(raw)
        rows.append(LeaderboardEntry(person=ps.person, value=value, label=spec.label(value)))

    if not rows:
        return None

    rows.sort(key=_stable_sort_key)
    return Leaderboard(
        id=spec.id,
        title=spec.title,
        icon=spec.icon,
        entries=tuple(rows),
        max_value=max(r.value for r in rows),
    )


def build_leaderboards(
    person_stats: Mapping[str, PersonStats],
    *,
    specs: Optional[Sequence[BoardSpec]] = None,
) -> Tuple[Leaderboard, ...]:
    """Compute every board in definition order."""

    out: List[Leaderboard] = []
    for spec in specs if specs is not None else build_board_specs():
        board = compute_leaderboard(spec, person_stats)
        if board is not None:
            out.append(board)
    return tuple(out)
