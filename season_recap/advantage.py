from __future__ import annotations

"""Pick advantage.

Whoever made the last pick of the previous round gets the advantage (extra
simultaneous picks) in the current round. Round 1 has no previous round.
"""

from typing import Optional

from . import config as r_cfg
from .types import AdvantageResult, Entry, FactSnapshot


def current_round(snapshot: FactSnapshot) -> int:
    """Highest group number with an entry; the first round when there are none."""
    if not snapshot.entries:
        return r_cfg.FIRST_ROUND
    return max(e.group_number for e in snapshot.entries)


def last_pick_of_round(snapshot: FactSnapshot, group_number: int) -> Optional[Entry]:
    rows = [e for e in snapshot.entries if e.group_number == group_number]
    if not rows:
        return None
    return max(rows, key=lambda e: (e.position, e.id))


def resolve_advantage(snapshot: FactSnapshot, round_number: int) -> AdvantageResult:
    if round_number <= r_cfg.FIRST_ROUND:
        return AdvantageResult(holder=None, advantage_round=0)

    prev = round_number - 1
    last = last_pick_of_round(snapshot, prev)
    if last is None:
        return AdvantageResult(holder=None, advantage_round=prev)
    return AdvantageResult(holder=snapshot.person(last.picked_by_person_id), advantage_round=prev)
