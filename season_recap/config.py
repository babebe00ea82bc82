from __future__ import annotations

"""Tuning parameters for the season recap.

This module is the single place to tune recap presentation.

Display
-------
- Averages, spreads and deviations are shown with one decimal.
- Release years are shown as whole years.
- Leaderboard labels use the same decimals as award values.

Completeness
------------
No "ratings per entry" constant: an entry is fully rated when every person
in the snapshot rated it, so the threshold follows the live participant count.
"""

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

VALUE_DECIMALS: int = 1
YEAR_DECIMALS: int = 0

# ---------------------------------------------------------------------------
# Round / position semantics
# ---------------------------------------------------------------------------

# Rounds are numbered from 1; the first round has no previous last pick.
FIRST_ROUND: int = 1

# Positions are numbered from 1 (first pick of the round).
FIRST_POSITION: int = 1
