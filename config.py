from __future__ import annotations

"""Process settings for the recap server.

Read from the environment:

- RECAP_SNAPSHOT_PATH  JSON snapshot file served by GET /api/stats/recap
                       (looked up and re-read on every request; unset disables it)
- RECAP_CORS_ORIGINS   comma-separated allowed origins (default "*", read at import)
"""

import os
from typing import List, Optional

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_list(name: str, default: str) -> List[str]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        raw = default
    return [x.strip() for x in raw.split(",") if x.strip()]


def snapshot_path() -> Optional[str]:
    """Current snapshot path. Looked up per call so tests can patch the env."""
    value = (os.environ.get("RECAP_SNAPSHOT_PATH") or "").strip()
    return value or None


CORS_ORIGINS: List[str] = _env_list("RECAP_CORS_ORIGINS", "*")
