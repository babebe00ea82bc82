from __future__ import annotations

import json
import logging
from typing import Any, Dict

import config
from season_recap import FactSnapshot, snapshot_from_payload

logger = logging.getLogger(__name__)


class SnapshotUnavailable(LookupError):
    pass


def load_configured_snapshot() -> FactSnapshot:
    """Read the configured snapshot file fresh for this request.

    Raises SnapshotUnavailable when no file is configured or it is missing,
    InvalidSnapshotError (a ValueError) when its content is not a valid snapshot.
    """
    path = config.snapshot_path()
    if not path:
        raise SnapshotUnavailable("RECAP_SNAPSHOT_PATH is not configured")

    try:
        with open(path, "r", encoding="utf-8") as f:
            payload: Dict[str, Any] = json.load(f)
    except FileNotFoundError as e:
        raise SnapshotUnavailable(f"snapshot file not found: {path}") from e
    except json.JSONDecodeError as e:
        logger.warning("snapshot file is not valid JSON: %s", path, exc_info=True)
        raise ValueError(f"snapshot file is not valid JSON: {e}") from e

    return snapshot_from_payload(payload)
