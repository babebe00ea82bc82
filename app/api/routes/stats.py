from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from season_recap import InvalidSnapshotError, build_stats_report, report_to_dict, snapshot_from_payload
from app.schemas.stats import RecapRequest
from app.services.snapshot_source import SnapshotUnavailable, load_configured_snapshot

router = APIRouter()
logger = logging.getLogger(__name__)


def _bad_snapshot(e: InvalidSnapshotError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"code": e.code, "message": e.message, "details": e.details},
    )


@router.post("/api/stats/recap")
async def api_stats_recap(req: RecapRequest):
    """Season recap for the snapshot in the request body."""
    payload = {
        "persons": req.persons,
        "entries": req.entries,
        "ratings": req.ratings,
        "movies": req.movies,
    }
    try:
        snapshot = snapshot_from_payload(payload)
    except InvalidSnapshotError as e:
        raise _bad_snapshot(e)
    return report_to_dict(build_stats_report(snapshot))


@router.get("/api/stats/recap")
async def api_stats_recap_configured():
    """Season recap for the configured snapshot file, re-read on every call."""
    try:
        snapshot = load_configured_snapshot()
    except SnapshotUnavailable as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSnapshotError as e:
        raise _bad_snapshot(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        logger.warning("failed to read configured snapshot", exc_info=True)
        raise HTTPException(status_code=500, detail=f"failed to read snapshot: {e}")
    return report_to_dict(build_stats_report(snapshot))
