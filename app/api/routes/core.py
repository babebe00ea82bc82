from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/api/health", response_class=PlainTextResponse)
async def health():
    return "ok"
