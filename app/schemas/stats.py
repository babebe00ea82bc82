from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel


class RecapRequest(BaseModel):
    persons: List[Dict[str, Any]] = []
    entries: List[Dict[str, Any]] = []
    ratings: List[Dict[str, Any]] = []
    movies: List[Dict[str, Any]] = []
