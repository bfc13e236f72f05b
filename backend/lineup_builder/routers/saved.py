"""Saved lineup, export and import endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..errors import LineupError
from ..services import lineup_session as session
from .lineup import lineup_state

router = APIRouter()


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class SaveRequest(BaseModel):
    name: str


class ImportRequest(BaseModel):
    text: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("")
async def list_saved():
    """All saved lineups in save order."""
    saved = session.list_saved()
    return {
        "lineups": [s.model_dump(by_alias=True) for s in saved],
        "count": len(saved),
    }


@router.post("")
async def save_lineup(req: SaveRequest):
    """Save the current lineup under a name."""
    try:
        snapshot = session.save_lineup(req.name)
    except LineupError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "lineup": snapshot.model_dump(by_alias=True),
        "count": len(session.list_saved()),
    }


@router.post("/{index}/load")
async def load_saved(index: int):
    """Replace the current lineup with a saved one."""
    if session.load_saved(index) is None:
        raise HTTPException(status_code=404, detail=f"Saved lineup {index} not found")
    return lineup_state()


@router.delete("/{index}")
async def delete_saved(index: int):
    """Delete a saved lineup. Unknown indexes are ignored."""
    try:
        removed = session.delete_saved(index)
    except LineupError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "deleted": removed.model_dump(by_alias=True) if removed else None,
        "count": len(session.list_saved()),
    }


@router.post("/export")
async def export_lineup():
    """Export the current lineup as JSON text for the clipboard."""
    try:
        payload, text = session.export_lineup()
    except LineupError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"payload": payload.model_dump(by_alias=True), "text": text}


@router.post("/import")
async def import_lineup(req: ImportRequest):
    """Replace the current lineup with pasted export text."""
    try:
        session.import_lineup(req.text)
    except LineupError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return lineup_state()
