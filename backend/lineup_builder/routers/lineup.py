"""Field and batting order assignment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path

from ..models.lineup import PlaceRequest
from ..services import lineup_session as session
from ..services.assignment_store import filled_count, is_empty
from ..utils.positions import POSITIONS

router = APIRouter()


def lineup_state() -> dict:
    """Everything the client needs to re-render after a change."""
    lineup = session.get_lineup()
    status = session.get_status()
    return {
        "field": lineup.field,
        "batting": lineup.batting,
        "field_filled": filled_count(lineup.field),
        "batting_filled": filled_count(lineup.batting),
        "is_empty": is_empty(lineup),
        "total_chemistry": session.current_chemistry(),
        "connections": [c.model_dump() for c in session.current_connections()],
        "available": session.available_players(),
        "status": status.model_dump(include={"type", "message"}) if status else None,
    }


@router.get("/state")
async def get_state():
    """Current lineup with chemistry and available players."""
    return lineup_state()


@router.get("/positions")
async def list_positions():
    """Fixed field positions in slot order."""
    return {"positions": [p._asdict() for p in POSITIONS]}


@router.post("/field/{slot}")
async def place_in_field(req: PlaceRequest, slot: int = Path(..., ge=0, le=8)):
    """Place a player at a field position (drag/drop or picker)."""
    try:
        session.place_in_field(req.player, slot, req.source_field_slot, req.source_batting_slot)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return lineup_state()


@router.post("/batting/{slot}")
async def place_in_batting(req: PlaceRequest, slot: int = Path(..., ge=0, le=8)):
    """Place a player in the batting order."""
    try:
        session.place_in_batting(req.player, slot, req.source_field_slot, req.source_batting_slot)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return lineup_state()


@router.delete("/field/{slot}")
async def remove_from_field(slot: int = Path(..., ge=0, le=8)):
    """Remove a field player (also drops them from the batting order)."""
    try:
        session.remove_from_field(slot)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return lineup_state()


@router.delete("/batting/{slot}")
async def remove_from_batting(slot: int = Path(..., ge=0, le=8)):
    """Remove a batter (also drops them from the field)."""
    try:
        session.remove_from_batting(slot)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return lineup_state()


@router.post("/clear")
async def clear_lineup():
    """Empty both the field and the batting order."""
    session.clear_lineup()
    return lineup_state()
