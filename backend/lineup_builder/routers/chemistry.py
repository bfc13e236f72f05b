"""Chemistry data upload, player list, and analysis endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from pydantic import BaseModel

from ..errors import ChemistryDataError
from ..services.chemistry_engine import player_chemistry, team_analysis
from ..services.chemistry_loader import (
    clear_matrix,
    get_matrix,
    get_player_names,
    load_chemistry_file,
    search_players,
)
from ..services import lineup_session as session

router = APIRouter()


class AnalysisRequest(BaseModel):
    players: List[str]


def _require_chemistry():
    matrix = get_matrix()
    if not len(matrix):
        raise HTTPException(status_code=400, detail="No chemistry data loaded. Upload a chemistry file first.")
    return matrix


@router.post("/upload")
async def upload_chemistry(file: UploadFile = File(...)):
    """Upload a chemistry lookup (CSV pairs or cached JSON). Saved to disk."""
    content = await file.read()
    try:
        matrix = load_chemistry_file(content, filename=file.filename or "chemistry.csv")
    except ChemistryDataError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "message": f"Loaded chemistry for {len(matrix)} players from {file.filename}",
        "player_count": len(matrix),
    }


@router.delete("/clear")
async def clear_chemistry(delete_files: bool = Query(True)):
    """Clear the loaded chemistry and optionally its saved file."""
    clear_matrix(delete_files=delete_files)
    return {"message": "Chemistry cleared", "files_deleted": delete_files}


@router.get("/players")
async def list_players(available_only: bool = False):
    """All known players, or just those not in the lineup."""
    names = session.available_players() if available_only else get_player_names()
    return {"players": names, "count": len(names)}


@router.get("/players/search")
async def search(q: str = Query(..., min_length=1), limit: Optional[int] = Query(None, ge=1, le=50)):
    """Fuzzy player search for the picker."""
    _require_chemistry()
    results = search_players(q, limit=limit)
    return {"results": results, "count": len(results)}


@router.get("/players/{player_name}")
async def get_player_chemistry(player_name: str):
    """A player's positive and negative chemistry partners."""
    matrix = _require_chemistry()
    if player_name not in matrix.players:
        raise HTTPException(status_code=404, detail=f"Player '{player_name}' not found")
    profile = player_chemistry(player_name, matrix)
    return {
        **profile.model_dump(),
        "pos_count": profile.pos_count,
        "neg_count": profile.neg_count,
    }


@router.post("/analysis")
async def analyze_team(req: AnalysisRequest):
    """Chemistry among selected players and with everyone else."""
    matrix = _require_chemistry()
    if len(req.players) < 2:
        raise HTTPException(status_code=400, detail="Select at least two players")
    analysis = team_analysis(req.players, matrix)
    return {
        **analysis.model_dump(),
        "total_connections": analysis.total_connections,
    }
