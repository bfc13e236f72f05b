"""Spreadsheet export of the current lineup."""

from __future__ import annotations

import io

from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse

import pandas as pd

from ..services import lineup_session as session
from ..utils.positions import POSITIONS, position_label

router = APIRouter()


def lineup_rows() -> list[dict]:
    """Batting order rows with each batter's field position."""
    lineup = session.get_lineup()
    rows = []
    for order, player in enumerate(lineup.batting):
        slot = lineup.field.index(player) if player is not None and player in lineup.field else None
        rows.append({
            "Order": order + 1,
            "Player": player or "",
            "Position": position_label(slot),
        })
    # Fielders who are not in the batting order
    for slot, player in enumerate(lineup.field):
        if player is not None and player not in lineup.batting:
            rows.append({"Order": "", "Player": player, "Position": position_label(slot)})
    return rows


@router.get("/lineup")
async def export_lineup_sheet(
    format: str = Query("csv", description="Export format: 'csv' or 'xlsx'"),
):
    """Export the current lineup as a spreadsheet.

    Columns: Order, Player, Position. A second xlsx sheet lists the field by
    position with the total chemistry.
    """
    df = pd.DataFrame(lineup_rows(), columns=["Order", "Player", "Position"])

    if format.lower() == "xlsx":
        lineup = session.get_lineup()
        field_df = pd.DataFrame([
            {"Position": pos.label, "Name": pos.name, "Player": lineup.field[pos.id] or ""}
            for pos in POSITIONS
            if pos.id < len(lineup.field)
        ])
        summary_df = pd.DataFrame([{"Total Chemistry": session.current_chemistry()}])
        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Batting Order")
            field_df.to_excel(writer, index=False, sheet_name="Field")
            summary_df.to_excel(writer, index=False, sheet_name="Chemistry")
        buf.seek(0)
        return StreamingResponse(
            buf,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": "attachment; filename=lineup.xlsx"},
        )
    else:
        buf = io.StringIO()
        df.to_csv(buf, index=False)
        buf.seek(0)
        return StreamingResponse(
            buf,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=lineup.csv"},
        )
