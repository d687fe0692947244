"""Session snapshot and board export endpoints."""

from __future__ import annotations

import io
import json
from datetime import date

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse

import pandas as pd

from ..services.draft_tracker import (
    export_snapshot,
    get_draft_state,
    import_snapshot,
    load_draft_state,
    save_draft_state,
)
from ..services.player_search import build_board

router = APIRouter()


@router.get("/snapshot")
async def download_snapshot():
    """Download the full session (pool, roster, preferences) as JSON."""
    data = export_snapshot().model_dump(mode="json", by_alias=True)
    filename = f"draft-session-{date.today().isoformat()}.json"
    return JSONResponse(
        data,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/snapshot")
async def upload_snapshot(file: UploadFile = File(...)):
    """Restore a session from an exported JSON snapshot."""
    content = await file.read()
    try:
        data = json.loads(content)
        state = import_snapshot(data)
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Invalid JSON file")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "status": "restored",
        "player_count": len(state.players),
        "roster": state.roster.model_dump(by_alias=True),
    }


@router.post("/save")
async def save_state():
    """Write the session to the local cache file."""
    try:
        filepath = save_draft_state()
    except OSError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "saved", "filepath": filepath}


@router.post("/load")
async def load_state():
    """Restore the session from the local cache file."""
    try:
        state = load_draft_state()
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "loaded", "player_count": len(state.players)}


@router.get("/board")
async def export_board(
    format: str = Query("csv", description="Export format: 'csv' or 'xlsx'"),
):
    """Export the board using the saved sort and hide-drafted preferences.

    Columns: Name, Position, Team, Bye, Value, ADP, Injury, Status
    """
    state = get_draft_state()
    prefs = state.preferences
    players = build_board(
        state.players,
        sort_key=prefs.sort_key,
        direction=prefs.sort_direction,
        hide_drafted=prefs.hide_drafted,
    )

    rows = [
        {
            "Name": p.name,
            "Position": p.position,
            "Team": p.team,
            "Bye": p.bye_week,
            "Value": p.value,
            "ADP": p.adp,
            "Injury": p.injury_note or "",
            "Status": p.status.value,
        }
        for p in players
    ]
    df = pd.DataFrame(rows, columns=["Name", "Position", "Team", "Bye", "Value", "ADP", "Injury", "Status"])

    if format.lower() == "xlsx":
        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Board")
        buf.seek(0)
        return StreamingResponse(
            buf,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": "attachment; filename=draft_board.xlsx"},
        )
    else:
        buf = io.StringIO()
        df.to_csv(buf, index=False)
        buf.seek(0)
        return StreamingResponse(
            buf,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=draft_board.csv"},
        )
