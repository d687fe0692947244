"""CSV import, column normalization, and the bundled sample pool."""

from __future__ import annotations

import io
import logging
import uuid
from typing import Optional

import pandas as pd

from ..models.player import Player, PlayerStatus
from ..utils.positions import FREE_AGENT, normalize_position

logger = logging.getLogger(__name__)

SAMPLE_CSV = """name,position,team,byeWeek,value,adp,injuryNote
Josh Allen,QB,BUF,13,98,4,
Jalen Hurts,QB,PHI,10,95,5,
Patrick Mahomes,QB,KC,6,94,8,
Christian McCaffrey,RB,SF,9,100,1,
Breece Hall,RB,NYJ,12,88,9,
Bijan Robinson,RB,ATL,12,86,11,
CeeDee Lamb,WR,DAL,7,94,2,
Justin Jefferson,WR,MIN,6,92,3,
Ja'Marr Chase,WR,CIN,12,90,6,
Travis Kelce,TE,KC,6,80,22,
Sam LaPorta,TE,DET,5,78,26,
Amon-Ra St. Brown,WR,DET,5,89,7,
Garrett Wilson,WR,NYJ,12,82,14,
A.J. Brown,WR,PHI,10,84,10,
Jahmyr Gibbs,RB,DET,5,80,17,
Aidan O'Connell,QB,LV,13,55,160,
Jayden Daniels,QB,WAS,14,68,72,
Dolphins DST,DST,MIA,6,12,140,
49ers DST,DST,SF,9,15,135,
Evan McPherson,K,CIN,12,8,180,
"""

# Lowercased header -> canonical column
COLUMN_MAP = {
    "\ufeffname": "name",  # BOM-prefixed
    "name": "name",
    "player": "name",
    "position": "position",
    "pos": "position",
    "team": "team",
    "byeweek": "byeWeek",
    "bye_week": "byeWeek",
    "bye": "byeWeek",
    "value": "value",
    "adp": "adp",
    "injurynote": "injuryNote",
    "injury_note": "injuryNote",
    "injury": "injuryNote",
}


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename recognized headers (case-insensitive) to canonical names."""
    rename = {}
    for col in df.columns:
        target = COLUMN_MAP.get(str(col).strip().lower())
        if target and target not in rename.values():
            rename[col] = target
    return df.rename(columns=rename)


def _clean_str(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def _optional_number(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def load_players_csv(csv_content: bytes) -> list[Player]:
    """Parse a player CSV into available Player records.

    Expected columns: name, position, team, byeWeek, value, adp, injuryNote
    (``pos``, ``bye`` and ``injury`` headers are also accepted). Non-numeric
    or blank numbers fall back to defaults: no bye week, value 0, no ADP.
    """
    try:
        df = pd.read_csv(io.BytesIO(csv_content), dtype=str, skip_blank_lines=True)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValueError(f"Could not parse CSV: {e}")

    df = _normalize_columns(df)
    if "name" not in df.columns:
        raise ValueError("CSV must contain a 'name' column")

    for col in ("position", "team", "injuryNote"):
        if col not in df.columns:
            df[col] = ""
    for col in ("byeWeek", "value", "adp"):
        if col not in df.columns:
            df[col] = None
        df[col] = pd.to_numeric(df[col], errors="coerce")

    players = []
    skipped = 0
    for idx, row in df.iterrows():
        name = _clean_str(row["name"])
        if not name:
            skipped += 1
            continue

        team = _clean_str(row["team"]).upper()
        bye = _optional_number(row["byeWeek"])
        value = _optional_number(row["value"]) or 0.0
        injury = _clean_str(row["injuryNote"])

        players.append(Player(
            id=f"{name}-{team}-{idx}",
            name=name,
            position=normalize_position(_clean_str(row["position"])),
            team=team,
            bye_week=int(bye) if bye is not None and bye >= 1 else None,
            value=max(0.0, value),
            adp=_optional_number(row["adp"]),
            injury_note=injury or None,
            status=PlayerStatus.AVAILABLE,
        ))

    if skipped:
        logger.warning(f"Skipped {skipped} CSV rows without a player name")
    logger.info(f"Parsed {len(players)} players from CSV")
    return players


def load_sample_players() -> list[Player]:
    """The bundled 20-player sample pool."""
    return load_players_csv(SAMPLE_CSV.encode())


def build_custom_player(
    name: str,
    position: str,
    team: Optional[str] = None,
    bye_week: Optional[int] = None,
    value: Optional[float] = None,
    adp: Optional[float] = None,
    injury_note: Optional[str] = None,
) -> Player:
    """Create a user-added player. Blank team becomes the free-agent marker."""
    name = name.strip()
    if not name:
        raise ValueError("Player name is required")
    team = (team or "").strip().upper() or FREE_AGENT
    return Player(
        id=f"{name}-{team}-{uuid.uuid4().hex[:5]}",
        name=name,
        position=normalize_position(position),
        team=team,
        bye_week=bye_week or None,
        value=value or 0.0,
        adp=adp,
        injury_note=injury_note or None,
    )
