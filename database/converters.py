"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the society schema and the engine's
models. jsonb columns normally arrive decoded (see connection.py) but a raw
JSON string is accepted too.
"""

import json
from typing import Any, Dict, List, Optional

from models import (
    Course,
    Event,
    GuestRecord,
    MemberRecord,
    TeeSetting,
    TeeSheetMetadata,
    TeeSheetPayload,
)


def _json(value: Any, default: Any) -> Any:
    if value is None:
        return default
    if isinstance(value, str):
        return json.loads(value)
    return value


def _str_or_none(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _float_or_none(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


# ================================================================
# Row -> Model (reads)
# ================================================================

def member_from_row(row) -> MemberRecord:
    """society.members row -> MemberRecord."""
    return MemberRecord(
        id=str(row["id"]),
        name=row["name"],
        handicap_index=_float_or_none(row["handicap_index"]),
        sex=row["sex"],
    )


def tee_setting_from_row(row) -> TeeSetting:
    """society.tee_sets row -> TeeSetting."""
    return TeeSetting(
        id=str(row["id"]),
        course_id=_str_or_none(row["course_id"]),
        tee_color=row["tee_color"],
        applies_to=row["applies_to"],
        par=row["par"],
        course_rating=_float_or_none(row["course_rating"]),
        slope_rating=row["slope_rating"],
    )


def course_from_rows(course_row, tee_rows: list) -> Course:
    """society.courses row + its tee_sets rows -> Course."""
    return Course(
        id=str(course_row["id"]),
        name=course_row["name"],
        tee_settings=[tee_setting_from_row(r) for r in tee_rows],
    )


def guest_from_dict(data: Dict[str, Any]) -> GuestRecord:
    """One entry of events.guests -> GuestRecord."""
    return GuestRecord(
        id=str(data["id"]),
        name=data.get("name") or "Guest",
        handicap_index=data.get("handicapIndex", data.get("handicap_index")),
        sex=data.get("sex"),
        included=data.get("included", True),
    )


def tee_sheet_from_json(value: Any) -> Optional[TeeSheetPayload]:
    """events.tee_sheet jsonb -> TeeSheetPayload (None when no sheet is stored)."""
    data = _json(value, None)
    if not data:
        return None
    return TeeSheetPayload.model_validate(data)


def event_from_row(row) -> Event:
    """society.events row -> Event."""
    return Event(
        id=str(row["id"]),
        name=row["name"],
        date=row["date"],
        course_id=_str_or_none(row["course_id"]),
        course_name=row["course_name"],
        male_tee_set_id=_str_or_none(row["male_tee_set_id"]),
        female_tee_set_id=_str_or_none(row["female_tee_set_id"]),
        handicap_allowance_pct=_float_or_none(row["handicap_allowance_pct"]),
        handicap_allowance=_float_or_none(row["handicap_allowance"]),
        format=row["format"],
        player_ids=[str(pid) for pid in (row["player_ids"] or [])],
        guests=[guest_from_dict(g) for g in _json(row["guests"], [])],
        rsvps=_json(row["rsvps"], {}),
        tee_sheet=tee_sheet_from_json(row["tee_sheet"]),
        tee_sheet_notes=row["tee_sheet_notes"],
        nearest_to_pin_holes=list(row["nearest_to_pin_holes"] or []),
        longest_drive_holes=list(row["longest_drive_holes"] or []),
        playing_handicap_snapshot=_json(row["playing_handicap_snapshot"], {}),
    )


# ================================================================
# Model -> Row values (writes)
# ================================================================

def tee_sheet_to_json(payload: TeeSheetPayload) -> Dict[str, Any]:
    """TeeSheetPayload -> plain dict for events.tee_sheet ({startTime, intervalMinutes, groups})."""
    return payload.model_dump(mode="json", by_alias=True)


def tee_sheet_metadata_to_row(metadata: TeeSheetMetadata) -> dict:
    """TeeSheetMetadata -> dict of events columns."""
    return {
        "tee_sheet_notes": metadata.tee_sheet_notes,
        "nearest_to_pin_holes": list(metadata.nearest_to_pin_holes),
        "longest_drive_holes": list(metadata.longest_drive_holes),
        "playing_handicap_snapshot": dict(metadata.playing_handicap_snapshot),
    }


def guests_to_json(guests: List[GuestRecord]) -> List[Dict[str, Any]]:
    """GuestRecords -> events.guests jsonb entries."""
    return [
        {
            "id": g.id,
            "name": g.name,
            "handicapIndex": g.handicap_index,
            "sex": g.sex.value if g.sex else None,
            "included": g.included,
        }
        for g in guests
    ]
