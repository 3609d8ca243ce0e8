"""
Saved case export: tabular (pandas / CSV) and single-case JSON files.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable

import pandas as pd

from rollpolar_app.models import OperatingParameters, SavedCase

# Column order for case tables
CASE_COLUMNS = [
    "case_id",
    "timestamp",
    "draft_category",
    "gm_m",
    "hs_m",
    "tz_s",
    "heading_deg",
    "speed_kn",
    "wave_direction_deg",
    "max_roll_angle_deg",
    "roll_deg",
    "is_in_danger_zone",
]


def case_to_flat_row(case: SavedCase) -> Dict[str, Any]:
    params = case.parameters.to_dict()
    row: Dict[str, Any] = {}
    for col in CASE_COLUMNS:
        if col == "case_id":
            row[col] = case.case_id
        elif col == "timestamp":
            row[col] = case.timestamp.isoformat()
        elif col == "roll_deg":
            row[col] = case.roll_deg
        elif col == "is_in_danger_zone":
            row[col] = case.is_in_danger_zone
        else:
            row[col] = params.get(col, "")
    return row


def cases_to_dataframe(cases: Iterable[SavedCase]) -> pd.DataFrame:
    rows = [case_to_flat_row(c) for c in cases]
    return pd.DataFrame(rows, columns=CASE_COLUMNS)


def export_cases_csv(filepath: Path, cases: Iterable[SavedCase]) -> None:
    cases_to_dataframe(cases).to_csv(filepath, index=False)


def save_case_to_file(filepath: Path, case: SavedCase) -> None:
    """
    Save a case (without dataset snapshot) to a JSON file.

    Args:
        filepath: Path where to save the file
        case: The case to save
    """
    data = {
        "case_id": case.case_id,
        "timestamp": case.timestamp.isoformat(),
        "is_in_danger_zone": case.is_in_danger_zone,
        "roll_deg": case.roll_deg,
        "parameters": case.parameters.to_dict(),
    }
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_case_from_file(filepath: Path) -> SavedCase:
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    raw_params = data.get("parameters") or {}
    ts_raw = data.get("timestamp")
    timestamp = datetime.fromisoformat(ts_raw) if ts_raw else datetime.now(timezone.utc)
    roll = data.get("roll_deg")
    return SavedCase(
        case_id=str(data.get("case_id", "")),
        parameters=OperatingParameters.from_dict(raw_params if isinstance(raw_params, dict) else {}),
        timestamp=timestamp,
        is_in_danger_zone=bool(data.get("is_in_danger_zone", False)),
        roll_deg=None if roll is None else float(roll),
    )
