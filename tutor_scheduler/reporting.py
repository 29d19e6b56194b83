"""
Tabular and JSON views of engine output for reports.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .engine.time_utils import minutes_to_time
from .models.conflict import ConflictResult
from .models.slot import SessionGap, SmartRecommendations, TimeSlot


GAP_COLUMNS = [
    "session_id", "owner_id", "owner_name", "start", "end",
    "gap_after", "gap_severity", "has_conflict", "conflict_type",
]

SLOT_COLUMNS = ["time", "time_localized", "duration", "period"]

SCAN_COLUMNS = [
    "session_id", "severity", "type", "conflict_count", "conflicts_with", "suggestions",
]

SMART_COLUMNS = ["time", "time_localized", "score", "tier", "priority", "period", "tags", "reasons"]


def conflict_result_to_dict(result: ConflictResult) -> Dict[str, Any]:
    return result.to_dict()


def gaps_to_dataframe(gaps: Iterable[SessionGap]) -> pd.DataFrame:
    """One row per session with HH:MM start/end columns."""
    rows = []
    for gap in gaps:
        row = gap.to_dict()
        row["start"] = minutes_to_time(row.pop("start_minutes"))
        row["end"] = minutes_to_time(row.pop("end_minutes"))
        rows.append(row)
    return pd.DataFrame(rows, columns=GAP_COLUMNS)


def slots_to_dataframe(slots: Iterable[TimeSlot]) -> pd.DataFrame:
    rows = [slot.to_dict() for slot in slots]
    columns = SLOT_COLUMNS + (["label"] if rows and "label" in rows[0] else [])
    return pd.DataFrame(rows, columns=columns)


def smart_slots_to_dataframe(recommendations: SmartRecommendations) -> pd.DataFrame:
    """One row per scored slot; tags and reasons joined into single cells."""
    rows = []
    for slot in recommendations.slots:
        row = slot.to_dict()
        row["tags"] = "، ".join(row["tags"])
        row["reasons"] = " | ".join(row["reasons"])
        rows.append(row)
    return pd.DataFrame(rows, columns=SMART_COLUMNS)


def scan_to_dataframe(scan: Mapping[str, ConflictResult]) -> pd.DataFrame:
    """Flatten a roster scan into one row per conflicting session."""
    rows = []
    for session_id, result in scan.items():
        rows.append({
            "session_id": session_id,
            "severity": result.severity.value,
            "type": result.type.value,
            "conflict_count": len(result.conflicts),
            "conflicts_with": ", ".join(c.owner.name for c in result.conflicts),
            "suggestions": ", ".join(s.time for s in result.suggestions),
        })
    return pd.DataFrame(rows, columns=SCAN_COLUMNS)


def build_report(
    date: Optional[str] = None,
    conflict: Optional[ConflictResult] = None,
    gaps: Optional[List[SessionGap]] = None,
    slots: Optional[List[TimeSlot]] = None,
    scan: Optional[Mapping[str, ConflictResult]] = None,
    smart: Optional[SmartRecommendations] = None,
) -> Dict[str, Any]:
    """
    Assemble a JSON-ready report of whichever analyses were run.
    """
    report: Dict[str, Any] = {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "date": date,
    }

    if conflict is not None:
        report["conflict"] = conflict_result_to_dict(conflict)
    if gaps is not None:
        report["gaps"] = [gap.to_dict() for gap in gaps]
    if slots is not None:
        report["slots"] = [slot.to_dict() for slot in slots]
    if scan is not None:
        report["scan"] = {
            session_id: result.to_dict() for session_id, result in scan.items()
        }
    if smart is not None:
        report["smart"] = smart.to_dict()

    return report
