"""Maps raw ``stats-updated`` payloads onto display-ready snapshots.

The backend serializes its stats with camelCase keys; snake_case keys are
accepted as well so that Python backends can hand over plain dicts.
"""

import math

from typing import Any, Mapping

from lanshare.constants import ETA_COMPUTING, SPEED_UNIT
from lanshare.data_models.progress_snapshot import ProgressSnapshot

_ALIASES: dict[str, str] = {
    "totalFiles": "total_files",
    "completedFiles": "completed_files",
    "totalBytes": "total_bytes",
    "transferredBytes": "transferred_bytes",
    "currentSpeed": "current_speed",
    "estimatedTime": "estimated_time",
    "currentFile": "current_file",
}

ZERO_PROGRESS = ProgressSnapshot(
    total_files=0,
    completed_files=0,
    total_bytes=0,
    transferred_bytes=0,
    current_speed_mbps=f"0 {SPEED_UNIT}",
    estimated_time_text=ETA_COMPUTING,
    current_file="",
    progress_percent=0.0,
    progress_text="0%",
    status_text="",
)

def project(raw: Mapping[str, Any] | None) -> ProgressSnapshot:
    stats = _normalize(raw or {})

    percent = _clamp(_as_float(stats.get("progress")), 0.0, 100.0)

    speed = stats.get("current_speed")
    if speed is None or _as_float(speed) is None:
        speed_text = f"0 {SPEED_UNIT}"
    else:
        speed_text = f"{_as_float(speed):.1f} {SPEED_UNIT}"

    eta = stats.get("estimated_time")
    eta_text = str(eta) if eta else ETA_COMPUTING

    return ProgressSnapshot(
        total_files=_as_int(stats.get("total_files")),
        completed_files=_as_int(stats.get("completed_files")),
        total_bytes=_as_int(stats.get("total_bytes")),
        transferred_bytes=_as_int(stats.get("transferred_bytes")),
        current_speed_mbps=speed_text,
        estimated_time_text=eta_text,
        current_file=str(stats.get("current_file") or ""),
        progress_percent=percent,
        progress_text=f"{percent:.1f}%",
        status_text=str(stats.get("status") or ""),
    )

def _normalize(raw: Mapping[str, Any]) -> dict[str, Any]:
    stats: dict[str, Any] = {}

    for key, value in raw.items():
        stats[_ALIASES.get(key, key)] = value

    return stats

def _as_float(value: Any) -> float | None:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None

    # NaN never compares, so it would slip through the clamp
    if math.isnan(result):
        return None

    return result

def _as_int(value: Any) -> int:
    number = _as_float(value)

    if number is None or math.isinf(number):
        return 0

    return int(number)

def _clamp(value: float | None, lower: float, upper: float) -> float:
    if value is None:
        return lower

    return min(upper, max(lower, value))
