from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from shedai.services.category_alias import normalize_category_name
from shedai.services.category_classifier import UNCATEGORIZED, infer_category
from shedai.services.schedule_normalize import normalize_schedule

MINUTES_PER_DAY = 24 * 60

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class ActivityMixResult:
    by_category: dict[str, int] = field(default_factory=dict)
    total_minutes: int = 0


def _leading_int(value: str) -> int:
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else 0


def _to_minutes(value: Any) -> int:
    parts = str(value or "00:00").split(":")
    hour = _leading_int(parts[0] or "0")
    minute = _leading_int(parts[1] or "0") if len(parts) > 1 else 0
    return hour * 60 + minute


def activity_duration_minutes(start: Any, end: Any) -> int:
    s = _to_minutes(start)
    e = _to_minutes(end)
    # end before start means the activity runs past midnight
    duration = e - s if e >= s else MINUTES_PER_DAY - s + e
    return max(0, duration)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_activity_mix(schedule: Any) -> ActivityMixResult:
    minutes_by_category: dict[str, int] = {}
    total = 0

    for day in normalize_schedule(schedule):
        activities = day.get("activities") if isinstance(day, Mapping) else None
        for activity in activities or []:
            if not isinstance(activity, Mapping):
                continue
            if not activity.get("start") or not activity.get("end"):
                continue
            duration = activity_duration_minutes(activity["start"], activity["end"])
            category = str(activity.get("category") or "").strip() or UNCATEGORIZED
            minutes_by_category[category] = minutes_by_category.get(category, 0) + duration
            total += duration

    if total <= 0:
        return ActivityMixResult(by_category={}, total_minutes=0)

    rounded = {
        category: _round_half_up(minutes / total * 100)
        for category, minutes in minutes_by_category.items()
    }
    drift = 100 - sum(rounded.values())
    if drift:
        largest = max(rounded, key=lambda category: rounded[category])
        rounded[largest] += drift

    return ActivityMixResult(by_category=rounded, total_minutes=total)


def categorize_schedule(schedule: Any) -> list[dict[str, Any]]:
    """Fill missing categories from title/type/start, then canonicalize every name."""
    out: list[dict[str, Any]] = []
    for day in normalize_schedule(schedule):
        if not isinstance(day, Mapping):
            continue
        activities = []
        for activity in day.get("activities") or []:
            if not isinstance(activity, Mapping):
                continue
            raw = activity.get("category") or infer_category(activity)
            activities.append({**activity, "category": normalize_category_name(raw)})
        out.append({**day, "activities": activities})
    return out
