from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def normalize_schedule(value: Any) -> list[Any]:
    """Accept a bare day list or an object wrapping it under scheduleData/schedule."""
    if not value:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, Mapping):
        for key in ("scheduleData", "schedule"):
            days = value.get(key)
            if isinstance(days, list):
                return days
    return []


def has_any_activities(value: Any) -> bool:
    for day in normalize_schedule(value):
        activities = day.get("activities") if isinstance(day, Mapping) else None
        if isinstance(activities, list) and activities:
            return True
    return False
