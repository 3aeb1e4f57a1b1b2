from __future__ import annotations

import re
from datetime import date, datetime

KOREAN_DAY_NAMES: dict[int, str] = {
    1: "월요일",
    2: "화요일",
    3: "수요일",
    4: "목요일",
    5: "금요일",
    6: "토요일",
    7: "일요일",
}
UNKNOWN_DAY_NAME = "알 수 없음"

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def korean_day_name(day: int) -> str:
    return KOREAN_DAY_NAMES.get(day, UNKNOWN_DAY_NAME)


def to_local_date(value: date | datetime | str | None) -> date | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if _ISO_DATE_RE.match(text):
                return date.fromisoformat(text)
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def to_iso_date_local(value: date | datetime | str | None) -> str | None:
    day = to_local_date(value)
    return day.isoformat() if day else None
