from __future__ import annotations

import re
from dataclasses import dataclass

# Rewrites run in order: later rules consume what earlier ones leave behind.
_TIME_IDIOM_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"자정"), "오전 0시"),
    (re.compile(r"정오"), "오후 12시"),
    (re.compile(r"밤\s*(\d{1,2})시"), r"오후 \1시"),
    (re.compile(r"새벽\s*(\d{1,2})시"), r"오전 \1시"),
    (re.compile(r"낮\s*(\d{1,2})시"), r"오후 \1시"),
)
_AM_HOUR_RE = re.compile(r"오전\s*(\d{1,2})시")
_PM_NOON_RE = re.compile(r"오후\s*12시")
_PM_HOUR_RE = re.compile(r"오후\s*(\d{1,2})시")

_CLOCK_RE = re.compile(r"(\d{1,2})\s*[:시]\s*(\d{1,2})?")
_COMPACT_RE = re.compile(r"^(\d{3,4})$")

_TIME_TOKEN = (
    r"\d{1,2}\s*(?::\s*\d{1,2})?\s*시?"
    r"|자정|정오"
    r"|오전\s*\d{1,2}\s*시?"
    r"|오후\s*\d{1,2}\s*시?"
)
_TIME_RANGE_RE = re.compile(rf"({_TIME_TOKEN})\s*[-~]\s*({_TIME_TOKEN})")


@dataclass(frozen=True)
class ClockTime:
    hour: int
    minute: int


@dataclass(frozen=True)
class TimeRange:
    start: str
    end: str
    span_text: str


def to_hhmm(hour: int, minute: int = 0) -> str:
    return f"{hour:02d}:{minute:02d}"


def normalize_korean_time_text(text: str) -> str:
    """Replace 자정/정오/밤/새벽/낮/오전/오후 idioms with 24-hour HH:MM tokens."""
    out = text
    for pattern, replacement in _TIME_IDIOM_REWRITES:
        out = pattern.sub(replacement, out)
    # 오전 hours are taken as spoken, without a 12-hour shift.
    out = _AM_HOUR_RE.sub(lambda m: to_hhmm(int(m.group(1))), out)
    # 오후 12시 stays noon; the generic rule below would yield 24:00.
    out = _PM_NOON_RE.sub("12:00", out)
    out = _PM_HOUR_RE.sub(lambda m: to_hhmm((int(m.group(1)) + 12) % 24), out)
    return out


def parse_korean_time(token: str | None) -> ClockTime | None:
    """Parse `H시M분`, `H:M` or compact `HMM`/`HHMM` into a clamped clock time."""
    if not token:
        return None
    text = normalize_korean_time_text(token)

    match = _CLOCK_RE.search(text)
    if match:
        hour = min(23, int(match.group(1)))
        minute = min(59, int(match.group(2))) if match.group(2) else 0
        return ClockTime(hour=hour, minute=minute)

    compact = _COMPACT_RE.match(text)
    if compact:
        digits = compact.group(1)
        hour = int(digits[:-2])
        minute = int(digits[-2:])
        return ClockTime(hour=min(23, hour), minute=min(59, minute))
    return None


def extract_time_range(text: str) -> TimeRange | None:
    normalized = normalize_korean_time_text(text)
    match = _TIME_RANGE_RE.search(normalized)
    if not match:
        return None
    start = parse_korean_time(match.group(1))
    end = parse_korean_time(match.group(2))
    if start is None or end is None:
        return None
    return TimeRange(
        start=to_hhmm(start.hour, start.minute),
        end=to_hhmm(end.hour, end.minute),
        span_text=match.group(0),
    )


def hhmm_to_minutes(value: str | None) -> int | None:
    if not value:
        return None
    parts = value.split(":")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]) * 60 + int(parts[1])
    except ValueError:
        return None
