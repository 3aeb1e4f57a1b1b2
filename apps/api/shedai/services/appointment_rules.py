from __future__ import annotations

import re

DEFAULT_APPOINTMENT_TITLE = "회의"

APPOINTMENT_COMMAND_RE = re.compile(r"(일정\s*추가(?:해줘|해|해주세요|해주라)?[.!]?)\s*$")

_DATE_TIME_PHRASES_RE = re.compile(
    r"(오늘|내일|모레|이번주|다음주|\d{1,2}\s*월\s*\d{1,2}\s*일"
    r"|\d{1,2}(?::|\s*시)\s*\d{0,2}\s*분?|오전|오후)\s*"
)
_TRAILERS_RE = re.compile(
    r"(을|를|에|에서|으로|로|한|하게|하세요|해줘|해요|해주세요"
    r"|추가|추가해줘|추가해요|추가해주세요)$"
)


def ends_with_appointment_command(text: str | None) -> bool:
    return bool(APPOINTMENT_COMMAND_RE.search((text or "").strip()))


def extract_appointment_title(raw: str | None) -> str:
    title = (raw or "").strip()
    title = APPOINTMENT_COMMAND_RE.sub("", title, count=1).strip()
    title = _DATE_TIME_PHRASES_RE.sub("", title).strip()
    title = _TRAILERS_RE.sub("", title, count=1).strip()
    if len(title) < 2:
        return DEFAULT_APPOINTMENT_TITLE
    return title
