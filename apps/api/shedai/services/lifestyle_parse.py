from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from shedai.services.korean_time import extract_time_range

ALL_DAYS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)
DEFAULT_TITLE = "활동"
DEFAULT_WINDOW = ("09:00", "18:00")

DAY_MAP: dict[str, int] = {"월": 1, "화": 2, "수": 3, "목": 4, "금": 5, "토": 6, "일": 7}

# Shared by day extraction and title stripping so both agree on what
# isolates a weekday character ("수" in "수면" is not a weekday).
_BOUNDARY_BEFORE = r"(?:^|[\s,·•])"
_BOUNDARY_AFTER = r"(?=$|[\s,·•])"
_WEEKDAY = r"[월화수목금토일]"

_DAY_KEYWORD_SETS: tuple[tuple[re.Pattern[str], tuple[int, ...]], ...] = (
    (re.compile(r"(매일|매|every\s*day)", re.IGNORECASE), ALL_DAYS),
    (re.compile(r"(평일|평)"), (1, 2, 3, 4, 5)),
    (re.compile(r"(주말)"), (6, 7)),
)
_NUMBER_LIST_RE = re.compile(r"(\d\s*,\s*)+\d")
_DAY_TOKEN_RE = re.compile(rf"{_BOUNDARY_BEFORE}({_WEEKDAY})(?:요일)?{_BOUNDARY_AFTER}")

_TITLE_TIME_HINTS: tuple[tuple[tuple[str, ...], tuple[str, str]], ...] = (
    (("수면", "잠", "취침"), ("00:00", "07:00")),
    (("공부", "과제", "시험"), ("21:00", "02:00")),
    (("운동", "헬스", "러닝"), ("19:00", "21:00")),
    (("출근", "회사", "근무"), ("09:00", "18:00")),
    (("식사", "밥", "점심"), ("12:00", "13:00")),
    (("산책", "휴식"), ("18:00", "19:00")),
)


@dataclass(frozen=True)
class LifestyleRecord:
    days: tuple[int, ...]
    start: str
    end: str
    title: str


def extract_days(text: str) -> tuple[int, ...] | None:
    for pattern, days in _DAY_KEYWORD_SETS:
        if pattern.search(text):
            return days

    number_list = _NUMBER_LIST_RE.search(text)
    if number_list:
        numbers = [int(part.strip()) for part in number_list.group(0).split(",")]
        valid = {n for n in numbers if 1 <= n <= 7}
        if valid:
            return tuple(sorted(valid))

    found = {DAY_MAP[m.group(1)] for m in _DAY_TOKEN_RE.finditer(text)}
    if found:
        return tuple(sorted(found))
    return None


def infer_time_from_title(title: str | None) -> tuple[str, str]:
    if not title:
        return DEFAULT_WINDOW
    lowered = title.lower()
    for keywords, window in _TITLE_TIME_HINTS:
        if any(keyword in lowered for keyword in keywords):
            return window
    return DEFAULT_WINDOW


TitleStep = Callable[[str], str]


def _regex_step(*rules: tuple[str, int]) -> TitleStep:
    compiled = [re.compile(pattern, flags) for pattern, flags in rules]

    def _apply(text: str) -> str:
        for pattern in compiled:
            text = pattern.sub(" ", text)
        return text

    return _apply


def _unify_meal_words(text: str) -> str:
    text = re.sub(r"아침\s*식\s*사", "아침 식사", text)
    text = re.sub(r"점심\s*식\s*사", "점심 식사", text)
    return re.sub(r"저녁\s*식\s*사", "저녁 식사", text)


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s{2,}", " ", text).strip()


def _trim_edge_separators(text: str) -> str:
    text = re.sub(r"^[~\-–—|·•,:;]+", "", text)
    return re.sub(r"[~\-–—|·•,:;]+$", "", text).strip()


_PERIOD = r"(오전|오후|새벽|낮|밤)"

# \b follows ASCII word rules so Hangul next to a digit still counts as a boundary.
TITLE_STEPS: tuple[tuple[str, TitleStep], ...] = (
    ("unify_meal_words", _unify_meal_words),
    (
        "strip_time_ranges",
        _regex_step(
            (
                rf"{_PERIOD}?\s*\d{{1,2}}\s*(?::\s*\d{{1,2}})?\s*(시)?\s*[~\-]\s*"
                rf"{_PERIOD}?\s*\d{{1,2}}\s*(?::\s*\d{{1,2}})?\s*(시)?",
                0,
            ),
            (r"\b\d{1,2}:\d{2}\s*[~\-]\s*\d{1,2}:\d{2}\b", re.ASCII),
        ),
    ),
    (
        "strip_weekday_ranges",
        _regex_step(
            (
                rf"{_BOUNDARY_BEFORE}(?:{_WEEKDAY}(?:요일)?)\s*[~\-]\s*"
                rf"(?:{_WEEKDAY}(?:요일)?){_BOUNDARY_AFTER}",
                0,
            ),
        ),
    ),
    (
        "strip_weekdays",
        _regex_step((rf"{_BOUNDARY_BEFORE}({_WEEKDAY})(요일)?{_BOUNDARY_AFTER}", 0)),
    ),
    (
        "strip_time_points",
        _regex_step(
            (rf"{_PERIOD}\s*\d{{1,2}}(?:\s*시(?:\s*\d{{1,2}}분)?)?", 0),
            (r"자정|정오", 0),
            (r"\b\d{1,2}:\d{2}\b", re.ASCII),
            (r"\b\d{1,2}\s*시(?:\s*\d{1,2}분)?\b", re.ASCII),
        ),
    ),
    (
        "strip_frequency_keywords",
        _regex_step(
            (rf"{_BOUNDARY_BEFORE}(?:매일|평일|주말){_BOUNDARY_AFTER}", re.IGNORECASE),
            (rf"{_BOUNDARY_BEFORE}(?:매|평){_BOUNDARY_AFTER}", 0),
            (r"\bevery\s*day\b", re.IGNORECASE | re.ASCII),
        ),
    ),
    ("collapse_separators", _regex_step((r"[~\-–—|:/]+", 0), (r"[·•]+", 0))),
    ("collapse_whitespace", _collapse_whitespace),
    ("trim_edge_separators", _trim_edge_separators),
)


def extract_title(text: str, removed: Iterable[str | None] = ()) -> str:
    title = text
    for chunk in removed:
        if chunk and chunk in title:
            title = title.replace(chunk, " ", 1)

    for _name, step in TITLE_STEPS:
        title = step(title)

    if re.fullmatch(_WEEKDAY, title):
        title = ""
    if not title or re.fullmatch(r"[0-9]+", title):
        return DEFAULT_TITLE
    return title


def parse_lifestyle_line(line: str | None) -> LifestyleRecord:
    raw = re.sub(r"\s+", " ", line or "").strip()
    time_range = extract_time_range(raw)
    days = extract_days(raw)
    title = extract_title(raw, [time_range.span_text if time_range else None])

    if time_range is not None:
        start, end = time_range.start, time_range.end
    else:
        start, end = infer_time_from_title(title)

    return LifestyleRecord(days=days or ALL_DAYS, start=start, end=end, title=title)


def parse_lifestyle_lines(text: str | None) -> list[LifestyleRecord]:
    if not text:
        return []
    lines = [line.strip() for line in text.split("\n")]
    return [parse_lifestyle_line(line) for line in lines if line]
