from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

DEFAULT_TASK_TITLE = "할 일"
DEADLINE_TIME = "23:59"
MAX_TITLE_CHARS = 50

LEVEL_HIGH = "상"
LEVEL_MEDIUM = "중"
LEVEL_LOW = "하"

_META_INFO_RE = re.compile(
    r"(중요도|난이도|priority|difficulty|중요\s*도|난이\s*도)", re.IGNORECASE
)
ACTION_VERBS: tuple[str, ...] = (
    "정리", "준비", "작성", "완성", "편집", "주문", "예약", "수강",
    "공부", "학습", "암기", "외우", "복습", "예습", "검토", "리뷰",
    "제작", "업데이트", "정돈", "정비", "완료", "완주", "풀이", "풀기",
    "풀어", "읽기", "읽어", "읽고", "보는", "보기", "보고", "연습",
    "마치", "마무리", "제출", "정리하기", "정리해", "정리하고", "정돈하기",
    "암기하기", "외우기", "수강하기", "준비하기", "작성하기", "완성하기",
)
_RELATIVE_DAY_TITLES = frozenset({"오늘", "내일", "모레", "이번주", "다음주", "다음", "주말"})

_LEADING_DATE_TIME_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"^\s*(이번|다음|다다음)\s+주", r"\1주"),
        (r"^\s*(한|두|세|네)?\s*(시간|일|주|달|개월)\s*(안에|안|이내|내)\s*", ""),
        (r"^\s*\d+\s*(시간|일|주|달|개월)\s*(안에|안|이내|내)\s*", ""),
        (
            r"^\s*(연말|연초|올해|올해안|해당년|이번\s*달|이번\s*달\s*안|이번\s*달\s*내)"
            r"\s*(까지|안에|안)?\s*",
            "",
        ),
        (r"^\s*(올해|내년|금년)\s*(안에|안|까지)?\s*", ""),
        (r"^\s*(이번|다음|지난)\s*(달|월)\s*\d+\s*(일까지|안에|내)?\s*", ""),
        (
            r"^\s*(오늘|내일|모레|이번주|다음주|다다음주)\s*[월화수목금토일]요일?\s*(까지|에)?\s*",
            "",
        ),
        (
            r"^\s*(오늘|내일|모레)\s*(오전|오후)?\s*\d{1,2}\s*시(\s*\d{1,2}\s*분)?\s*(까지|에)?\s*",
            "",
        ),
        (r"^\s*(이번주|다음주|다다음주)?\s*[월화수목금토일]요일?\s*(까지|에)?\s*", ""),
        (r"^\s*\d{1,2}\s*월\s*\d{1,2}\s*일?\s*(까지|까진)?\s*", ""),
        (r"^\s*(오전|오후)\s*\d{1,2}\s*시(\s*\d{1,2}\s*분)?\s*(까지|에)?\s*", ""),
        (r"^\s*\d{1,2}\s*[.\-/]\s*\d{1,2}\s*(까지|까진)?\s*", ""),
    )
)

_PRIORITY_LINE_RE = re.compile(
    r"(해야|만들어야|준비해야|작성해야|필요|정리|준비|작성|완성|검토|리뷰|외워야|완료)"
)
_KEYWORD_TITLE_RE = re.compile(
    r"([가-힣A-Za-z0-9\s]{0,80}?)"
    r"(회의|미팅|화상\s*미팅|면담|인터뷰|진료|상담|발표회|발표|수업|강의|세미나|프로젝트|과제|콜|예약)"
    r"(\s*(일정|미팅))?"
)
_DEADLINE_SPLIT_RE = re.compile(r"마감일|마감|기한|데드라인")
_OBLIGATION_RULES: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"만들어야\s*해",
        r"준비해야\s*해",
        r"작성해야\s*해",
        r"해야\s*(해|돼|됨|함)",
        r"해야\s*돼",
        r"해야\s*함",
        r"일정\s*(추가|등록)\s*해줘?",
        r"추가해줘",
        r"등록해줘",
    )
)
_INTENT_TAIL_RE = re.compile(
    r"\s*(해서|하려고|하려|하려면|하려니|하려함|하고|하고자|하고싶|하고싶어|하고싶다|싶어|싶다)\s.*$"
)
_VERB_FALLBACK_RE = re.compile(r"([가-힣A-Za-z0-9\s]{2,60})\s*(만들어야|준비해야|해야|작성해야)")
_NOUN_PHRASE_RE = re.compile(r"^[가-힣A-Za-z0-9\s]+")

_DEADLINE_RE = re.compile(r"(\d{1,2})\s*월\s*(\d{1,2})\s*일")
_STRICT_RE = re.compile(r"엄격")
_FOCUS_RE = re.compile(r"집중\s*필요|집중")


@dataclass(frozen=True)
class TaskRecord:
    title: str
    deadline: datetime
    importance: str
    difficulty: str
    description: str
    strict_deadline: bool
    needs_focus: bool
    created_at: datetime
    deadline_time: str = DEADLINE_TIME
    is_active: bool = True
    persist_as_task: bool = True


def strip_leading_date_time_phrases(text: str) -> str:
    out = text
    for pattern, replacement in _LEADING_DATE_TIME_RULES:
        out = pattern.sub(replacement, out, count=1)
    return out.strip()


def _strip_trailing_particle(text: str, particles: str = "을|를|은|는|이|가") -> str:
    return re.sub(rf"({particles})\s*$", "", text).strip()


def _cut_at_meta_info(text: str) -> str:
    match = _META_INFO_RE.search(text)
    return text[: match.start()].strip() if match else text


def _is_placeholder_title(title: str) -> bool:
    return not title or len(title) < 2 or title in _RELATIVE_DAY_TITLES


def cleanup_title(title: str | None, source_text: str = "") -> str:
    if not title:
        return DEFAULT_TASK_TITLE
    out = re.sub(r"\s+", " ", strip_leading_date_time_phrases(title)).strip()
    out = _INTENT_TAIL_RE.sub("", out).strip()
    out = _cut_at_meta_info(out)
    out = _strip_trailing_particle(out, "을|를|은|는|이|가|와|과")
    if source_text:
        verb = next((v for v in ACTION_VERBS if v in source_text), None)
        if verb and verb not in out:
            out = f"{out} {verb}".strip()
    if len(out) > MAX_TITLE_CHARS:
        out = out[:MAX_TITLE_CHARS].strip()
    if _is_placeholder_title(out):
        return DEFAULT_TASK_TITLE
    return out


def _pick_task_line(text: str) -> str:
    lines = [line.strip() for line in re.split(r"\r?\n", re.sub(r"[.!?]", "\n", text))]
    lines = [line for line in lines if line]
    if len(lines) <= 1:
        return text

    for line in reversed(lines):
        if _META_INFO_RE.search(line):
            continue
        if _PRIORITY_LINE_RE.search(line):
            return line
    return next((line for line in lines if not _META_INFO_RE.search(line)), lines[-1])


def extract_task_title(text: str | None) -> str:
    """Recover a short task title from a free-form Korean request.

    Multi-sentence input is reduced to the sentence most likely to carry the
    task ("...해야 해", "정리", ...), skipping lines that only hold
    importance/difficulty metadata.
    """
    if not text:
        return DEFAULT_TASK_TITLE

    picked = _pick_task_line(text.strip())
    action_source = picked
    picked = strip_leading_date_time_phrases(picked)

    # Meeting/project keywords win: "오늘 오후 4시 20분에 회의 일정 추가해줘" -> "회의".
    keyword = _KEYWORD_TITLE_RE.search(picked)
    if keyword:
        candidate = strip_leading_date_time_phrases((keyword.group(1) + keyword.group(2)).strip())
        candidate = re.sub(r"\s*일정$", "", candidate)
        candidate = _strip_trailing_particle(candidate, "을|를|은|는|이|가|와|과|및")
        candidate = re.sub(r"\s+", " ", candidate).strip()
        if candidate:
            return cleanup_title(candidate, action_source)

    picked = _DEADLINE_SPLIT_RE.split(picked)[0].strip()
    for pattern in _OBLIGATION_RULES:
        picked = pattern.sub("", picked)
    picked = _strip_trailing_particle(picked.strip())
    picked = re.sub(r"[.!?。，,]", "", picked).strip()

    noun_phrase = _NOUN_PHRASE_RE.match(picked)
    title = noun_phrase.group(0).strip() if noun_phrase else picked.strip()
    title = re.sub(r"^(은|는|을|를|이|가)\s+", "", title).strip()

    if _is_placeholder_title(title):
        verb_match = _VERB_FALLBACK_RE.search(text)
        if verb_match:
            title = strip_leading_date_time_phrases(verb_match.group(1).strip())
            title = _cut_at_meta_info(_strip_trailing_particle(title))

    return cleanup_title(title, action_source)


def _calendar_date(year: int, month_index: int, day: int) -> date:
    # Out-of-range months/days roll over into the following month/year.
    year += month_index // 12
    first = date(year, month_index % 12 + 1, 1)
    return first + timedelta(days=day - 1)


def _deadline_at(year: int, month_index: int, day: int) -> datetime:
    return datetime.combine(_calendar_date(year, month_index, day), time(23, 59))


def parse_deadline(text: str, *, base_date: date) -> datetime | None:
    match = _DEADLINE_RE.search(text)
    if not match:
        return None
    month_index = int(match.group(1)) - 1
    day = int(match.group(2))
    deadline = _deadline_at(base_date.year, month_index, day)
    if deadline.date() < base_date:
        deadline = _deadline_at(base_date.year + 1, month_index, day)
    return deadline


def parse_level(text: str, label: str) -> str:
    for level in (LEVEL_HIGH, LEVEL_LOW, LEVEL_MEDIUM):
        if re.search(rf"{label}\s*{level}", text):
            return level
    return LEVEL_HIGH


def parse_korean_task_sentence(
    text: str | None,
    *,
    base_date: date | datetime | None = None,
    now: datetime | None = None,
) -> TaskRecord | None:
    if not text:
        return None

    now = now or datetime.now()
    if base_date is None:
        base_date = now
    base_day = base_date.date() if isinstance(base_date, datetime) else base_date

    deadline = parse_deadline(text, base_date=base_day)
    title = extract_task_title(text)
    if title == DEFAULT_TASK_TITLE or deadline is None:
        return None

    return TaskRecord(
        title=title,
        deadline=deadline,
        importance=parse_level(text, "중요도"),
        difficulty=parse_level(text, "난이도"),
        description=text,
        strict_deadline=bool(_STRICT_RE.search(text)),
        needs_focus=bool(_FOCUS_RE.search(text)),
        created_at=now,
    )
