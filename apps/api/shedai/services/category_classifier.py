from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

SLEEP = "Sleep"
MEALS = "Meals"
EXERCISE = "Exercise"
COMMUTE = "Commute"
MEETINGS = "Meetings"
STUDY = "Study"
ADMIN = "Admin"
CHORES = "Chores"
LEISURE = "Leisure"
DEEP_WORK = "Deep work"
UNCATEGORIZED = "Uncategorized"

CATEGORIES: tuple[str, ...] = (
    SLEEP,
    MEALS,
    EXERCISE,
    COMMUTE,
    MEETINGS,
    STUDY,
    ADMIN,
    CHORES,
    LEISURE,
    DEEP_WORK,
    UNCATEGORIZED,
)

# Evaluated top to bottom; the first matching group wins.
_TITLE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"수면|잠|취침|sleep"), SLEEP),
    (re.compile(r"아침|점심|저녁|식사|meal|밥|breakfast|lunch|dinner", re.I), MEALS),
    (
        re.compile(r"헬스|운동|러닝|조깅|요가|수영|pt|gym|run|jog|필라테스|산책", re.I),
        EXERCISE,
    ),
    (re.compile(r"출근|퇴근|통근|지하철|버스|이동|commute"), COMMUTE),
    (
        re.compile(r"회의|미팅|콜|sync|stand ?up|면접|발표|클라이언트|meeting|call"),
        MEETINGS,
    ),
    (
        re.compile(
            r"공부|학습|스터디|study|과제|시험|테스트|평가|op?ic|토익|토플|텝스|시험 준비|자격증",
            re.I,
        ),
        STUDY,
    ),
    (
        re.compile(r"정리|가계부|세금|청구|서류|행정|메일|관리|admin|잡무|보고|리포트", re.I),
        ADMIN,
    ),
    (re.compile(r"청소|빨래|설거지|집안일|마트|장보기|요리|정리", re.I), CHORES),
    (
        re.compile(
            r"영화|게임|카페|데이트|산책|휴식|레저|취미|유튜브|leisure|rest|break"
            r"|독서|책|reading|뮤지컬|공연",
            re.I,
        ),
        LEISURE,
    ),
    (
        re.compile(r"개발|코딩|프로그래밍|작업|업무|work|dev|code|프로젝트|개발 업무", re.I),
        DEEP_WORK,
    ),
)
_STUDY_TASK_RE = re.compile(r"준비|시험|공부|학습", re.I)


def _start_hour(start: Any) -> int | None:
    raw = str(start or "00:00").split(":")[0]
    if not raw.strip():
        return 0
    try:
        return int(raw)
    except ValueError:
        return None


def _lifestyle_hour_category(hour: int | None) -> str | None:
    if hour is None:
        return None
    if hour < 6:
        return SLEEP
    if 7 <= hour < 9 or 12 <= hour < 14 or 18 <= hour < 21:
        return MEALS
    return None


def infer_category(activity: Mapping[str, Any] | None = None) -> str:
    activity = activity or {}
    title = str(activity.get("title") or "").lower()
    activity_type = str(activity.get("type") or "").lower()

    for pattern, category in _TITLE_RULES:
        if pattern.search(title):
            return category

    if activity_type == "lifestyle":
        by_hour = _lifestyle_hour_category(_start_hour(activity.get("start")))
        if by_hour:
            return by_hour

    if activity_type == "task":
        return STUDY if _STUDY_TASK_RE.search(title) else DEEP_WORK

    return UNCATEGORIZED
