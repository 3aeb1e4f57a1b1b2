from __future__ import annotations

import re

from shedai.services.category_classifier import (
    ADMIN,
    CHORES,
    COMMUTE,
    DEEP_WORK,
    EXERCISE,
    LEISURE,
    MEALS,
    STUDY,
    UNCATEGORIZED,
)

# Order matters: "정리" is claimed by Chores before Admin sees it.
_ALIASES: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...] = (
    (DEEP_WORK, (re.compile(r"deep ?work", re.I), re.compile(r"집중(작업|업무)"))),
    (STUDY, (re.compile(r"study|공부|학습", re.I),)),
    (EXERCISE, (re.compile(r"운동|헬스|러닝|요가", re.I),)),
    (MEALS, (re.compile(r"식사|아침|점심|저녁", re.I),)),
    (CHORES, (re.compile(r"집안일|정리|청소|설거지", re.I),)),
    (ADMIN, (re.compile(r"보고|정리|메일|서류|행정|잡무", re.I),)),
    (LEISURE, (re.compile(r"여가|게임|취미|휴식(?!/)", re.I),)),
    (COMMUTE, (re.compile(r"출근|퇴근|통근|이동", re.I),)),
)


def normalize_category_name(name: str | None) -> str:
    value = str(name or "").strip()
    if not value:
        return UNCATEGORIZED
    for canonical, patterns in _ALIASES:
        if any(pattern.search(value) for pattern in patterns):
            return canonical
    return value
