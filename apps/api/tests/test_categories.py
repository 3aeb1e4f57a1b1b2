from __future__ import annotations

import pytest

from shedai.services.category_alias import normalize_category_name
from shedai.services.category_classifier import (
    ADMIN,
    CATEGORIES,
    CHORES,
    COMMUTE,
    DEEP_WORK,
    EXERCISE,
    LEISURE,
    MEALS,
    MEETINGS,
    SLEEP,
    STUDY,
    UNCATEGORIZED,
    infer_category,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("수면", SLEEP),
        ("점심 식사", MEALS),
        ("헬스장 PT", EXERCISE),
        ("지하철 이동", COMMUTE),
        ("팀 회의", MEETINGS),
        ("토익 공부", STUDY),
        ("가계부 정리", ADMIN),
        ("빨래", CHORES),
        ("영화 보기", LEISURE),
        ("코딩", DEEP_WORK),
    ],
)
def test_infer_category_from_title_keywords(title: str, expected: str) -> None:
    assert infer_category({"title": title}) == expected


def test_infer_category_first_matching_group_wins() -> None:
    assert infer_category({"title": "점심 후 낮잠"}) == SLEEP
    assert infer_category({"title": "아침 운동"}) == MEALS
    assert infer_category({"title": "산책"}) == EXERCISE


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        ("03:00", SLEEP),
        ("07:30", MEALS),
        ("12:30", MEALS),
        ("19:00", MEALS),
        ("06:30", UNCATEGORIZED),
        ("10:00", UNCATEGORIZED),
        ("21:00", UNCATEGORIZED),
    ],
)
def test_infer_category_lifestyle_time_of_day_fallback(start: str, expected: str) -> None:
    assert infer_category({"title": "브런치", "type": "lifestyle", "start": start}) == expected


def test_infer_category_lifestyle_without_start_treated_as_midnight() -> None:
    assert infer_category({"title": "", "type": "lifestyle"}) == SLEEP


def test_infer_category_task_fallbacks() -> None:
    assert infer_category({"title": "자격 준비", "type": "task"}) == STUDY
    assert infer_category({"title": "신규 기능 기획", "type": "task"}) == DEEP_WORK


def test_infer_category_defaults_to_uncategorized() -> None:
    assert infer_category({"title": "브런치"}) == UNCATEGORIZED
    assert infer_category({}) == UNCATEGORIZED
    assert infer_category(None) == UNCATEGORIZED


def test_infer_category_returns_known_vocabulary() -> None:
    samples = ["수면", "브런치", "코딩", "청소", "", "출근"]
    for title in samples:
        for activity_type in ("lifestyle", "task", None):
            category = infer_category({"title": title, "type": activity_type, "start": "10:00"})
            assert category in CATEGORIES


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("deep work", DEEP_WORK),
        ("DeepWork", DEEP_WORK),
        ("집중작업", DEEP_WORK),
        ("공부", STUDY),
        ("Study group", STUDY),
        ("요가", EXERCISE),
        ("점심", MEALS),
        ("정리", CHORES),
        ("메일", ADMIN),
        ("휴식", LEISURE),
        ("휴식/이동", COMMUTE),
        ("출근", COMMUTE),
        ("Meetings", "Meetings"),
        ("  Sleep ", "Sleep"),
        ("", UNCATEGORIZED),
        ("   ", UNCATEGORIZED),
        (None, UNCATEGORIZED),
    ],
)
def test_normalize_category_name(name: str | None, expected: str) -> None:
    assert normalize_category_name(name) == expected


@pytest.mark.parametrize(
    "name",
    [
        "deep work",
        "집중업무",
        "공부",
        "헬스",
        "저녁",
        "청소",
        "서류",
        "게임",
        "퇴근",
        "Meetings",
        "뭔가 새로운 것",
        "",
        *CATEGORIES,
    ],
)
def test_normalize_category_name_is_idempotent(name: str) -> None:
    once = normalize_category_name(name)
    assert normalize_category_name(once) == once
