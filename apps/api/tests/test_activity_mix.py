from __future__ import annotations

import pytest

from shedai.services.activity_mix import (
    ActivityMixResult,
    activity_duration_minutes,
    categorize_schedule,
    compute_activity_mix,
)


def _day(*activities: dict, day: int = 1) -> dict:
    return {"day": day, "activities": list(activities)}


def _act(start: str | None, end: str | None, category: str | None = None, **extra) -> dict:
    return {"start": start, "end": end, "category": category, **extra}


@pytest.mark.parametrize("schedule", [None, [], [_day()], {"schedule": []}, "oops"])
def test_empty_schedule_yields_zero_result(schedule) -> None:
    assert compute_activity_mix(schedule) == ActivityMixResult(by_category={}, total_minutes=0)


def test_activities_without_both_times_are_skipped() -> None:
    result = compute_activity_mix(
        [_day(_act("09:00", None, "Study"), _act(None, "10:00", "Study"), _act("", "", "Study"))]
    )

    assert result.total_minutes == 0
    assert result.by_category == {}


def test_overnight_activity_wraps_midnight() -> None:
    result = compute_activity_mix([_day(_act("23:00", "07:00", "Sleep"))])

    assert result.total_minutes == 480
    assert result.by_category == {"Sleep": 100}


def test_mix_accumulates_across_days() -> None:
    schedule = [
        _day(_act("00:00", "07:00", "Sleep"), _act("09:00", "12:00", "Deep work"), day=1),
        _day(_act("00:00", "07:00", "Sleep"), _act("12:00", "13:00", "Meals"), day=2),
    ]

    result = compute_activity_mix(schedule)

    assert result.total_minutes == 420 + 180 + 420 + 60
    assert result.by_category == {"Sleep": 77, "Deep work": 17, "Meals": 6}
    assert sum(result.by_category.values()) == 100


def test_rounding_deficit_is_added_to_largest_category() -> None:
    schedule = [
        _day(
            _act("00:00", "01:00", "A"),
            _act("01:00", "02:00", "B"),
            _act("02:00", "03:00", "C"),
        )
    ]

    result = compute_activity_mix(schedule)

    # 33.3% each rounds to 99 in total; the first largest absorbs +1.
    assert result.by_category == {"A": 34, "B": 33, "C": 33}


def test_rounding_surplus_is_removed_from_largest_category() -> None:
    schedule = [
        _day(
            _act("00:00", "00:03", "A"),
            _act("01:00", "01:03", "B"),
            _act("02:00", "02:02", "C"),
        )
    ]

    result = compute_activity_mix(schedule)

    # 37.5 + 37.5 + 25 rounds half-up to 101; the first largest gives back 1.
    assert result.total_minutes == 8
    assert result.by_category == {"A": 37, "B": 38, "C": 25}


@pytest.mark.parametrize(
    "minutes",
    [
        [1, 1, 1],
        [7, 11, 13, 17],
        [100, 1],
        [3, 3, 3, 3, 3, 3, 3],
        [59, 61, 119, 1, 2],
    ],
)
def test_percentages_always_sum_to_100(minutes: list[int]) -> None:
    activities = [
        _act("00:00", f"{m // 60:02d}:{m % 60:02d}", f"cat-{i}") for i, m in enumerate(minutes)
    ]

    result = compute_activity_mix([_day(*activities)])

    assert result.total_minutes == sum(minutes)
    assert sum(result.by_category.values()) == 100


def test_missing_or_blank_category_counts_as_uncategorized() -> None:
    result = compute_activity_mix(
        [_day(_act("09:00", "10:00"), _act("10:00", "11:00", "  "), _act("11:00", "12:00", "Study"))]
    )

    assert result.by_category == {"Uncategorized": 67, "Study": 33}


@pytest.mark.parametrize("key", ["scheduleData", "schedule"])
def test_mix_accepts_wrapped_schedules(key: str) -> None:
    result = compute_activity_mix({key: [_day(_act("09:00", "10:00", "Study"))]})

    assert result.total_minutes == 60
    assert result.by_category == {"Study": 100}


def test_activity_duration_minutes() -> None:
    assert activity_duration_minutes("23:30", "00:30") == 60
    assert activity_duration_minutes("09:00", "09:00") == 0
    assert activity_duration_minutes("9", "10:15") == 75
    assert activity_duration_minutes("ab:cd", "01:00") == 60


def test_categorize_schedule_infers_and_normalizes() -> None:
    schedule = {
        "scheduleData": [
            _day(
                _act("12:00", "13:00", title="점심 식사"),
                _act("20:00", "22:00", "공부"),
                _act("22:00", "23:00", "Meetings"),
            )
        ]
    }

    categorized = categorize_schedule(schedule)

    assert [a["category"] for a in categorized[0]["activities"]] == ["Meals", "Study", "Meetings"]
    assert categorized[0]["day"] == 1
    assert schedule["scheduleData"][0]["activities"][0]["category"] is None
