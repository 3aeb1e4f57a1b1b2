from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime

import pytest

from shedai.services.dates import korean_day_name, to_iso_date_local, to_local_date
from shedai.services.error_log import log_system_error
from shedai.services.privacy import (
    mask_pii_text,
    redact_secrets_text,
    sanitize_for_log,
    text_digest,
)
from shedai.services.schedule_normalize import has_any_activities, normalize_schedule


@pytest.mark.parametrize(
    ("day", "expected"),
    [(1, "월요일"), (3, "수요일"), (7, "일요일"), (0, "알 수 없음"), (8, "알 수 없음")],
)
def test_korean_day_name(day: int, expected: str) -> None:
    assert korean_day_name(day) == expected


def test_to_iso_date_local_accepts_dates_datetimes_and_strings() -> None:
    assert to_iso_date_local("2024-03-05") == "2024-03-05"
    assert to_iso_date_local("2024-03-05T22:10:00") == "2024-03-05"
    assert to_iso_date_local(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"
    assert to_iso_date_local(date(2024, 3, 5)) == "2024-03-05"
    assert to_iso_date_local("not a date") is None
    assert to_iso_date_local(None) is None
    assert to_local_date("") is None


def test_normalize_schedule_shapes() -> None:
    days = [{"day": 1, "activities": []}]

    assert normalize_schedule(days) is days
    assert normalize_schedule({"scheduleData": days}) is days
    assert normalize_schedule({"schedule": days}) is days
    assert normalize_schedule({"scheduleData": "x", "schedule": days}) is days
    assert normalize_schedule({"other": days}) == []
    assert normalize_schedule(None) == []


def test_has_any_activities() -> None:
    assert has_any_activities([{"day": 1, "activities": []}]) is False
    assert has_any_activities({"schedule": [{"day": 1, "activities": [{"title": "x"}]}]}) is True
    assert has_any_activities([{"day": 1}]) is False
    assert has_any_activities(None) is False


def test_sanitize_for_log_masks_pii_and_secrets() -> None:
    value = {
        "email": "contact user@example.com",
        "auth": "Bearer abcdefghijklmnop",
        "nested": ["010-1234-5678", 3, True],
    }

    cleaned = sanitize_for_log(value)

    assert cleaned["email"] == "contact [REDACTED_EMAIL]"
    assert cleaned["auth"] == "Bearer [REDACTED_TOKEN]"
    assert cleaned["nested"] == ["[REDACTED_PHONE]", 3, True]
    assert mask_pii_text("") == ""
    assert redact_secrets_text("key AIza" + "A" * 35) == "key [REDACTED_GOOGLE_API_KEY]"


def test_log_system_error_logs_sanitized_record(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="shedai.services.error_log")

    try:
        raise ValueError("boom")
    except ValueError as exc:
        asyncio.run(
            log_system_error(
                route="/api/tasks/parse",
                message="Task parse failed for user@example.com",
                err=exc,
                meta={"digest": "abc"},
            )
        )

    assert "Task parse failed for [REDACTED_EMAIL]" in caplog.text
    assert "user@example.com" not in caplog.text
    assert "ValueError: boom" in caplog.text


def test_log_system_error_never_raises() -> None:
    class Unprintable:
        def __str__(self) -> str:
            raise RuntimeError("cannot render")

    asyncio.run(log_system_error(route="/x", message="m", meta={"bad": Unprintable()}))


def test_text_digest_is_stable_and_does_not_leak_text() -> None:
    digest = text_digest("매일 00:00~07:00 수면")

    assert digest == text_digest("매일 00:00~07:00 수면")
    assert len(digest) == 16
    assert "수면" not in digest
