from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from shedai.core.config import settings
from shedai.core.rate_limit import limit_parse_requests
from shedai.schemas.parse import (
    AppointmentDetectRequest,
    AppointmentDetectResponse,
    LifestyleParseRequest,
    LifestyleParseResponse,
    LifestyleRecordOut,
    PromptGuardRequest,
    PromptGuardResponse,
    TaskParseRequest,
    TaskParseResponse,
    TaskRecordOut,
)
from shedai.services.appointment_rules import (
    ends_with_appointment_command,
    extract_appointment_title,
)
from shedai.services.category_classifier import infer_category
from shedai.services.dates import korean_day_name
from shedai.services.korean_time import hhmm_to_minutes
from shedai.services.lifestyle_parse import LifestyleRecord, parse_lifestyle_lines
from shedai.services.privacy import text_digest
from shedai.services.prompt_guards import looks_like_system_prompt
from shedai.services.task_parse import parse_korean_task_sentence

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(limit_parse_requests)])


def _error_payload(
    *,
    code: str,
    message: str,
    request_id: str,
    retryable: bool = False,
) -> dict[str, Any]:
    hint = f"Reference ID: {request_id}"
    if retryable:
        hint = f"{hint}. Please retry once in a few seconds."
    return {
        "code": code,
        "message": message,
        "hint": hint,
        "retryable": retryable,
    }


def _lifestyle_out(record: LifestyleRecord) -> LifestyleRecordOut:
    start_min = hhmm_to_minutes(record.start)
    end_min = hhmm_to_minutes(record.end)
    return LifestyleRecordOut(
        days=list(record.days),
        start=record.start,
        end=record.end,
        title=record.title,
        category=infer_category(
            {"title": record.title, "type": "lifestyle", "start": record.start}
        ),
        day_names=[korean_day_name(day) for day in record.days],
        crosses_midnight=(
            start_min is not None and end_min is not None and end_min < start_min
        ),
    )


@router.post("/lifestyle/parse", response_model=LifestyleParseResponse)
async def parse_lifestyle(body: LifestyleParseRequest) -> LifestyleParseResponse:
    line_count = sum(1 for line in body.text.split("\n") if line.strip())
    if line_count > settings.lifestyle_max_lines:
        raise HTTPException(
            status_code=422,
            detail=_error_payload(
                code="LIFESTYLE_TOO_MANY_LINES",
                message=f"At most {settings.lifestyle_max_lines} lifestyle lines are accepted.",
                request_id=uuid4().hex[:12],
            ),
        )

    records = [_lifestyle_out(record) for record in parse_lifestyle_lines(body.text)]
    logger.info(
        "lifestyle parsed: lines=%s records=%s digest=%s",
        line_count,
        len(records),
        text_digest(body.text),
    )
    return LifestyleParseResponse(records=records)


@router.post("/tasks/parse", response_model=TaskParseResponse)
async def parse_task(body: TaskParseRequest) -> TaskParseResponse:
    digest = text_digest(body.text)
    if looks_like_system_prompt(body.text, max_chars=settings.prompt_guard_max_chars):
        logger.info("task parse skipped: prompt-like text digest=%s", digest)
        return TaskParseResponse(task=None, reason="looks_like_prompt")

    now = datetime.now()
    task = parse_korean_task_sentence(body.text, base_date=body.base_date or now, now=now)
    if task is None:
        logger.debug("task parse: not a task digest=%s", digest)
        return TaskParseResponse(task=None, reason="not_a_task")

    logger.info(
        "task parsed: deadline=%s importance=%s difficulty=%s digest=%s",
        task.deadline.date().isoformat(),
        task.importance,
        task.difficulty,
        digest,
    )
    return TaskParseResponse(
        task=TaskRecordOut(
            title=task.title,
            deadline=task.deadline,
            deadline_time=task.deadline_time,
            importance=task.importance,
            difficulty=task.difficulty,
            description=task.description,
            is_active=task.is_active,
            persist_as_task=task.persist_as_task,
            strict_deadline=task.strict_deadline,
            needs_focus=task.needs_focus,
            created_at=task.created_at,
        ),
        reason="parsed",
    )


@router.post("/appointments/detect", response_model=AppointmentDetectResponse)
async def detect_appointment(body: AppointmentDetectRequest) -> AppointmentDetectResponse:
    if not ends_with_appointment_command(body.text):
        return AppointmentDetectResponse(is_command=False, title=None)
    return AppointmentDetectResponse(
        is_command=True, title=extract_appointment_title(body.text)
    )


@router.post("/prompt-guard", response_model=PromptGuardResponse)
async def prompt_guard(body: PromptGuardRequest) -> PromptGuardResponse:
    verdict = looks_like_system_prompt(
        body.text, max_chars=settings.prompt_guard_max_chars
    )
    logger.debug("prompt guard: verdict=%s chars=%s", verdict, len(body.text))
    return PromptGuardResponse(looks_like_prompt=verdict)
