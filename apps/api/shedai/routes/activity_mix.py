from __future__ import annotations

from fastapi import APIRouter, Query

from shedai.schemas.activity_mix import (
    ActivityMixResponse,
    ScheduleDay,
    ScheduleEnvelope,
)
from shedai.services.activity_mix import categorize_schedule, compute_activity_mix

router = APIRouter()


@router.post("/activity-mix", response_model=ActivityMixResponse)
async def activity_mix(
    body: list[ScheduleDay] | ScheduleEnvelope,
    categorize: bool = Query(default=True),
) -> ActivityMixResponse:
    if isinstance(body, list):
        schedule = [day.model_dump() for day in body]
    else:
        schedule = body.model_dump()

    if categorize:
        schedule = categorize_schedule(schedule)

    result = compute_activity_mix(schedule)
    return ActivityMixResponse(
        by_category=result.by_category,
        total_minutes=result.total_minutes,
    )
