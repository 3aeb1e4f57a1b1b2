from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScheduleActivity(BaseModel):
    model_config = ConfigDict(extra="allow")

    start: str | None = None
    end: str | None = None
    category: str | None = None
    title: str | None = None
    type: str | None = None


class ScheduleDay(BaseModel):
    model_config = ConfigDict(extra="allow")

    day: int | None = None
    activities: list[ScheduleActivity] = Field(default_factory=list)


class ScheduleEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    scheduleData: list[ScheduleDay] | None = None
    schedule: list[ScheduleDay] | None = None


class ActivityMixResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    by_category: dict[str, int] = Field(default_factory=dict, alias="byCategory")
    total_minutes: int = Field(default=0, ge=0, alias="totalMinutes")
