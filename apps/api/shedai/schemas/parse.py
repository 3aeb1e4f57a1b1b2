from __future__ import annotations

from datetime import date as Date
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LifestyleParseRequest(BaseModel):
    text: str = Field(min_length=1, max_length=5000)


class LifestyleRecordOut(BaseModel):
    days: list[int] = Field(min_length=1)
    start: str = Field(pattern=r"^\d{2}:\d{2}$")
    end: str = Field(pattern=r"^\d{2}:\d{2}$")
    title: str = Field(min_length=1)
    category: str
    day_names: list[str] = Field(default_factory=list)
    crosses_midnight: bool = False


class LifestyleParseResponse(BaseModel):
    records: list[LifestyleRecordOut]


class TaskParseRequest(BaseModel):
    text: str = Field(min_length=1, max_length=2000)
    base_date: Date | None = None


class TaskRecordOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    deadline: datetime
    deadline_time: str = Field(default="23:59", alias="deadlineTime")
    importance: str  # 상, 중, 하
    difficulty: str  # 상, 중, 하
    description: str
    is_active: bool = Field(default=True, alias="isActive")
    persist_as_task: bool = Field(default=True, alias="persistAsTask")
    strict_deadline: bool = Field(default=False, alias="strictDeadline")
    needs_focus: bool = Field(default=False, alias="needsFocus")
    created_at: datetime = Field(alias="createdAt")


class TaskParseResponse(BaseModel):
    task: TaskRecordOut | None = None
    reason: str  # parsed, looks_like_prompt, not_a_task


class AppointmentDetectRequest(BaseModel):
    text: str = Field(min_length=1, max_length=500)


class AppointmentDetectResponse(BaseModel):
    is_command: bool
    title: str | None = None


class PromptGuardRequest(BaseModel):
    text: str = Field(max_length=50_000)


class PromptGuardResponse(BaseModel):
    looks_like_prompt: bool
