from __future__ import annotations

from pydantic import BaseModel, Field


class ClassifyCategoryRequest(BaseModel):
    title: str = Field(default="", max_length=200)
    type: str | None = Field(default=None, max_length=20)  # lifestyle, task, appointment
    start: str | None = Field(default=None, max_length=5)


class NormalizeCategoryRequest(BaseModel):
    name: str = Field(default="", max_length=100)


class CategoryResponse(BaseModel):
    category: str
