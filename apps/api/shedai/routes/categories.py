from __future__ import annotations

from fastapi import APIRouter

from shedai.schemas.categories import (
    CategoryResponse,
    ClassifyCategoryRequest,
    NormalizeCategoryRequest,
)
from shedai.services.category_alias import normalize_category_name
from shedai.services.category_classifier import infer_category

router = APIRouter()


@router.post("/categories/classify", response_model=CategoryResponse)
async def classify_category(body: ClassifyCategoryRequest) -> CategoryResponse:
    return CategoryResponse(
        category=infer_category(
            {"title": body.title, "type": body.type, "start": body.start}
        )
    )


@router.post("/categories/normalize", response_model=CategoryResponse)
async def normalize_category(body: NormalizeCategoryRequest) -> CategoryResponse:
    return CategoryResponse(category=normalize_category_name(body.name))
