"""Dropdown filter fields and values for the inquiry screens."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from inquiry.core.audit import log_audit
from inquiry.core.cache import filter_value_cache
from inquiry.core.deps import get_filter_service
from inquiry.schemas.filters import (
    CacheClearOut,
    FilterField,
    FilterValuesOut,
    ScreenFilterValuesOut,
)
from inquiry.services.filters import SCREEN_FIELDS, FilterValueService

router = APIRouter(prefix="/filters", tags=["filters"])


def _known_screen(screen: str) -> str:
    if screen not in SCREEN_FIELDS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown inquiry screen '{screen}'.",
        )
    return screen


@router.get("/values/{field_id}", response_model=FilterValuesOut)
async def get_filter_values(
    field_id: str,
    service: FilterValueService = Depends(get_filter_service),
) -> FilterValuesOut:
    """Values for one dropdown. Unknown fields answer with an empty list."""

    values, cached = await service.get_filter_values(field_id)
    return FilterValuesOut(field_id=field_id, values=values, cached=cached)


@router.get("/{screen}/fields", response_model=List[FilterField])
async def get_filter_fields(screen: str) -> List[FilterField]:
    return FilterValueService.get_filter_fields(_known_screen(screen))


@router.get("/{screen}/values", response_model=ScreenFilterValuesOut)
async def get_screen_filter_values(
    screen: str,
    service: FilterValueService = Depends(get_filter_service),
) -> ScreenFilterValuesOut:
    """Every dropdown on a screen, fetched concurrently."""

    fields = await service.get_screen_values(_known_screen(screen))
    return ScreenFilterValuesOut(screen=screen, fields=fields)


@router.delete("/cache", response_model=CacheClearOut)
async def clear_filter_cache(
    request: Request,
    field_id: Optional[str] = Query(None, description="Clear one field; omit to clear all"),
) -> CacheClearOut:
    removed = await filter_value_cache.ainvalidate(field_id)
    log_audit(request, "filter_cache", "CLEAR", {"field_id": field_id, "removed": removed})
    return CacheClearOut(removed=removed)
