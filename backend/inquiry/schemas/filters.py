"""Pydantic models for dropdown filter metadata and gateway list envelopes."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilterField(BaseModel):
    """A dropdown category shown on an inquiry screen."""

    field_id: str = Field(description="Identifier sent back with search criteria")
    field_desc: str = Field(description="Label displayed next to the dropdown")


class FilterValue(BaseModel):
    """One selectable option inside a filter field."""

    model_config = ConfigDict(frozen=True)

    field_id: str
    filter_id: str
    filter_desc: str


class FilterValuesOut(BaseModel):
    field_id: str
    values: List[FilterValue] = Field(default_factory=list)
    cached: bool = Field(default=False, description="Served from the filter value cache")


class ScreenFilterValuesOut(BaseModel):
    screen: str
    fields: dict[str, List[FilterValue]] = Field(default_factory=dict)


class CacheClearOut(BaseModel):
    removed: int


class GatewayListEnvelope(BaseModel):
    """The wrapped shape the gateway uses for most list endpoints.

    ``{data: [...], success, message, correlationId}``; bare arrays and other
    property names are handled by :func:`inquiry.services.normalize.extract_records`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    data: Any = None
    success: Any = None
    message: Any = None
    correlation_id: Any = Field(default=None, alias="correlationId")


class GatewaySearchEnvelope(BaseModel):
    """Envelope returned by the gateway's POST search endpoints."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    data: Optional[List[dict[str, Any]]] = None
    items: Optional[List[dict[str, Any]]] = None
    success: Optional[bool] = True
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    message: Optional[str] = None
    total_count: Optional[int] = Field(default=None, alias="totalCount")
    total_records: Optional[int] = Field(default=None, alias="totalRecords")

    @property
    def records(self) -> List[dict[str, Any]]:
        if self.items is not None:
            return self.items
        return self.data or []
