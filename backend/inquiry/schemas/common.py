"""Shared pydantic bases for the inquiry screens."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ReportType = Literal["browser", "excel", "email", "emailExcel"]
ExportFormat = Literal["xlsx", "csv"]


class CamelModel(BaseModel):
    """Snake-case in Python, camelCase on the wire (what the screens and gateway speak)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GatewayRow(CamelModel):
    """A result row from a gateway search; unknown columns are kept as-is.

    Identifiers arrive as numbers from some gateway builds, so numbers are
    accepted wherever a string column is declared.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class ValidationOut(CamelModel):
    is_valid: bool
    errors: list[str]
