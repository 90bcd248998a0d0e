"""Daily entry form definition."""

from __future__ import annotations

import datetime as dt
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...services.habits import HabitValidationError, parse_entry_date, validate_coding_level

_TRUTHY = {"1", "true", "yes", "on"}


class HabitEntryForm(BaseModel):
    """The once-a-day submission: coding level, doomscroll flag and date."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    coding_level: int = Field(alias="codingLevel", description="0 none, 1 light, 2 heavy")
    doomscrolled: bool = Field(default=False, description="Whether the user doomscrolled")
    date: dt.date = Field(description="Day the entry is for")

    @field_validator("coding_level", mode="before")
    @classmethod
    def validate_level(cls, value: Any) -> int:
        """Parse the select value ("0", "1", "2") and range-check it."""

        if isinstance(value, str):
            text = value.strip()
            if not text.lstrip("-").isdigit():
                raise ValueError("Please choose a coding level.")
            value = int(text)
        try:
            return validate_coding_level(value)
        except HabitValidationError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("doomscrolled", mode="before")
    @classmethod
    def parse_checkbox(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return bool(value)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: Any) -> dt.date:
        if value is None or value == "":
            raise ValueError("Please provide the entry date.")
        try:
            return parse_entry_date(value)
        except HabitValidationError as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def from_payload(
        cls, payload: Mapping[str, Any]
    ) -> tuple["HabitEntryForm | None", dict[str, list[str]]]:
        """Validate a request payload, returning (form, errors)."""

        # Both the camelCase form name and the snake_case column name are accepted.
        data = {
            key: payload[key]
            for key in ("codingLevel", "coding_level", "doomscrolled", "date")
            if key in payload
        }
        try:
            return cls.model_validate(data), {}
        except ValidationError as exc:
            structured: dict[str, list[str]] = {}
            for error in exc.errors(include_url=False):
                loc = error.get("loc", ())
                key = str(loc[0]) if loc else "__root__"
                if key == "codingLevel":
                    key = "coding_level"
                structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
            return None, structured


__all__ = ["HabitEntryForm"]
