"""Base pydantic models for the camelCase JSON contract."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from tryluck.core.utils.dates import parse_day

# Largest value an INTEGER column holds on every supported backend.
INT_MAX = 2**31 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class LenientModel(CamelModel):
    """Input model for client-authored data: nulls and empty strings fall back to defaults."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None and value != ""}
        return data


def jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err:
            err.pop("input")
    return errors


def _to_day(value: Any) -> Any:
    if value is None:
        return None
    # Unparseable input is passed through so pydantic reports it.
    day = parse_day(value)
    return value if day is None else day


# Calendar day that also accepts full ISO timestamps (keeps the date part).
LenientDay = Annotated[Optional[date], BeforeValidator(_to_day)]
