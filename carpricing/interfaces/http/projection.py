"""Output shaping: every ``data`` payload is reduced to a DTO's declared fields."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def _as_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, BaseModel):
        return value.model_dump()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    return {
        name: getattr(value, name)
        for name in dir(value)
        if not name.startswith("_") and not callable(getattr(value, name, None))
    }


class FieldProjector:
    """Copy a produced value into ``dto``'s allow-list; anything else is dropped."""

    def __init__(self, dto: type[BaseModel]) -> None:
        self._dto = dto

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._dto.model_fields)

    def project(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return [self.project(item) for item in value]
        shaped = self._dto.model_validate(_as_mapping(value))
        return shaped.model_dump(mode="json")


__all__ = ["FieldProjector"]
