# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from carpricing.shared.errors.validation import raise_validation_error

T = TypeVar("T", bound=BaseModel)


def parse_body(dto: type[T]) -> T:
    try:
        return dto.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


def parse_query(dto: type[T]) -> T:
    try:
        return dto.model_validate(request.args.to_dict())
    except ValidationError as exc:
        raise_validation_error(exc)
