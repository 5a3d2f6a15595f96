# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from carpricing.shared.errors.base import AppError


class SessionMetaDTO(BaseModel):
    user_id: int = 0


class MetaDTO(BaseModel):
    affected_rows: int = 0
    session: SessionMetaDTO = Field(default_factory=SessionMetaDTO)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    request_id: str | None = None


class ApiResponse(BaseModel):
    action: str
    success: bool
    message: str
    meta: MetaDTO = Field(default_factory=MetaDTO)
    data: Any = None
    error: str | None = None
    context: dict[str, Any] | None = None

    @classmethod
    def ok(
        cls,
        action: str,
        message: str,
        data: Any = None,
        *,
        affected_rows: int = 0,
    ) -> ApiResponse:
        return cls(
            action=action,
            success=True,
            message=message,
            meta=MetaDTO(affected_rows=affected_rows),
            data=data,
        )

    @classmethod
    def failure(cls, action: str, error: AppError) -> ApiResponse:
        return cls(
            action=action,
            success=False,
            message=error.public_message,
            data=None,
            error=error.code,
            context=dict(error.context) if error.context else None,
        )
