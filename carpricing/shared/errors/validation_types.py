# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    BLANK = "blank"
    PASSWORD_TOO_SHORT = "password_too_short"
    YEAR_OUT_OF_RANGE = "year_out_of_range"
