# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation, InvariantViolationError
from .reports.entities import EstimateQuery, Report
from .users.entities import Session, User

__all__ = [
    "EstimateQuery",
    "InvariantViolation",
    "InvariantViolationError",
    "Report",
    "Session",
    "User",
]
