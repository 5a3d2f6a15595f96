# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import EstimateQuery, Report


class ReportRepository(Protocol):
    def find_by_id(self, report_id: int) -> Report | None: ...
    def add(self, report: Report) -> Report: ...
    def update(self, report: Report) -> Report: ...
    def aggregate_estimate(self, query: EstimateQuery) -> float | None: ...
