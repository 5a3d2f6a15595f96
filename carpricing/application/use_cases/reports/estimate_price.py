# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from carpricing.domain.reports.entities import EstimateQuery
from carpricing.domain.reports.repositories import ReportRepository
from carpricing.shared.logging import logger


class EstimatePriceUseCase:
    def __init__(self, *, reports: ReportRepository) -> None:
        self._reports = reports

    def execute(self, query: EstimateQuery) -> float | None:
        price = self._reports.aggregate_estimate(query)
        if price is None:
            logger.info(f"reports.estimate: no comparables for {query.make} {query.model}")
        return price
