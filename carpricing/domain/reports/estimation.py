# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Comparable-report selection for price estimates.

A report is comparable to a query when it is approved, has the same make and
model, lies within ``COORDINATE_WINDOW`` degrees on each axis independently and
within ``YEAR_WINDOW`` model years. Comparables are ordered by mileage distance
from the query, *largest distance first*, and the first ``SAMPLE_SIZE`` are
averaged.

The furthest-first ordering is the documented behaviour of the pricing product
and is kept as is until product confirms whether closest-first was intended.
Storage backends that compute the estimate natively must follow the same rules.
"""

from __future__ import annotations

from collections.abc import Iterable

from .entities import EstimateQuery, Report

COORDINATE_WINDOW = 5
YEAR_WINDOW = 3
SAMPLE_SIZE = 3


def is_comparable(report: Report, query: EstimateQuery) -> bool:
    return all(
        [
            report.approved,
            report.make == query.make,
            report.model == query.model,
            abs(report.longitude - query.longitude) <= COORDINATE_WINDOW,
            abs(report.latitude - query.latitude) <= COORDINATE_WINDOW,
            abs(report.year - query.year) <= YEAR_WINDOW,
        ]
    )


def mileage_distance(report: Report, query: EstimateQuery) -> float:
    return abs(report.mileage - query.mileage)


def select_comparables(reports: Iterable[Report], query: EstimateQuery) -> list[Report]:
    candidates = [report for report in reports if is_comparable(report, query)]
    # sorted() is stable, ties keep storage order
    candidates = sorted(
        candidates, key=lambda report: mileage_distance(report, query), reverse=True
    )
    return candidates[:SAMPLE_SIZE]


def estimate_price(reports: Iterable[Report], query: EstimateQuery) -> float | None:
    """Return the mean price of the selected comparables, ``None`` if there are none."""

    sample = select_comparables(reports, query)
    if not sample:
        return None
    return sum(float(report.price) for report in sample) / len(sample)
