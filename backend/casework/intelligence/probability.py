from __future__ import annotations

import math

from casework.intelligence.documents import (
    has_documents,
    has_travel_history,
    has_uploaded_financial_document,
    mentions_prior_denial,
    required_count,
    uploaded_count,
)
from casework.intelligence.types import CaseRecord

BASE_PROBABILITY = 70
MIN_PROBABILITY = 10
MAX_PROBABILITY = 95

HIGH_SUCCESS_COUNTRIES = {'canada', 'australia', 'uk'}
MEDIUM_SUCCESS_COUNTRIES = {'usa', 'germany', 'france'}

# First matching keyword wins.
VISA_TYPE_ADJUSTMENTS = (
    ('tourist', 5),
    ('student', -5),
    ('work', 10),
)


def visa_type_adjustment(visa_type: str | None) -> int:
    lowered = (visa_type or '').lower()
    for keyword, points in VISA_TYPE_ADJUSTMENTS:
        if keyword in lowered:
            return points
    return 0


def country_adjustment(country: str | None) -> int:
    normalized = (country or '').strip().lower()
    if normalized in HIGH_SUCCESS_COUNTRIES:
        return 10
    if normalized in MEDIUM_SUCCESS_COUNTRIES:
        return 5
    return 0


def completeness_penalty(case: CaseRecord) -> float:
    if not has_documents(case):
        return 0.0

    required = required_count(case)
    if required == 0:
        return 0.0

    ratio = uploaded_count(case) / required
    if ratio < 1:
        return (1 - ratio) * 20
    return 0.0


def clamp_probability(value: float) -> int:
    clamped = max(MIN_PROBABILITY, min(MAX_PROBABILITY, value))
    return int(math.floor(clamped + 0.5))


def calculate_success_probability(case: CaseRecord) -> int:
    probability: float = BASE_PROBABILITY

    probability += visa_type_adjustment(case.visa_type)
    probability += country_adjustment(case.country)

    if has_documents(case) and has_uploaded_financial_document(case):
        probability += 15

    if has_travel_history(case):
        probability += 10

    if mentions_prior_denial(case):
        probability -= 20

    probability -= completeness_penalty(case)

    return clamp_probability(probability)
