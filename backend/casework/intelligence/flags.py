from __future__ import annotations

from casework.intelligence.documents import (
    has_documents,
    has_travel_history,
    has_uploaded_financial_document,
    mentions_prior_denial,
    missing_count,
)
from casework.intelligence.types import CaseRecord

LOW_PROBABILITY_THRESHOLD = 50

PRIOR_DENIAL_FLAG = 'Previous visa denial detected'
NO_FINANCIAL_DOCUMENTATION_FLAG = 'No financial documentation provided'
NO_TRAVEL_HISTORY_FLAG = 'No previous travel history documented'


def missing_documents_flag(missing: int) -> str:
    suffix = 's' if missing > 1 else ''
    return f'{missing} required document{suffix} missing'


def low_probability_flag(success_probability: int) -> str:
    return f'Low success probability ({success_probability}%) - requires additional documentation'


def extract_risk_flags(case: CaseRecord, success_probability: int) -> list[str]:
    flags: list[str] = []

    if has_documents(case):
        missing = missing_count(case)
        if missing > 0:
            flags.append(missing_documents_flag(missing))

    for alert in case.alert_list:
        if alert.is_urgent:
            flags.append(alert.message)

    if success_probability < LOW_PROBABILITY_THRESHOLD:
        flags.append(low_probability_flag(success_probability))

    if mentions_prior_denial(case):
        flags.append(PRIOR_DENIAL_FLAG)

    if has_documents(case) and not has_uploaded_financial_document(case):
        flags.append(NO_FINANCIAL_DOCUMENTATION_FLAG)

    if not has_travel_history(case):
        flags.append(NO_TRAVEL_HISTORY_FLAG)

    return flags
