from __future__ import annotations

from casework.intelligence.documents import has_documents, has_uploaded_financial_document, missing_count
from casework.intelligence.types import CaseRecord
from casework.models import RiskLevel

# Evaluated top-down, first threshold reached wins.
RISK_LEVEL_THRESHOLDS = (
    (5, RiskLevel.CRITICAL),
    (3, RiskLevel.HIGH),
    (1, RiskLevel.MEDIUM),
)


def count_risk_indicators(case: CaseRecord, success_probability: int) -> int:
    indicators = 0

    if has_documents(case):
        missing = missing_count(case)
        if missing > 2:
            indicators += 1
        if missing > 5:
            indicators += 1

    alerts = case.alert_list
    indicators += sum(1 for alert in alerts if alert.is_urgent)

    if any(alert.type == 'deadline-warning' or alert.mentions('suspicious') for alert in alerts):
        indicators += 1

    if success_probability < 40:
        indicators += 2
    elif success_probability < 60:
        indicators += 1

    if has_documents(case) and not has_uploaded_financial_document(case):
        indicators += 1

    return indicators


def risk_level_from_indicators(indicators: int) -> str:
    for threshold, level in RISK_LEVEL_THRESHOLDS:
        if indicators >= threshold:
            return level
    return RiskLevel.LOW


def determine_risk_level(case: CaseRecord, success_probability: int) -> str:
    return risk_level_from_indicators(count_risk_indicators(case, success_probability))
