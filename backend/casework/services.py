from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Iterable

from django.conf import settings
from django.utils import timezone

from casework.intelligence.engine import CaseIntelligenceEngine
from casework.intelligence.types import CaseRecord, ScoreResult
from casework.models import VisaCase
from casework.repositories import VisaCaseDuplicateLookup


def duplicate_detection_enabled() -> bool:
    return bool(getattr(settings, 'CASE_DUPLICATE_DETECTION_ENABLED', True))


def build_case_record(visa_case: VisaCase) -> CaseRecord:
    client = visa_case.client if visa_case.client_id else None

    travel_history = visa_case.travel_history
    if not travel_history and client is not None and client.travel_history:
        travel_history = client.travel_history

    passport_number = visa_case.passport_number or (client.passport_number if client else '')
    client_email = visa_case.client_email or (client.email if client else '')

    return CaseRecord(
        visa_type=visa_case.visa_type or '',
        country=visa_case.country or '',
        documents=visa_case.documents,
        travel_history=travel_history,
        alerts=visa_case.alerts,
        priority=visa_case.priority,
        expected_decision_date=visa_case.expected_decision_date,
        passport_number=passport_number or None,
        client_name=visa_case.client_name or (client.full_name if client else None),
        client_email=client_email or None,
    )


def build_engine(now: datetime | None = None) -> CaseIntelligenceEngine:
    duplicate_lookup = VisaCaseDuplicateLookup() if duplicate_detection_enabled() else None
    return CaseIntelligenceEngine(duplicate_lookup=duplicate_lookup, now=now)


def score_visa_case(visa_case: VisaCase, engine: CaseIntelligenceEngine | None = None) -> ScoreResult:
    engine = engine or build_engine()
    return engine.run(build_case_record(visa_case), case_id=visa_case.pk)


def _isoformat(value: datetime | None) -> str:
    return (value or timezone.now()).isoformat()


def build_case_intelligence_payload(
    visa_case: VisaCase,
    result: ScoreResult,
    include_recommendations: bool = False,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        'id': str(visa_case.pk),
        'caseId': visa_case.case_id,
        'clientName': visa_case.display_client_name,
        'visaType': visa_case.visa_type or 'Unknown',
        'country': visa_case.country or 'Unknown',
        'successProbability': result.success_probability,
        'riskLevel': str(result.risk_level),
        'duplicateDetected': result.duplicate_detected,
        'priority': str(result.priority),
        'riskFlags': list(result.risk_flags),
    }
    if include_recommendations:
        payload['recommendations'] = result.recommendations.as_dict()
    payload['createdAt'] = _isoformat(visa_case.created_at)
    payload['updatedAt'] = _isoformat(visa_case.updated_at)
    return payload


def persist_score_snapshot(visa_case: VisaCase, result: ScoreResult) -> VisaCase:
    visa_case.success_probability = result.success_probability
    visa_case.risk_level = result.risk_level
    visa_case.scored_at = timezone.now()
    visa_case.save(update_fields=['success_probability', 'risk_level', 'scored_at'])
    return visa_case


def score_and_persist(visa_case: VisaCase, engine: CaseIntelligenceEngine | None = None) -> ScoreResult:
    result = score_visa_case(visa_case, engine=engine)
    persist_score_snapshot(visa_case, result)
    return result


def flatten_case_alerts(
    visa_cases: Iterable[VisaCase],
    resolved: bool | None = None,
    severity: str | None = None,
) -> list[dict[str, Any]]:
    flattened = []
    for visa_case in visa_cases:
        for index, alert in enumerate(visa_case.alerts or []):
            if not isinstance(alert, Mapping):
                continue
            if resolved is not None and bool(alert.get('resolved', False)) != resolved:
                continue
            if severity and alert.get('severity') != severity:
                continue
            flattened.append({
                **alert,
                'alertIndex': index,
                'caseId': visa_case.case_id,
                'clientName': visa_case.display_client_name,
                'caseStatus': visa_case.status,
            })
    return flattened


def add_case_alert(visa_case: VisaCase, alert: dict[str, Any]) -> VisaCase:
    entry = {
        'type': alert['type'],
        'message': alert['message'],
        'severity': alert.get('severity') or 'info',
        'triggeredDate': timezone.now().isoformat(),
        'resolved': False,
    }
    visa_case.alerts = [*(visa_case.alerts or []), entry]
    visa_case.save(update_fields=['alerts', 'updated_at'])
    return visa_case


def set_alert_resolution(visa_case: VisaCase, alert_index: int, resolved: bool) -> VisaCase:
    alerts = [dict(item) if isinstance(item, Mapping) else item for item in visa_case.alerts or []]
    if alert_index < 0 or alert_index >= len(alerts) or not isinstance(alerts[alert_index], Mapping):
        raise IndexError(alert_index)

    alerts[alert_index]['resolved'] = resolved
    if resolved:
        alerts[alert_index]['resolvedDate'] = timezone.now().isoformat()
    visa_case.alerts = alerts
    visa_case.save(update_fields=['alerts', 'updated_at'])
    return visa_case
