from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _as_list(value: Any) -> list[Any] | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@dataclass
class CaseDocument:
    type: str
    uploaded: bool = False
    required: bool = False
    name: str | None = None

    @classmethod
    def coerce(cls, value: Any) -> CaseDocument:
        if isinstance(value, cls):
            return value
        data = value if isinstance(value, Mapping) else {}
        return cls(
            type=str(data.get('type') or ''),
            uploaded=bool(data.get('uploaded', False)),
            required=bool(data.get('required', False)),
            name=data.get('name'),
        )

    @property
    def is_financial(self) -> bool:
        return 'financial' in (self.type or '').lower()


@dataclass
class CaseAlert:
    message: str
    severity: str = 'info'
    type: str = ''
    resolved: bool = False

    @classmethod
    def coerce(cls, value: Any) -> CaseAlert:
        if isinstance(value, cls):
            return value
        data = value if isinstance(value, Mapping) else {}
        return cls(
            message=str(data.get('message') or ''),
            severity=str(data.get('severity') or 'info'),
            type=str(data.get('type') or ''),
            resolved=bool(data.get('resolved', False)),
        )

    @property
    def is_urgent(self) -> bool:
        return self.severity == 'error' or self.type == 'urgent-action'

    def mentions(self, *needles: str) -> bool:
        message = (self.message or '').lower()
        return any(needle in message for needle in needles)


@dataclass
class CaseRecord:
    """Read-only view of one visa case as the scoring engine sees it.

    Optional collections stay ``None`` when the caller did not supply them;
    the engine distinguishes "absent" from "empty" for documents.
    """

    visa_type: str
    country: str
    documents: list[CaseDocument] | None = None
    travel_history: list[Any] | None = None
    alerts: list[CaseAlert] | None = None
    priority: str | None = None
    expected_decision_date: datetime | date | None = None
    passport_number: str | None = None
    client_name: str | None = None
    client_email: str | None = None

    def __post_init__(self):
        if self.documents is not None:
            self.documents = [CaseDocument.coerce(item) for item in self.documents]
        if self.alerts is not None:
            self.alerts = [CaseAlert.coerce(item) for item in self.alerts]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> CaseRecord:
        return cls(
            visa_type=str(_pick(payload, 'visa_type', 'visaType') or ''),
            country=str(_pick(payload, 'country') or ''),
            documents=_as_list(_pick(payload, 'documents')),
            travel_history=_as_list(_pick(payload, 'travel_history', 'travelHistory')),
            alerts=_as_list(_pick(payload, 'alerts')),
            priority=_pick(payload, 'priority'),
            expected_decision_date=_pick(payload, 'expected_decision_date', 'expectedDecisionDate'),
            passport_number=_pick(payload, 'passport_number', 'passportNumber'),
            client_name=_pick(payload, 'client_name', 'clientName'),
            client_email=_pick(payload, 'client_email', 'clientEmail'),
        )

    @property
    def alert_list(self) -> list[CaseAlert]:
        return self.alerts or []


@dataclass
class Recommendations:
    improvements: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, list[str]]:
        return {
            'improvements': list(self.improvements),
            'strengths': list(self.strengths),
        }


@dataclass
class ScoreResult:
    success_probability: int
    risk_level: str
    duplicate_detected: bool
    priority: str
    risk_flags: list[str]
    recommendations: Recommendations
