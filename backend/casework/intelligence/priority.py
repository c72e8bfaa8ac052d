from __future__ import annotations

from datetime import date, datetime, time, timezone as dt_timezone
import math
from typing import Any

from django.utils import timezone

from casework.intelligence.types import CaseRecord
from casework.models import ScorePriority

SECONDS_PER_DAY = 24 * 60 * 60


def _as_aware_datetime(value: Any) -> datetime | None:
    if value is None:
        return None

    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        try:
            value = datetime.fromisoformat(candidate.replace('Z', '+00:00'))
        except ValueError:
            return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=dt_timezone.utc)
        return value

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=dt_timezone.utc)

    return None


def days_until(value: Any, now: datetime | None = None) -> int | None:
    target = _as_aware_datetime(value)
    if target is None:
        return None
    current = _as_aware_datetime(now) or timezone.now()
    return math.ceil((target - current).total_seconds() / SECONDS_PER_DAY)


def determine_priority(case: CaseRecord, now: datetime | None = None) -> str:
    if case.priority == ScorePriority.URGENT:
        return ScorePriority.URGENT
    if case.priority == ScorePriority.EXPRESS:
        return ScorePriority.EXPRESS

    days = days_until(case.expected_decision_date, now=now)
    if days is not None:
        if days <= 7:
            return ScorePriority.URGENT
        # Unreachable while the seven-day branch comes first.
        if days <= 2:
            return ScorePriority.EXPRESS

    if any(alert.is_urgent for alert in case.alert_list):
        return ScorePriority.URGENT

    return ScorePriority.NORMAL
