from __future__ import annotations

from casework.intelligence.types import CaseRecord


def has_documents(case: CaseRecord) -> bool:
    return case.documents is not None


def required_count(case: CaseRecord) -> int:
    return sum(1 for doc in case.documents or [] if doc.required)


def uploaded_count(case: CaseRecord) -> int:
    return sum(1 for doc in case.documents or [] if doc.uploaded)


def missing_count(case: CaseRecord) -> int:
    # Uploaded optional documents offset missing required ones; can go negative.
    return required_count(case) - uploaded_count(case)


def has_uploaded_financial_document(case: CaseRecord) -> bool:
    return any(doc.is_financial and doc.uploaded for doc in case.documents or [])


def has_travel_history(case: CaseRecord) -> bool:
    return bool(case.travel_history)


def mentions_prior_denial(case: CaseRecord) -> bool:
    return any(alert.mentions('denied', 'rejected') for alert in case.alert_list)
