from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Any, Protocol

from casework.intelligence.types import CaseRecord
from casework.models import normalize_passport

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r'\s+')

MIN_PASSPORT_LENGTH = 6
MIN_NAME_LENGTH = 4


class DuplicateLookup(Protocol):
    def find_duplicates(
        self,
        *,
        passport_number: str | None,
        email: str | None,
        name: str | None,
        country: str | None,
        exclude_id: Any = None,
    ) -> list[Any]:
        ...


@dataclass
class DuplicateKeys:
    passport_number: str | None = None
    email: str | None = None
    name: str | None = None
    country: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.passport_number or self.email or self.name)


def normalize_email(value: Any) -> str:
    return str(value or '').strip().lower()


def normalize_name(value: Any) -> str:
    return WHITESPACE_PATTERN.sub(' ', str(value or '')).strip().casefold()


def duplicate_keys_for(case: CaseRecord) -> DuplicateKeys:
    passport_number = normalize_passport(case.passport_number)
    email = normalize_email(case.client_email)
    name = normalize_name(case.client_name)
    country = (case.country or '').strip()

    return DuplicateKeys(
        passport_number=passport_number if len(passport_number) >= MIN_PASSPORT_LENGTH else None,
        email=email if '@' in email else None,
        # Names only match within the same destination country.
        name=name if len(name) >= MIN_NAME_LENGTH and country else None,
        country=country or None,
    )


def detect_duplicates(
    case: CaseRecord,
    current_case_id: Any = None,
    repository: DuplicateLookup | None = None,
) -> bool:
    """Report whether another stored case shares this applicant's identity.

    Matches on normalized passport number, email, or name within the same
    destination country. Without a repository there is nothing to compare
    against and the answer is ``False``. Lookup failures are logged and
    reported as ``False``; this function does not raise.
    """
    try:
        if repository is None:
            return False

        keys = duplicate_keys_for(case)
        if keys.is_empty:
            return False

        matches = repository.find_duplicates(
            passport_number=keys.passport_number,
            email=keys.email,
            name=keys.name,
            country=keys.country,
            exclude_id=current_case_id,
        )
        return bool(matches)
    except Exception:
        logger.warning('Duplicate detection failed (case_id=%s).', current_case_id, exc_info=True)
        return False
