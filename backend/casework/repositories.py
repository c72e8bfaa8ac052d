from __future__ import annotations

from typing import Any

from django.db.models import CharField, Q, QuerySet, Value
from django.db.models.functions import Concat

from casework.models import VisaCase


class VisaCaseDuplicateLookup:
    """Finds stored cases that share an applicant identity key.

    Each key is compared against the case's own identity fields and against
    the linked client, so a case that inherits its identity from the client
    matches the same way as one that carries it explicitly.
    """

    def __init__(self, queryset: QuerySet | None = None):
        self.queryset = queryset if queryset is not None else VisaCase.objects.all()

    def find_duplicates(
        self,
        *,
        passport_number: str | None,
        email: str | None,
        name: str | None,
        country: str | None,
        exclude_id: Any = None,
    ) -> list[VisaCase]:
        criteria = Q()
        if passport_number:
            criteria |= Q(passport_number=passport_number) | Q(client__passport_number=passport_number)
        if email:
            criteria |= Q(client_email__iexact=email) | Q(client__email__iexact=email)
        if name and country:
            criteria |= (
                Q(client_name__iexact=name) | Q(client_full_name__iexact=name)
            ) & Q(country__iexact=country)

        if not criteria:
            return []

        queryset = self.queryset.annotate(
            client_full_name=Concat(
                'client__first_name',
                Value(' '),
                'client__last_name',
                output_field=CharField(),
            ),
        ).filter(criteria)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        return list(queryset.order_by('-created_at')[:5])
