from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from casework.models import RiskLevel, VisaCase
from casework.services import build_engine, persist_score_snapshot, score_visa_case


class Command(BaseCommand):
    help = 'Recalculate case intelligence scores and store the snapshot on each case.'

    def add_arguments(self, parser):
        parser.add_argument('--limit', type=int, default=500, help='Maximum number of cases to process.')
        parser.add_argument('--case-id', type=str, default='', help='Only process one case (e.g. VC-1A2B3C4D).')
        parser.add_argument(
            '--risk-level',
            type=str,
            default='',
            choices=['', *RiskLevel.values],
            help='Only report cases that land on this risk level.',
        )
        parser.add_argument('--dry-run', action='store_true', help='Print scores without saving them.')

    def handle(self, *args, **options):
        limit = max(options['limit'], 1)
        case_id = (options['case_id'] or '').strip().upper()
        risk_filter = options['risk_level']
        dry_run = bool(options['dry_run'])

        queryset = VisaCase.objects.select_related('client').order_by('-created_at')
        if case_id:
            queryset = queryset.filter(case_id=case_id)
            if not queryset.exists():
                raise CommandError(f'Case {case_id} does not exist.')

        visa_cases = list(queryset[:limit])
        if not visa_cases:
            self.stdout.write(self.style.SUCCESS('No cases to score.'))
            return

        engine = build_engine()
        reported = 0
        for visa_case in visa_cases:
            result = score_visa_case(visa_case, engine=engine)
            if not dry_run:
                persist_score_snapshot(visa_case, result)

            if risk_filter and result.risk_level != risk_filter:
                continue

            reported += 1
            prefix = '[DRY RUN] ' if dry_run else ''
            duplicate_marker = ' duplicate' if result.duplicate_detected else ''
            self.stdout.write(
                f'{prefix}{visa_case.case_id}: {result.success_probability}% '
                f'{result.risk_level} {result.priority}{duplicate_marker}'
            )

        if dry_run:
            self.stdout.write(self.style.SUCCESS(f'Dry run complete. {reported} case(s) matched.'))
            return

        self.stdout.write(
            self.style.SUCCESS(f'Scoring complete. Updated {len(visa_cases)} case(s), reported {reported}.')
        )
