import logging
from collections.abc import Mapping

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from casework.auth import ApiTokenPermission
from casework.models import Client, RiskLevel, ScorePriority, VisaCase
from casework.serializers import (
    AlertCreateSerializer,
    AlertResolutionSerializer,
    CaseCreateSerializer,
    CaseUpdateSerializer,
)
from casework.services import (
    add_case_alert,
    build_case_intelligence_payload,
    build_engine,
    flatten_case_alerts,
    score_and_persist,
    score_visa_case,
    set_alert_resolution,
)

logger = logging.getLogger(__name__)

CASE_UPDATE_FIELDS = [
    'status',
    'submission_date',
    'expected_decision_date',
    'priority',
    'documents',
    'checklist_items',
    'notes',
    'reminders',
    'alerts',
    'travel_history',
]


def _error_response(message: str, status_code: int) -> Response:
    return Response({'error': message}, status=status_code)


def _invalid_fields_response(serializer) -> Response:
    fields = ', '.join(sorted(serializer.errors))
    return _error_response(f'Invalid fields: {fields}', status.HTTP_400_BAD_REQUEST)


def _parse_bool(value):
    if value is None:
        return None
    lowered = str(value).strip().lower()
    if lowered in {'true', '1', 'yes'}:
        return True
    if lowered in {'false', '0', 'no'}:
        return False
    return None


def _get_case(pk) -> VisaCase | None:
    try:
        return VisaCase.objects.select_related('client').get(pk=pk)
    except (VisaCase.DoesNotExist, DjangoValidationError):
        return None


class HealthAPIView(APIView):
    throttle_scope = 'default'
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok', 'timestamp': timezone.now(), 'version': settings.APP_VERSION})


class CaseListAPIView(APIView):
    throttle_scope = 'cases'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get(self, request):
        try:
            limit = min(max(int(request.query_params.get('limit', 50)), 1), 200)
        except ValueError:
            limit = 50

        risk_level = (request.query_params.get('risk_level') or '').lower()
        if risk_level not in RiskLevel.values:
            risk_level = ''

        priority = (request.query_params.get('priority') or '').lower()
        if priority not in ScorePriority.values:
            priority = ''

        duplicates_only = _parse_bool(request.query_params.get('duplicates')) is True

        try:
            engine = build_engine()
            results = []
            for visa_case in VisaCase.objects.select_related('client').order_by('-created_at'):
                result = score_visa_case(visa_case, engine=engine)
                if risk_level and result.risk_level != risk_level:
                    continue
                if priority and result.priority != priority:
                    continue
                if duplicates_only and not result.duplicate_detected:
                    continue
                results.append(build_case_intelligence_payload(visa_case, result))
                if len(results) >= limit:
                    break
        except Exception:
            logger.exception('Failed to fetch case intelligence list.')
            return _error_response('Failed to fetch case intelligence', status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(results)

    def post(self, request):
        if CaseCreateSerializer.missing_required_fields(request.data):
            return _error_response(
                'Missing required fields: clientId, visaType, country',
                status.HTTP_400_BAD_REQUEST,
            )

        serializer = CaseCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_fields_response(serializer)
        payload = dict(serializer.validated_data)

        client = Client.objects.filter(pk=payload['client_id']).first()
        if client is None:
            return _error_response('Client not found', status.HTTP_404_NOT_FOUND)

        try:
            with transaction.atomic():
                visa_case = VisaCase.objects.create(**payload)
                result = score_and_persist(visa_case)
        except Exception:
            logger.exception('Failed to create case intelligence (client_id=%s).', client.pk)
            return _error_response('Failed to create case intelligence', status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info('Created visa case %s (risk_level=%s).', visa_case.case_id, result.risk_level)
        return Response(
            build_case_intelligence_payload(visa_case, result),
            status=status.HTTP_201_CREATED,
        )


class CaseDetailAPIView(APIView):
    throttle_scope = 'cases'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get(self, request, pk):
        visa_case = _get_case(pk)
        if visa_case is None:
            return _error_response('Case not found', status.HTTP_404_NOT_FOUND)

        try:
            result = score_visa_case(visa_case)
        except Exception:
            logger.exception('Failed to fetch case intelligence (case=%s).', pk)
            return _error_response('Failed to fetch case intelligence', status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(build_case_intelligence_payload(visa_case, result, include_recommendations=True))

    def put(self, request, pk):
        visa_case = _get_case(pk)
        if visa_case is None:
            return _error_response('Case not found', status.HTTP_404_NOT_FOUND)

        if not isinstance(request.data, Mapping):
            return _error_response('Request body must be a JSON object', status.HTTP_400_BAD_REQUEST)

        serializer = CaseUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_fields_response(serializer)

        changed = [name for name in CASE_UPDATE_FIELDS if name in serializer.validated_data]
        for name in changed:
            setattr(visa_case, name, serializer.validated_data[name])

        try:
            with transaction.atomic():
                visa_case.save(update_fields=[*changed, 'updated_at'])
                result = score_and_persist(visa_case)
        except Exception:
            logger.exception('Failed to update case intelligence (case=%s).', pk)
            return _error_response('Failed to update case intelligence', status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(build_case_intelligence_payload(visa_case, result, include_recommendations=True))


class CaseAlertsAPIView(APIView):
    throttle_scope = 'alerts'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get(self, request):
        queryset = VisaCase.objects.select_related('client')
        case_id = (request.query_params.get('caseId') or '').strip()
        if case_id:
            queryset = queryset.filter(case_id=case_id)

        alerts = flatten_case_alerts(
            queryset,
            resolved=_parse_bool(request.query_params.get('resolved')),
            severity=(request.query_params.get('severity') or '').strip() or None,
        )
        return Response(alerts)

    def post(self, request):
        data = request.data
        if not isinstance(data, Mapping) or not data.get('caseId') or not data.get('alert'):
            return _error_response('Missing required fields: caseId and alert', status.HTTP_400_BAD_REQUEST)

        serializer = AlertCreateSerializer(data=data)
        if not serializer.is_valid():
            return _error_response('Alert must include type and message', status.HTTP_400_BAD_REQUEST)

        visa_case = VisaCase.objects.select_related('client').filter(
            case_id=serializer.validated_data['case_id'],
        ).first()
        if visa_case is None:
            return _error_response('Visa case not found', status.HTTP_404_NOT_FOUND)

        add_case_alert(visa_case, serializer.validated_data['alert'])
        return Response(
            {
                'message': 'Alert added successfully',
                'caseId': visa_case.case_id,
                'alerts': visa_case.alerts,
            },
            status=status.HTTP_200_OK,
        )

    def put(self, request):
        serializer = AlertResolutionSerializer(data=request.data)
        if not isinstance(request.data, Mapping) or not serializer.is_valid():
            return _error_response(
                'Missing required fields: caseId, alertIndex, and resolved',
                status.HTTP_400_BAD_REQUEST,
            )

        visa_case = VisaCase.objects.select_related('client').filter(
            case_id=serializer.validated_data['case_id'],
        ).first()
        if visa_case is None:
            return _error_response('Visa case not found', status.HTTP_404_NOT_FOUND)

        try:
            set_alert_resolution(
                visa_case,
                serializer.validated_data['alert_index'],
                serializer.validated_data['resolved'],
            )
        except IndexError:
            return _error_response('Invalid alert index', status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                'message': 'Alert updated successfully',
                'caseId': visa_case.case_id,
                'alerts': visa_case.alerts,
            },
            status=status.HTTP_200_OK,
        )
