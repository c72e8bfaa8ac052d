from collections.abc import Mapping

from rest_framework import serializers

from casework.models import AlertSeverity, AlertType, CasePriority, CaseStatus

MAX_COLLECTION_ITEMS = 200


class CaseDocumentSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    type = serializers.CharField(max_length=128)
    uploaded = serializers.BooleanField(required=False, default=False)
    required = serializers.BooleanField(required=False, default=True)
    uploadDate = serializers.DateTimeField(required=False, allow_null=True)
    fileUrl = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class CaseAlertSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=AlertType.choices)
    message = serializers.CharField(max_length=1024)
    severity = serializers.ChoiceField(choices=AlertSeverity.choices, required=False, default=AlertSeverity.INFO)
    triggeredDate = serializers.DateTimeField(required=False, allow_null=True)
    resolved = serializers.BooleanField(required=False, default=False)
    resolvedDate = serializers.DateTimeField(required=False, allow_null=True)


class _JSONListField(serializers.ListField):
    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('max_length', MAX_COLLECTION_ITEMS)
        super().__init__(**kwargs)


def _plain(items):
    # Nested serializer output carries datetimes; JSONField storage wants strings.
    return [
        {key: value.isoformat() if hasattr(value, 'isoformat') else value for key, value in dict(item).items()}
        for item in items
    ]


class CaseWriteSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CaseStatus.choices, required=False)
    submissionDate = serializers.DateTimeField(source='submission_date', required=False, allow_null=True)
    expectedDecisionDate = serializers.DateTimeField(source='expected_decision_date', required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=CasePriority.choices, required=False)
    documents = _JSONListField(child=CaseDocumentSerializer())
    checklistItems = _JSONListField(source='checklist_items', child=serializers.DictField())
    notes = _JSONListField(child=serializers.CharField(allow_blank=True))
    reminders = _JSONListField(child=serializers.DictField())
    alerts = _JSONListField(child=CaseAlertSerializer())
    travelHistory = _JSONListField(source='travel_history', child=serializers.JSONField())

    def validate_documents(self, value):
        return _plain(value)

    def validate_alerts(self, value):
        return _plain(value)


class CaseCreateSerializer(CaseWriteSerializer):
    REQUIRED_FIELDS = ('clientId', 'visaType', 'country')

    clientId = serializers.UUIDField(source='client_id')
    clientName = serializers.CharField(source='client_name', max_length=255, required=False, allow_blank=True)
    clientEmail = serializers.EmailField(source='client_email', required=False, allow_blank=True)
    passportNumber = serializers.CharField(source='passport_number', max_length=32, required=False, allow_blank=True)
    visaType = serializers.CharField(source='visa_type', max_length=128)
    country = serializers.CharField(max_length=128)
    applicationDate = serializers.DateTimeField(source='application_date', required=False)

    @classmethod
    def missing_required_fields(cls, data) -> bool:
        if not isinstance(data, Mapping):
            return True
        return any(not data.get(field) for field in cls.REQUIRED_FIELDS)


class CaseUpdateSerializer(CaseWriteSerializer):
    pass


class AlertCreateSerializer(serializers.Serializer):
    caseId = serializers.CharField(source='case_id', max_length=32)
    alert = CaseAlertSerializer()


class AlertResolutionSerializer(serializers.Serializer):
    caseId = serializers.CharField(source='case_id', max_length=32)
    alertIndex = serializers.IntegerField(source='alert_index')
    resolved = serializers.BooleanField()
