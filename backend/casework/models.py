import re
import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

PASSPORT_STRIP_PATTERN = re.compile(r'[\s-]+')


def normalize_passport(value) -> str:
    return PASSPORT_STRIP_PATTERN.sub('', str(value or '')).upper()


class RiskLevel(models.TextChoices):
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'
    CRITICAL = 'critical', 'Critical'


class ScorePriority(models.TextChoices):
    NORMAL = 'normal', 'Normal'
    URGENT = 'urgent', 'Urgent'
    EXPRESS = 'express', 'Express'


class CasePriority(models.TextChoices):
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'
    URGENT = 'urgent', 'Urgent'
    EXPRESS = 'express', 'Express'


class CaseStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    SUBMITTED = 'submitted', 'Submitted'
    IN_PROCESS = 'in-process', 'In process'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class AlertType(models.TextChoices):
    DEADLINE_WARNING = 'deadline-warning', 'Deadline warning'
    MISSING_DOCUMENT = 'missing-document', 'Missing document'
    STATUS_CHANGE = 'status-change', 'Status change'
    URGENT_ACTION = 'urgent-action', 'Urgent action'


class AlertSeverity(models.TextChoices):
    INFO = 'info', 'Info'
    WARNING = 'warning', 'Warning'
    ERROR = 'error', 'Error'


class Client(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=128)
    last_name = models.CharField(max_length=128)
    email = models.EmailField(max_length=255, unique=True)
    phone = models.CharField(max_length=32, blank=True, default='')
    passport_number = models.CharField(max_length=32, blank=True, default='', db_index=True)
    passport_country = models.CharField(max_length=64, blank=True, default='')
    travel_history = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['last_name', 'first_name']

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()

    def save(self, *args, **kwargs):
        self.email = (self.email or '').strip().lower()
        self.passport_number = normalize_passport(self.passport_number)
        super().save(*args, **kwargs)


class VisaCase(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    case_id = models.CharField(max_length=32, unique=True, blank=True)
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='visa_cases')
    client_name = models.CharField(max_length=255, blank=True, default='')
    client_email = models.EmailField(max_length=255, blank=True, default='', db_index=True)
    passport_number = models.CharField(max_length=32, blank=True, default='', db_index=True)
    visa_type = models.CharField(max_length=128)
    country = models.CharField(max_length=128)
    status = models.CharField(max_length=16, choices=CaseStatus.choices, default=CaseStatus.DRAFT, db_index=True)
    application_date = models.DateTimeField(default=timezone.now)
    submission_date = models.DateTimeField(null=True, blank=True)
    decision_date = models.DateTimeField(null=True, blank=True)
    expected_decision_date = models.DateTimeField(null=True, blank=True)
    priority = models.CharField(max_length=16, choices=CasePriority.choices, default=CasePriority.MEDIUM)
    documents = models.JSONField(default=list, blank=True)
    checklist_items = models.JSONField(default=list, blank=True)
    notes = models.JSONField(default=list, blank=True)
    reminders = models.JSONField(default=list, blank=True)
    alerts = models.JSONField(default=list, blank=True)
    travel_history = models.JSONField(default=list, blank=True)
    success_probability = models.IntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(10), MaxValueValidator(95)],
    )
    risk_level = models.CharField(max_length=16, choices=RiskLevel.choices, null=True, blank=True)
    scored_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return self.case_id or str(self.id)

    @property
    def display_client_name(self) -> str:
        if self.client_name:
            return self.client_name
        if self.client_id and self.client.full_name:
            return self.client.full_name
        return 'Unknown Client'

    def save(self, *args, **kwargs):
        if not self.case_id:
            self.case_id = f'VC-{self.id.hex[:8].upper()}'
        self.client_email = (self.client_email or '').strip().lower()
        self.passport_number = normalize_passport(self.passport_number)
        self.client_name = ' '.join((self.client_name or '').split())
        super().save(*args, **kwargs)
