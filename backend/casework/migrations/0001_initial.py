import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('first_name', models.CharField(max_length=128)),
                ('last_name', models.CharField(max_length=128)),
                ('email', models.EmailField(max_length=255, unique=True)),
                ('phone', models.CharField(blank=True, default='', max_length=32)),
                ('passport_number', models.CharField(blank=True, db_index=True, default='', max_length=32)),
                ('passport_country', models.CharField(blank=True, default='', max_length=64)),
                ('travel_history', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['last_name', 'first_name'],
            },
        ),
        migrations.CreateModel(
            name='VisaCase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('case_id', models.CharField(blank=True, max_length=32, unique=True)),
                ('client_name', models.CharField(blank=True, default='', max_length=255)),
                ('client_email', models.EmailField(blank=True, db_index=True, default='', max_length=255)),
                ('passport_number', models.CharField(blank=True, db_index=True, default='', max_length=32)),
                ('visa_type', models.CharField(max_length=128)),
                ('country', models.CharField(max_length=128)),
                (
                    'status',
                    models.CharField(
                        choices=[
                            ('draft', 'Draft'),
                            ('submitted', 'Submitted'),
                            ('in-process', 'In process'),
                            ('approved', 'Approved'),
                            ('rejected', 'Rejected'),
                        ],
                        db_index=True,
                        default='draft',
                        max_length=16,
                    ),
                ),
                ('application_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('submission_date', models.DateTimeField(blank=True, null=True)),
                ('decision_date', models.DateTimeField(blank=True, null=True)),
                ('expected_decision_date', models.DateTimeField(blank=True, null=True)),
                (
                    'priority',
                    models.CharField(
                        choices=[
                            ('low', 'Low'),
                            ('medium', 'Medium'),
                            ('high', 'High'),
                            ('urgent', 'Urgent'),
                            ('express', 'Express'),
                        ],
                        default='medium',
                        max_length=16,
                    ),
                ),
                ('documents', models.JSONField(blank=True, default=list)),
                ('checklist_items', models.JSONField(blank=True, default=list)),
                ('notes', models.JSONField(blank=True, default=list)),
                ('reminders', models.JSONField(blank=True, default=list)),
                ('alerts', models.JSONField(blank=True, default=list)),
                ('travel_history', models.JSONField(blank=True, default=list)),
                (
                    'success_probability',
                    models.IntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(10),
                            django.core.validators.MaxValueValidator(95),
                        ],
                    ),
                ),
                (
                    'risk_level',
                    models.CharField(
                        blank=True,
                        choices=[
                            ('low', 'Low'),
                            ('medium', 'Medium'),
                            ('high', 'High'),
                            ('critical', 'Critical'),
                        ],
                        max_length=16,
                        null=True,
                    ),
                ),
                ('scored_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                (
                    'client',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='visa_cases',
                        to='casework.client',
                    ),
                ),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
    ]
