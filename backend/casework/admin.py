from django.contrib import admin
from django.contrib import messages

from casework.models import Client, VisaCase
from casework.services import build_engine, score_and_persist


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'email', 'passport_number', 'passport_country', 'created_at')
    search_fields = ('first_name', 'last_name', 'email', 'passport_number')


@admin.register(VisaCase)
class VisaCaseAdmin(admin.ModelAdmin):
    list_display = (
        'case_id',
        'client_name',
        'visa_type',
        'country',
        'status',
        'priority',
        'success_probability',
        'risk_level',
        'scored_at',
    )
    list_filter = ('status', 'priority', 'risk_level')
    search_fields = ('case_id', 'client_name', 'client_email', 'passport_number')
    readonly_fields = ('case_id', 'success_probability', 'risk_level', 'scored_at', 'created_at', 'updated_at')
    actions = ['recalculate_intelligence']

    @admin.action(description='Recalculate case intelligence')
    def recalculate_intelligence(self, request, queryset):
        engine = build_engine()
        scored = 0
        for visa_case in queryset.select_related('client'):
            try:
                score_and_persist(visa_case, engine=engine)
            except Exception as exc:
                self.message_user(
                    request,
                    f'Scoring failed for {visa_case.case_id}: {exc}',
                    level=messages.ERROR,
                )
            else:
                scored += 1

        if scored:
            self.message_user(request, f'{scored} case(s) rescored successfully.', level=messages.SUCCESS)
