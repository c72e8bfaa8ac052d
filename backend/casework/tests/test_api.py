from datetime import timedelta
import secrets
import uuid

from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from casework.models import Client, VisaCase

RESPONSE_KEYS = {
    'id',
    'caseId',
    'clientName',
    'visaType',
    'country',
    'successProbability',
    'riskLevel',
    'duplicateDetected',
    'priority',
    'riskFlags',
    'createdAt',
    'updatedAt',
}


class CaseApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.applicant = Client.objects.create(
            first_name='Amina',
            last_name='Okafor',
            email='Amina.Okafor@Example.com ',
            passport_number='a1 234-567',
        )

    def create_payload(self, **overrides):
        payload = {
            'clientId': str(self.applicant.pk),
            'visaType': 'Work Visa',
            'country': 'Canada',
            'documents': [
                {'name': 'Bank statement', 'type': 'financial', 'uploaded': True, 'required': True},
            ],
            'travelHistory': ['UK 2019'],
        }
        payload.update(overrides)
        return payload

    def test_client_identity_fields_are_normalized(self):
        self.applicant.refresh_from_db()
        self.assertEqual(self.applicant.email, 'amina.okafor@example.com')
        self.assertEqual(self.applicant.passport_number, 'A1234567')

    def test_create_case_returns_scored_payload(self):
        response = self.client.post('/api/cases', self.create_payload(), format='json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(set(response.data), RESPONSE_KEYS)
        self.assertTrue(response.data['caseId'].startswith('VC-'))
        self.assertEqual(response.data['clientName'], 'Amina Okafor')
        self.assertEqual(response.data['successProbability'], 95)
        self.assertEqual(response.data['riskLevel'], 'low')
        self.assertEqual(response.data['priority'], 'normal')
        self.assertFalse(response.data['duplicateDetected'])
        self.assertEqual(response.data['riskFlags'], [])

        visa_case = VisaCase.objects.get(pk=response.data['id'])
        self.assertEqual(visa_case.status, 'draft')
        self.assertEqual(visa_case.priority, 'medium')
        self.assertEqual(visa_case.success_probability, 95)
        self.assertEqual(visa_case.risk_level, 'low')
        self.assertIsNotNone(visa_case.scored_at)

    def test_create_case_requires_core_fields(self):
        response = self.client.post('/api/cases', {'visaType': 'Work Visa'}, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Missing required fields: clientId, visaType, country')

    def test_create_case_rejects_unknown_client(self):
        response = self.client.post(
            '/api/cases',
            self.create_payload(clientId=str(uuid.uuid4())),
            format='json',
        )
        self.assertEqual(response.status_code, 404)

    def test_create_case_rejects_malformed_documents(self):
        response = self.client.post(
            '/api/cases',
            self.create_payload(documents=[{'uploaded': True}]),
            format='json',
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'Invalid fields: documents'})

    def test_create_case_rejects_malformed_client_id(self):
        response = self.client.post('/api/cases', self.create_payload(clientId='client-42'), format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'Invalid fields: clientId'})
        self.assertFalse(VisaCase.objects.exists())

    def test_update_case_rejects_invalid_bodies(self):
        created = self.client.post('/api/cases', self.create_payload(), format='json')
        url = f"/api/cases/{created.data['id']}"

        not_an_object = self.client.put(url, [{'status': 'submitted'}], format='json')
        self.assertEqual(not_an_object.status_code, 400)
        self.assertEqual(not_an_object.data, {'error': 'Request body must be a JSON object'})

        bad_status = self.client.put(url, {'status': 'lost'}, format='json')
        self.assertEqual(bad_status.status_code, 400)
        self.assertEqual(bad_status.data, {'error': 'Invalid fields: status'})

    def test_case_detail_includes_recommendations(self):
        created = self.client.post('/api/cases', self.create_payload(), format='json')

        response = self.client.get(f"/api/cases/{created.data['id']}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(set(response.data), RESPONSE_KEYS | {'recommendations'})
        self.assertEqual(
            response.data['recommendations'],
            {
                'improvements': [],
                'strengths': [
                    'Application appears complete and well-documented',
                    'Strong supporting documentation provided',
                ],
            },
        )

    def test_case_detail_unknown_id_is_not_found(self):
        response = self.client.get(f'/api/cases/{uuid.uuid4()}')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['error'], 'Case not found')

    def test_update_case_rescores(self):
        created = self.client.post('/api/cases', self.create_payload(), format='json')

        response = self.client.put(
            f"/api/cases/{created.data['id']}",
            {
                'status': 'submitted',
                'alerts': [
                    {'type': 'urgent-action', 'message': 'Embassy requested interview', 'severity': 'error'},
                ],
            },
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['priority'], 'urgent')
        self.assertEqual(response.data['riskLevel'], 'medium')
        self.assertEqual(response.data['riskFlags'], ['Embassy requested interview'])
        self.assertIn('recommendations', response.data)

        visa_case = VisaCase.objects.get(pk=created.data['id'])
        self.assertEqual(visa_case.status, 'submitted')
        self.assertEqual(visa_case.risk_level, 'medium')
        self.assertEqual(len(visa_case.documents), 1)

    def test_update_expected_decision_date_marks_case_urgent(self):
        created = self.client.post('/api/cases', self.create_payload(), format='json')

        response = self.client.put(
            f"/api/cases/{created.data['id']}",
            {'expectedDecisionDate': (timezone.now() + timedelta(days=1)).isoformat()},
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['priority'], 'urgent')

    def test_update_unknown_case_is_not_found(self):
        response = self.client.put(f'/api/cases/{uuid.uuid4()}', {'status': 'submitted'}, format='json')
        self.assertEqual(response.status_code, 404)

    def test_second_case_for_same_passport_is_flagged_duplicate(self):
        self.client.post('/api/cases', self.create_payload(), format='json')
        second = self.client.post(
            '/api/cases',
            self.create_payload(visaType='Tourist Visa', country='France'),
            format='json',
        )

        self.assertEqual(second.status_code, 201)
        self.assertTrue(second.data['duplicateDetected'])

    def test_second_case_for_client_without_passport_is_flagged_duplicate(self):
        returning = Client.objects.create(first_name='Lena', last_name='Fischer', email='lena@example.com')
        payload = self.create_payload(clientId=str(returning.pk))

        first = self.client.post('/api/cases', payload, format='json')
        second = self.client.post('/api/cases', payload, format='json')

        self.assertFalse(first.data['duplicateDetected'])
        self.assertTrue(second.data['duplicateDetected'])

    @override_settings(CASE_DUPLICATE_DETECTION_ENABLED=False)
    def test_duplicate_detection_can_be_disabled(self):
        self.client.post('/api/cases', self.create_payload(), format='json')
        second = self.client.post('/api/cases', self.create_payload(), format='json')

        self.assertFalse(second.data['duplicateDetected'])

    def test_case_list_filters_by_risk_level(self):
        other = Client.objects.create(first_name='Tomas', last_name='Silva', email='tomas@example.com')
        VisaCase.objects.create(
            client=self.applicant,
            visa_type='Work Visa',
            country='Canada',
            documents=[{'type': 'financial', 'uploaded': True, 'required': True}],
            travel_history=['UK 2019'],
        )
        risky = VisaCase.objects.create(
            client=other,
            visa_type='Student Visa',
            country='Nigeria',
            documents=[{'type': 'passport', 'uploaded': False, 'required': True}] * 4,
        )

        response = self.client.get('/api/cases')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 2)

        high = self.client.get('/api/cases?risk_level=high')
        self.assertEqual(len(high.data), 1)
        self.assertEqual(high.data[0]['caseId'], risky.case_id)
        self.assertEqual(high.data[0]['successProbability'], 45)
        self.assertNotIn('recommendations', high.data[0])

        limited = self.client.get('/api/cases?limit=1')
        self.assertEqual(len(limited.data), 1)

    def test_case_list_falls_back_to_client_name(self):
        VisaCase.objects.create(client=self.applicant, visa_type='', country='')

        response = self.client.get('/api/cases')

        self.assertEqual(response.data[0]['clientName'], 'Amina Okafor')
        self.assertEqual(response.data[0]['visaType'], 'Unknown')
        self.assertEqual(response.data[0]['country'], 'Unknown')

    def test_api_token_required_when_configured(self):
        api_token = secrets.token_urlsafe(24)
        with override_settings(API_AUTH_TOKEN=api_token):
            unauthorized = self.client.get('/api/cases')
            self.assertEqual(unauthorized.status_code, 403)

            authorized = self.client.get('/api/cases', HTTP_X_API_TOKEN=api_token)
            self.assertEqual(authorized.status_code, 200)

            bearer = self.client.get('/api/cases', HTTP_AUTHORIZATION=f'Bearer {api_token}')
            self.assertEqual(bearer.status_code, 200)

            wrong = self.client.get('/api/cases', HTTP_X_API_TOKEN='not-the-token')
            self.assertEqual(wrong.status_code, 403)

    @override_settings(API_REQUIRE_AUTH=True, API_AUTH_TOKEN='')
    def test_required_auth_without_configured_token_rejects_everything(self):
        self.assertEqual(self.client.get('/api/cases').status_code, 403)
        self.assertEqual(self.client.get('/api/cases', HTTP_X_API_TOKEN='anything').status_code, 403)
        self.assertEqual(self.client.get('/api/health').status_code, 200)

    def test_health_endpoint(self):
        response = self.client.get('/api/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'ok')
