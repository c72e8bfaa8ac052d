from django.test import TestCase
from rest_framework.test import APIClient

from casework.models import Client, VisaCase


class CaseAlertsApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        applicant = Client.objects.create(first_name='Sofia', last_name='Rossi', email='sofia@example.com')
        self.visa_case = VisaCase.objects.create(
            client=applicant,
            visa_type='Tourist Visa',
            country='USA',
            alerts=[
                {'type': 'deadline-warning', 'message': 'Biometrics due Friday', 'severity': 'warning', 'resolved': False},
                {'type': 'status-change', 'message': 'Application received', 'severity': 'info', 'resolved': True},
            ],
        )

    def test_list_alerts_flattens_with_case_context(self):
        response = self.client.get('/api/cases/alerts')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 2)
        first = response.data[0]
        self.assertEqual(first['alertIndex'], 0)
        self.assertEqual(first['caseId'], self.visa_case.case_id)
        self.assertEqual(first['clientName'], 'Sofia Rossi')
        self.assertEqual(first['caseStatus'], 'draft')

    def test_list_alerts_filters(self):
        unresolved = self.client.get('/api/cases/alerts?resolved=false')
        self.assertEqual([item['message'] for item in unresolved.data], ['Biometrics due Friday'])

        info = self.client.get('/api/cases/alerts?severity=info')
        self.assertEqual([item['alertIndex'] for item in info.data], [1])

        other_case = self.client.get('/api/cases/alerts?caseId=VC-NOPE0000')
        self.assertEqual(other_case.data, [])

    def test_add_alert(self):
        response = self.client.post(
            '/api/cases/alerts',
            {
                'caseId': self.visa_case.case_id,
                'alert': {'type': 'urgent-action', 'message': 'Interview moved forward', 'severity': 'error'},
            },
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Alert added successfully')
        self.assertEqual(len(response.data['alerts']), 3)

        self.visa_case.refresh_from_db()
        added = self.visa_case.alerts[-1]
        self.assertEqual(added['message'], 'Interview moved forward')
        self.assertFalse(added['resolved'])
        self.assertIn('triggeredDate', added)

        detail = self.client.get(f'/api/cases/{self.visa_case.pk}')
        self.assertEqual(detail.data['priority'], 'urgent')
        self.assertIn('Interview moved forward', detail.data['riskFlags'])

    def test_add_alert_validation(self):
        missing = self.client.post('/api/cases/alerts', {'caseId': self.visa_case.case_id}, format='json')
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(missing.data['error'], 'Missing required fields: caseId and alert')

        incomplete = self.client.post(
            '/api/cases/alerts',
            {'caseId': self.visa_case.case_id, 'alert': {'severity': 'error'}},
            format='json',
        )
        self.assertEqual(incomplete.status_code, 400)
        self.assertEqual(incomplete.data['error'], 'Alert must include type and message')

        unknown = self.client.post(
            '/api/cases/alerts',
            {'caseId': 'VC-NOPE0000', 'alert': {'type': 'status-change', 'message': 'Call client'}},
            format='json',
        )
        self.assertEqual(unknown.status_code, 404)

    def test_resolve_alert(self):
        response = self.client.put(
            '/api/cases/alerts',
            {'caseId': self.visa_case.case_id, 'alertIndex': 0, 'resolved': True},
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Alert updated successfully')

        self.visa_case.refresh_from_db()
        self.assertTrue(self.visa_case.alerts[0]['resolved'])
        self.assertIn('resolvedDate', self.visa_case.alerts[0])

    def test_resolve_alert_validation(self):
        missing = self.client.put('/api/cases/alerts', {'caseId': self.visa_case.case_id}, format='json')
        self.assertEqual(missing.status_code, 400)

        out_of_range = self.client.put(
            '/api/cases/alerts',
            {'caseId': self.visa_case.case_id, 'alertIndex': 5, 'resolved': True},
            format='json',
        )
        self.assertEqual(out_of_range.status_code, 400)
        self.assertEqual(out_of_range.data['error'], 'Invalid alert index')

    def test_non_object_bodies_are_rejected(self):
        created = self.client.post('/api/cases/alerts', [{'caseId': self.visa_case.case_id}], format='json')
        self.assertEqual(created.status_code, 400)
        self.assertEqual(created.data['error'], 'Missing required fields: caseId and alert')

        resolved = self.client.put('/api/cases/alerts', [0, True], format='json')
        self.assertEqual(resolved.status_code, 400)
        self.assertEqual(resolved.data['error'], 'Missing required fields: caseId, alertIndex, and resolved')

    def test_malformed_stored_alerts_are_skipped(self):
        self.visa_case.alerts = ['legacy free-text alert', *self.visa_case.alerts]
        self.visa_case.save(update_fields=['alerts'])

        response = self.client.get('/api/cases/alerts')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item['alertIndex'] for item in response.data], [1, 2])

        legacy = self.client.put(
            '/api/cases/alerts',
            {'caseId': self.visa_case.case_id, 'alertIndex': 0, 'resolved': True},
            format='json',
        )
        self.assertEqual(legacy.status_code, 400)
        self.assertEqual(legacy.data['error'], 'Invalid alert index')

        detail = self.client.get(f'/api/cases/{self.visa_case.pk}')
        self.assertEqual(detail.status_code, 200)
