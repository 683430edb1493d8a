"""Tests for companionship and home-nursing booking routes."""

import unittest

from fastapi.testclient import TestClient

from api.main import app
from api.tests.fixtures import bearer, install_fakes, register


class TestBookingRoutes(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.fakes = install_fakes(app)
        data = register(self.client)
        self.headers = bearer(data['token'])
        self.user_id = data['user']['id']

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_companionship_created(self):
        response = self.client.post('/api/companionship', json={
            'companionType': 'Conversation', 'date': '2026-11-01T10:00:00Z', 'notes': 'Loves chess',
        }, headers=self.headers)

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['message'], 'Companionship request submitted')
        self.assertEqual(data['companionship']['user_id'], self.user_id)
        self.assertEqual(data['companionship']['service'], 'companionship')
        self.assertEqual(data['companionship']['service_type'], 'Conversation')
        self.assertIn(data['companionship']['id'], self.fakes.bookings.store)

    def test_home_nursing_created(self):
        response = self.client.post('/api/home-nursing', json={
            'nurseType': 'Registered Nurse', 'date': '2026-11-02T09:30:00Z',
        }, headers=self.headers)

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['message'], 'Home nursing request submitted')
        self.assertEqual(data['homeNursing']['service'], 'home_nursing')
        self.assertIsNone(data['homeNursing']['notes'])

    def test_missing_fields_are_400(self):
        no_type = self.client.post('/api/companionship', json={'date': '2026-11-01T10:00:00Z'}, headers=self.headers)
        no_date = self.client.post('/api/home-nursing', json={'nurseType': 'RN'}, headers=self.headers)

        self.assertEqual(no_type.status_code, 400)
        self.assertEqual(no_type.json()['detail'], 'Companion type and date are required')
        self.assertEqual(no_date.status_code, 400)
        self.assertEqual(self.fakes.bookings.store, {})

    def test_bad_date_is_400(self):
        response = self.client.post('/api/home-nursing', json={
            'nurseType': 'RN', 'date': 'next tuesday',
        }, headers=self.headers)

        self.assertEqual(response.status_code, 400)

    def test_store_failure_is_500(self):
        self.fakes.bookings.save = lambda booking: False

        response = self.client.post('/api/home-nursing', json={
            'nurseType': 'RN', 'date': '2026-11-02T09:30:00Z',
        }, headers=self.headers)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'detail': 'Server error'})


if __name__ == '__main__':
    unittest.main()
