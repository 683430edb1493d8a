"""Tests for POST /api/create-payment-intent."""

import unittest

from fastapi.testclient import TestClient

from api.main import app
from api.tests.fixtures import bearer, install_fakes, register


class TestCreatePaymentIntent(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.fakes = install_fakes(app)
        data = register(self.client)
        self.headers = bearer(data['token'])
        self.user_id = data['user']['id']

    def tearDown(self):
        app.dependency_overrides.clear()

    def _post(self, body, headers=None):
        return self.client.post('/api/create-payment-intent', json=body, headers=headers or self.headers)

    def test_valid_amount_returns_client_secret(self):
        response = self._post({'amount': 499.5})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertIsInstance(data['clientSecret'], str)
        self.assertTrue(data['clientSecret'])
        self.assertTrue(data['intentId'])
        self.assertEqual(self.fakes.gateway.calls[0]['amount'], 49950)
        self.assertEqual(self.fakes.payments.get_by_intent_id(data['intentId']).user_id, self.user_id)

    def test_zero_amount_is_400(self):
        response = self._post({'amount': 0})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Invalid amount')
        self.assertEqual(self.fakes.gateway.calls, [])

    def test_missing_or_non_numeric_amount_is_400(self):
        for body in ({}, {'amount': None}, {'amount': 'lots'}, {'amount': True}, {'amount': -3}):
            with self.subTest(body=body):
                self.assertEqual(self._post(body).status_code, 400)

        self.assertEqual(self.fakes.gateway.calls, [])

    def test_huge_amount_is_400_not_server_error(self):
        for amount in (1e30, 1000000):
            with self.subTest(amount=amount):
                response = self._post({'amount': amount})

                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json(), {'detail': 'Invalid amount'})

        self.assertEqual(self.fakes.gateway.calls, [])

    def test_processor_failure_is_generic_500(self):
        self.fakes.gateway.error = RuntimeError('No such customer: cus_secret_detail')

        response = self._post({'amount': 10})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'detail': 'Payment failed'})

    def test_links_payment_to_booking(self):
        booking = self.client.post('/api/home-nursing', json={
            'nurseType': 'Registered Nurse', 'date': '2026-11-01T10:00:00Z',
        }, headers=self.headers).json()['homeNursing']

        response = self._post({'amount': 1500, 'bookingId': booking['id']})

        self.assertEqual(response.status_code, 200)
        stored = self.fakes.bookings.get_by_id(booking['id'])
        self.assertEqual(stored.payment_intent_id, response.json()['intentId'])

    def test_unknown_booking_is_404(self):
        response = self._post({'amount': 1500, 'bookingId': 'missing'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.fakes.gateway.calls, [])

    def test_idempotency_key_is_forwarded(self):
        headers = dict(self.headers, **{'Idempotency-Key': 'checkout-42'})

        first = self._post({'amount': 10}, headers=headers)
        second = self._post({'amount': 10}, headers=headers)

        self.assertEqual(first.json()['intentId'], second.json()['intentId'])
        self.assertEqual(self.fakes.gateway.calls[0]['idempotency_key'], 'checkout-42')


if __name__ == '__main__':
    unittest.main()
