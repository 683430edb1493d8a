"""Unit tests for API dependencies — repository and gateway wiring."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi import HTTPException

from adapter.external.stripe_gateway import StripePaymentGateway
from adapter.mongodb.user_repository import MongoUserRepository
from api.dependencies import get_payment_gateway, get_user_repo
from utils.settings import Settings


class TestGetUserRepo(unittest.TestCase):

    @patch('api.dependencies.get_mongodb_client')
    def test_returns_mongo_repository_when_connected(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.__getitem__.return_value = MagicMock()
        mock_get_client.return_value = mock_client

        repo = get_user_repo()

        self.assertIsInstance(repo, MongoUserRepository)

    @patch('api.dependencies.get_mongodb_client')
    def test_raises_503_when_mongodb_unavailable(self, mock_get_client):
        mock_get_client.return_value = None

        with self.assertRaises(HTTPException) as context:
            get_user_repo()

        self.assertEqual(context.exception.status_code, 503)
        self.assertEqual(context.exception.detail, "Database unavailable")


class TestGetPaymentGateway(unittest.TestCase):

    def test_raises_503_without_stripe_key(self):
        settings = Settings(_env_file=None, stripe_secret_key=None)

        with self.assertRaises(HTTPException) as context:
            get_payment_gateway(settings)

        self.assertEqual(context.exception.status_code, 503)

    def test_returns_stripe_gateway_with_key(self):
        settings = Settings(_env_file=None, stripe_secret_key='sk_test_123')

        gateway = get_payment_gateway(settings)

        self.assertIsInstance(gateway, StripePaymentGateway)
        self.assertIs(gateway, get_payment_gateway(settings))


if __name__ == '__main__':
    unittest.main()
