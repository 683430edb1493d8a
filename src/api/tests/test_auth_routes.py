"""Tests for /api/auth routes, end to end over in-memory stores."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from api.main import app
from api.tests.fixtures import bearer, install_fakes, register


class TestRegister(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.fakes = install_fakes(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_register_returns_201_token_and_user_without_password(self):
        data = register(self.client)

        self.assertEqual(data['message'], 'User registered successfully')
        self.assertTrue(data['token'])
        self.assertEqual(data['user']['email'], 'alice@example.com')
        self.assertEqual(data['user']['role'], 'user')
        self.assertNotIn('password', data['user'])
        self.assertNotIn('password_hash', data['user'])

    def test_register_accepts_user_type_alias(self):
        data = register(self.client, userType='provider')

        self.assertEqual(data['user']['role'], 'provider')

    def test_register_missing_field_is_400(self):
        response = self.client.post('/api/auth/register', json={
            'name': 'Alice', 'email': 'alice@example.com', 'password': 's3cret-pass',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('required', response.json()['detail'])
        self.assertEqual(self.fakes.users.store, {})

    def test_register_duplicate_email_is_400_and_creates_nothing(self):
        register(self.client)

        response = self.client.post('/api/auth/register', json={
            'name': 'Mallory', 'email': 'alice@example.com', 'password': 'x-pass', 'phone': '1',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'User already exists')
        self.assertEqual(len(self.fakes.users.store), 1)

    def test_register_invalid_role_is_400(self):
        response = self.client.post('/api/auth/register', json={
            'name': 'A', 'email': 'a@example.com', 'password': 'pw-pass', 'phone': '1', 'role': 'admin',
        })

        self.assertEqual(response.status_code, 400)

    def test_non_string_field_is_400_not_422(self):
        response = self.client.post('/api/auth/register', json={
            'name': 'A', 'email': ['a@example.com'], 'password': 'pw', 'phone': '1',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('email', response.json()['detail'])


class TestLoginAndMe(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.fakes = install_fakes(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_register_login_me_wrong_password_scenario(self):
        registered = register(self.client, email='alice@example.com', password='s3cret-pass')

        login = self.client.post('/api/auth/login', json={
            'email': 'alice@example.com', 'password': 's3cret-pass',
        })
        self.assertEqual(login.status_code, 200)
        self.assertEqual(login.json()['message'], 'Login successful')
        token = login.json()['token']

        me = self.client.get('/api/auth/me', headers=bearer(token))
        self.assertEqual(me.status_code, 200)
        user = me.json()['user']
        self.assertEqual(user['id'], registered['user']['id'])
        self.assertEqual(user['email'], 'alice@example.com')
        self.assertNotIn('password', user)
        self.assertNotIn('password_hash', user)

        wrong = self.client.post('/api/auth/login', json={
            'email': 'alice@example.com', 'password': 'wrong-pass',
        })
        self.assertEqual(wrong.status_code, 400)
        self.assertEqual(wrong.json()['detail'], 'Invalid credentials')

    def test_login_unknown_email_is_same_400(self):
        response = self.client.post('/api/auth/login', json={
            'email': 'nobody@example.com', 'password': 'whatever',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Invalid credentials')

    def test_register_token_works_for_me(self):
        token = register(self.client)['token']

        response = self.client.get('/api/auth/me', headers=bearer(token))

        self.assertEqual(response.status_code, 200)

    def test_me_without_token_is_401(self):
        response = self.client.get('/api/auth/me')

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers['www-authenticate'], 'Bearer')


class TestProfileAndPassword(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.fakes = install_fakes(app)
        data = register(self.client)
        self.token = data['token']
        self.user_id = data['user']['id']

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_patch_me_updates_profile_only(self):
        old_hash = self.fakes.users.get_by_id(self.user_id).password_hash

        response = self.client.patch('/api/auth/me', json={'phone': '555-0199'}, headers=bearer(self.token))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['user']['phone'], '555-0199')
        self.assertEqual(self.fakes.users.get_by_id(self.user_id).password_hash, old_hash)

    def test_patch_me_for_vanished_user_is_401_with_bearer_challenge(self):
        # Account removed after the guard resolved it
        with patch.object(self.fakes.users, 'update_profile', return_value=None):
            response = self.client.patch('/api/auth/me', json={'name': 'Al'}, headers=bearer(self.token))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'detail': 'Not authenticated'})
        self.assertEqual(response.headers.get('www-authenticate'), 'Bearer')

    def test_patch_me_with_nothing_is_400(self):
        response = self.client.patch('/api/auth/me', json={}, headers=bearer(self.token))

        self.assertEqual(response.status_code, 400)

    def test_change_password(self):
        response = self.client.put('/api/auth/password', json={
            'currentPassword': 's3cret-pass', 'newPassword': 'brand-new-pass',
        }, headers=bearer(self.token))
        self.assertEqual(response.status_code, 200)

        old = self.client.post('/api/auth/login', json={'email': 'alice@example.com', 'password': 's3cret-pass'})
        new = self.client.post('/api/auth/login', json={'email': 'alice@example.com', 'password': 'brand-new-pass'})
        self.assertEqual(old.status_code, 400)
        self.assertEqual(new.status_code, 200)

    def test_change_password_with_wrong_current_is_400(self):
        response = self.client.put('/api/auth/password', json={
            'current_password': 'nope', 'new_password': 'brand-new-pass',
        }, headers=bearer(self.token))

        self.assertEqual(response.status_code, 400)


if __name__ == '__main__':
    unittest.main()
