"""
Integration tests for reward API endpoints.
"""
from datetime import datetime, timedelta, timezone
from unittest import mock
from uuid import uuid4

import jwt
from django.conf import settings
from django.db import OperationalError
from django.test import TestCase

from apps.identity.models import User
from apps.rewards.models import Reward


def auth_headers(email='player@example.com'):
    token = jwt.encode(
        {'email': email, 'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm='HS256',
    )
    return {'Authorization': f'Bearer {token}'}


class RewardAPITest(TestCase):

    async def test_all_routes_require_auth(self):
        reward_id = uuid4()
        for method, path in [
            ('get', '/api/rewards/'),
            ('post', '/api/rewards/'),
            ('patch', f'/api/rewards/{reward_id}'),
            ('delete', f'/api/rewards/{reward_id}'),
            ('post', f'/api/rewards/{reward_id}/buy'),
            ('get', '/api/ledger/history'),
        ]:
            response = await getattr(self.async_client, method)(path)
            self.assertEqual(response.status_code, 401, f"{method.upper()} {path}")
            self.assertEqual(response.json()['code'], 'UNAUTHENTICATED')

    async def test_create_edit_delete(self):
        response = await self.async_client.post(
            '/api/rewards/',
            data={'title': 'Coffee', 'points': 10},
            content_type='application/json',
            headers=auth_headers(),
        )
        self.assertEqual(response.status_code, 200)
        reward_id = response.json()['id']

        response = await self.async_client.patch(
            f'/api/rewards/{reward_id}',
            data={'points': 15},
            content_type='application/json',
            headers=auth_headers(),
        )
        self.assertEqual(response.json()['points'], 15)
        self.assertEqual(response.json()['title'], 'Coffee')

        response = await self.async_client.delete(f'/api/rewards/{reward_id}', headers=auth_headers())
        self.assertEqual(response.status_code, 200)

        response = await self.async_client.patch(
            f'/api/rewards/{reward_id}',
            data={'points': 1},
            content_type='application/json',
            headers=auth_headers(),
        )
        self.assertEqual(response.status_code, 404)

    async def test_buy_with_insufficient_balance(self):
        """Balance 10, reward costs 20: purchase fails and balance stays 10."""
        await User.objects.acreate(email='player@example.com', points=10)
        reward = await Reward.objects.acreate(title='Evening off', points=20)

        response = await self.async_client.post(f'/api/rewards/{reward.id}/buy', headers=auth_headers())

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()['success'])
        self.assertEqual(response.json()['message'], 'insufficient balance')
        user = await User.objects.aget(email='player@example.com')
        self.assertEqual(user.points, 10)

    async def test_buy_and_history(self):
        await User.objects.acreate(email='player@example.com', points=50)
        reward = await Reward.objects.acreate(title='Coffee', points=20)

        response = await self.async_client.post(f'/api/rewards/{reward.id}/buy', headers=auth_headers())
        self.assertTrue(response.json()['success'])
        self.assertEqual(response.json()['balance'], 30)

        response = await self.async_client.get('/api/ledger/history', headers=auth_headers())
        self.assertEqual(response.status_code, 200)
        history = response.json()
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0]['amount'], -20)
        self.assertEqual(history[0]['balance_after'], 30)

    async def test_store_failure_returns_503(self):
        await User.objects.acreate(email='player@example.com', points=50)
        reward = await Reward.objects.acreate(title='Coffee', points=20)

        with mock.patch('apps.rewards.services.debit_points', side_effect=OperationalError("timeout")):
            response = await self.async_client.post(f'/api/rewards/{reward.id}/buy', headers=auth_headers())

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['code'], 'TRANSIENT_STORE_FAILURE')
