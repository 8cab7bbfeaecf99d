"""
Unit tests for reward services.
Tests CRUD and the overdraft-safe purchase.
"""
import asyncio
from unittest import mock
from uuid import uuid4

from django.db import OperationalError
from django.test import TestCase

from apps.core.exceptions import InvariantViolation, ResultCode, TransientStoreFailure
from apps.identity.dtos import Principal
from apps.identity.models import User
from apps.ledger.models import PointsTransaction, PointsTransactionType
from apps.rewards import services
from apps.rewards.dtos import RewardIn, RewardUpdate
from apps.rewards.models import Reward


class RewardCrudTest(TestCase):

    async def test_create_list_update_delete(self):
        reward = await services.create_reward(RewardIn(title="Coffee", points=10))
        self.assertEqual(reward.points, 10)

        updated = await services.update_reward(reward.id, RewardUpdate(points=12))
        self.assertEqual(updated.title, "Coffee")
        self.assertEqual(updated.points, 12)

        rewards = await services.list_rewards()
        self.assertEqual([r.id for r in rewards], [reward.id])

        self.assertTrue(await services.delete_reward(reward.id))
        self.assertEqual(await services.list_rewards(), [])

    async def test_update_unknown_reward(self):
        self.assertIsNone(await services.update_reward(uuid4(), RewardUpdate(title="x")))
        self.assertFalse(await services.delete_reward(uuid4()))


class BuyRewardTest(TestCase):

    def setUp(self):
        self.user = User.objects.create(email='player@example.com', points=100)
        self.principal = Principal(user_id=self.user.id, email=self.user.email)
        self.coffee = Reward.objects.create(title="Coffee", points=60)
        self.dessert = Reward.objects.create(title="Dessert", points=60)

    async def _balance(self):
        return (await User.objects.aget(id=self.user.id)).points

    async def test_affordable_purchase(self):
        result = await services.buy_reward(self.coffee.id, self.principal)

        self.assertTrue(result.success)
        self.assertEqual(result.balance, 40)
        self.assertEqual(await self._balance(), 40)

        entry = await PointsTransaction.objects.aget(user_id=self.user.id)
        self.assertEqual(entry.transaction_type, PointsTransactionType.REWARD_PURCHASE)
        self.assertEqual(entry.amount, -60)
        self.assertEqual(entry.reference_id, self.coffee.id)

    async def test_insufficient_balance(self):
        await User.objects.filter(id=self.user.id).aupdate(points=10)
        expensive = await Reward.objects.acreate(title="Evening off", points=20)

        result = await services.buy_reward(expensive.id, self.principal)

        self.assertFalse(result.success)
        self.assertEqual(result.message, "insufficient balance")
        self.assertEqual(result.code, ResultCode.INSUFFICIENT_BALANCE)
        self.assertEqual(await self._balance(), 10)

    async def test_reward_is_unchanged_by_purchase(self):
        await services.buy_reward(self.coffee.id, self.principal)
        reward = await Reward.objects.aget(id=self.coffee.id)
        self.assertEqual(reward.points, 60)

    async def test_concurrent_purchases_never_overdraw(self):
        """
        Balance 100, two 60-point rewards bought at once: exactly one succeeds.

        The purchases interleave at their awaits but the ORM calls share one
        worker thread, so the result rests on the points__gte conditional
        UPDATE, not on true parallelism here.
        """
        results = await asyncio.gather(
            services.buy_reward(self.coffee.id, self.principal),
            services.buy_reward(self.dessert.id, self.principal),
        )

        self.assertEqual(sorted(r.success for r in results), [False, True])
        self.assertEqual(await self._balance(), 40)

    async def test_sequential_purchases_debit_serially(self):
        cheap = await Reward.objects.acreate(title="Sticker", points=30)
        results = [await services.buy_reward(cheap.id, self.principal) for _ in range(4)]

        self.assertEqual([r.success for r in results], [True, True, True, False])
        self.assertEqual(await self._balance(), 10)

    async def test_unknown_reward(self):
        result = await services.buy_reward(uuid4(), self.principal)
        self.assertFalse(result.success)
        self.assertEqual(result.code, ResultCode.NOT_FOUND)
        self.assertEqual(await self._balance(), 100)

    async def test_missing_user(self):
        ghost = Principal(user_id=uuid4(), email='ghost@example.com')
        with self.assertRaises(InvariantViolation):
            await services.buy_reward(self.coffee.id, ghost)

    async def test_store_failure_is_transient(self):
        with mock.patch('apps.rewards.services.debit_points', side_effect=OperationalError("timeout")):
            with self.assertRaises(TransientStoreFailure):
                await services.buy_reward(self.coffee.id, self.principal)
        self.assertEqual(await self._balance(), 100)
