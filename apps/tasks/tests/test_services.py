"""
Unit tests for task services.
Tests CRUD and the exactly-once completion credit.
"""
import asyncio
from unittest import mock
from uuid import uuid4

from django.db import OperationalError
from django.test import TestCase

from apps.core.exceptions import InvariantViolation, ResultCode, TransientStoreFailure
from apps.identity.dtos import Principal
from apps.identity.models import User
from apps.ledger.models import PointsTransaction
from apps.tasks import services
from apps.tasks.dtos import TaskIn, TaskUpdate
from apps.tasks.models import Task, Importance


class TaskCrudTest(TestCase):

    async def test_create_defaults(self):
        task = await services.create_task(TaskIn(title="Clean desk", points=10))
        self.assertEqual(task.title, "Clean desk")
        self.assertEqual(task.points, 10)
        self.assertEqual(task.importance, Importance.NORMAL)
        self.assertFalse(task.done)

    async def test_list_tasks(self):
        await services.create_task(TaskIn(title="A", points=1))
        await services.create_task(TaskIn(title="B", points=2, importance=Importance.UBER_HIGH))
        tasks = await services.list_tasks()
        self.assertEqual({t.title for t in tasks}, {"A", "B"})

    async def test_partial_update(self):
        task = await services.create_task(TaskIn(title="Old", points=5, importance=Importance.LOW))
        updated = await services.update_task(task.id, TaskUpdate(points=8))

        self.assertEqual(updated.title, "Old")
        self.assertEqual(updated.points, 8)
        self.assertEqual(updated.importance, Importance.LOW)

    async def test_update_does_not_touch_done(self):
        task = await Task.objects.acreate(title="Done already", points=5, done=True)
        updated = await services.update_task(task.id, TaskUpdate(title="Renamed"))
        self.assertTrue(updated.done)

    async def test_update_unknown_task(self):
        self.assertIsNone(await services.update_task(uuid4(), TaskUpdate(title="x")))

    async def test_delete(self):
        task = await services.create_task(TaskIn(title="Temp", points=1))
        self.assertTrue(await services.delete_task(task.id))
        self.assertFalse(await services.delete_task(task.id))
        self.assertIsNone(await services.get_task_dto(task.id))

    async def test_crud_has_no_balance_side_effects(self):
        task = await services.create_task(TaskIn(title="Temp", points=10))
        await services.update_task(task.id, TaskUpdate(points=20))
        await services.delete_task(task.id)
        self.assertEqual(await PointsTransaction.objects.acount(), 0)


class CompleteTaskTest(TestCase):

    def setUp(self):
        self.user = User.objects.create(email='player@example.com')
        self.principal = Principal(user_id=self.user.id, email=self.user.email)
        self.task = Task.objects.create(title="Clean desk", points=10)

    async def _balance(self):
        return (await User.objects.aget(id=self.user.id)).points

    async def test_complete_credits_points(self):
        result = await services.complete_task(self.task.id, self.principal)

        self.assertTrue(result.success)
        self.assertEqual(result.balance, 10)
        self.assertEqual(await self._balance(), 10)

        task = await Task.objects.aget(id=self.task.id)
        self.assertTrue(task.done)
        self.assertEqual(task.completed_by_id, self.user.id)
        self.assertIsNotNone(task.completed_at)

    async def test_complete_adds_to_existing_balance(self):
        await User.objects.filter(id=self.user.id).aupdate(points=7)
        result = await services.complete_task(self.task.id, self.principal)
        self.assertEqual(result.balance, 17)

    async def test_second_completion_does_not_double_credit(self):
        first = await services.complete_task(self.task.id, self.principal)
        second = await services.complete_task(self.task.id, self.principal)

        self.assertTrue(first.success)
        self.assertFalse(second.success)
        self.assertEqual(second.code, ResultCode.ALREADY_COMPLETED)
        self.assertEqual(await self._balance(), 10)
        self.assertEqual(await PointsTransaction.objects.acount(), 1)

    async def test_concurrent_completion_credits_once(self):
        """
        Interleaves completions at their awaits. The ORM calls share one
        worker thread, so the single credit rests on the done=False
        conditional UPDATE, not on true parallelism here.
        """
        results = await asyncio.gather(
            services.complete_task(self.task.id, self.principal),
            services.complete_task(self.task.id, self.principal),
            services.complete_task(self.task.id, self.principal),
        )

        self.assertEqual(sum(1 for r in results if r.success), 1)
        self.assertEqual(await self._balance(), 10)

    async def test_unknown_task(self):
        result = await services.complete_task(uuid4(), self.principal)
        self.assertFalse(result.success)
        self.assertEqual(result.code, ResultCode.NOT_FOUND)
        self.assertEqual(await self._balance(), 0)

    async def test_missing_user_rolls_back_done_flag(self):
        ghost = Principal(user_id=uuid4(), email='ghost@example.com')
        with self.assertRaises(InvariantViolation):
            await services.complete_task(self.task.id, ghost)

        task = await Task.objects.aget(id=self.task.id)
        self.assertFalse(task.done)

    async def test_store_failure_leaves_no_partial_update(self):
        with mock.patch('apps.tasks.services.credit_points', side_effect=OperationalError("timeout")):
            with self.assertRaises(TransientStoreFailure):
                await services.complete_task(self.task.id, self.principal)

        task = await Task.objects.aget(id=self.task.id)
        self.assertFalse(task.done)
        self.assertEqual(await self._balance(), 0)

        # Retrying after the failure succeeds
        result = await services.complete_task(self.task.id, self.principal)
        self.assertTrue(result.success)
        self.assertEqual(await self._balance(), 10)
