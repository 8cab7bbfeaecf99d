from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.rewards.models import Reward
from apps.tasks.models import Task


class SeedCommandTest(TestCase):
    def test_seed_is_idempotent(self):
        call_command('seed', stdout=StringIO())
        tasks, rewards = Task.objects.count(), Reward.objects.count()
        self.assertGreater(tasks, 0)
        self.assertGreater(rewards, 0)

        call_command('seed', stdout=StringIO())
        self.assertEqual(Task.objects.count(), tasks)
        self.assertEqual(Reward.objects.count(), rewards)

    def test_seed_tasks_only_with_clean(self):
        Reward.objects.create(title="Leftover", points=1)
        Task.objects.create(title="Leftover", points=1)

        call_command('seed', '--clean', '--tasks', stdout=StringIO())

        self.assertFalse(Task.objects.filter(title="Leftover").exists())
        self.assertEqual(Reward.objects.count(), 0)
        self.assertTrue(Task.objects.filter(title="Clean desk", points=10).exists())


class BypassModeAPITest(TestCase):
    async def test_bypass_serves_operator_without_credential(self):
        with self.settings(AUTH_BYPASS=True, AUTH_BYPASS_OPERATOR_EMAIL='operator@localhost'):
            response = await self.async_client.get('/api/identity/me')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['email'], 'operator@localhost')

    async def test_no_bypass_by_default(self):
        response = await self.async_client.get('/api/identity/me')
        self.assertEqual(response.status_code, 401)
