from django.core.management.base import BaseCommand
from django.db import transaction

from apps.tasks.models import Task, Importance
from apps.rewards.models import Reward

SAMPLE_TASKS = [
    ("Clean desk", 10, Importance.NORMAL),
    ("Water the plants", 5, Importance.LOW),
    ("File tax return", 50, Importance.UBER_HIGH),
    ("Reply to pending emails", 15, Importance.HIGH),
    ("Go for a run", 20, Importance.NORMAL),
]

SAMPLE_REWARDS = [
    ("Coffee break", 10),
    ("Episode of a series", 20),
    ("Dessert", 30),
    ("Evening off", 100),
]


class Command(BaseCommand):
    help = 'Seeds the database with sample tasks and rewards.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clean',
            action='store_true',
            help='Delete existing tasks and rewards before seeding',
        )
        parser.add_argument(
            '--tasks',
            action='store_true',
            help='Seed tasks only',
        )
        parser.add_argument(
            '--rewards',
            action='store_true',
            help='Seed rewards only',
        )

    def handle(self, *args, **options):
        seed_all = not any([options['tasks'], options['rewards']])

        with transaction.atomic():
            if options['clean']:
                self.stdout.write(self.style.WARNING('Cleaning tasks and rewards...'))
                Task.objects.all().delete()
                Reward.objects.all().delete()

            if seed_all or options['tasks']:
                self._seed_tasks()

            if seed_all or options['rewards']:
                self._seed_rewards()

        self.stdout.write(self.style.SUCCESS('Seeding completed successfully.'))

    def _seed_tasks(self):
        self.stdout.write('Seeding Tasks...')
        for title, points, importance in SAMPLE_TASKS:
            _, created = Task.objects.get_or_create(
                title=title,
                defaults={'points': points, 'importance': importance},
            )
            if created:
                self.stdout.write(f' - Created task "{title}" ({points} pts)')

    def _seed_rewards(self):
        self.stdout.write('Seeding Rewards...')
        for title, points in SAMPLE_REWARDS:
            _, created = Reward.objects.get_or_create(
                title=title,
                defaults={'points': points},
            )
            if created:
                self.stdout.write(f' - Created reward "{title}" ({points} pts)')
