import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PointsTransaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('user_id', models.UUIDField(db_index=True)),
                ('transaction_type', models.CharField(choices=[('TASK_COMPLETION', 'Task Completion'), ('REWARD_PURCHASE', 'Reward Purchase')], max_length=20)),
                ('amount', models.IntegerField(help_text='Positive for credits, negative for debits')),
                ('balance_after', models.PositiveIntegerField(help_text='Points balance after this transaction')),
                ('reference_id', models.UUIDField(blank=True, db_index=True, help_text='Task or reward that caused the change', null=True)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Points Transaction',
                'verbose_name_plural': 'Points Transactions',
                'ordering': ['-created_at'],
            },
        ),
    ]
