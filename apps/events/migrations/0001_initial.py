import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField()),
                ('location', models.CharField(max_length=255)),
                ('start_time', models.DateTimeField()),
                ('end_time', models.DateTimeField()),
                ('capacity', models.PositiveIntegerField(blank=True, null=True)),
                ('published', models.BooleanField(default=False)),
                ('points_total', models.PositiveIntegerField()),
                ('points_remain', models.IntegerField()),
                ('points_awarded', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'db_table': 'events',
                'ordering': ['id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('points_remain__gte', 0)), name='event_points_remain_non_negative'),
                    models.CheckConstraint(condition=models.Q(('points_awarded__gte', 0)), name='event_points_awarded_non_negative'),
                    models.CheckConstraint(condition=models.Q(('points_total', models.F('points_remain') + models.F('points_awarded'))), name='event_points_conserved'),
                    models.CheckConstraint(condition=models.Q(('end_time__gt', models.F('start_time'))), name='event_end_after_start'),
                ],
            },
        ),
        migrations.CreateModel(
            name='EventGuest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='guests', to='events.event')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='event_rsvps', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Event Guest',
                'verbose_name_plural': 'Event Guests',
                'db_table': 'event_guests',
                'ordering': ['id'],
                'constraints': [
                    models.UniqueConstraint(fields=('event', 'user'), name='unique_event_guest'),
                ],
            },
        ),
        migrations.CreateModel(
            name='EventOrganizer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='organizers', to='events.event')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='organized_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Event Organizer',
                'verbose_name_plural': 'Event Organizers',
                'db_table': 'event_organizers',
                'ordering': ['id'],
                'constraints': [
                    models.UniqueConstraint(fields=('event', 'user'), name='unique_event_organizer'),
                ],
            },
        ),
    ]
