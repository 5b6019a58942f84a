from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.common.validators import UTORID_PATTERN
from apps.users.models import User, Role


class Command(BaseCommand):
    help = 'Create or update a verified superuser account'

    def add_arguments(self, parser):
        parser.add_argument('utorid', help='utorid of the superuser (7-8 alphanumerics)')
        parser.add_argument('email', help='email address')
        parser.add_argument('password', help='login password')
        parser.add_argument('--name', default=None, help='display name (defaults to the utorid)')

    @transaction.atomic
    def handle(self, *args, **options):
        utorid = options['utorid']
        if not UTORID_PATTERN.match(utorid):
            raise CommandError(f'Invalid utorid: {utorid}')

        user = User.objects.filter(utorid=utorid).first()
        created = user is None
        if created:
            user = User(utorid=utorid)

        user.email = options['email']
        user.name = options['name'] or user.name or utorid
        user.role = Role.SUPERUSER
        user.verified = True
        user.is_staff = True
        user.is_superuser = True
        user.set_password(options['password'])
        user.save()

        action = 'Created' if created else 'Updated'
        self.stdout.write(self.style.SUCCESS(f'{action} superuser {user.utorid} (id={user.id})'))
