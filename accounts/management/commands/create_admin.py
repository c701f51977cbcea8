import os

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model

from core.constants import UserRole


class Command(BaseCommand):
    help = 'Create the admin user if it does not exist'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=os.environ.get('ADMIN_EMAIL', 'admin@pgnexus.local'))
        parser.add_argument('--name', default=os.environ.get('ADMIN_NAME', 'Administrator'))
        parser.add_argument('--password', default=os.environ.get('ADMIN_PASSWORD'))

    def handle(self, *args, **options):
        User = get_user_model()
        email = options['email'].strip().lower()

        if User.objects.filter(email=email).exists():
            self.stdout.write(self.style.WARNING(f'Admin user already exists: {email}'))
            return
        if not options['password']:
            raise CommandError('A password is required (--password or ADMIN_PASSWORD)')

        User.objects.create_superuser(
            email=email,
            password=options['password'],
            name=options['name'],
            role=UserRole.ADMIN,
        )
        self.stdout.write(self.style.SUCCESS(f'Admin user created: {email}'))
