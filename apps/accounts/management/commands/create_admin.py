"""
Management command to create (or reset) a super admin account.

Usage:
    python manage.py create_admin --email admin@salon.com --password admin123
"""

from django.core.management.base import BaseCommand, CommandError
from decouple import config

from apps.accounts.models import User, UserRole


class Command(BaseCommand):
    help = 'Create a super admin account, or reset the password of an existing one'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            default=config('ADMIN_EMAIL', default='admin@salon.com'),
            help='Login email of the super admin',
        )
        parser.add_argument(
            '--password',
            default=config('ADMIN_PASSWORD', default=None),
            help='Password (falls back to ADMIN_PASSWORD)',
        )
        parser.add_argument(
            '--name',
            default='Admin',
            help='Display name',
        )

    def handle(self, *args, **options):
        email = options['email']
        password = options['password']
        if not password:
            raise CommandError('A password is required: pass --password or set ADMIN_PASSWORD')

        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            User.objects.create_superuser(
                email=email,
                password=password,
                display_name=options['name'],
            )
            self.stdout.write(self.style.SUCCESS(f'Super admin {email} created.'))
            return

        user.role = UserRole.SUPER_ADMIN
        user.is_staff = True
        user.is_superuser = True
        user.is_active = True
        user.set_password(password)
        user.save()
        self.stdout.write(self.style.WARNING(f'Super admin {email} already existed; password reset.'))
