from django.core.management.base import BaseCommand, CommandError
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from camps.services.users import ensure_admin


class Command(BaseCommand):
    help = "Create the user with the given email as admin, or promote an existing user (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('email')
        parser.add_argument('--name', default='')

    def handle(self, *args, **opts):
        try:
            validate_email(opts['email'])
        except ValidationError as exc:
            raise CommandError(f"invalid email: {opts['email']}") from exc
        user, created = ensure_admin(opts['email'], name=opts['name'])
        state = 'created' if created else 'ensured'
        self.stdout.write(self.style.SUCCESS(f"{state}: {user.email} ({user.role})"))
