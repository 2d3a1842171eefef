# clinic/management/commands/grant_admin.py
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from clinic.services.identity import grant_admin


class Command(BaseCommand):
    help = "Grant the admin role to an existing account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("email")

    def handle(self, *args, **opts):
        email = opts["email"].strip().lower()
        user = get_user_model().objects.filter(username=email).first()
        if user is None:
            raise CommandError(f"no account registered for {email}")
        if grant_admin(user):
            self.stdout.write(self.style.SUCCESS(f"ok: {email} is now admin"))
        else:
            self.stdout.write(f"unchanged: {email} already admin")
