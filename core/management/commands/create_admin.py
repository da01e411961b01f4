# core/management/commands/create_admin.py
from django.core.management.base import BaseCommand, CommandError
from core.models import User


class Command(BaseCommand):
    help = "Create a verified admin user. Fails if an admin with that email already exists."

    def add_arguments(self, parser):
        parser.add_argument("email", nargs="?", default="admin@stayinnhostels.com")
        parser.add_argument("password", nargs="?", default="admin123456")
        parser.add_argument("full_name", nargs="?", default="Admin User")

    def handle(self, *args, **opts):
        email = opts["email"].strip().lower()
        if User.objects.filter(email=email, role=User.ROLE_ADMIN).exists():
            raise CommandError(f"Admin user already exists with this email: {email}")
        if User.objects.filter(email=email).exists():
            raise CommandError(f"A non-admin user already uses this email: {email}")

        admin = User.objects.create_user(
            email=email,
            password=opts["password"],
            full_name=opts["full_name"],
            role=User.ROLE_ADMIN,
            is_email_verified=True,
            cnic_front="admin-cnic-front",
            cnic_back="admin-cnic-back",
        )
        self.stdout.write(self.style.SUCCESS(f"Admin user created: {admin.email} ({admin.full_name})"))
        self.stdout.write(self.style.WARNING("Please change the password after first login!"))
