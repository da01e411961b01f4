from django.core.management.base import BaseCommand

from core.services.facilities import seed_facilities


class Command(BaseCommand):
    help = "Insert the default facilities (wifi, laundry, kitchen, ...). Existing rows are kept unless --replace."

    def add_arguments(self, parser):
        parser.add_argument("--replace", action="store_true", help="overwrite existing default facilities")

    def handle(self, *args, **opts):
        written = seed_facilities(replace=opts["replace"])
        self.stdout.write(self.style.SUCCESS(f"Seeded {written} facilities."))
