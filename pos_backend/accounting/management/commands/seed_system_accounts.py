# accounting/management/commands/seed_system_accounts.py

from django.core.management.base import BaseCommand

from accounting.services.account_service import seed_system_accounts


class Command(BaseCommand):
    help = "Seed the non-removable system accounts (Cash/Bank, Sales, COGS, ...)"

    def handle(self, *args, **options):
        self.stdout.write("Seeding system accounts...")

        created_count, updated_count = seed_system_accounts()

        self.stdout.write(
            self.style.SUCCESS(
                f"✔ System accounts seeded ({created_count} new accounts, {updated_count} updated)."
            )
        )
