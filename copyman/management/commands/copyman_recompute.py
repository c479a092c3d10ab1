"""Management command to rebuild a customer's reward ledger."""

from django.core.management.base import BaseCommand, CommandError

from copyman.exceptions import CopymanError
from copyman.services import customer as customer_service
from copyman.services.ledger import LedgerService


class Command(BaseCommand):
    help = "Recompute free units earned/used from an authoritative printed-units total"

    def add_arguments(self, parser):
        parser.add_argument("mobile", help="Customer mobile")
        parser.add_argument(
            "--total",
            type=int,
            required=True,
            help="Units of the loyalty product printed so far",
        )

    def handle(self, *args, **options):
        customer = customer_service.get_by_mobile(options["mobile"])
        if customer is None:
            raise CommandError(f"Customer {options['mobile']!r} not found.")

        try:
            LedgerService.recompute(customer.pk, options["total"])
        except CopymanError as e:
            raise CommandError(e.message) from e

        status = LedgerService.status(customer.pk)
        self.stdout.write(
            self.style.SUCCESS(
                f"Recomputed {customer.code}: printed={status.total_printed} "
                f"free_remaining={status.free_remaining} "
                f"next_unlock_in={status.units_until_next_unlock}"
            )
        )
