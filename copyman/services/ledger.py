"""Reward ledger service - snapshot, delta, recompute and status.

Counters move through apply_delta() (transaction path) or recompute()
(administrative path) only. Both run under the customer lock with the
ledger row locked for update.
"""

import logging

from django.db import transaction

from copyman.exceptions import ConsistencyError, ConfigurationError, ValidationError
from copyman.gates import Gates
from copyman.locks import customer_lock
from copyman.models import Customer, Offer, RewardLedger
from copyman.protocols import RewardStatus
from copyman.services.offers import OfferResolver
from copyman.signals import ledger_recomputed

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service for reward ledger operations.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def read_snapshot(cls, customer_id: int) -> RewardLedger:
        """
        Get the customer's ledger locked for update, creating it if absent.

        MUST be called inside transaction.atomic() and customer_lock(), and
        the same scope must cover the apply_delta() that follows.

        Raises:
            ValidationError: CUSTOMER_NOT_FOUND
        """
        cls._ensure_ledger(customer_id)
        return RewardLedger.objects.select_for_update().get(customer_id=customer_id)

    @classmethod
    def apply_delta(
        cls,
        customer_id: int,
        units_added: int,
        free_earned_added: int,
        free_used_added: int,
    ) -> RewardLedger:
        """
        Add deltas to the three counters.

        MUST be called inside customer_lock(), in the same scope as the
        read_snapshot() the deltas were computed from. select_for_update()
        is a no-op on SQLite, so the lock is the only serialization there.

        Args:
            customer_id: Customer primary key
            units_added: Units of the loyalty product requested (paid + free)
            free_earned_added: Free units earned by closed cycles
            free_used_added: Free units redeemed

        Returns:
            Updated RewardLedger

        Raises:
            ConsistencyError: NEGATIVE_DELTA, or LEDGER_INCONSISTENT when
                free_used would exceed free_earned. Nothing is written.
        """
        deltas = (units_added, free_earned_added, free_used_added)
        if any(delta < 0 for delta in deltas):
            raise ConsistencyError(
                "NEGATIVE_DELTA",
                customer_id=customer_id,
                units_added=units_added,
                free_earned_added=free_earned_added,
                free_used_added=free_used_added,
            )

        with transaction.atomic():
            ledger = cls.read_snapshot(customer_id)

            total_units = ledger.total_units + units_added
            free_earned = ledger.free_earned + free_earned_added
            free_used = ledger.free_used + free_used_added
            Gates.ledger_consistency(total_units, free_earned, free_used)

            ledger.total_units = total_units
            ledger.free_earned = free_earned
            ledger.free_used = free_used
            ledger.save(update_fields=["total_units", "free_earned", "free_used", "updated_at"])

        return ledger

    @classmethod
    def recompute(cls, customer_id: int, total_units: int) -> RewardLedger:
        """
        Rebuild counters from an authoritative printed-units figure.

        free_earned = (total_units // buy) * free using the offer resolved for
        the customer's role; free_used is clamped to the new free_earned.
        Administrative correction only: counters may go down.

        Args:
            customer_id: Customer primary key
            total_units: Units of the loyalty product printed so far

        Returns:
            Updated RewardLedger

        Raises:
            ValidationError: INVALID_TOTAL or CUSTOMER_NOT_FOUND
            ConfigurationError: OFFER_NOT_FOUND (no usable offer for the role)
        """
        if not Gates.check_quantity(total_units, "total_units"):
            raise ValidationError("INVALID_TOTAL", total_units=total_units)

        customer = cls._get_customer(customer_id)
        offer = OfferResolver.resolve(customer.role_id)
        if offer is None:
            raise ConfigurationError(
                "OFFER_NOT_FOUND",
                customer_id=customer_id,
                role_id=customer.role_id,
            )

        with customer_lock(customer.pk):
            with transaction.atomic():
                ledger = cls.read_snapshot(customer.pk)
                previous = {
                    "total_units": ledger.total_units,
                    "free_earned": ledger.free_earned,
                    "free_used": ledger.free_used,
                }

                free_earned = (total_units // offer.buy_quantity) * offer.free_quantity
                ledger.total_units = total_units
                ledger.free_earned = free_earned
                ledger.free_used = min(ledger.free_used, free_earned)
                ledger.save(update_fields=["total_units", "free_earned", "free_used", "updated_at"])

        logger.info(
            "Ledger recomputed for customer %s: %s -> total=%s earned=%s used=%s",
            customer.pk,
            previous,
            ledger.total_units,
            ledger.free_earned,
            ledger.free_used,
        )
        ledger_recomputed.send(sender=RewardLedger, ledger=ledger, previous=previous)
        return ledger

    @classmethod
    def status(cls, customer_id: int) -> RewardStatus:
        """
        Customer-facing view of the ledger (lazily creates the row).

        Raises:
            ValidationError: CUSTOMER_NOT_FOUND
        """
        customer = cls._get_customer(customer_id)
        offer = OfferResolver.resolve(customer.role_id)
        ledger = cls._ensure_ledger(customer.pk)
        return cls.build_status(ledger, offer)

    @classmethod
    def build_status(cls, ledger: RewardLedger, offer: Offer | None) -> RewardStatus:
        """Derive RewardStatus from ledger counters and the resolved offer."""
        buy = offer.buy_quantity if offer else 0
        progress = ledger.cycle_progress(buy)
        return RewardStatus(
            total_printed=ledger.total_units,
            paid_total=ledger.paid_total,
            free_remaining=ledger.free_balance,
            cycle_progress=progress,
            cycles_completed=ledger.cycles_completed(buy),
            units_until_next_unlock=buy - progress if buy > 0 else 0,
            buy_quantity=buy,
            free_quantity=offer.free_quantity if offer else 0,
            offer_product_id=offer.product_id if offer else None,
        )

    @classmethod
    def _get_customer(cls, customer_id: int) -> Customer:
        try:
            return Customer.objects.select_related("role").get(pk=customer_id, is_active=True)
        except Customer.DoesNotExist:
            raise ValidationError("CUSTOMER_NOT_FOUND", customer_id=customer_id)

    @classmethod
    def _ensure_ledger(cls, customer_id: int) -> RewardLedger:
        """Get or lazily create the zeroed ledger row."""
        if not Customer.objects.filter(pk=customer_id, is_active=True).exists():
            raise ValidationError("CUSTOMER_NOT_FOUND", customer_id=customer_id)
        ledger, created = RewardLedger.objects.get_or_create(customer_id=customer_id)
        if created:
            logger.debug("Reward ledger created for customer %s", customer_id)
        return ledger
