"""RewardLedger model - per-customer loyalty counters."""

from django.db import models
from django.db.models import F, Q
from django.utils.translation import gettext_lazy as _


class RewardLedger(models.Model):
    """
    Loyalty counters for the eligible product line. One row per customer.

    total_units counts every unit of the eligible product ever requested,
    paid or free. Units paid for are therefore total_units - free_used.

    Rows are created lazily with zeros and only mutated through
    LedgerService.apply_delta() or LedgerService.recompute().
    """

    customer = models.OneToOneField(
        "copyman.Customer",
        on_delete=models.CASCADE,
        related_name="reward_ledger",
        verbose_name=_("customer"),
    )

    total_units = models.PositiveIntegerField(
        _("total units"),
        default=0,
        help_text=_("Units of the loyalty product printed (paid + free)"),
    )
    free_earned = models.PositiveIntegerField(
        _("free units earned"),
        default=0,
    )
    free_used = models.PositiveIntegerField(
        _("free units used"),
        default=0,
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("reward ledger")
        verbose_name_plural = _("reward ledgers")
        constraints = [
            models.CheckConstraint(
                condition=Q(free_used__lte=F("free_earned")),
                name="copyman_ledger_used_lte_earned",
            ),
        ]

    def __str__(self):
        return f"{self.customer_id}: {self.total_units} printed | {self.free_balance} free"

    @property
    def free_balance(self) -> int:
        return max(self.free_earned - self.free_used, 0)

    @property
    def paid_total(self) -> int:
        """Units paid for. Free units used are netted out of total_units."""
        return max(self.total_units - self.free_used, 0)

    def cycle_progress(self, buy_quantity: int) -> int:
        """Paid units into the current cycle (0 without a valid cycle length)."""
        if buy_quantity <= 0:
            return 0
        return self.paid_total % buy_quantity

    def cycles_completed(self, buy_quantity: int) -> int:
        if buy_quantity <= 0:
            return 0
        return self.paid_total // buy_quantity
