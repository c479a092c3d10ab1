"""Transaction models - purchase header and line items."""

from django.db import models
from django.db.models import F, Q
from django.utils.translation import gettext_lazy as _


class Transaction(models.Model):
    """
    Committed purchase.

    Created only by TransactionService.process(), together with its items
    and the ledger delta, in a single database transaction.
    """

    customer = models.ForeignKey(
        "copyman.Customer",
        on_delete=models.PROTECT,
        related_name="transactions",
        verbose_name=_("customer"),
    )
    total_q = models.PositiveBigIntegerField(
        _("total"),
        default=0,
        help_text=_("Sum of paid units x unit price, in minor units"),
    )
    apply_offer = models.BooleanField(
        _("offer applied"),
        default=True,
        help_text=_("Whether free units were redeemed at checkout"),
    )
    offer = models.ForeignKey(
        "copyman.Offer",
        on_delete=models.SET_NULL,
        related_name="transactions",
        null=True,
        blank=True,
        verbose_name=_("offer"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _("transaction")
        verbose_name_plural = _("transactions")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["customer", "-created_at"], name="copyman_tx_customer_idx"),
        ]

    def __str__(self):
        return f"#{self.pk} {self.customer_id}: {self.total_q}"


class TransactionItem(models.Model):
    """Line item with its paid/free split. quantity = paid + free, always."""

    transaction = models.ForeignKey(
        Transaction,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name=_("transaction"),
    )
    product = models.ForeignKey(
        "copyman.Product",
        on_delete=models.PROTECT,
        related_name="transaction_items",
        verbose_name=_("product"),
    )
    quantity = models.PositiveIntegerField(_("quantity"))
    paid_quantity = models.PositiveIntegerField(_("paid quantity"))
    free_quantity = models.PositiveIntegerField(_("free quantity"), default=0)
    unit_price_q = models.PositiveIntegerField(_("unit price"))

    class Meta:
        verbose_name = _("transaction item")
        verbose_name_plural = _("transaction items")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity=F("paid_quantity") + F("free_quantity")),
                name="copyman_item_quantity_split",
            ),
        ]

    def __str__(self):
        return f"{self.product_id} x{self.quantity} ({self.free_quantity} free)"

    @property
    def line_total_q(self) -> int:
        return self.paid_quantity * self.unit_price_q

    @property
    def discount_q(self) -> int:
        """Value of the free units."""
        return self.free_quantity * self.unit_price_q
