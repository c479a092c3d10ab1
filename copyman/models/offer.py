"""Offer model - "buy N get M free" rule for one product."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Offer(models.Model):
    """
    Loyalty accrual rule.

    role NULL = common offer, applies to every role. A role-specific offer
    wins over the common one for the same product (see OfferResolver).

    Quantities may be stored as 0 (an offer being edited), but such an offer
    is never applied: both must be positive to drive the cycle.
    """

    product = models.ForeignKey(
        "copyman.Product",
        on_delete=models.CASCADE,
        related_name="offers",
        verbose_name=_("product"),
    )
    role = models.ForeignKey(
        "copyman.CustomerRole",
        on_delete=models.CASCADE,
        related_name="offers",
        null=True,
        blank=True,
        verbose_name=_("role"),
        help_text=_("Empty = applies to all roles"),
    )
    buy_quantity = models.PositiveIntegerField(_("buy quantity"))
    free_quantity = models.PositiveIntegerField(_("free quantity"))
    is_active = models.BooleanField(_("active"), default=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("offer")
        verbose_name_plural = _("offers")
        ordering = ["-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "role"],
                name="copyman_offer_unique_product_role",
            ),
            models.UniqueConstraint(
                fields=["product"],
                condition=models.Q(role__isnull=True),
                name="copyman_offer_unique_common_product",
            ),
        ]

    def __str__(self):
        role = self.role.name if self.role else "All"
        return f"{self.product}: buy {self.buy_quantity} get {self.free_quantity} ({role})"

    @property
    def is_usable(self) -> bool:
        """Both quantities strictly positive."""
        return self.buy_quantity > 0 and self.free_quantity > 0
