"""Product model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Product(models.Model):
    """Catalog product. Prices are integer minor units (paise/cents)."""

    name = models.CharField(_("name"), max_length=200)
    price_q = models.PositiveIntegerField(
        _("price"),
        default=0,
        help_text=_("Unit price in minor units"),
    )
    is_active = models.BooleanField(_("active"), default=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("product")
        verbose_name_plural = _("products")
        ordering = ["name"]

    def __str__(self):
        return self.name
