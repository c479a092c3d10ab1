"""Customer model.

Customers are looked up at the counter by mobile number, stored as digits only.
The loyalty core reads nothing but the primary key and the role.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


def normalize_mobile(value: str) -> str:
    """Keep digits only ("+91 98765-43210" -> "919876543210")."""
    return "".join(filter(str.isdigit, value or ""))


class Customer(models.Model):
    """Registered customer."""

    code = models.CharField(
        _("code"),
        max_length=50,
        unique=True,
        help_text=_("Unique customer code (e.g. CUST-001)"),
    )
    name = models.CharField(_("name"), max_length=200)
    mobile = models.CharField(
        _("mobile"),
        max_length=20,
        unique=True,
        help_text=_("Digits only"),
    )

    role = models.ForeignKey(
        "copyman.CustomerRole",
        on_delete=models.SET_NULL,
        related_name="customers",
        null=True,
        blank=True,
        verbose_name=_("role"),
    )

    is_active = models.BooleanField(_("active"), default=True, db_index=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("customer")
        verbose_name_plural = _("customers")
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"

    @property
    def role_name(self) -> str:
        """Role name, "All" when the customer has no role."""
        return self.role.name if self.role else "All"

    def save(self, *args, **kwargs):
        self.mobile = normalize_mobile(self.mobile)
        super().save(*args, **kwargs)
