"""CustomerRole model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class CustomerRole(models.Model):
    """Customer role (student, staff, business...). Decides which offer applies."""

    code = models.SlugField(_("code"), max_length=50, unique=True)
    name = models.CharField(_("name"), max_length=100)
    is_active = models.BooleanField(_("active"), default=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("customer role")
        verbose_name_plural = _("customer roles")
        ordering = ["name"]

    def __str__(self):
        return self.name
