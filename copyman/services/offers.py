"""Offer resolver - picks the loyalty rule that applies to a customer role."""

import logging

from django.db.models import Case, IntegerField, Q, Value, When

from copyman.conf import copyman_settings
from copyman.gates import Gates
from copyman.models import Offer

logger = logging.getLogger(__name__)


class OfferResolver:
    """
    Resolve the active offer for the loyalty product line.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def resolve(cls, role_id: int | None) -> Offer | None:
        """
        Select the single offer that applies to ``role_id``.

        Candidates are active offers on a product whose name contains
        COPYMAN["ELIGIBLE_PRODUCT_KEYWORD"], either common (role NULL) or
        bound to ``role_id``. A role-specific offer wins; ties go to the
        newest offer. A role id of 0 or None only matches common offers.

        The chosen offer is returned only if usable (buy and free quantities
        positive). An unusable offer does not fall back to the common one:
        the product is simply fully paid for that role.

        Args:
            role_id: Customer role id (nullable)

        Returns:
            Offer or None
        """
        offer = cls._candidates(role_id).first()
        if offer is None:
            return None

        if not cls.usable(offer):
            logger.warning(
                "Offer %s ignored: buy=%s free=%s must both be positive",
                offer.pk,
                offer.buy_quantity,
                offer.free_quantity,
            )
            return None
        return offer

    @classmethod
    def usable(cls, offer: Offer) -> bool:
        """L3 gate as a bool."""
        return Gates.check_offer_usable(offer.buy_quantity, offer.free_quantity)

    @classmethod
    def _candidates(cls, role_id: int | None):
        """Internal: ordered queryset of matching offers. Override for caching, etc."""
        role_id = role_id or None
        keyword = copyman_settings.ELIGIBLE_PRODUCT_KEYWORD.strip()

        qs = Offer.objects.select_related("product", "role").filter(
            is_active=True,
            product__name__icontains=keyword,
        )

        if role_id is None:
            return qs.filter(role__isnull=True).order_by("-id")

        return (
            qs.filter(Q(role__isnull=True) | Q(role_id=role_id))
            .annotate(
                role_match=Case(
                    When(role_id=role_id, then=Value(1)),
                    default=Value(0),
                    output_field=IntegerField(),
                )
            )
            .order_by("-role_match", "-id")
        )
