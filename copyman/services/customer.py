"""Customer lookup at the counter."""

from copyman.models import Customer, normalize_mobile


def get_by_mobile(mobile: str) -> Customer | None:
    """Get active customer by mobile (digits-only exact match)."""
    mobile_normalized = normalize_mobile(mobile)
    if not mobile_normalized:
        return None
    try:
        return Customer.objects.select_related("role").get(
            mobile=mobile_normalized, is_active=True
        )
    except Customer.DoesNotExist:
        return None
