"""
Copyman configuration.

Usage in settings.py:
    COPYMAN = {
        "ELIGIBLE_PRODUCT_KEYWORD": "xerox",
        "DEFAULT_APPLY_OFFER": True,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class CopymanSettings:
    """Copyman configuration settings."""

    # Products whose name contains this keyword form the loyalty product line
    ELIGIBLE_PRODUCT_KEYWORD: str = "xerox"

    # Used when a submission does not say whether to redeem free units
    DEFAULT_APPLY_OFFER: bool = True

    # Transactions returned by activity views
    HISTORY_LIMIT: int = 50


def get_copyman_settings() -> CopymanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "COPYMAN", {})
    return CopymanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_copyman_settings(), name)


copyman_settings = _LazySettings()
