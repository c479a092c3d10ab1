"""Copyman models."""

from copyman.models.role import CustomerRole
from copyman.models.customer import Customer, normalize_mobile
from copyman.models.product import Product
from copyman.models.offer import Offer
from copyman.models.ledger import RewardLedger
from copyman.models.transaction import Transaction, TransactionItem

__all__ = [
    # Collaborator records
    "CustomerRole",
    "Customer",
    "normalize_mobile",
    "Product",
    "Offer",
    # Loyalty core
    "RewardLedger",
    "Transaction",
    "TransactionItem",
]
