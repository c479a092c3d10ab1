"""Copyman services.

- cycle: pure loyalty cycle simulator
- offers: OfferResolver
- ledger: LedgerService
- transaction: TransactionService
- customer: lookup by mobile
"""

from copyman.services import customer

__all__ = ["customer"]
