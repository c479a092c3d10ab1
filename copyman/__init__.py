"""
Django Copyman - Print shop loyalty cycles ("buy N pages, get M free").

Usage:
    from copyman import TransactionService, LedgerService, OfferResolver
    from copyman.protocols import TransactionRequest, ItemRequest

    receipt = TransactionService.process(
        TransactionRequest(
            customer_mobile="9876543210",
            items=[ItemRequest(product_id=1, quantity=150, unit_price_q=200)],
        )
    )
    status = LedgerService.status(customer_id)
    offer = OfferResolver.resolve(role_id)

    # Pure cycle calculation
    from copyman.services.cycle import CycleState, simulate
    result = simulate(30, 100, 20, True, CycleState(progress=90))
"""


def __getattr__(name):
    if name == "TransactionService":
        from copyman.services.transaction import TransactionService

        return TransactionService
    if name == "LedgerService":
        from copyman.services.ledger import LedgerService

        return LedgerService
    if name == "OfferResolver":
        from copyman.services.offers import OfferResolver

        return OfferResolver
    if name == "Gates":
        from copyman.gates import Gates

        return Gates
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["TransactionService", "LedgerService", "OfferResolver", "Gates"]
__version__ = "0.1.0"
