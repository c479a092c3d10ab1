"""Copyman exceptions."""


class BaseError(Exception):
    """
    Structured exception with a machine-readable code.

    Subclasses provide ``_default_messages`` so callers can raise with just a
    code. Extra keyword arguments are kept in ``data`` for the caller.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class CopymanError(BaseError):
    """
    Structured exception for loyalty operations.

    Usage:
        try:
            receipt = TransactionService.process(request)
        except CopymanError as e:
            if e.code == "CUSTOMER_NOT_FOUND":
                handle_not_found()
    """

    _default_messages = {
        # Validation
        "INVALID_SUBMISSION": "Invalid transaction submission",
        "INVALID_QUANTITY": "Quantity must be a non-negative integer",
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "PRODUCT_NOT_FOUND": "Product not found",
        "TRANSACTION_NOT_FOUND": "Transaction not found",
        "INVALID_CYCLE_STATE": "Invalid loyalty cycle state",
        "INVALID_TOTAL": "Total units must be a non-negative integer",
        # Configuration
        "OFFER_NOT_USABLE": "Offer quantities must be positive",
        "OFFER_NOT_FOUND": "No active offer for customer role",
        # Consistency
        "LEDGER_INCONSISTENT": "Free units used would exceed free units earned",
        "NEGATIVE_DELTA": "Ledger counters cannot decrease",
    }


class ValidationError(CopymanError):
    """Bad input. Raised before any state change."""


class ConfigurationError(CopymanError):
    """Offer configuration cannot drive the loyalty cycle."""


class ConsistencyError(CopymanError):
    """Ledger invariant would be violated. Fatal for the transaction."""
