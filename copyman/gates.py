"""
Copyman Gates - Validation rules.

L1: SubmissionShape - Customer mobile present, items is a non-empty list of ItemRequest
L2: QuantityValid - Quantities and prices are non-negative integers
L3: OfferUsable - Offer buy/free quantities are strictly positive
L4: LedgerConsistency - Counters non-negative, free used <= free earned
"""

from dataclasses import dataclass

from copyman.exceptions import ConfigurationError, ConsistencyError, ValidationError


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Gates:
    """Copyman validation gates."""

    # =========================================================================
    # L1: Submission Shape
    # =========================================================================

    @classmethod
    def submission_shape(cls, request) -> GateResult:
        """
        L1: Submission must name a customer and carry at least one item.

        Args:
            request: TransactionRequest

        Raises:
            ValidationError: INVALID_SUBMISSION
        """
        from copyman.models import normalize_mobile
        from copyman.protocols import ItemRequest

        if not isinstance(request.customer_mobile, str) or not normalize_mobile(
            request.customer_mobile
        ):
            raise ValidationError(
                "INVALID_SUBMISSION",
                message="Customer mobile is required.",
                gate="L1_SubmissionShape",
            )

        items = request.items
        if not isinstance(items, (list, tuple)) or not items:
            raise ValidationError(
                "INVALID_SUBMISSION",
                message="Items must be a non-empty list.",
                gate="L1_SubmissionShape",
            )

        for index, item in enumerate(items):
            if not isinstance(item, ItemRequest):
                raise ValidationError(
                    "INVALID_SUBMISSION",
                    message=f"Item {index} is malformed.",
                    gate="L1_SubmissionShape",
                    index=index,
                )
            if not _is_int(item.product_id) or item.product_id <= 0:
                raise ValidationError(
                    "INVALID_SUBMISSION",
                    message=f"Item {index} has an invalid product id.",
                    gate="L1_SubmissionShape",
                    index=index,
                    product_id=item.product_id,
                )

        return GateResult(True, "L1_SubmissionShape")

    @classmethod
    def check_submission_shape(cls, request) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.submission_shape(request)
            return True
        except ValidationError:
            return False

    # =========================================================================
    # L2: Quantity Valid
    # =========================================================================

    @classmethod
    def quantity(cls, value, field: str = "quantity") -> GateResult:
        """
        L2: Value must be a non-negative integer (bools rejected).

        Raises:
            ValidationError: INVALID_QUANTITY
        """
        if not _is_int(value) or value < 0:
            raise ValidationError(
                "INVALID_QUANTITY",
                message=f"{field} must be a non-negative integer, got {value!r}.",
                gate="L2_QuantityValid",
                field=field,
                value=value,
            )
        return GateResult(True, "L2_QuantityValid")

    @classmethod
    def check_quantity(cls, value, field: str = "quantity") -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.quantity(value, field)
            return True
        except ValidationError:
            return False

    @classmethod
    def item_quantities(cls, request) -> GateResult:
        """L2 applied to every item of a submission."""
        for item in request.items:
            cls.quantity(item.quantity, "quantity")
            if item.unit_price_q is not None:
                cls.quantity(item.unit_price_q, "unit_price_q")
        return GateResult(True, "L2_QuantityValid")

    # =========================================================================
    # L3: Offer Usable
    # =========================================================================

    @classmethod
    def offer_usable(cls, buy_quantity, free_quantity) -> GateResult:
        """
        L3: Both quantities strictly positive integers.

        A zero buy quantity would never close a cycle; a zero free quantity
        makes the cycle pointless.

        Raises:
            ConfigurationError: OFFER_NOT_USABLE
        """
        if not (_is_int(buy_quantity) and buy_quantity > 0) or not (
            _is_int(free_quantity) and free_quantity > 0
        ):
            raise ConfigurationError(
                "OFFER_NOT_USABLE",
                gate="L3_OfferUsable",
                buy_quantity=buy_quantity,
                free_quantity=free_quantity,
            )
        return GateResult(True, "L3_OfferUsable")

    @classmethod
    def check_offer_usable(cls, buy_quantity, free_quantity) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.offer_usable(buy_quantity, free_quantity)
            return True
        except ConfigurationError:
            return False

    # =========================================================================
    # L4: Ledger Consistency
    # =========================================================================

    @classmethod
    def ledger_consistency(
        cls,
        total_units: int,
        free_earned: int,
        free_used: int,
    ) -> GateResult:
        """
        L4: Counters non-negative and free_used <= free_earned.

        Raises:
            ConsistencyError: LEDGER_INCONSISTENT
        """
        if min(total_units, free_earned, free_used) < 0 or free_used > free_earned:
            raise ConsistencyError(
                "LEDGER_INCONSISTENT",
                gate="L4_LedgerConsistency",
                total_units=total_units,
                free_earned=free_earned,
                free_used=free_used,
            )
        return GateResult(True, "L4_LedgerConsistency")

    @classmethod
    def check_ledger_consistency(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.ledger_consistency(*args, **kwargs)
            return True
        except ConsistencyError:
            return False
