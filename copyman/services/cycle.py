"""Cycle simulator - splits a requested quantity into paid and free units.

Pure calculation, no database access. Only paid units advance the cycle.
Every closed cycle earns free units into the balance; whether the balance
is spent on the current purchase depends on apply_offer. Earning is
unconditional, so a customer can bank free units by not applying the offer.

Several line items of one purchase are chained by feeding the returned
state into the next call:

    state = CycleState(progress=ledger.cycle_progress(buy), free_balance=ledger.free_balance)
    for qty in quantities:
        result = simulate(qty, buy, free, apply_offer, state)
        state = result.state
"""

from dataclasses import dataclass

from copyman.exceptions import ConfigurationError, ValidationError
from copyman.gates import Gates


@dataclass(frozen=True)
class CycleState:
    """Position in the current cycle plus unspent free units."""

    progress: int = 0
    free_balance: int = 0


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one simulate() call."""

    paid: int
    free_used: int
    earned: int
    state: CycleState

    @property
    def new_progress(self) -> int:
        return self.state.progress

    @property
    def new_free_balance(self) -> int:
        return self.state.free_balance


def simulate(
    quantity: int,
    buy_quantity: int,
    free_quantity: int,
    apply_offer: bool,
    state: CycleState,
) -> CycleResult:
    """
    Run the loyalty cycle over ``quantity`` units.

    Args:
        quantity: Units requested (>= 0)
        buy_quantity: Paid units per cycle (> 0)
        free_quantity: Free units earned per closed cycle (>= 0)
        apply_offer: Spend free balance on this purchase
        state: Cycle position and free balance before the purchase

    Returns:
        CycleResult with paid/free_used/earned and the state to carry forward

    Raises:
        ConfigurationError: buy_quantity not positive or free_quantity negative
        ValidationError: negative quantity or out-of-range state
    """
    # buy_quantity == 0 would never close a cycle
    valid_buy = Gates.check_quantity(buy_quantity) and buy_quantity > 0
    if not valid_buy or not Gates.check_quantity(free_quantity):
        raise ConfigurationError(
            "OFFER_NOT_USABLE",
            buy_quantity=buy_quantity,
            free_quantity=free_quantity,
        )
    Gates.quantity(quantity)
    if not 0 <= state.progress < buy_quantity or state.free_balance < 0:
        raise ValidationError(
            "INVALID_CYCLE_STATE",
            progress=state.progress,
            free_balance=state.free_balance,
            buy_quantity=buy_quantity,
        )

    remaining = quantity
    progress = state.progress
    balance = state.free_balance
    paid = free_used = earned = 0

    if apply_offer and balance > 0:
        use = min(remaining, balance)
        free_used += use
        balance -= use
        remaining -= use

    while remaining > 0:
        pay_now = min(remaining, buy_quantity - progress)
        paid += pay_now
        progress += pay_now
        remaining -= pay_now

        if progress == buy_quantity:
            earned += free_quantity
            balance += free_quantity
            progress = 0

            if apply_offer and remaining > 0:
                use = min(remaining, balance)
                free_used += use
                balance -= use
                remaining -= use

    return CycleResult(
        paid=paid,
        free_used=free_used,
        earned=earned,
        state=CycleState(progress=progress, free_balance=balance),
    )
