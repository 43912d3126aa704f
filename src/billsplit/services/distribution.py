from __future__ import annotations

from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from billsplit.models import ParticipantShare, TipDistribution
from billsplit.services.money import ADJUSTMENT_EPSILON, ZERO, round_money


def distribute_tax(
    participant_subtotal: Decimal,
    total_subtotal: Decimal,
    total_tax: Decimal,
    rounding: str = ROUND_HALF_UP,
) -> Decimal:
    """Tax always follows the participant's share of the subtotal."""
    if total_tax == ZERO or total_subtotal == ZERO:
        return round_money(ZERO, rounding)

    proportion = participant_subtotal / total_subtotal
    return round_money(total_tax * proportion, rounding)


def distribute_tip(
    participant_subtotal: Decimal,
    total_subtotal: Decimal,
    total_tip: Decimal,
    mode: TipDistribution,
    participant_count: int,
    rounding: str = ROUND_HALF_UP,
) -> Decimal:
    if total_tip == ZERO:
        return round_money(ZERO, rounding)

    if mode == TipDistribution.EQUAL or total_subtotal == ZERO:
        return round_money(total_tip / participant_count, rounding)

    proportion = participant_subtotal / total_subtotal
    return round_money(total_tip * proportion, rounding)


def build_share(
    participant_id: str,
    subtotal: Decimal,
    total_subtotal: Decimal,
    total_tax: Decimal,
    total_tip: Decimal,
    mode: TipDistribution,
    participant_count: int,
    rounding: str = ROUND_HALF_UP,
    items: Sequence[str] | None = None,
) -> ParticipantShare:
    subtotal = round_money(subtotal, rounding)
    tax = distribute_tax(subtotal, total_subtotal, total_tax, rounding)
    tip = distribute_tip(subtotal, total_subtotal, total_tip, mode, participant_count, rounding)
    return ParticipantShare(
        participant_id=participant_id,
        subtotal=subtotal,
        tax=tax,
        tip=tip,
        total=round_money(subtotal + tax + tip, rounding),
        items=tuple(items) if items is not None else None,
    )


def apply_rounding_adjustment(
    shares: Sequence[ParticipantShare],
    adjustment: Decimal,
    rounding: str = ROUND_HALF_UP,
) -> list[ParticipantShare]:
    """Absorb ``adjustment`` into the largest share.

    ``adjustment`` is ``calculated - expected``, so it is subtracted. The first share wins when
    several have the same largest total. Only that share's ``total`` changes; a new share object
    replaces it and the input sequence is left untouched.
    """
    adjusted = list(shares)
    if not adjusted or abs(adjustment) < ADJUSTMENT_EPSILON:
        return adjusted

    max_index = 0
    for index, share in enumerate(adjusted):
        if share.total > adjusted[max_index].total:
            max_index = index

    target = adjusted[max_index]
    adjusted[max_index] = replace(target, total=round_money(target.total - adjustment, rounding))
    return adjusted
