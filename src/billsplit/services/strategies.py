from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Callable

from billsplit.models import CalculationRequest, ParticipantShare, SplitType, TipDistribution
from billsplit.services.distribution import build_share
from billsplit.services.money import ZERO

HUNDRED = Decimal("100")

Strategy = Callable[[CalculationRequest, str], list[ParticipantShare]]


def _tip_mode(request: CalculationRequest) -> TipDistribution:
    if request.tip_distribution is not None:
        return request.tip_distribution
    if request.split_type == SplitType.EQUAL:
        return TipDistribution.EQUAL
    return TipDistribution.PROPORTIONAL


def _share(
    request: CalculationRequest,
    participant_id: str,
    subtotal: Decimal,
    rounding: str,
    items: list[str] | None = None,
) -> ParticipantShare:
    return build_share(
        participant_id,
        subtotal,
        total_subtotal=request.subtotal,
        total_tax=request.tax_amount,
        total_tip=request.tip_amount,
        mode=_tip_mode(request),
        participant_count=len(request.participant_ids),
        rounding=rounding,
        items=items,
    )


def equal_split(request: CalculationRequest, rounding: str = ROUND_HALF_UP) -> list[ParticipantShare]:
    per_person = request.subtotal / len(request.participant_ids)
    return [_share(request, participant_id, per_person, rounding) for participant_id in request.participant_ids]


def itemized_split(request: CalculationRequest, rounding: str = ROUND_HALF_UP) -> list[ParticipantShare]:
    subtotals: dict[str, Decimal] = {participant_id: ZERO for participant_id in request.participant_ids}
    names: dict[str, list[str]] = {participant_id: [] for participant_id in request.participant_ids}

    for item in request.items or ():
        per_person = item.price / len(item.participant_ids)
        for participant_id in item.participant_ids:
            subtotals[participant_id] += per_person
            names[participant_id].append(item.name)

    return [
        _share(request, participant_id, subtotals[participant_id], rounding, items=names[participant_id])
        for participant_id in request.participant_ids
    ]


def percentage_split(request: CalculationRequest, rounding: str = ROUND_HALF_UP) -> list[ParticipantShare]:
    percentages = {entry.participant_id: entry.percentage for entry in request.percentages or ()}
    return [
        _share(request, participant_id, request.subtotal * percentages.get(participant_id, ZERO) / HUNDRED, rounding)
        for participant_id in request.participant_ids
    ]


def custom_split(request: CalculationRequest, rounding: str = ROUND_HALF_UP) -> list[ParticipantShare]:
    amounts = {entry.participant_id: entry.amount for entry in request.custom_amounts or ()}
    return [
        _share(request, participant_id, amounts.get(participant_id, ZERO), rounding)
        for participant_id in request.participant_ids
    ]


STRATEGIES: dict[SplitType, Strategy] = {
    SplitType.EQUAL: equal_split,
    SplitType.ITEMIZED: itemized_split,
    SplitType.PERCENTAGE: percentage_split,
    SplitType.CUSTOM: custom_split,
}
