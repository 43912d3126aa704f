"""Precondition and result checks for split calculation requests."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Optional, Sequence

from billsplit.models import (
    CalculationRequest,
    CustomAmount,
    Item,
    PercentageEntry,
    SplitType,
    TipDistribution,
)
from billsplit.services.money import MAX_AMOUNT, TOLERANCE, ZERO, to_decimal, within_tolerance

HUNDRED = Decimal("100")
PER_PARTICIPANT_SLACK = Decimal("0.01")


class ValidationError(ValueError):
    pass


def _amount(value: object, label: str) -> Decimal:
    try:
        amount = to_decimal(value)  # type: ignore[arg-type]
    except ValueError as exc:
        raise ValidationError(f"{label} is not a valid amount: {exc}") from exc
    if abs(amount) >= MAX_AMOUNT:
        raise ValidationError(f"{label} amount is too large")
    return amount


def _participant_ids(value: object, label: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        raise ValidationError(f"{label} must be a list of participant IDs, not a single string")
    return tuple(value)  # type: ignore[arg-type]


def _optional_amount(value: object, label: str) -> Optional[Decimal]:
    if value is None:
        return None
    return _amount(value, label)


def normalize_request(request: CalculationRequest) -> CalculationRequest:
    """Return a copy with every amount as Decimal and every sequence as a tuple."""
    try:
        split_type = SplitType(request.split_type)
    except ValueError as exc:
        raise ValidationError("Invalid split type") from exc

    tip_distribution = request.tip_distribution
    if tip_distribution is not None:
        try:
            tip_distribution = TipDistribution(tip_distribution)
        except ValueError as exc:
            raise ValidationError("Invalid tip distribution") from exc

    items = None
    if request.items is not None:
        items = tuple(
            Item(
                name=item.name,
                price=_amount(item.price, f"Price of item at index {index}"),
                participant_ids=_participant_ids(item.participant_ids, f"Participants of item at index {index}"),
            )
            for index, item in enumerate(request.items)
        )

    percentages = None
    if request.percentages is not None:
        percentages = tuple(
            PercentageEntry(
                participant_id=entry.participant_id,
                percentage=_amount(entry.percentage, f"Percentage for participant \"{entry.participant_id}\""),
            )
            for entry in request.percentages
        )

    custom_amounts = None
    if request.custom_amounts is not None:
        custom_amounts = tuple(
            CustomAmount(
                participant_id=entry.participant_id,
                amount=_amount(entry.amount, f"Amount for participant \"{entry.participant_id}\""),
            )
            for entry in request.custom_amounts
        )

    return replace(
        request,
        split_type=split_type,
        subtotal=_amount(request.subtotal, "Subtotal"),
        tax=_optional_amount(request.tax, "Tax"),
        tip=_optional_amount(request.tip, "Tip"),
        tip_distribution=tip_distribution,
        participant_ids=_participant_ids(request.participant_ids, "Participants"),
        items=items,
        percentages=percentages,
        custom_amounts=custom_amounts,
    )


def validate(request: CalculationRequest) -> None:
    check_request(normalize_request(request))


def validate_result(
    request: CalculationRequest,
    calculated_total: Decimal,
    rounding_adjustment: Decimal,
) -> None:
    check_result(
        normalize_request(request),
        _amount(calculated_total, "Calculated total"),
        _amount(rounding_adjustment, "Rounding adjustment"),
    )


def check_request(request: CalculationRequest) -> None:
    """Same as ``validate`` for a request already passed through ``normalize_request``."""
    _validate_basic_requirements(request)

    validators = {
        SplitType.EQUAL: _validate_equal_split,
        SplitType.ITEMIZED: _validate_itemized_split,
        SplitType.PERCENTAGE: _validate_percentage_split,
        SplitType.CUSTOM: _validate_custom_split,
    }
    validators[request.split_type](request)


def check_result(
    request: CalculationRequest,
    calculated_total: Decimal,
    rounding_adjustment: Decimal,
) -> None:
    """Same as ``validate_result`` for a normalized request and Decimal totals."""
    expected_total = request.expected_total

    if not within_tolerance(calculated_total, expected_total):
        raise ValidationError(
            f"Calculated total ({calculated_total:.2f}) does not match expected total ({expected_total:.2f})"
        )

    max_adjustment = PER_PARTICIPANT_SLACK * len(request.participant_ids)
    if abs(rounding_adjustment) > max_adjustment:
        raise ValidationError(
            f"Rounding adjustment ({rounding_adjustment:.2f}) exceeds reasonable threshold"
        )


def _validate_basic_requirements(request: CalculationRequest) -> None:
    if not request.participant_ids:
        raise ValidationError("At least one participant is required")

    if len(set(request.participant_ids)) != len(request.participant_ids):
        raise ValidationError("Duplicate participant IDs are not allowed")

    if request.subtotal < ZERO:
        raise ValidationError("Subtotal cannot be negative")

    if request.tax is not None and request.tax < ZERO:
        raise ValidationError("Tax cannot be negative")

    if request.tip is not None and request.tip < ZERO:
        raise ValidationError("Tip cannot be negative")

    if request.expected_total <= ZERO:
        raise ValidationError("Total amount must be greater than zero")


def _validate_equal_split(request: CalculationRequest) -> None:
    if request.items is not None or request.percentages is not None or request.custom_amounts is not None:
        raise ValidationError("Equal split should not include items, percentages, or custom amounts")


def _validate_itemized_split(request: CalculationRequest) -> None:
    if not request.items:
        raise ValidationError("Itemized split requires at least one item")

    if request.percentages is not None or request.custom_amounts is not None:
        raise ValidationError("Itemized split should not include percentages or custom amounts")

    participants = set(request.participant_ids)
    for index, item in enumerate(request.items):
        _validate_item(item, index, participants)

    items_total = sum((item.price for item in request.items), ZERO)
    if not within_tolerance(items_total, request.subtotal):
        raise ValidationError(
            f"Sum of item prices ({items_total:.2f}) does not match subtotal ({request.subtotal:.2f})"
        )


def _validate_item(item: Item, index: int, participants: set[str]) -> None:
    if not isinstance(item.name, str) or not item.name.strip():
        raise ValidationError(f"Item at index {index} must have a name")

    if item.price < ZERO:
        raise ValidationError(f'Item "{item.name}" has invalid price: {item.price}')

    if not item.participant_ids:
        raise ValidationError(f'Item "{item.name}" must have at least one participant')

    for participant_id in item.participant_ids:
        if participant_id not in participants:
            raise ValidationError(
                f'Item "{item.name}" has participant "{participant_id}" who is not in the main participant list'
            )

    if len(set(item.participant_ids)) != len(item.participant_ids):
        raise ValidationError(f'Item "{item.name}" has duplicate participants')


def _validate_percentage_split(request: CalculationRequest) -> None:
    if not request.percentages:
        raise ValidationError("Percentage split requires percentage configuration")

    if request.items is not None or request.custom_amounts is not None:
        raise ValidationError("Percentage split should not include items or custom amounts")

    participants = set(request.participant_ids)
    seen: dict[str, Decimal] = {}
    for entry in request.percentages:
        if entry.participant_id not in participants:
            raise ValidationError(
                f'Percentage split includes participant "{entry.participant_id}" '
                "who is not in the main participant list"
            )
        if entry.participant_id in seen:
            raise ValidationError(f'Duplicate percentage entry for participant "{entry.participant_id}"')
        if entry.percentage < ZERO or entry.percentage > HUNDRED:
            raise ValidationError(
                f'Invalid percentage {entry.percentage} for participant "{entry.participant_id}". '
                "Must be between 0 and 100"
            )
        seen[entry.participant_id] = entry.percentage

    total_percentage = sum(seen.values(), ZERO)
    if not within_tolerance(total_percentage, HUNDRED):
        raise ValidationError(f"Total percentage ({total_percentage:.2f}%) must equal 100%")

    _require_coverage(request.participant_ids, seen, "a percentage")


def _validate_custom_split(request: CalculationRequest) -> None:
    if not request.custom_amounts:
        raise ValidationError("Custom split requires custom amount configuration")

    if request.items is not None or request.percentages is not None:
        raise ValidationError("Custom split should not include items or percentages")

    participants = set(request.participant_ids)
    seen: dict[str, Decimal] = {}
    for entry in request.custom_amounts:
        if entry.participant_id not in participants:
            raise ValidationError(
                f'Custom split includes participant "{entry.participant_id}" '
                "who is not in the main participant list"
            )
        if entry.participant_id in seen:
            raise ValidationError(f'Duplicate custom amount entry for participant "{entry.participant_id}"')
        if entry.amount < ZERO:
            raise ValidationError(
                f'Invalid amount {entry.amount} for participant "{entry.participant_id}". Must be non-negative'
            )
        seen[entry.participant_id] = entry.amount

    total_custom = sum(seen.values(), ZERO)
    if not within_tolerance(total_custom, request.subtotal, TOLERANCE):
        raise ValidationError(
            f"Sum of custom amounts ({total_custom:.2f}) does not match subtotal ({request.subtotal:.2f})"
        )

    _require_coverage(request.participant_ids, seen, "a custom amount")


def _require_coverage(participant_ids: Sequence[str], assigned: dict[str, Decimal], what: str) -> None:
    for participant_id in participant_ids:
        if participant_id not in assigned:
            raise ValidationError(f'Participant "{participant_id}" is missing {what} assignment')
