from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from pydantic import ValidationError as SchemaError

from billsplit.models import CalculationRequest, CalculationResult, ParticipantShare, SplitType
from billsplit.schemas import CalculateSplitSchema
from billsplit.services.money import round_money
from billsplit.services.validator import ValidationError


def _describe(exc: SchemaError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "request"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def parse_request(data: Mapping[str, Any]) -> CalculationRequest:
    """
    Build a CalculationRequest from a JSON-like mapping.

    Field names follow the public API (``splitType``, ``participantIds``, ``customAmounts``...);
    snake_case names are accepted too. Schema failures are reported as ValidationError.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be an object")
    try:
        schema = CalculateSplitSchema.model_validate(dict(data))
    except SchemaError as exc:
        raise ValidationError(f"Invalid request: {_describe(exc)}") from exc
    return schema.to_request()


def _money(value: Decimal) -> float:
    return float(round_money(value))


def dump_share(share: ParticipantShare, include_items: bool) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "participantId": share.participant_id,
        "subtotal": _money(share.subtotal),
        "tax": _money(share.tax),
        "tip": _money(share.tip),
        "total": _money(share.total),
    }
    if include_items:
        payload["items"] = list(share.items or ())
    return payload


def dump_result(result: CalculationResult) -> dict[str, Any]:
    include_items = result.split_type == SplitType.ITEMIZED
    return {
        "splitType": result.split_type.value,
        "originalSubtotal": _money(result.original_subtotal),
        "originalTax": _money(result.original_tax),
        "originalTip": _money(result.original_tip),
        "grandTotal": _money(result.grand_total),
        "shares": [dump_share(share, include_items) for share in result.shares],
        "roundingAdjustment": _money(result.rounding_adjustment),
    }
