from __future__ import annotations

from decimal import Decimal

from billsplit.models import CalculationResult, ParticipantShare, SplitType
from billsplit.services.money import ZERO

SPLIT_LABELS = {
    SplitType.EQUAL: "equal split",
    SplitType.ITEMIZED: "itemized split",
    SplitType.PERCENTAGE: "percentage split",
    SplitType.CUSTOM: "custom split",
}


def format_amount(value: Decimal, currency: str = "") -> str:
    text = f"{value:.2f}"
    return f"{text} {currency}" if currency else text


def format_share(share: ParticipantShare, currency: str = "") -> str:
    line = (
        f"{share.participant_id}: {format_amount(share.total, currency)} "
        f"({share.subtotal:.2f} + tax {share.tax:.2f} + tip {share.tip:.2f})"
    )
    if share.items:
        line += f" [{', '.join(share.items)}]"
    return line


def format_result(result: CalculationResult, currency: str = "") -> str:
    lines = [
        f"{SPLIT_LABELS.get(result.split_type, result.split_type.value).capitalize()}, "
        f"total {format_amount(result.grand_total, currency)}"
    ]
    lines.extend(format_share(share, currency) for share in result.shares)
    if result.rounding_adjustment != ZERO:
        lines.append(f"Rounding adjustment: {result.rounding_adjustment:+.2f}")
    return "\n".join(lines)
