from __future__ import annotations

from billsplit.models import (
    CalculationRequest,
    CalculationResult,
    CustomAmount,
    Item,
    ParticipantShare,
    PercentageEntry,
    SplitType,
    TipDistribution,
)
from billsplit.services.split import SplitCalculator, calculate_split
from billsplit.services.validator import ValidationError

__all__ = [
    "CalculationRequest",
    "CalculationResult",
    "CustomAmount",
    "Item",
    "ParticipantShare",
    "PercentageEntry",
    "SplitCalculator",
    "SplitType",
    "TipDistribution",
    "ValidationError",
    "calculate_split",
]
