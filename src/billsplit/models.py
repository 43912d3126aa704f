from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence


class SplitType(str, Enum):
    EQUAL = "equal"
    ITEMIZED = "itemized"
    PERCENTAGE = "percentage"
    CUSTOM = "custom"


class TipDistribution(str, Enum):
    EQUAL = "equal"
    PROPORTIONAL = "proportional"


@dataclass(slots=True, frozen=True)
class Item:
    name: str
    price: Decimal
    participant_ids: Sequence[str]


@dataclass(slots=True, frozen=True)
class PercentageEntry:
    participant_id: str
    percentage: Decimal


@dataclass(slots=True, frozen=True)
class CustomAmount:
    participant_id: str
    amount: Decimal


@dataclass(slots=True, frozen=True)
class CalculationRequest:
    split_type: SplitType
    subtotal: Decimal
    participant_ids: Sequence[str]
    tax: Optional[Decimal] = None
    tip: Optional[Decimal] = None
    tip_distribution: Optional[TipDistribution] = None
    items: Optional[Sequence[Item]] = None
    percentages: Optional[Sequence[PercentageEntry]] = None
    custom_amounts: Optional[Sequence[CustomAmount]] = None

    @property
    def tax_amount(self) -> Decimal:
        return self.tax if self.tax is not None else Decimal("0")

    @property
    def tip_amount(self) -> Decimal:
        return self.tip if self.tip is not None else Decimal("0")

    @property
    def expected_total(self) -> Decimal:
        return self.subtotal + self.tax_amount + self.tip_amount


@dataclass(slots=True, frozen=True)
class ParticipantShare:
    participant_id: str
    subtotal: Decimal
    tax: Decimal
    tip: Decimal
    total: Decimal
    items: Optional[Sequence[str]] = None


@dataclass(slots=True, frozen=True)
class CalculationResult:
    split_type: SplitType
    original_subtotal: Decimal
    original_tax: Decimal
    original_tip: Decimal
    grand_total: Decimal
    shares: Sequence[ParticipantShare] = field(default_factory=tuple)
    rounding_adjustment: Decimal = Decimal("0")
