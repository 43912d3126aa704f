"""Wire schemas for split requests, using the camelCase field names of the public API."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from billsplit.models import (
    CalculationRequest,
    CustomAmount,
    Item,
    PercentageEntry,
    SplitType,
    TipDistribution,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ItemSchema(_WireModel):
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    participant_ids: List[str] = Field(..., alias="participantIds")

    def to_model(self) -> Item:
        return Item(name=self.name, price=self.price, participant_ids=tuple(self.participant_ids))


class PercentageSchema(_WireModel):
    participant_id: str = Field(..., alias="participantId", min_length=1)
    percentage: Decimal = Field(..., ge=0, le=100)

    def to_model(self) -> PercentageEntry:
        return PercentageEntry(participant_id=self.participant_id, percentage=self.percentage)


class CustomAmountSchema(_WireModel):
    participant_id: str = Field(..., alias="participantId", min_length=1)
    amount: Decimal = Field(..., ge=0)

    def to_model(self) -> CustomAmount:
        return CustomAmount(participant_id=self.participant_id, amount=self.amount)


class CalculateSplitSchema(_WireModel):
    split_type: SplitType = Field(..., alias="splitType")
    subtotal: Decimal = Field(..., ge=0)
    tax: Optional[Decimal] = Field(None, ge=0)
    tip: Optional[Decimal] = Field(None, ge=0)
    tip_distribution: Optional[TipDistribution] = Field(None, alias="tipDistribution")
    participant_ids: List[str] = Field(..., alias="participantIds")
    items: Optional[List[ItemSchema]] = None
    percentages: Optional[List[PercentageSchema]] = None
    custom_amounts: Optional[List[CustomAmountSchema]] = Field(None, alias="customAmounts")

    def to_request(self) -> CalculationRequest:
        return CalculationRequest(
            split_type=self.split_type,
            subtotal=self.subtotal,
            tax=self.tax,
            tip=self.tip,
            tip_distribution=self.tip_distribution,
            participant_ids=tuple(self.participant_ids),
            items=None if self.items is None else tuple(item.to_model() for item in self.items),
            percentages=(
                None if self.percentages is None else tuple(entry.to_model() for entry in self.percentages)
            ),
            custom_amounts=(
                None if self.custom_amounts is None else tuple(entry.to_model() for entry in self.custom_amounts)
            ),
        )
