from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from billsplit.config import get_settings
from billsplit.logging import get_logger
from billsplit.models import CalculationRequest, CalculationResult, ParticipantShare
from billsplit.services.distribution import apply_rounding_adjustment
from billsplit.services.money import ADJUSTMENT_EPSILON, ZERO, round_money
from billsplit.services.strategies import STRATEGIES
from billsplit.services.validator import ValidationError, check_request, check_result, normalize_request


def _sum_totals(shares: Sequence[ParticipantShare]) -> Decimal:
    return sum((share.total for share in shares), ZERO)


class SplitCalculator:
    def __init__(self, rounding: str = ROUND_HALF_UP) -> None:
        self.rounding = rounding
        self._log = get_logger(__name__)

    def calculate(self, request: CalculationRequest) -> CalculationResult:
        try:
            return self._calculate(request)
        except ValidationError as exc:
            split_type = getattr(request.split_type, "value", request.split_type)
            self._log.info("split.rejected", split_type=split_type, reason=str(exc))
            raise

    def _calculate(self, request: CalculationRequest) -> CalculationResult:
        request = normalize_request(request)
        check_request(request)

        shares = STRATEGIES[request.split_type](request, self.rounding)

        expected_total = request.expected_total
        rounding_adjustment = round_money(_sum_totals(shares) - expected_total, self.rounding)

        if abs(rounding_adjustment) > ADJUSTMENT_EPSILON:
            shares = apply_rounding_adjustment(shares, rounding_adjustment, self.rounding)
            self._log.info(
                "split.rounding_adjusted",
                split_type=request.split_type.value,
                adjustment=str(rounding_adjustment),
            )

        check_result(request, _sum_totals(shares), rounding_adjustment)

        result = CalculationResult(
            split_type=request.split_type,
            original_subtotal=request.subtotal,
            original_tax=request.tax_amount,
            original_tip=request.tip_amount,
            grand_total=round_money(expected_total, self.rounding),
            shares=tuple(shares),
            rounding_adjustment=rounding_adjustment,
        )
        self._log.info(
            "split.calculated",
            split_type=request.split_type.value,
            participants=len(result.shares),
            grand_total=str(result.grand_total),
            adjustment=str(rounding_adjustment),
        )
        return result


def calculate_split(request: CalculationRequest, *, rounding: Optional[str] = None) -> CalculationResult:
    if rounding is None:
        rounding = get_settings().rounding
    return SplitCalculator(rounding=rounding).calculate(request)
