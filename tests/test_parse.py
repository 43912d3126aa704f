from decimal import Decimal

import pytest

from billsplit.models import SplitType, TipDistribution
from billsplit.services.split import calculate_split
from billsplit.services.validator import ValidationError
from billsplit.utils.parse import dump_result, parse_request


def test_parse_itemized_request():
    request = parse_request(
        {
            "splitType": "itemized",
            "subtotal": 50,
            "tax": 5.5,
            "tipDistribution": "equal",
            "participantIds": ["u1", "u2"],
            "items": [
                {"name": "Pizza", "price": "30", "participantIds": ["u1"]},
                {"name": "Salad", "price": 20, "participantIds": ["u2"]},
            ],
        }
    )

    assert request.split_type is SplitType.ITEMIZED
    assert request.subtotal == Decimal("50")
    assert request.tax == Decimal("5.5")
    assert request.tip is None
    assert request.tip_distribution is TipDistribution.EQUAL
    assert request.participant_ids == ("u1", "u2")
    assert request.items[0].name == "Pizza"
    assert request.items[0].price == Decimal("30")
    assert request.items[1].participant_ids == ("u2",)
    assert request.percentages is None
    assert request.custom_amounts is None


def test_parse_accepts_snake_case_names():
    request = parse_request(
        {
            "split_type": "custom",
            "subtotal": 10,
            "participant_ids": ["u1"],
            "custom_amounts": [{"participant_id": "u1", "amount": 10}],
        }
    )

    assert request.custom_amounts[0].amount == Decimal("10")


def test_parse_keeps_extraneous_payload_for_validator():
    request = parse_request(
        {
            "splitType": "equal",
            "subtotal": 100,
            "participantIds": ["u1", "u2"],
            "items": [],
        }
    )

    assert request.items == ()
    with pytest.raises(ValidationError, match="Equal split should not include"):
        calculate_split(request)


@pytest.mark.parametrize(
    "data, field",
    [
        ({"splitType": "shares", "subtotal": 1, "participantIds": ["u1"]}, "splitType"),
        ({"splitType": "equal", "subtotal": -1, "participantIds": ["u1"]}, "subtotal"),
        ({"splitType": "equal", "subtotal": 1}, "participantIds"),
        (
            {
                "splitType": "percentage",
                "subtotal": 1,
                "participantIds": ["u1"],
                "percentages": [{"participantId": "u1", "percentage": 120}],
            },
            "percentage",
        ),
        (
            {
                "splitType": "itemized",
                "subtotal": 1,
                "participantIds": ["u1"],
                "items": [{"name": "Tea", "price": -1, "participantIds": ["u1"]}],
            },
            "price",
        ),
    ],
)
def test_parse_rejects_invalid_payloads(data, field):
    with pytest.raises(ValidationError, match=field):
        parse_request(data)


def test_parse_rejects_non_mapping():
    with pytest.raises(ValidationError, match="must be an object"):
        parse_request(["equal"])


def test_dump_result_equal_split():
    request = parse_request(
        {"splitType": "equal", "subtotal": 100, "tax": 10, "tip": 15, "participantIds": ["u1", "u2"]}
    )

    payload = dump_result(calculate_split(request))

    assert payload == {
        "splitType": "equal",
        "originalSubtotal": 100.0,
        "originalTax": 10.0,
        "originalTip": 15.0,
        "grandTotal": 125.0,
        "shares": [
            {"participantId": "u1", "subtotal": 50.0, "tax": 5.0, "tip": 7.5, "total": 62.5},
            {"participantId": "u2", "subtotal": 50.0, "tax": 5.0, "tip": 7.5, "total": 62.5},
        ],
        "roundingAdjustment": 0.0,
    }


def test_dump_result_itemized_includes_items():
    request = parse_request(
        {
            "splitType": "itemized",
            "subtotal": 50,
            "participantIds": ["u1", "u2"],
            "items": [
                {"name": "Pizza", "price": 30, "participantIds": ["u1"]},
                {"name": "Salad", "price": 20, "participantIds": ["u2"]},
            ],
        }
    )

    payload = dump_result(calculate_split(request))

    assert payload["shares"][0]["items"] == ["Pizza"]
    assert payload["shares"][1]["items"] == ["Salad"]
    assert payload["grandTotal"] == 50.0
