import pytest

from shop.shipping import (
    FREE_SHIPPING_FROM,
    format_cop,
    quote,
    shipping_cost,
    shipping_message,
)


@pytest.mark.parametrize(
    "subtotal, fee",
    [
        (0, 10000),
        (45000, 10000),
        (49999, 10000),
        (50000, 5000),
        (99999, 5000),
        (100000, 0),
        (120000, 0),
    ],
)
def test_shipping_cost_tiers(subtotal, fee):
    assert shipping_cost(subtotal) == fee


def test_message_below_first_tier_names_shortfall():
    assert shipping_cost(45000) == 10000
    msg = shipping_message(45000)
    assert "5.000" in msg
    assert msg.startswith("¡Estás cerca!")


def test_message_in_middle_tier_names_shortfall_to_free_shipping():
    msg = shipping_message(70000)
    assert "$ 30.000" in msg
    assert "envío gratis" in msg


def test_free_shipping_has_empty_message():
    assert shipping_cost(120000) == 0
    assert shipping_message(120000) == ""


def test_message_and_fee_agree():
    for subtotal in range(0, 150001, 2500):
        fee = shipping_cost(subtotal)
        msg = shipping_message(subtotal)
        if subtotal < FREE_SHIPPING_FROM:
            assert fee > 0 and msg != ""
        else:
            assert fee == 0 and msg == ""


def test_format_cop():
    assert format_cop(5000) == "$ 5.000"
    assert format_cop(1250000) == "$ 1.250.000"
    assert format_cop(0) == "$ 0"


def test_quote():
    assert quote(60000) == {
        "subtotal": 60000,
        "shipping": 5000,
        "total": 65000,
        "message": shipping_message(60000),
    }
