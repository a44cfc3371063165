import pytest

from shop.models import Product
from shop.pricing import discount_percent, margin_sign, offers_of_the_day, profit


@pytest.mark.parametrize(
    "original, final, expected",
    [
        (20000, 15000, 25),
        (15000, 12000, 20),
        (3000, 1000, 67),
        (8000, 6500, 19),   # 18.75 sube a 19
        (200, 199, 1),      # 0.5 sube a 1
        (10000, 10000, 0),
        (10000, 12000, 0),
        (0, 5000, 0),
        (None, 5000, 0),
        (5000, None, 0),
    ],
)
def test_discount_percent(original, final, expected):
    assert discount_percent(original, final) == expected


def test_discount_percent_stays_in_range():
    for original in (1, 7, 999, 20000, 123457):
        for final in (1, original // 3 or 1, original - 1 or 1, original, original * 2):
            assert 0 <= discount_percent(original, final) <= 100


def test_profit_prefers_final_price():
    assert profit(15000, 20000, 9000) == 6000


def test_profit_falls_back_to_original():
    assert profit(None, 20000, 9000) == 11000
    assert profit(0, 20000, 9000) == 11000


def test_profit_can_be_negative():
    value = profit(5000, 8000, 7000)
    assert value == -2000
    assert margin_sign(value) == "negative"
    assert margin_sign(0) == "positive"


def test_profit_without_prices():
    assert profit(None, None, None) == 0


def test_offers_of_the_day_ranks_by_discount():
    products = [
        Product(name="a", category="x", original_price=10000, final_price=9000),   # 10
        Product(name="b", category="x", original_price=10000, final_price=5000),   # 50
        Product(name="c", category="x", original_price=10000, final_price=10000),  # 0
        Product(name="d", category="x", original_price=10000, final_price=7000),   # 30
        Product(name="e", category="x", original_price=10000, final_price=8000),   # 20
    ]
    offers = offers_of_the_day(products)
    assert [p.name for p in offers] == ["b", "d", "e", "a"]
