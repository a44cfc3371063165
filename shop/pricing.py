from decimal import Decimal, ROUND_HALF_UP

OFFERS_OF_THE_DAY = 4


def _dec(value) -> Decimal:
    return Decimal(str(value or 0))


def discount_percent(original, final) -> int:
    """
    Porcentaje de descuento entero, redondeado hacia arriba en .5:
      20000 / 15000 -> 25
    0 si no hay precio original, si no hay precio final
    o si el final no es menor que el original.
    """
    if not original or not final:
        return 0
    original, final = _dec(original), _dec(final)
    if original <= 0 or final >= original:
        return 0
    pct = (original - final) / original * 100
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def profit(final, original, purchase) -> int:
    # el precio final manda; si no hay, se usa el original
    return int((final or original or 0) - (purchase or 0))


def margin_sign(value) -> str:
    return "positive" if value >= 0 else "negative"


def offers_of_the_day(products, limit=OFFERS_OF_THE_DAY):
    ranked = sorted(
        products,
        key=lambda p: discount_percent(p.original_price, p.final_price),
        reverse=True,
    )
    return ranked[:limit]
