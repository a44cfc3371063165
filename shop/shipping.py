MEDIUM_TIER_FROM = 50_000
FREE_SHIPPING_FROM = 100_000

BASE_FEE = 10_000
MEDIUM_FEE = 5_000


def _thousands(value) -> str:
    return f"{int(value):,}".replace(",", ".")


def format_cop(value) -> str:
    """
    Formato es-CO sin decimales:
      5000 -> "$ 5.000"
    """
    return "$ " + _thousands(value)


def shipping_cost(subtotal) -> int:
    if subtotal < MEDIUM_TIER_FROM:
        return BASE_FEE
    if subtotal < FREE_SHIPPING_FROM:
        return MEDIUM_FEE
    return 0


def shipping_message(subtotal) -> str:
    if subtotal < MEDIUM_TIER_FROM:
        diff = MEDIUM_TIER_FROM - subtotal
        return (
            f"¡Estás cerca! Solo {format_cop(diff)} más y tu pedido tendrá "
            f"envío por solo {_thousands(MEDIUM_FEE)} COP."
        )
    if subtotal < FREE_SHIPPING_FROM:
        diff = FREE_SHIPPING_FROM - subtotal
        return (
            f"¡Casi llegas! Agrega {format_cop(diff)} más para disfrutar de "
            "envío gratis en tu pedido."
        )
    return ""


def quote(subtotal) -> dict:
    shipping = shipping_cost(subtotal)
    return {
        "subtotal": subtotal,
        "shipping": shipping,
        "total": subtotal + shipping,
        "message": shipping_message(subtotal),
    }
