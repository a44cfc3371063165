from django.utils import timezone
import random
import string

ALPHABET = string.ascii_lowercase + string.digits


def generate_order_number(prefix="ORD"):
    d = timezone.now().strftime("%Y%m%d%H%M%S")
    r = "".join(random.choices(ALPHABET, k=5))
    return f"{prefix}-{d}-{r}"


def to_int(value, default=0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
