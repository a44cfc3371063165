from . import shipping

SESSION_KEY = "cart"


class Cart:
    """
    Carrito guardado en la sesión. Cada línea se identifica por
    (id de producto, variante) y guarda una copia de los precios.
    """

    def __init__(self, session):
        self.session = session
        self.lines = dict(session.get(SESSION_KEY) or {})

    @staticmethod
    def key(product_id, variant=""):
        return f"{int(product_id)}:{variant or ''}"

    def _save(self):
        self.session[SESSION_KEY] = self.lines
        self.session.modified = True

    def add(self, product, variant="", qty=1):
        k = self.key(product.pk, variant)
        line = self.lines.get(k)
        if line:
            line["qty"] += qty
        else:
            self.lines[k] = {
                "product_id": product.pk,
                "name": product.name,
                "image": product.image,
                "variant": variant or "",
                "purchase_price": product.purchase_price,
                "original_price": product.original_price,
                "final_price": product.final_price,
                "qty": qty,
            }
        if self.lines[k]["qty"] <= 0:
            del self.lines[k]
        self._save()

    def update_quantity(self, product_id, qty, variant=""):
        k = self.key(product_id, variant)
        if qty <= 0:
            self.lines.pop(k, None)
        elif k in self.lines:
            self.lines[k]["qty"] = qty
        self._save()

    def remove(self, product_id, variant=""):
        self.lines.pop(self.key(product_id, variant), None)
        self._save()

    def clear(self):
        self.lines = {}
        self._save()

    @property
    def items(self):
        return list(self.lines.values())

    @property
    def total_items(self):
        return sum(line["qty"] for line in self.lines.values())

    @property
    def total_price(self):
        return sum(line["final_price"] * line["qty"] for line in self.lines.values())

    def __len__(self):
        return len(self.lines)

    def summary(self):
        data = shipping.quote(self.total_price)
        data.update({
            "items": self.items,
            "total_items": self.total_items,
        })
        return data
