from django.db import models

from .pricing import discount_percent, profit


class Product(models.Model):
    LABEL_CHOICES = [
        ("Nuevo", "Nuevo"),
        ("Popular", "Popular"),
        ("Más vendido", "Más vendido"),
        ("Recomendado", "Recomendado"),
    ]

    name = models.CharField(max_length=160)
    category = models.CharField(max_length=80)
    description = models.TextField(blank=True, default="")

    # Precios en COP, sin decimales
    purchase_price = models.PositiveIntegerField(default=0)
    original_price = models.PositiveIntegerField(default=0)
    final_price = models.PositiveIntegerField(default=0)

    images = models.JSONField(default=list, blank=True)
    label = models.CharField(max_length=20, choices=LABEL_CHOICES, blank=True, default="")
    stock = models.PositiveIntegerField(default=0)

    variant_type = models.CharField(max_length=50, blank=True, default="")
    variant_options = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        if not self.final_price:
            self.final_price = self.original_price or 0
        if not self.original_price:
            self.original_price = self.final_price
        self.variant_options = [
            op.strip() for op in (self.variant_options or [])
            if isinstance(op, str) and op.strip()
        ]
        super().save(*args, **kwargs)

    @property
    def image(self):
        return self.images[0] if self.images else ""

    @property
    def discount_percent(self):
        return discount_percent(self.original_price, self.final_price)

    @property
    def profit(self):
        return profit(self.final_price, self.original_price, self.purchase_price)

    def __str__(self):
        return self.name


class Order(models.Model):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (PENDING, "Pendiente"),
        (PROCESSING, "En proceso"),
        (SHIPPED, "Enviado"),
        (DELIVERED, "Entregado"),
        (CANCELLED, "Cancelado"),
    ]

    # Flujo normal; CANCELLED sale de cualquier estado no terminal
    FLOW = [PENDING, PROCESSING, SHIPPED, DELIVERED]
    TERMINAL = {DELIVERED, CANCELLED}

    order_number = models.CharField(max_length=40, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)

    # Copia del cliente al momento de la compra
    full_name = models.CharField(max_length=120)
    address = models.CharField(max_length=255)
    phone = models.CharField(max_length=30)
    email = models.EmailField(blank=True, default="")

    subtotal = models.PositiveIntegerField(default=0)
    shipping = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0)

    payment_method = models.CharField(max_length=60, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)

    @classmethod
    def status_label(cls, key):
        return dict(cls.STATUS_CHOICES).get(key, key)

    @classmethod
    def parse_status(cls, value):
        """
        Acepta la llave ("delivered") o la etiqueta ("Entregado").
        Devuelve la llave o None si no corresponde a ningún estado.
        """
        s = (value or "").strip()
        for key, label in cls.STATUS_CHOICES:
            if s.lower() in (key, label.lower()):
                return key
        return None

    def can_transition_to(self, new_status):
        if new_status == self.status:
            return True
        if self.status in self.TERMINAL:
            return False
        if new_status == self.CANCELLED:
            return True
        return (
            new_status in self.FLOW
            and self.FLOW.index(new_status) == self.FLOW.index(self.status) + 1
        )

    def __str__(self):
        return self.order_number


class OrderItem(models.Model):
    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)

    # Copia puntual del producto, no una referencia viva
    product_id = models.PositiveIntegerField()
    name = models.CharField(max_length=160)
    image = models.CharField(max_length=255, blank=True, default="")
    variant = models.CharField(max_length=80, blank=True, default="")

    purchase_price = models.PositiveIntegerField(default=0)
    original_price = models.PositiveIntegerField(default=0)
    final_price = models.PositiveIntegerField()
    qty = models.PositiveIntegerField(default=1)
    line_total = models.PositiveIntegerField(default=0)

    def save(self, *args, **kwargs):
        self.line_total = (self.final_price or 0) * self.qty
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} x{self.qty}"
