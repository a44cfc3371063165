import json
import logging
from collections import defaultdict

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.core.management.color import no_style
from django.db import IntegrityError, connection, transaction
from django.shortcuts import get_object_or_404

from .models import Order, OrderItem, Product
from .shipping import shipping_cost
from .utils import generate_order_number, to_int
from .emails import schedule_order_email

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 3
TOP_PRODUCTS = 5

PRODUCT_FIELDS = (
    "name", "category", "description", "purchase_price", "original_price",
    "final_price", "images", "label", "stock", "variant_type", "variant_options",
)

# Nombres de campo del catálogo original (JSON de semilla y clientes antiguos)
LEGACY_FIELDS = {
    "nombre": "name",
    "categoria": "category",
    "descripcion": "description",
    "precioCompra": "purchase_price",
    "precioOriginal": "original_price",
    "precioFinal": "final_price",
    "imagenes": "images",
    "etiqueta": "label",
}


def _text(value) -> str:
    # los clientes JSON a veces mandan el teléfono como número
    return "" if value is None else str(value).strip()


# =========================
# Products
# =========================
def _clean_product_data(payload, partial=False) -> dict:
    data = {}
    for key, value in (payload or {}).items():
        data[LEGACY_FIELDS.get(key, key)] = value

    if "imagen" in data and "images" not in data:
        data["images"] = [data["imagen"]] if data["imagen"] else []

    variants = data.pop("variantes", None)
    if isinstance(variants, dict) and isinstance(variants.get("tipo"), str):
        data["variant_type"] = variants["tipo"]
        data["variant_options"] = variants.get("opciones") or []

    cleaned = {k: v for k, v in data.items() if k in PRODUCT_FIELDS}

    if not partial:
        name = _text(cleaned.get("name"))
        category = _text(cleaned.get("category"))
        if not name or not category:
            raise ValidationError("Nombre y categoría son obligatorios")

    for k in ("purchase_price", "original_price", "final_price", "stock"):
        if k in cleaned:
            value = to_int(cleaned[k], -1) if cleaned[k] is not None else 0
            if value < 0:
                raise ValidationError(f"Valor inválido para {k}")
            cleaned[k] = value

    if "label" in cleaned:
        label = cleaned["label"] or ""
        if label and label not in dict(Product.LABEL_CHOICES):
            raise ValidationError("Etiqueta inválida")
        cleaned["label"] = label

    if "images" in cleaned and not isinstance(cleaned["images"], list):
        cleaned["images"] = []

    return cleaned


def all_products():
    return list(Product.objects.order_by("id"))


def get_product(product_id) -> Product:
    return get_object_or_404(Product, pk=product_id)


def create_product(payload) -> Product:
    data = _clean_product_data(payload)
    product = Product.objects.create(**data)
    logger.info("Producto creado id=%s (%s)", product.pk, product.name)
    return product


def update_product(product_id, payload) -> Product:
    product = get_product(product_id)
    data = _clean_product_data(payload, partial=True)

    # precio final en 0 vuelve al original en Product.save()
    for field, value in data.items():
        setattr(product, field, value)
    product.save()
    logger.info("Producto actualizado id=%s", product.pk)
    return product


def delete_product(product_id):
    product = get_product(product_id)
    product.delete()
    logger.info("Producto eliminado id=%s", product_id)


def seed_products(path=None, force=False) -> dict:
    """
    Carga productos desde un archivo JSON si la colección está vacía.
    """
    existing = Product.objects.count()
    if existing and not force:
        return {"message": "Database already has products", "count": existing, "created": 0}

    path = path or settings.SHOP_SEED_FILE
    with open(path, encoding="utf-8") as fh:
        rows = json.load(fh)

    created = 0
    with transaction.atomic():
        for row in rows:
            data = _clean_product_data(row)
            product_id = to_int(row.get("id"), 0)
            if product_id:
                Product.objects.update_or_create(pk=product_id, defaults=data)
            else:
                Product.objects.create(**data)
            created += 1

        # los ids explícitos no avanzan la secuencia en Postgres
        for sql in connection.ops.sequence_reset_sql(no_style(), [Product]):
            with connection.cursor() as cursor:
                cursor.execute(sql)

    logger.info("Semilla de catálogo cargada: %s productos desde %s", created, path)
    return {"message": "Database seeded successfully", "count": Product.objects.count(), "created": created}


# =========================
# Orders
# =========================
def _clean_client(client) -> dict:
    if not isinstance(client, dict):
        raise ValidationError("Faltan datos de envío")
    data = {
        "full_name": _text(client.get("full_name") or client.get("nombre")),
        "address": _text(client.get("address") or client.get("direccion")),
        "phone": _text(client.get("phone") or client.get("telefono")),
        "email": _text(client.get("email") or client.get("correo")),
    }
    if not data["full_name"] or not data["address"] or not data["phone"]:
        raise ValidationError("Faltan datos de envío")
    if data["email"]:
        try:
            validate_email(data["email"])
        except ValidationError:
            raise ValidationError("Correo inválido")
    return data


def _clean_items(items) -> list:
    if not isinstance(items, list) or len(items) == 0:
        raise ValidationError("Carrito vacío")

    cleaned = []
    for it in items:
        if not isinstance(it, dict):
            raise ValidationError("Producto inválido")
        product_id = to_int(it.get("product_id", it.get("id")), 0)
        qty = to_int(it.get("qty", it.get("cantidad")), 0)
        if product_id <= 0:
            raise ValidationError("Producto inválido")
        if qty <= 0:
            raise ValidationError("Cantidad inválida")
        cleaned.append({
            "product_id": product_id,
            "qty": qty,
            "variant": _text(it.get("variant") or it.get("variante")),
        })
    return cleaned


def _new_order_number():
    for _ in range(ORDER_NUMBER_ATTEMPTS):
        number = generate_order_number()
        if not Order.objects.filter(order_number=number).exists():
            return number
    raise IntegrityError("No se pudo generar un número de orden único")


def create_order(client, items, payment_method) -> Order:
    client_data = _clean_client(client)
    cleaned = _clean_items(items)

    needed = defaultdict(int)
    for row in cleaned:
        needed[row["product_id"]] += row["qty"]

    with transaction.atomic():
        products = (
            Product.objects
            .select_for_update()
            .filter(pk__in=list(needed.keys()))
        )
        by_id = {p.pk: p for p in products}

        missing = [str(pid) for pid in needed if pid not in by_id]
        if missing:
            raise ValidationError(f"Producto no existe: {', '.join(missing)}")

        for pid, qty in needed.items():
            p = by_id[pid]
            if p.stock < qty:
                raise ValidationError(
                    f"Sin stock para {p.name} (stock {p.stock}, requerido {qty})"
                )

        subtotal = sum(by_id[row["product_id"]].final_price * row["qty"] for row in cleaned)
        shipping = shipping_cost(subtotal)

        order = Order.objects.create(
            order_number=_new_order_number(),
            status=Order.PENDING,
            payment_method=_text(payment_method),
            subtotal=subtotal,
            shipping=shipping,
            total=subtotal + shipping,
            **client_data,
        )

        for row in cleaned:
            p = by_id[row["product_id"]]
            OrderItem.objects.create(
                order=order,
                product_id=p.pk,
                name=p.name,
                image=p.image,
                variant=row["variant"],
                purchase_price=p.purchase_price,
                original_price=p.original_price,
                final_price=p.final_price,
                qty=row["qty"],
            )

        for pid, qty in needed.items():
            p = by_id[pid]
            p.stock -= qty
            p.save(update_fields=["stock", "updated_at"])

        order = Order.objects.prefetch_related("items").get(pk=order.pk)
        schedule_order_email(order)

    logger.info(
        "Orden %s creada: subtotal=%s envío=%s total=%s",
        order.order_number, order.subtotal, order.shipping, order.total,
    )
    return order


def get_order(order_id) -> Order:
    return get_object_or_404(Order.objects.prefetch_related("items"), pk=order_id)


def get_order_by_number(order_number) -> Order:
    return get_object_or_404(Order.objects.prefetch_related("items"), order_number=order_number)


def list_orders():
    return list(Order.objects.prefetch_related("items").order_by("-created_at"))


def update_status(order_id, new_status) -> Order:
    status = Order.parse_status(new_status)
    if status is None:
        raise ValidationError("Estado inválido")

    with transaction.atomic():
        order = get_object_or_404(Order.objects.select_for_update(), pk=order_id)

        if settings.SHOP_STRICT_STATUS_TRANSITIONS and not order.can_transition_to(status):
            raise ValidationError(
                f"No se puede pasar de {order.get_status_display()} a {Order.status_label(status)}"
            )

        previous = order.status
        if status == Order.CANCELLED and previous != Order.CANCELLED:
            _move_stock(order, +1)
        elif previous == Order.CANCELLED and status != Order.CANCELLED:
            _move_stock(order, -1)

        order.status = status
        order.save(update_fields=["status", "updated_at"])

    logger.info("Orden %s: %s -> %s", order.order_number, previous, status)
    return order


def _move_stock(order, sign):
    """
    Devuelve (sign=+1) o vuelve a tomar (sign=-1) el stock de los renglones
    de la orden. Los productos borrados desde entonces se ignoran.
    """
    needed = defaultdict(int)
    for it in order.items.all():
        needed[it.product_id] += it.qty

    products = Product.objects.select_for_update().filter(pk__in=list(needed.keys()))
    for p in products:
        qty = needed[p.pk]
        if sign < 0 and p.stock < qty:
            raise ValidationError(
                f"Sin stock para {p.name} (stock {p.stock}, requerido {qty})"
            )
        p.stock += sign * qty
        p.save(update_fields=["stock", "updated_at"])


# =========================
# Stats
# =========================
def get_stats(orders=None) -> dict:
    """
    Agregados del tablero. `revenue` suma todo lo no cancelado
    (pendientes incluidos); `confirmed_revenue` solo lo entregado.
    """
    if orders is None:
        orders = list_orders()

    per_status = {key: 0 for key, _ in Order.STATUS_CHOICES}
    revenue = 0
    confirmed_revenue = 0
    product_sales = {}
    payments = {}

    for order in orders:
        per_status[order.status] = per_status.get(order.status, 0) + 1
        if order.status == Order.CANCELLED:
            continue

        revenue += order.total
        confirmed = order.status == Order.DELIVERED
        if confirmed:
            confirmed_revenue += order.total

        method = order.payment_method or "No especificado"
        bucket = payments.setdefault(method, {
            "confirmed": 0, "confirmed_count": 0, "pending": 0, "pending_count": 0,
        })
        if confirmed:
            bucket["confirmed"] += order.total
            bucket["confirmed_count"] += 1
        else:
            bucket["pending"] += order.total
            bucket["pending_count"] += 1

        # una orden sin guardar no tiene renglones
        items = order.items.all() if order.pk else []
        for it in items:
            row = product_sales.setdefault(it.product_id, {
                "product_id": it.product_id,
                "name": it.name,
                "qty": 0,
                "revenue": 0,
                "purchase_price": it.purchase_price,
            })
            row["qty"] += it.qty
            row["revenue"] += it.final_price * it.qty

    for row in product_sales.values():
        row["profit"] = row["revenue"] - row["purchase_price"] * row["qty"]

    top_products = sorted(product_sales.values(), key=lambda r: r["qty"], reverse=True)

    return {
        "total": sum(per_status.values()),
        "per_status": per_status,
        "revenue": revenue,
        "confirmed_revenue": confirmed_revenue,
        "pending_revenue": revenue - confirmed_revenue,
        "profit": sum(r["profit"] for r in product_sales.values()),
        "top_products": top_products[:TOP_PRODUCTS],
        "payments": payments,
    }
