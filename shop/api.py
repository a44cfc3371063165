import functools
import json
import logging

from django.contrib.auth import authenticate, login, logout
from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.http import Http404, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import services
from .cart import Cart
from .catalog import CatalogBrowser, categories, list_products, paginate
from .models import Order, Product
from .pricing import margin_sign, offers_of_the_day
from .shipping import quote
from .utils import to_int

logger = logging.getLogger(__name__)


# =========================
# Helpers
# =========================
def staff_required(user):
    return user.is_authenticated and (user.is_staff or user.is_superuser)


def _error(message, status):
    return JsonResponse({"success": False, "error": message}, status=status)


def json_endpoint(generic_error):
    """
    404 y 400 con mensaje propio; cualquier otro error queda en el log
    y se responde 500 con un mensaje corto.
    """
    def decorator(view):
        @functools.wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                return view(request, *args, **kwargs)
            except (Http404, ObjectDoesNotExist) as e:
                return _error(str(e) or "No encontrado", 404)
            except ValidationError as e:
                return _error("; ".join(e.messages), 400)
            except Exception:
                logger.exception("%s %s", request.method, request.path)
                return _error(generic_error, 500)
        return csrf_exempt(wrapper)
    return decorator


def staff_only(view):
    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        if not staff_required(request.user):
            return _error("No autorizado", 401)
        return view(request, *args, **kwargs)
    return wrapper


def _payload(request) -> dict:
    try:
        data = json.loads(request.body.decode("utf-8") or "{}")
    except (UnicodeDecodeError, ValueError):
        raise ValidationError("JSON inválido")
    if not isinstance(data, dict):
        raise ValidationError("JSON inválido")
    return data


def product_to_dict(p: Product) -> dict:
    return {
        "id": p.pk,
        "name": p.name,
        "category": p.category,
        "description": p.description,
        "purchase_price": p.purchase_price,
        "original_price": p.original_price,
        "final_price": p.final_price,
        "discount_percent": p.discount_percent,
        "profit": p.profit,
        "profit_sign": margin_sign(p.profit),
        "image": p.image,
        "images": p.images,
        "label": p.label or None,
        "stock": p.stock,
        "variants": (
            {"type": p.variant_type, "options": p.variant_options}
            if p.variant_type else None
        ),
    }


def order_to_dict(o: Order) -> dict:
    return {
        "id": o.pk,
        "order_number": o.order_number,
        "client": {
            "full_name": o.full_name,
            "address": o.address,
            "phone": o.phone,
            "email": o.email,
        },
        "items": [
            {
                "product_id": it.product_id,
                "name": it.name,
                "image": it.image,
                "variant": it.variant,
                "purchase_price": it.purchase_price,
                "original_price": it.original_price,
                "final_price": it.final_price,
                "qty": it.qty,
                "line_total": it.line_total,
            }
            for it in o.items.all()
        ],
        "subtotal": o.subtotal,
        "shipping": o.shipping,
        "total": o.total,
        "status": o.status,
        "status_label": o.get_status_display(),
        "payment_method": o.payment_method,
        "created_at": o.created_at.isoformat(),
    }


def _page_to_dict(page_obj) -> dict:
    return {
        "results": [product_to_dict(p) for p in page_obj.object_list],
        "page": page_obj.number,
        "num_pages": page_obj.paginator.num_pages,
        "count": page_obj.paginator.count,
    }


# =========================
# Products
# =========================
@json_endpoint("Error fetching products")
@require_http_methods(["GET", "POST"])
def products(request):
    if request.method == "POST":
        return _create_product(request)

    q = request.GET
    result = list_products(
        services.all_products(),
        search=(q.get("search") or "").strip(),
        category=(q.get("category") or "").strip(),
        sort=q.get("sort") or "default",
    )
    if "page" in q:
        return JsonResponse(_page_to_dict(paginate(result, q.get("page"))))
    return JsonResponse([product_to_dict(p) for p in result], safe=False)


@json_endpoint("Error fetching products")
@require_GET
def catalog(request):
    # la página se recuerda por sesión y vuelve a 1 si cambian los filtros
    q = request.GET
    page_obj = CatalogBrowser(request.session).browse(
        services.all_products(),
        search=q.get("search", ""),
        category=q.get("category", ""),
        sort=q.get("sort", "default"),
        page=q.get("page"),
    )
    return JsonResponse(_page_to_dict(page_obj))


@staff_only
def _create_product(request):
    product = services.create_product(_payload(request))
    return JsonResponse(product_to_dict(product), status=201)


@json_endpoint("Error fetching product")
@require_http_methods(["GET", "PUT", "DELETE"])
def product_detail(request, pk):
    if request.method == "GET":
        return JsonResponse(product_to_dict(services.get_product(pk)))
    return _mutate_product(request, pk)


@staff_only
def _mutate_product(request, pk):
    if request.method == "DELETE":
        services.delete_product(pk)
        return JsonResponse({"success": True})
    product = services.update_product(pk, _payload(request))
    return JsonResponse(product_to_dict(product))


@json_endpoint("Error searching products")
@require_GET
def product_search(request):
    query = (request.GET.get("query") or "").strip()
    if not query:
        return JsonResponse([], safe=False)
    result = list_products(services.all_products(), search=query)
    return JsonResponse([product_to_dict(p) for p in result], safe=False)


@json_endpoint("Error fetching category products")
@require_GET
def category_products(request, category):
    result = list_products(services.all_products(), category=category)
    return JsonResponse([product_to_dict(p) for p in result], safe=False)


@json_endpoint("Error fetching offers")
@require_GET
def product_offers(request):
    offers = offers_of_the_day(services.all_products())
    return JsonResponse([product_to_dict(p) for p in offers], safe=False)


@json_endpoint("Error fetching categories")
@require_GET
def product_categories(request):
    return JsonResponse(categories(services.all_products()), safe=False)


@json_endpoint("Error seeding database")
@require_POST
@staff_only
def product_seed(request):
    return JsonResponse(services.seed_products())


# =========================
# Orders
# =========================
@json_endpoint("Error al procesar pedidos")
@require_http_methods(["GET", "POST"])
def orders(request):
    if request.method == "POST":
        payload = _payload(request)
        order = services.create_order(
            client=payload.get("client") or payload.get("cliente"),
            items=payload.get("items") or payload.get("productos"),
            payment_method=payload.get("payment_method") or payload.get("metodoPago"),
        )
        return JsonResponse({"success": True, "order": order_to_dict(order)}, status=201)
    return _list_orders(request)


@staff_only
def _list_orders(request):
    return JsonResponse({
        "success": True,
        "orders": [order_to_dict(o) for o in services.list_orders()],
    })


@json_endpoint("Error al obtener pedido")
@require_GET
def order_by_number(request):
    number = (request.GET.get("orderNumber") or request.GET.get("order_number") or "").strip()
    if not number:
        raise ValidationError("Missing orderNumber")
    try:
        order = services.get_order_by_number(number)
    except Http404:
        raise Http404("Order not found")
    return JsonResponse({"success": True, "order": order_to_dict(order)})


@json_endpoint("Error al obtener pedido")
@require_GET
@staff_only
def order_detail(request, pk):
    try:
        order = services.get_order(pk)
    except Http404:
        raise Http404("Pedido no encontrado")
    return JsonResponse(order_to_dict(order))


@json_endpoint("Error al actualizar estado")
@require_http_methods(["PUT", "POST"])
@staff_only
def order_status(request, pk):
    payload = _payload(request)
    try:
        order = services.update_status(pk, payload.get("status") or payload.get("estado"))
    except Http404:
        raise Http404("Pedido no encontrado")
    return JsonResponse({
        "message": "Estado actualizado",
        "status": order.status,
        "status_label": order.get_status_display(),
    })


@json_endpoint("Error al calcular estadísticas")
@require_GET
@staff_only
def order_stats(request):
    return JsonResponse(services.get_stats())


# =========================
# Cart / checkout
# =========================
@json_endpoint("Error en el carrito")
@require_GET
def cart_detail(request):
    return JsonResponse(Cart(request.session).summary())


@json_endpoint("Error en el carrito")
@require_POST
def cart_add(request):
    payload = _payload(request)
    product = services.get_product(to_int(payload.get("product_id"), 0))
    qty = max(1, to_int(payload.get("qty"), 1))
    cart = Cart(request.session)
    cart.add(product, variant=(payload.get("variant") or "").strip(), qty=qty)
    return JsonResponse(cart.summary())


@json_endpoint("Error en el carrito")
@require_POST
def cart_update(request):
    payload = _payload(request)
    cart = Cart(request.session)
    cart.update_quantity(
        to_int(payload.get("product_id"), 0),
        to_int(payload.get("qty"), 0),
        variant=(payload.get("variant") or "").strip(),
    )
    return JsonResponse(cart.summary())


@json_endpoint("Error en el carrito")
@require_POST
def cart_remove(request):
    payload = _payload(request)
    cart = Cart(request.session)
    cart.remove(to_int(payload.get("product_id"), 0), variant=(payload.get("variant") or "").strip())
    return JsonResponse(cart.summary())


@json_endpoint("Error en el carrito")
@require_POST
def cart_clear(request):
    cart = Cart(request.session)
    cart.clear()
    return JsonResponse(cart.summary())


@json_endpoint("Error al calcular envío")
@require_GET
def shipping_quote(request):
    subtotal = to_int(request.GET.get("subtotal"), -1)
    if subtotal < 0:
        raise ValidationError("Subtotal inválido")
    return JsonResponse(quote(subtotal))


@json_endpoint("Error al agregar pedido")
@require_POST
def checkout(request):
    payload = _payload(request)
    cart = Cart(request.session)
    order = services.create_order(
        client=payload.get("client"),
        items=cart.items,
        payment_method=payload.get("payment_method"),
    )
    cart.clear()
    return JsonResponse({"success": True, "order": order_to_dict(order)}, status=201)


# =========================
# Admin session
# =========================
@json_endpoint("Error en login")
@require_POST
def admin_login(request):
    payload = _payload(request)
    username = (payload.get("username") or "").strip()
    password = payload.get("password") or ""

    user = authenticate(request, username=username, password=password)
    if user and staff_required(user):
        login(request, user)
        logger.info("Login de administración: %s", username)
        return JsonResponse({"success": True})

    logger.warning("Credenciales incorrectas para %r", username)
    return JsonResponse({"success": False}, status=401)


@json_endpoint("Error en logout")
@require_POST
def admin_logout(request):
    logout(request)
    return JsonResponse({"success": True})


@json_endpoint("Error de sesión")
@require_GET
def admin_session(request):
    return JsonResponse({"isAuthenticated": staff_required(request.user)})
