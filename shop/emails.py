import logging
import threading

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import transaction
from django.utils import timezone
from django.utils.html import escape

from .shipping import format_cop

logger = logging.getLogger(__name__)


def build_text(order) -> str:
    lines = []
    lines.append(f"Hola {order.full_name},")
    lines.append("")
    lines.append("¡Gracias por tu compra! Estos son los detalles de tu pedido:")
    lines.append("")
    lines.append(f"Número de orden: {order.order_number}")
    lines.append(f"Fecha: {timezone.localtime(order.created_at):%d/%m/%Y %H:%M}")
    lines.append(f"Estado: {order.get_status_display()}")
    lines.append(f"Método de pago: {order.payment_method}")
    lines.append("")
    for it in order.items.all():
        variant = f" ({it.variant})" if it.variant else ""
        lines.append(f"- {it.name}{variant} x{it.qty} — {format_cop(it.final_price)}")
    lines.append("")
    lines.append(f"Subtotal: {format_cop(order.subtotal)}")
    lines.append(f"Envío: {format_cop(order.shipping)}")
    lines.append(f"Total: {format_cop(order.total)}")
    lines.append("")
    lines.append(f"Dirección: {order.address}")
    lines.append(f"Tel: {order.phone}")
    return "\n".join(lines)


def build_html(order) -> str:
    rows = "".join(
        "<tr>"
        f"<td>{escape(it.name)}{' (' + escape(it.variant) + ')' if it.variant else ''}</td>"
        f"<td style='text-align:center'>{it.qty}</td>"
        f"<td style='text-align:right'>{format_cop(it.final_price)}</td>"
        "</tr>"
        for it in order.items.all()
    )
    return (
        "<div style='font-family: Arial, sans-serif; max-width: 600px; margin: auto;'>"
        f"<h1>{escape(settings.SHOP_NAME)}</h1>"
        f"<h2>Hola {escape(order.full_name)},</h2>"
        "<p>¡Estamos muy contentos de que hayas comprado con nosotros!</p>"
        f"<p><b>Número de orden:</b><br/>{escape(order.order_number)}</p>"
        f"<p><b>Estado:</b> {escape(order.get_status_display())}<br/>"
        f"<b>Método de pago:</b> {escape(order.payment_method)}</p>"
        f"<table style='width:100%'>{rows}</table>"
        f"<p style='text-align:right'>Envío: {format_cop(order.shipping)}</p>"
        f"<h3 style='text-align:right'>Total: {format_cop(order.total)}</h3>"
        "</div>"
    )


def send_order_email(order) -> bool:
    """
    Envía la confirmación al cliente (con copia oculta al operador).
    Nunca lanza: un fallo del proveedor de correo queda en el log.
    """
    if not order.email:
        logger.info("Orden %s sin correo, no se envía confirmación.", order.order_number)
        return False

    try:
        msg = EmailMultiAlternatives(
            subject=f"¡Gracias por tu pedido #{order.order_number}!",
            body=build_text(order),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[order.email],
            bcc=settings.SHOP_ORDER_BCC,
        )
        msg.attach_alternative(build_html(order), "text/html")
        msg.send()
    except Exception:
        logger.exception("Error enviando correo de la orden %s", order.order_number)
        return False

    logger.info("Correo de confirmación enviado para %s", order.order_number)
    return True


def schedule_order_email(order):
    """
    Programa el correo para después del commit: la creación de la orden
    no espera al proveedor de correo.
    """
    def deliver():
        if settings.SHOP_EMAIL_BACKGROUND:
            threading.Thread(target=send_order_email, args=(order,), daemon=True).start()
        else:
            send_order_email(order)

    transaction.on_commit(deliver)
