from django.contrib import admin, messages
from django.core.exceptions import ValidationError

from . import services
from .models import Order, OrderItem, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "category",
        "purchase_price",
        "original_price",
        "final_price",
        "discount",
        "margin",
        "label",
        "stock",
    )
    list_filter = ("category", "label")
    search_fields = ("name", "category", "description")
    ordering = ("id",)

    @admin.display(description="Descuento")
    def discount(self, obj):
        pct = obj.discount_percent
        return f"-{pct}%" if pct > 0 else "—"

    @admin.display(description="Ganancia")
    def margin(self, obj):
        return obj.profit


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = (
        "product_id", "name", "variant", "purchase_price", "original_price",
        "final_price", "qty", "line_total", "image",
    )
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


def _set_status(modeladmin, request, queryset, status):
    # una por una, para que quede registro en el log
    for order in queryset:
        try:
            services.update_status(order.pk, status)
        except ValidationError as e:
            modeladmin.message_user(request, f"{order}: {e.messages[0]}", level=messages.WARNING)


@admin.action(description="Marcar como EN PROCESO")
def mark_processing(modeladmin, request, queryset):
    _set_status(modeladmin, request, queryset, Order.PROCESSING)

@admin.action(description="Marcar como ENVIADO")
def mark_shipped(modeladmin, request, queryset):
    _set_status(modeladmin, request, queryset, Order.SHIPPED)

@admin.action(description="Marcar como ENTREGADO")
def mark_delivered(modeladmin, request, queryset):
    _set_status(modeladmin, request, queryset, Order.DELIVERED)

@admin.action(description="Marcar como CANCELADO")
def mark_cancelled(modeladmin, request, queryset):
    _set_status(modeladmin, request, queryset, Order.CANCELLED)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    inlines = [OrderItemInline]

    list_display = (
        "order_number",
        "status",
        "payment_method",
        "total",
        "full_name",
        "phone",
        "email",
        "created_at",
    )

    list_filter = ("status", "payment_method", "created_at")
    search_fields = ("order_number", "full_name", "phone", "email", "address")
    date_hierarchy = "created_at"
    ordering = ("-created_at",)

    # el estado cambia solo con las acciones, que pasan por services.update_status
    readonly_fields = (
        "order_number", "status", "full_name", "address", "phone", "email", "payment_method",
        "created_at", "updated_at", "subtotal", "shipping", "total",
    )

    fieldsets = (
        ("Estado", {"fields": ("order_number", "status", "payment_method")}),
        ("Cliente", {"fields": ("full_name", "email", "phone", "address")}),
        ("Totales", {"fields": ("subtotal", "shipping", "total")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )

    actions = [mark_processing, mark_shipped, mark_delivered, mark_cancelled]
