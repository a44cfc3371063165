from django.urls import path

from . import api

app_name = "shop"

urlpatterns = [
    # Catálogo
    path("api/products/", api.products, name="products"),
    path("api/products/<int:pk>/", api.product_detail, name="product_detail"),
    path("api/products/search/", api.product_search, name="product_search"),
    path("api/products/offers/", api.product_offers, name="product_offers"),
    path("api/products/categories/", api.product_categories, name="product_categories"),
    path("api/products/seed/", api.product_seed, name="product_seed"),
    path("api/category/<str:category>/", api.category_products, name="category_products"),
    path("api/catalog/", api.catalog, name="catalog"),

    # Pedidos
    path("api/orders/", api.orders, name="orders"),
    path("api/orders/by-number/", api.order_by_number, name="order_by_number"),
    path("api/orders/stats/", api.order_stats, name="order_stats"),
    path("api/orders/<int:pk>/", api.order_detail, name="order_detail"),
    path("api/orders/<int:pk>/status/", api.order_status, name="order_status"),

    # Carrito / checkout
    path("api/cart/", api.cart_detail, name="cart"),
    path("api/cart/add/", api.cart_add, name="cart_add"),
    path("api/cart/update/", api.cart_update, name="cart_update"),
    path("api/cart/remove/", api.cart_remove, name="cart_remove"),
    path("api/cart/clear/", api.cart_clear, name="cart_clear"),
    path("api/shipping/quote/", api.shipping_quote, name="shipping_quote"),
    path("api/checkout/", api.checkout, name="checkout"),

    # Sesión de administración
    path("api/admin/login/", api.admin_login, name="admin_login"),
    path("api/admin/logout/", api.admin_logout, name="admin_logout"),
    path("api/admin/session/", api.admin_session, name="admin_session"),
]
