"""Tests for the Django admin order screens."""

import pytest
from django.conf import settings as django_settings

from shop import services
from shop.models import Order


@pytest.fixture
def order(empanadas, client_info):
    return services.create_order(client_info, [{"product_id": empanadas.pk, "qty": 3}], "Nequi")


@pytest.mark.django_db
class TestOrderAdmin:
    def test_status_is_read_only_on_change_form(self, admin_client, order):
        res = admin_client.get(f"/admin/shop/order/{order.pk}/change/")
        assert res.status_code == 200
        assert 'name="status"' not in res.content.decode()

    def test_cancel_action_goes_through_service(self, admin_client, order, empanadas):
        res = admin_client.post("/admin/shop/order/", {
            "action": "mark_cancelled",
            "_selected_action": [order.pk],
        })
        assert res.status_code == 302

        order.refresh_from_db()
        empanadas.refresh_from_db()
        assert order.status == Order.CANCELLED
        assert empanadas.stock == 10

    def test_rejected_transition_is_reported(self, admin_client, order, settings):
        settings.SHOP_STRICT_STATUS_TRANSITIONS = True
        res = admin_client.post("/admin/shop/order/", {
            "action": "mark_delivered",
            "_selected_action": [order.pk],
        }, follow=True)

        assert "No se puede pasar de Pendiente a Entregado" in res.content.decode()
        order.refresh_from_db()
        assert order.status == Order.PENDING


def test_settings_have_no_frontend_domain():
    assert not hasattr(django_settings, "FRONTEND_DOMAIN")
