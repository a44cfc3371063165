"""Shared pytest fixtures for shop tests."""

import json

import pytest
from django.test import Client

from shop.models import Product


@pytest.fixture(autouse=True)
def shop_settings(settings):
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.SHOP_EMAIL_BACKGROUND = False
    settings.SHOP_STRICT_STATUS_TRANSITIONS = False
    settings.SHOP_ORDER_BCC = ["operador@antojitosquin.com"]
    settings.ADMIN_ACCOUNTS = [("admin", "secreto")]
    settings.SESSION_COOKIE_SECURE = False
    settings.STORAGES = {
        **settings.STORAGES,
        "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    }
    return settings


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.fixture
def staff_client(db, client):
    """Client logged in through the admin login endpoint."""
    res = client.post(
        "/api/admin/login/",
        data=json.dumps({"username": "admin", "password": "secreto"}),
        content_type="application/json",
    )
    assert res.status_code == 200
    return client


@pytest.fixture
def empanadas(db):
    return Product.objects.create(
        name="Empanadas x6",
        category="Antojitos",
        purchase_price=6000,
        original_price=15000,
        final_price=12000,
        description="Empanadas de carne con ají",
        images=["/images/empanadas.jpg"],
        label="Más vendido",
        stock=10,
    )


@pytest.fixture
def cafe(db):
    return Product.objects.create(
        name="Café de origen",
        category="Bebidas",
        purchase_price=14000,
        original_price=32000,
        final_price=24000,
        description="Café tostado del Huila",
        stock=5,
    )


@pytest.fixture
def client_info():
    return {
        "full_name": "Laura Quintero",
        "address": "Cra 10 # 20-30, Bogotá",
        "phone": "3001234567",
        "email": "laura@example.com",
    }
