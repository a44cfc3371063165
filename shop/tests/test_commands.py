import json
from io import StringIO

import pytest
from django.core.management import call_command

from shop.models import Product


@pytest.mark.django_db
def test_seed_catalog_loads_original_field_names(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([
        {"id": 3, "nombre": "Bocadillo", "categoria": "Dulces", "precioOriginal": 5000,
         "precioFinal": 4000, "imagen": "/b.jpg", "etiqueta": "Nuevo", "stock": 9},
    ]), encoding="utf-8")

    out = StringIO()
    call_command("seed_catalog", file=str(path), stdout=out)

    p = Product.objects.get(pk=3)
    assert (p.name, p.category, p.final_price, p.images, p.label) == ("Bocadillo", "Dulces", 4000, ["/b.jpg"], "Nuevo")
    assert "Seed OK" in out.getvalue()

    # no vuelve a cargar si ya hay productos
    out = StringIO()
    call_command("seed_catalog", file=str(path), stdout=out)
    assert "no se cargó nada" in out.getvalue()


@pytest.mark.django_db
def test_seed_catalog_force(tmp_path):
    Product.objects.create(name="Viejo", category="X", original_price=1000)
    path = tmp_path / "products.json"
    path.write_text(json.dumps([{"nombre": "Nuevo", "categoria": "Y", "precioOriginal": 2000}]), encoding="utf-8")

    call_command("seed_catalog", file=str(path), force=True, stdout=StringIO())
    assert Product.objects.count() == 2
    assert Product.objects.get(name="Nuevo").final_price == 2000
