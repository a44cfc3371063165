import pytest
from django.contrib.sessions.backends.signed_cookies import SessionStore

from shop.catalog import (
    PAGE_SIZE,
    CatalogBrowser,
    categories,
    filter_by_category,
    list_products,
    normalize,
    paginate,
    search_products,
    sort_products,
)
from shop.models import Product


def make(name, category="Antojitos", description="", original=10000, final=None):
    return Product(
        name=name,
        category=category,
        description=description,
        original_price=original,
        final_price=final if final is not None else original,
    )


@pytest.fixture
def products():
    return [
        make("Empanada de pipián", "Antojitos", "Frita, con ají", 4000, 3000),
        make("Café", "Bebidas", "Café del Huila", 20000, 15000),
        make("Arepa", "Antojitos", "Arepa con café y queso", 5000, 5000),
        make("Obleas", "Dulces", "Arequipe", 4000, 3800),
        make("Café helado", "Bebidas", "Frío", 9000, 6000),
    ]


def test_normalize_strips_accents_case_and_spaces():
    assert normalize("  Más Vendido ") == "mas vendido"
    assert normalize("PIPIÁN") == "pipian"
    assert normalize(None) == ""


def test_search_ranks_exact_matches_first(products):
    result = search_products(products, "cafe")
    # exacto: "Café"; luego parciales en el orden original
    assert [p.name for p in result] == ["Café", "Arepa", "Café helado"]


def test_search_matches_category_and_description(products):
    assert [p.name for p in search_products(products, "dulces")] == ["Obleas"]
    assert [p.name for p in search_products(products, "AJÍ")] == ["Empanada de pipián"]


def test_search_with_empty_query_returns_everything(products):
    assert search_products(products, "  ") == products


def test_search_without_matches(products):
    assert search_products(products, "pizza") == []


def test_filter_by_category_ignores_accents(products):
    products.append(make("Té", "Bébidas"))
    result = filter_by_category(products, "bebidas")
    assert [p.name for p in result] == ["Café", "Café helado", "Té"]


def test_sort_default_keeps_order(products):
    assert sort_products(products, "default") == products
    assert sort_products(products, "unknown") == products


def test_sort_by_discount(products):
    result = sort_products(products, "discount")
    # empates (25 %) conservan el orden de entrada
    assert [p.name for p in result] == ["Café helado", "Empanada de pipián", "Café", "Obleas", "Arepa"]


def test_sort_by_price(products):
    result = sort_products(products, "price")
    assert [p.final_price for p in result] == [3000, 3800, 5000, 6000, 15000]


def test_sort_by_name_is_accent_insensitive():
    items = [make("Zanahoria"), make("Ñame"), make("ágape"), make("Bebida")]
    result = sort_products(items, "name")
    assert [p.name for p in result] == ["ágape", "Bebida", "Ñame", "Zanahoria"]


def test_list_products_searches_then_filters(products):
    result = list_products(products, search="cafe", category="Antojitos")
    assert [p.name for p in result] == ["Arepa"]


def test_paginate_uses_fixed_page_size():
    items = [make(f"p{i}") for i in range(45)]
    page = paginate(items, 3)
    assert page.paginator.per_page == PAGE_SIZE == 20
    assert page.paginator.num_pages == 3
    assert len(page.object_list) == 5
    assert paginate(items, 99).number == 3
    assert paginate(items, "x").number == 1


def test_categories_in_first_seen_order(products):
    assert categories(products) == ["Antojitos", "Bebidas", "Dulces"]


def test_browser_resets_page_when_criteria_change():
    items = [make(f"Producto {i}", "Antojitos" if i % 2 else "Bebidas") for i in range(60)]
    session = SessionStore()
    browser = CatalogBrowser(session)

    assert browser.browse(items, page=2).number == 2
    # misma búsqueda sin página: se recuerda
    assert CatalogBrowser(session).browse(items).number == 2
    # cambia la categoría: vuelve a la página 1
    assert CatalogBrowser(session).browse(items, category="Bebidas", page=2).number == 1
    assert session[CatalogBrowser.SESSION_KEY]["criteria"]["category"] == "Bebidas"


def test_browser_clamps_out_of_range_page():
    items = [make(f"p{i}") for i in range(25)]
    session = SessionStore()
    page = CatalogBrowser(session).browse(items, page=7)
    assert page.number == 2
    assert session[CatalogBrowser.SESSION_KEY]["page"] == 2
