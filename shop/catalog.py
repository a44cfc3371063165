import unicodedata

from django.core.paginator import Paginator

from .pricing import discount_percent

PAGE_SIZE = 20

SORT_DEFAULT = "default"
SORT_DISCOUNT = "discount"
SORT_PRICE = "price"
SORT_NAME = "name"
SORT_CHOICES = (SORT_DEFAULT, SORT_DISCOUNT, SORT_PRICE, SORT_NAME)

SEARCH_FIELDS = ("name", "category", "description")


def normalize(text) -> str:
    """Minúsculas, sin tildes y sin espacios en los extremos."""
    s = unicodedata.normalize("NFD", str(text or ""))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    return s.lower().strip()


def _fields(product):
    return [normalize(getattr(product, f, "")) for f in SEARCH_FIELDS]


def search_products(products, query):
    """
    Dos fases: primero coincidencias exactas en nombre, categoría o
    descripción; después las parciales que no fueron exactas.
    """
    products = list(products)
    q = normalize(query)
    if not q:
        return products

    exact, partial = [], []
    for p in products:
        fields = _fields(p)
        if any(f == q for f in fields):
            exact.append(p)
        elif any(q in f for f in fields):
            partial.append(p)
    return exact + partial


def filter_by_category(products, category):
    c = normalize(category)
    return [p for p in products if normalize(p.category) == c]


def sort_products(products, sort=SORT_DEFAULT):
    products = list(products)
    if sort == SORT_DISCOUNT:
        return sorted(
            products,
            key=lambda p: discount_percent(p.original_price, p.final_price),
            reverse=True,
        )
    if sort == SORT_PRICE:
        return sorted(products, key=lambda p: p.final_price)
    if sort == SORT_NAME:
        # Orden alfabético sin distinguir tildes ni mayúsculas ("Árbol" antes que "Bebida")
        return sorted(products, key=lambda p: (normalize(p.name), p.name))
    return products


def list_products(products, search=None, category=None, sort=SORT_DEFAULT):
    result = list(products)
    if search:
        result = search_products(result, search)
    if category:
        result = filter_by_category(result, category)
    return sort_products(result, sort)


def paginate(products, page):
    return Paginator(list(products), PAGE_SIZE).get_page(page)


def categories(products):
    seen = []
    for p in products:
        if p.category not in seen:
            seen.append(p.category)
    return seen


class CatalogBrowser:
    """
    Estado de navegación del catálogo guardado en la sesión.
    Si cambia la búsqueda, la categoría o el orden, se vuelve a la página 1.
    """

    SESSION_KEY = "catalog"

    def __init__(self, session):
        self.session = session
        self.state = dict(session.get(self.SESSION_KEY) or {})

    @staticmethod
    def criteria(search="", category="", sort=SORT_DEFAULT):
        if sort not in SORT_CHOICES:
            sort = SORT_DEFAULT
        return {
            "search": (search or "").strip(),
            "category": (category or "").strip(),
            "sort": sort,
        }

    def resolve_page(self, criteria, page=None):
        previous = self.state.get("criteria")
        if previous is not None and previous != criteria:
            page = 1
        elif page in (None, ""):
            page = self.state.get("page", 1)

        try:
            page = max(1, int(page))
        except (TypeError, ValueError):
            page = 1

        self.state = {"criteria": criteria, "page": page}
        self.session[self.SESSION_KEY] = self.state
        return page

    def browse(self, products, search="", category="", sort=SORT_DEFAULT, page=None):
        crit = self.criteria(search, category, sort)
        page_number = self.resolve_page(crit, page)
        filtered = list_products(products, crit["search"], crit["category"], crit["sort"])
        page_obj = paginate(filtered, page_number)
        if page_obj.number != page_number:
            self.state["page"] = page_obj.number
            self.session[self.SESSION_KEY] = self.state
        return page_obj
