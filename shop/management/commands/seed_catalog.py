from django.conf import settings
from django.core.management.base import BaseCommand

from shop.services import seed_products


class Command(BaseCommand):
    help = "Seed the product catalog from a JSON file (skipped when products exist)."

    def add_arguments(self, parser):
        parser.add_argument("--file", default=None, help=f"JSON file (default: {settings.SHOP_SEED_FILE})")
        parser.add_argument("--force", action="store_true", help="Load even if the catalog has products.")

    def handle(self, *args, **options):
        result = seed_products(path=options["file"], force=options["force"])

        if not result["created"]:
            self.stdout.write(self.style.WARNING(f"Catálogo ya tiene productos ({result['count']}), no se cargó nada."))
            return

        self.stdout.write(self.style.SUCCESS(f"✅ Seed OK. Created/updated: {result['created']}, Total: {result['count']}"))
