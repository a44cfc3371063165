import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=160)),
                ("category", models.CharField(max_length=80)),
                ("description", models.TextField(blank=True, default="")),
                ("purchase_price", models.PositiveIntegerField(default=0)),
                ("original_price", models.PositiveIntegerField(default=0)),
                ("final_price", models.PositiveIntegerField(default=0)),
                ("images", models.JSONField(blank=True, default=list)),
                ("label", models.CharField(blank=True, choices=[("Nuevo", "Nuevo"), ("Popular", "Popular"), ("Más vendido", "Más vendido"), ("Recomendado", "Recomendado")], default="", max_length=20)),
                ("stock", models.PositiveIntegerField(default=0)),
                ("variant_type", models.CharField(blank=True, default="", max_length=50)),
                ("variant_options", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_number", models.CharField(max_length=40, unique=True)),
                ("status", models.CharField(choices=[("pending", "Pendiente"), ("processing", "En proceso"), ("shipped", "Enviado"), ("delivered", "Entregado"), ("cancelled", "Cancelado")], default="pending", max_length=20)),
                ("full_name", models.CharField(max_length=120)),
                ("address", models.CharField(max_length=255)),
                ("phone", models.CharField(max_length=30)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("subtotal", models.PositiveIntegerField(default=0)),
                ("shipping", models.PositiveIntegerField(default=0)),
                ("total", models.PositiveIntegerField(default=0)),
                ("payment_method", models.CharField(blank=True, default="", max_length=60)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("-created_at",),
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_id", models.PositiveIntegerField()),
                ("name", models.CharField(max_length=160)),
                ("image", models.CharField(blank=True, default="", max_length=255)),
                ("variant", models.CharField(blank=True, default="", max_length=80)),
                ("purchase_price", models.PositiveIntegerField(default=0)),
                ("original_price", models.PositiveIntegerField(default=0)),
                ("final_price", models.PositiveIntegerField()),
                ("qty", models.PositiveIntegerField(default=1)),
                ("line_total", models.PositiveIntegerField(default=0)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="shop.order")),
            ],
        ),
    ]
