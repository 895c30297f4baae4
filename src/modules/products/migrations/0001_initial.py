import django.db.models.deletion
import uuid6
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("sellers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RegisteredProduct",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("seller_order_id", models.CharField(max_length=100)),
                ("customer_phone_at_sale", models.CharField(max_length=20)),
                ("product_name", models.CharField(max_length=255)),
                (
                    "price",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                ("purchase_date", models.DateField()),
                ("warranty_valid_until", models.DateField()),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registered_products",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "seller",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registered_products",
                        to="sellers.seller",
                    ),
                ),
            ],
            options={
                "db_table": "registered_products",
                "ordering": ["-purchase_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["seller"], name="products_seller_idx"),
                    models.Index(
                        fields=["warranty_valid_until"], name="products_warranty_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("customer", "seller", "seller_order_id"),
                        name="uniq_product_customer_seller_order",
                    ),
                ],
            },
        ),
    ]
