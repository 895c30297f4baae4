import django.db.models.deletion
import uuid6
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Seller",
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
                ("shop_name", models.CharField(max_length=255)),
                ("business_name", models.CharField(blank=True, default="", max_length=255)),
                ("business_email", models.EmailField(max_length=254)),
                ("business_phone_number", models.CharField(max_length=20)),
                ("address", models.TextField(blank=True, default="")),
                (
                    "contract_status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("ACTIVE", "Active"),
                            ("DEACTIVATED", "Deactivated"),
                            ("TERMINATED", "Terminated"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("api_base_url", models.URLField(blank=True, default="", max_length=500)),
                ("api_key", models.CharField(blank=True, default="", max_length=255)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="seller_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "sellers",
                "ordering": ["shop_name"],
                "indexes": [
                    models.Index(fields=["contract_status"], name="sellers_status_idx"),
                ],
            },
        ),
    ]
