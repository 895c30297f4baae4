import django.db.models.deletion
import django.utils.timezone
import uuid6
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WarrantyClaim",
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
                ("issue_description", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("REQUESTED", "Requested"),
                            ("ACCEPTED", "Accepted"),
                            ("DENIED", "Denied"),
                            ("IN_PROGRESS", "In progress"),
                            ("RESOLVED", "Resolved"),
                        ],
                        default="REQUESTED",
                        max_length=16,
                    ),
                ),
                ("seller_response_notes", models.TextField(blank=True, null=True)),
                (
                    "last_status_update_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="warranty_claims",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "registered_product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="claims",
                        to="products.registeredproduct",
                    ),
                ),
            ],
            options={
                "db_table": "warranty_claims",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="claims_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(
                            ("status__in", ["DENIED", "RESOLVED"]), _negated=True
                        ),
                        fields=("registered_product",),
                        name="uniq_active_claim_per_product",
                    ),
                ],
            },
        ),
    ]
