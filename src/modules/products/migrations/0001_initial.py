import django.utils.timezone
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
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
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now, editable=False
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True, db_index=True, default=None, null=True
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                (
                    "size",
                    models.CharField(
                        choices=[
                            ("half_gallon", "Half Gallon"),
                            ("gallon", "Gallon"),
                        ],
                        max_length=20,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("price_cents", models.PositiveIntegerField()),
                ("active", models.BooleanField(default=True)),
                ("sort_order", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "products",
                "ordering": ["sort_order", "name"],
                "indexes": [
                    models.Index(
                        fields=["active", "sort_order"], name="products_active_idx"
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(("price_cents__gte", 0)),
                        name="products_price_non_negative",
                    ),
                ],
            },
        ),
    ]
