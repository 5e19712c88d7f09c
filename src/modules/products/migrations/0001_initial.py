import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("categories", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(blank=True, default=None, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("deleted_at", models.DateTimeField(blank=True, default=None, null=True)),
                (
                    "deleted_by",
                    models.CharField(blank=True, default=None, max_length=100, null=True),
                ),
                (
                    "deletion_reason",
                    models.CharField(blank=True, default=None, max_length=500, null=True),
                ),
                ("name", models.CharField(max_length=150)),
                ("name_key", models.CharField(editable=False, max_length=450)),
                ("description", models.CharField(blank=True, max_length=1000, null=True)),
                ("price", models.DecimalField(decimal_places=2, max_digits=18)),
                ("stock", models.PositiveIntegerField(default=0)),
                ("code", models.CharField(max_length=50)),
                ("code_key", models.CharField(editable=False, max_length=150)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="products",
                        to="categories.category",
                    ),
                ),
            ],
            options={
                "db_table": "products",
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["category", "is_active"],
                        name="products_category_active_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("price__gt", 0)),
                        name="products_price_positive",
                    ),
                    models.UniqueConstraint(
                        fields=("code_key",),
                        condition=models.Q(("is_active", True)),
                        name="products_code_ci_unique_active",
                    ),
                ],
            },
        ),
    ]
