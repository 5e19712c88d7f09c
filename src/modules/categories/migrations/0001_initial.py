from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
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
                ("name", models.CharField(max_length=100)),
                ("name_key", models.CharField(editable=False, max_length=300)),
                ("description", models.CharField(blank=True, max_length=500, null=True)),
            ],
            options={
                "db_table": "categories",
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("name_key",),
                        condition=models.Q(("is_active", True)),
                        name="categories_name_ci_unique_active",
                    )
                ],
            },
        ),
    ]
