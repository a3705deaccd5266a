import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Organization",
            fields=[
                ("name", models.CharField(max_length=255)),
                ("name_key", models.CharField(db_index=True, editable=False, max_length=255)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("country", models.CharField(default="IN", max_length=8)),
                ("tax_id", models.CharField(blank=True, default="", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "orderdesk_organizations",
                "ordering": ["name_key", "id"],
            },
        ),
        migrations.CreateModel(
            name="TaxConfig",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("country", models.CharField(max_length=8, unique=True)),
                ("rate", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("tax_type", models.CharField(default="N/A", max_length=32)),
            ],
            options={
                "db_table": "orderdesk_tax_configs",
                "ordering": ["country"],
            },
        ),
        migrations.CreateModel(
            name="Party",
            fields=[
                ("name", models.CharField(max_length=255)),
                ("name_key", models.CharField(db_index=True, editable=False, max_length=255)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "role",
                    models.CharField(
                        choices=[("CUSTOMER", "Customer"), ("VENDOR", "Vendor")],
                        default="CUSTOMER",
                        max_length=20,
                    ),
                ),
                ("phone", models.CharField(blank=True, default="", max_length=64)),
                ("email", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "organization",
                    models.ForeignKey(
                        db_column="org_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="parties",
                        to="catalog.organization",
                    ),
                ),
            ],
            options={
                "db_table": "orderdesk_parties",
                "ordering": ["name_key", "id"],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("name", models.CharField(max_length=255)),
                ("name_key", models.CharField(db_index=True, editable=False, max_length=255)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("current_stock", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "organization",
                    models.ForeignKey(
                        db_column="org_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="products",
                        to="catalog.organization",
                    ),
                ),
            ],
            options={
                "db_table": "orderdesk_products",
                "ordering": ["name_key", "id"],
            },
        ),
    ]
