import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OrderSequence",
            fields=[
                ("key", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("last_number", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "orderdesk_order_sequences",
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("invoice_number", models.PositiveIntegerField(unique=True)),
                ("display_number", models.CharField(max_length=32, unique=True)),
                ("intent", models.CharField(max_length=64)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("DELIVERED", "Delivered"),
                            ("INVOICED", "Invoiced"),
                            ("PARTIALLY_PAID", "Partially paid"),
                            ("PAID", "Paid"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("subtotal_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("tax_summary", models.CharField(blank=True, default="", max_length=64)),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("paid_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("balance_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("due_date", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField()),
                ("fulfilled_at", models.DateTimeField(blank=True, null=True)),
                ("invoiced_at", models.DateTimeField(blank=True, null=True)),
                (
                    "organization",
                    models.ForeignKey(
                        db_column="org_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="orders",
                        to="catalog.organization",
                    ),
                ),
                (
                    "party",
                    models.ForeignKey(
                        db_column="party_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="orders",
                        to="catalog.party",
                    ),
                ),
            ],
            options={
                "db_table": "orderdesk_orders",
                "ordering": ["invoice_number"],
            },
        ),
        migrations.CreateModel(
            name="InvoiceItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("description", models.CharField(max_length=255)),
                ("quantity", models.DecimalField(decimal_places=2, max_digits=12)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "order",
                    models.ForeignKey(
                        db_column="order_id",
                        on_delete=models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        db_column="product_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="invoice_items",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "db_table": "orderdesk_invoice_items",
                "ordering": ["order_id", "description", "id"],
            },
        ),
    ]
