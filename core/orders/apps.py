"""
OrderDesk Orders - App Configuration
====================================
Order/invoice aggregate state. Rows are created once by the invoice builder;
afterwards only status, payment and timestamp fields change.
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.orders"
    label = "orders"
    verbose_name = "OrderDesk Orders"
