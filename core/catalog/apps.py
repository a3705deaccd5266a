"""
OrderDesk Catalog - App Configuration
=====================================
Passive catalog records read by lookups; products are mutated only by
fulfillment stock decrements.
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.catalog"
    label = "catalog"
    verbose_name = "OrderDesk Catalog"
