"""
OrderDesk Catalog - Relational Catalog State
============================================
Organization, Party, Product and TaxConfig records.

Name columns carry a normalized ``name_key`` filled on every save; lookups
filter on it and never on the display name.
"""

from __future__ import annotations

import uuid

from django.db import models

from core.catalog.normalization import normalize_name


class PartyRole(models.TextChoices):
    CUSTOMER = "CUSTOMER", "Customer"
    VENDOR = "VENDOR", "Vendor"


class _NamedRecord(models.Model):
    name = models.CharField(max_length=255)
    name_key = models.CharField(max_length=255, db_index=True, editable=False)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        self.name_key = normalize_name(self.name)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "name" in update_fields:
            kwargs["update_fields"] = sorted(set(update_fields) | {"name_key"})
        super().save(*args, **kwargs)


class Organization(_NamedRecord):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    country = models.CharField(max_length=8, default="IN")
    tax_id = models.CharField(max_length=64, default="", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "orderdesk_organizations"
        ordering = ["name_key", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.country})"


class Party(_NamedRecord):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        Organization,
        on_delete=models.PROTECT,
        related_name="parties",
        db_column="org_id",
    )
    role = models.CharField(
        max_length=20,
        choices=PartyRole.choices,
        default=PartyRole.CUSTOMER,
    )
    phone = models.CharField(max_length=64, default="", blank=True)
    email = models.CharField(max_length=255, default="", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "orderdesk_parties"
        ordering = ["name_key", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"


class Product(_NamedRecord):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        Organization,
        on_delete=models.PROTECT,
        related_name="products",
        db_column="org_id",
    )
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    current_stock = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "orderdesk_products"
        ordering = ["name_key", "id"]

    def __str__(self) -> str:
        return f"{self.name} @ {self.unit_price}"


class TaxConfig(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    country = models.CharField(max_length=8, unique=True)
    rate = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    tax_type = models.CharField(max_length=32, default="N/A")

    class Meta:
        db_table = "orderdesk_tax_configs"
        ordering = ["country"]

    def save(self, *args, **kwargs):
        self.country = self.country.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.country}: {self.tax_type} {self.rate}%"
