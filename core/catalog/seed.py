"""
OrderDesk Catalog - Seed Data
=============================
Initial catalog for a fresh database: two organizations, the products and
parties of the default organization, and per-country tax rates.

Seeding is skipped entirely when any organization already exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction

from core.catalog.models import Organization, Party, PartyRole, Product, TaxConfig

logger = logging.getLogger("orderdesk.seed")


ORGANIZATIONS = (
    ("Hemadri Solutions", "IN", "29AABCH1234E1Z2"),
    ("Selmel Liquors", "IN", "27AABCT1234H1Z0"),
)

PRODUCTS_OWNER = "Selmel Liquors"

PRODUCTS = (
    ("kingfisher", Decimal("150.00"), Decimal("50")),
    ("tuborg", Decimal("130.00"), Decimal("200")),
    ("Heineken Lager", Decimal("180.00"), Decimal("500")),
    ("Hayward 500 Larger", Decimal("199.99"), Decimal("30")),
    ("Canadian Goose", Decimal("249.99"), Decimal("100")),
    ("Malibu Rum", Decimal("299.99"), Decimal("150")),
)

PARTIES = (
    ("Hilton Hotels India", PartyRole.CUSTOMER, "416-555-0123"),
    ("Restaurant Supply Co.", PartyRole.VENDOR, "416-555-0124"),
    ("Ryan", PartyRole.CUSTOMER, "416-555-0125"),
    ("Anonymous Traders", PartyRole.CUSTOMER, "+91-80-4156-0000"),
    ("Spencer & Co. Suppliers", PartyRole.VENDOR, "+91-11-4155-1234"),
    ("Taj Hotels", PartyRole.VENDOR, "+91-22-6178-2000"),
)

TAX_CONFIGS = (
    ("IN", Decimal("18.00"), "GST"),
    ("CA", Decimal("13.00"), "HST"),
)


@dataclass(frozen=True)
class SeedSummary:
    organizations: int = 0
    products: int = 0
    parties: int = 0
    tax_configs: int = 0
    skipped: bool = False


def seed_catalog() -> SeedSummary:
    """Populate an empty catalog. Returns a skipped summary if already seeded."""
    with transaction.atomic():
        if Organization.objects.exists():
            logger.info("Catalog already seeded. Skipping.")
            return SeedSummary(skipped=True)

        organizations = {}
        for name, country, tax_id in ORGANIZATIONS:
            organization = Organization(name=name, country=country, tax_id=tax_id)
            organization.save()
            organizations[name] = organization
        owner = organizations[PRODUCTS_OWNER]

        for name, unit_price, stock in PRODUCTS:
            Product(
                organization=owner,
                name=name,
                unit_price=unit_price,
                current_stock=stock,
            ).save()

        for name, role, phone in PARTIES:
            Party(organization=owner, name=name, role=role, phone=phone).save()

        tax_configs = 0
        for country, rate, tax_type in TAX_CONFIGS:
            _, created = TaxConfig.objects.get_or_create(
                country=country,
                defaults={"rate": rate, "tax_type": tax_type},
            )
            tax_configs += int(created)

    summary = SeedSummary(
        organizations=len(ORGANIZATIONS),
        products=len(PRODUCTS),
        parties=len(PARTIES),
        tax_configs=tax_configs,
    )
    logger.info(
        f"Catalog seeded: {summary.organizations} organizations, "
        f"{summary.products} products, {summary.parties} parties, "
        f"{summary.tax_configs} tax configs."
    )
    return summary
