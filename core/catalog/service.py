"""
OrderDesk Catalog - Lookup Resolver
===================================
Case-insensitive name resolution for parties, products and organizations.

Rules:
- Lookups match on the normalized ``name_key``, never on raw names.
- Parties fall back to the configured default customer, or are created on
  demand when the caller allows it (order creation only).
- Products and organizations are never created here.
- Every query participates in the caller's transaction.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from core.catalog.models import Organization, Party, PartyRole, Product
from core.catalog.normalization import normalize_name
from core.errors import FatalConfigurationError

logger = logging.getLogger("orderdesk.catalog")


def _first_by_name(queryset, name: str):
    key = normalize_name(name)
    if not key:
        return None
    return queryset.filter(name_key=key).order_by("created_at", "id").first()


class LookupResolver:
    """Resolves catalog records by name with default-entity fallback."""

    def __init__(
        self,
        *,
        default_customer_name: str,
        default_organization_name: str,
    ):
        self._default_customer_name = default_customer_name
        self._default_organization_name = default_organization_name

    def resolve_party(self, name: str | None, *, allow_create: bool) -> Party:
        requested = name if normalize_name(name) else self._default_customer_name
        party = _first_by_name(Party.objects.all(), requested)
        if party is not None:
            return party

        if normalize_name(requested) == normalize_name(self._default_customer_name):
            raise FatalConfigurationError("customer", self._default_customer_name)

        if allow_create:
            organization = self.default_organization()
            party = Party(
                organization=organization,
                name=" ".join(str(requested).split()),
                role=PartyRole.CUSTOMER,
            )
            party.save()
            logger.info(f"Created customer '{party.name}' on demand.")
            return party

        logger.warning(
            f"Party '{requested}' not found; using default customer "
            f"'{self._default_customer_name}'."
        )
        default = _first_by_name(Party.objects.all(), self._default_customer_name)
        if default is None:
            raise FatalConfigurationError("customer", self._default_customer_name)
        return default

    def resolve_product(self, name: str | None) -> Product | None:
        return _first_by_name(Product.objects.all(), name or "")

    def resolve_organization(self, name: str | None) -> Organization | None:
        organization = _first_by_name(Organization.objects.all(), name or "")
        if organization is None:
            logger.warning(f"Organization '{name}' not found.")
        return organization

    def default_organization(self) -> Organization:
        organization = self.resolve_organization(self._default_organization_name)
        if organization is None:
            raise FatalConfigurationError(
                "organization", self._default_organization_name,
            )
        return organization

    def lock_products(self, product_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Product]:
        """
        Row-lock products for a stock mutation, in id order.

        Must be called inside ``transaction.atomic()``; locks are held until
        the enclosing transaction ends.
        """
        ordered_ids = sorted(set(product_ids), key=str)
        rows = Product.objects.select_for_update().filter(id__in=ordered_ids).order_by("id")
        return {product.id: product for product in rows}
