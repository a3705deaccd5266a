from __future__ import annotations

import pytest

from core.catalog.models import Organization, Party, PartyRole, Product
from core.catalog.normalization import normalize_name
from core.catalog.seed import seed_catalog
from core.catalog.service import LookupResolver
from core.errors import FatalConfigurationError

pytestmark = pytest.mark.django_db(transaction=True)


def _resolver(
    customer: str = "Anonymous Traders",
    organization: str = "Selmel Liquors",
) -> LookupResolver:
    return LookupResolver(
        default_customer_name=customer,
        default_organization_name=organization,
    )


class TestNormalizeName:
    def test_trims_collapses_and_folds_case(self):
        assert normalize_name("  Heineken   LAGER ") == "heineken lager"

    def test_none_and_blank_are_empty(self):
        assert normalize_name(None) == ""
        assert normalize_name("   ") == ""


class TestPartyResolution:
    def test_matches_case_insensitively(self, seeded_catalog):
        party = _resolver().resolve_party("  hilton   HOTELS india ", allow_create=False)
        assert party.name == "Hilton Hotels India"

    def test_blank_name_uses_default_customer(self, seeded_catalog):
        party = _resolver().resolve_party("  ", allow_create=False)
        assert party.name == "Anonymous Traders"

    def test_missing_party_falls_back_when_creation_not_allowed(self, seeded_catalog):
        party = _resolver().resolve_party("Nobody Ltd", allow_create=False)
        assert party.name == "Anonymous Traders"
        assert not Party.objects.filter(name_key="nobody ltd").exists()

    def test_missing_party_is_created_once_under_default_organization(self, seeded_catalog):
        resolver = _resolver()
        created = resolver.resolve_party("Marriott  Goa", allow_create=True)
        again = resolver.resolve_party("marriott goa", allow_create=True)

        assert created.id == again.id
        assert created.name == "Marriott Goa"
        assert created.role == PartyRole.CUSTOMER
        assert created.organization.name == "Selmel Liquors"
        assert Party.objects.filter(name_key="marriott goa").count() == 1

    def test_missing_default_customer_is_fatal(self, seeded_catalog):
        with pytest.raises(FatalConfigurationError) as exc_info:
            _resolver(customer="Ghost Customer").resolve_party(None, allow_create=False)
        assert exc_info.value.entity == "customer"

    def test_missing_default_customer_is_fatal_even_when_creation_allowed(self, seeded_catalog):
        Party.objects.filter(name_key="anonymous traders").delete()

        with pytest.raises(FatalConfigurationError):
            _resolver().resolve_party(None, allow_create=True)
        assert not Party.objects.filter(name_key="anonymous traders").exists()


class TestOrganizationAndProducts:
    def test_default_organization(self, seeded_catalog):
        organization = _resolver().default_organization()
        assert organization.name == "Selmel Liquors"
        assert organization.country == "IN"

    def test_missing_default_organization_is_fatal(self, seeded_catalog):
        with pytest.raises(FatalConfigurationError) as exc_info:
            _resolver(organization="Ghost Org").default_organization()
        assert "Ghost Org" in str(exc_info.value)

    def test_missing_organization_returns_none(self, seeded_catalog):
        assert _resolver().resolve_organization("Nowhere Inc") is None

    def test_product_lookup_ignores_case(self, seeded_catalog):
        product = _resolver().resolve_product("KINGFISHER")
        assert product is not None
        assert product.name == "kingfisher"

    def test_unknown_product_returns_none(self, seeded_catalog):
        assert _resolver().resolve_product("Old Monk") is None
        assert _resolver().resolve_product(None) is None

    def test_renaming_refreshes_name_key(self, seeded_catalog):
        product = Product.objects.get(name_key="tuborg")
        product.name = "Tuborg Green"
        product.save(update_fields=["name"])

        assert _resolver().resolve_product("tuborg green").id == product.id
        assert _resolver().resolve_product("tuborg") is None


class TestSeed:
    def test_seed_is_idempotent(self):
        first = seed_catalog()
        second = seed_catalog()

        assert first.skipped is False
        assert first.products == 6
        assert second.skipped is True
        assert Organization.objects.count() == 2
        assert Product.objects.count() == 6
        assert Party.objects.count() == 6
