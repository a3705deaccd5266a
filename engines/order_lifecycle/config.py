"""
OrderDesk Order Lifecycle Engine - Settings
===========================================
Default-entity names and document options, resolved once when the engine is
constructed. Transition logic reads these from the engine, never from string
literals.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_CUSTOMER_NAME = "Anonymous Traders"
DEFAULT_ORGANIZATION_NAME = "Selmel Liquors"
DEFAULT_CURRENCY = "INR"
DEFAULT_DOCUMENT_BASE_URL = "http://localhost:8000/v1"


@dataclass(frozen=True)
class EngineSettings:
    default_customer_name: str = DEFAULT_CUSTOMER_NAME
    default_organization_name: str = DEFAULT_ORGANIZATION_NAME
    currency: str = DEFAULT_CURRENCY
    document_output_dir: Path = Path("var/invoices")
    document_base_url: str = DEFAULT_DOCUMENT_BASE_URL

    def __post_init__(self):
        if not self.default_customer_name or not self.default_customer_name.strip():
            raise ValueError("default_customer_name must be non-empty.")
        if not self.default_organization_name or not self.default_organization_name.strip():
            raise ValueError("default_organization_name must be non-empty.")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("currency must be 3-letter ISO 4217 code.")

    @classmethod
    def from_django_settings(cls) -> "EngineSettings":
        from django.conf import settings

        options = dict(getattr(settings, "ORDERDESK", {}))
        return cls(
            default_customer_name=options.get("DEFAULT_CUSTOMER_NAME", DEFAULT_CUSTOMER_NAME),
            default_organization_name=options.get(
                "DEFAULT_ORGANIZATION_NAME", DEFAULT_ORGANIZATION_NAME,
            ),
            currency=str(options.get("CURRENCY", DEFAULT_CURRENCY)).upper(),
            document_output_dir=Path(
                options.get("DOCUMENT_OUTPUT_DIR", Path(settings.BASE_DIR) / "var" / "invoices")
            ),
            document_base_url=options.get("DOCUMENT_BASE_URL", DEFAULT_DOCUMENT_BASE_URL),
        )
