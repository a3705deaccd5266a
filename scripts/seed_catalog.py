"""
Seed the OrderDesk catalog into the configured database.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --migrate
    python scripts/seed_catalog.py --settings config.settings
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the OrderDesk catalog.")
    parser.add_argument(
        "--settings",
        default=os.environ.get("DJANGO_SETTINGS_MODULE", "config.settings"),
        help="Django settings module.",
    )
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Apply migrations before seeding.",
    )
    args = parser.parse_args()

    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
    os.environ["DJANGO_SETTINGS_MODULE"] = args.settings

    import django

    django.setup()

    if args.migrate:
        from django.core.management import call_command

        call_command("migrate", interactive=False, verbosity=1)

    from core.catalog.seed import seed_catalog

    summary = seed_catalog()
    if summary.skipped:
        print("Catalog already seeded. Nothing to do.")
    else:
        print(
            f"Seeded {summary.organizations} organizations, {summary.products} products, "
            f"{summary.parties} parties, {summary.tax_configs} tax configs."
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
