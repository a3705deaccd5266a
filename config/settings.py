"""
OrderDesk – Django Settings (Infrastructure Only)
=================================================
Django serves as the framework container for OrderDesk: ORM, transactions,
migrations and the thin HTTP adapter. Lifecycle rules live in engines/.

Every OrderDesk option can be overridden from the environment.
"""

import os
import tempfile
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = project root
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "ORDERDESK_SECRET_KEY",
    "orderdesk-dev-key-replace-before-deployment",
)

DEBUG = os.environ.get("ORDERDESK_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("ORDERDESK_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # ── OrderDesk Modules (dependency order) ──────────────
    "core.catalog",
    "core.orders",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL ───────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("ORDERDESK_DB_PATH", BASE_DIR / "db.sqlite3"),
        # Writers take the database lock at BEGIN and wait for it.
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": 20,
        },
        # File-backed so concurrent test threads share one database.
        "TEST": {
            "NAME": os.environ.get(
                "ORDERDESK_TEST_DB_PATH",
                Path(tempfile.gettempdir()) / "orderdesk_test.sqlite3",
            ),
        },
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
# OrderDesk uses UUIDs explicitly. This is a Django fallback only.
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── OrderDesk ─────────────────────────────────────────────────
ORDERDESK = {
    "DEFAULT_CUSTOMER_NAME": os.environ.get(
        "ORDERDESK_DEFAULT_CUSTOMER", "Anonymous Traders",
    ),
    "DEFAULT_ORGANIZATION_NAME": os.environ.get(
        "ORDERDESK_DEFAULT_ORGANIZATION", "Selmel Liquors",
    ),
    "CURRENCY": os.environ.get("ORDERDESK_CURRENCY", "INR"),
    "DOCUMENT_OUTPUT_DIR": Path(
        os.environ.get("ORDERDESK_DOCUMENT_DIR", BASE_DIR / "var" / "invoices")
    ),
    "DOCUMENT_BASE_URL": os.environ.get(
        "ORDERDESK_DOCUMENT_BASE_URL", "http://localhost:8000/v1",
    ),
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "orderdesk": {
            "handlers": ["console"],
            "level": os.environ.get("ORDERDESK_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
