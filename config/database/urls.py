"""Database URL configuration.

Environment Variables:
    - TFTIPS_DATABASE_URL: PostgreSQL connection string for the winning comps
      table. Plain ``postgres://`` / ``postgresql://`` URLs are accepted and
      switched to the asyncpg driver.
"""

from __future__ import annotations

import os

from core.utils.config_helpers import normalise_async_url

TFTIPS_DATABASE_URL_ENV = "TFTIPS_DATABASE_URL"

TFTIPS_DATABASE_URL = normalise_async_url(os.getenv(TFTIPS_DATABASE_URL_ENV, ""))

__all__ = [
    "TFTIPS_DATABASE_URL",
    "TFTIPS_DATABASE_URL_ENV",
]
