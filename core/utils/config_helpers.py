"""Helper utilities for configuration modules."""

from __future__ import annotations

_ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def normalise_async_url(url: str | None) -> str:
    """Return ``url`` rewritten to use an async SQLAlchemy driver.

    URLs that already name a driver (``postgresql+asyncpg://``) are kept
    unchanged; an empty value stays empty so callers can report it.

    Args:
        url: Database URL as found in the environment

    Returns:
        Async SQLAlchemy connection URL, or ``""``
    """
    if not url:
        return ""

    url = url.strip()
    scheme, separator, remainder = url.partition("://")
    if not separator or "+" in scheme:
        return url

    driver = _ASYNC_DRIVERS.get(scheme.lower())
    if driver is None:
        return url
    return f"{driver}://{remainder}"


__all__ = ["normalise_async_url"]
