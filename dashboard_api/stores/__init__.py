"""
Store factory for the dashboard.

create_store() picks the InvoiceStore implementation once, from settings:

- live: PostgreSQL, when POSTGRES_URL or DATABASE_URL is set
- fallback: static placeholder data otherwise

Callers receive the store by injection and never re-check configuration.
"""

import logging

from ..config import Settings
from .base import ITEMS_PER_PAGE, InvoiceStore
from .fallback import FallbackStore
from .live import LiveStore

logger = logging.getLogger(__name__)

__all__ = ["ITEMS_PER_PAGE", "InvoiceStore", "FallbackStore", "LiveStore", "create_store"]


def create_store(settings: Settings) -> InvoiceStore:
    """Return the invoice store matching the configured database."""
    if settings.database_configured:
        logger.info("Using PostgreSQL store")
        return LiveStore(
            settings.database_url,
            revenue_delay_seconds=settings.revenue_delay_seconds,
        )
    logger.info("No database configured, serving placeholder data")
    return FallbackStore()
