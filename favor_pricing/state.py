"""Process-wide holder for the active pricing tables."""
from __future__ import annotations

import logging

from .domain_models import PricingTables
from .table_loader import load_default_pricing_tables

logger = logging.getLogger(__name__)

# Replaced as a whole, never mutated
_ACTIVE_TABLES: PricingTables | None = None


def install_pricing_tables(tables: PricingTables) -> None:
    """Make ``tables`` the tables used by quotes and classification."""
    global _ACTIVE_TABLES
    _ACTIVE_TABLES = tables
    logger.info("Installed pricing tables version %s", tables.version or "<unversioned>")


def get_pricing_tables() -> PricingTables:
    """Return the active tables, or the packaged defaults if none were installed."""
    if _ACTIVE_TABLES is None:
        return load_default_pricing_tables()
    return _ACTIVE_TABLES


def reset_pricing_tables() -> None:
    """Drop installed tables so the packaged defaults apply again."""
    global _ACTIVE_TABLES
    _ACTIVE_TABLES = None
