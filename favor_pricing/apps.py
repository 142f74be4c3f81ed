import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class FavorPricingConfig(AppConfig):
    name = "favor_pricing"
    verbose_name = "Favor pricing"

    def ready(self):
        from .state import install_pricing_tables
        from .table_loader import load_default_pricing_tables, load_pricing_tables_from_path

        tables_path = getattr(settings, "FAVOR_PRICING_TABLES_PATH", None)
        if tables_path:
            logger.info("Loading pricing tables from %s", tables_path)
            tables = load_pricing_tables_from_path(tables_path)
        else:
            tables = load_default_pricing_tables()
        install_pricing_tables(tables)
