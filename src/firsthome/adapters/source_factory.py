# src/firsthome/adapters/source_factory.py
from __future__ import annotations

from firsthome.adapters.catalog_source import CatalogListingSource
from firsthome.adapters.config import AppConfig, config
from firsthome.adapters.nestoria_client import NestoriaClient
from firsthome.adapters.nestoria_listings import NestoriaListingSource
from firsthome.domain.ports import ListingSource


def make_listing_source(cfg: AppConfig | None = None) -> ListingSource:
    """Pick the listing source variant named by LISTING_SOURCE."""
    cfg = cfg or config

    if cfg.LISTING_SOURCE == "nestoria":
        return NestoriaListingSource(
            client=NestoriaClient(
                base_url=cfg.NESTORIA_BASE_URL,
                country=cfg.NESTORIA_COUNTRY,
                timeout_s=float(cfg.NESTORIA_TIMEOUT_S),
            )
        )

    if cfg.CATALOG_PATH:
        return CatalogListingSource.from_file(cfg.CATALOG_PATH)
    return CatalogListingSource.demo()
