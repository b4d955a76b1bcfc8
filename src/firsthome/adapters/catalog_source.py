# src/firsthome/adapters/catalog_source.py
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from firsthome.adapters.logging_utils import fields, get_logger
from firsthome.adapters.storage import read_records
from firsthome.domain.criteria import AmenityFlags
from firsthome.domain.errors import SourceUnavailable
from firsthome.domain.listing import ListingRecord
from firsthome.domain.ports import ListingQuery

logger = get_logger(__name__)

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}


def _to_flag(v: Any) -> bool | None:
    if v is None:
        return None
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return None


def record_from_dict(raw: Mapping[str, Any]) -> ListingRecord:
    """
    Build a ListingRecord from a flat catalog row.

    Amenity columns are the AmenityFlags field names; blank or missing
    columns leave the amenity unknown.
    """
    try:
        price = float(raw["price"])
        beds = float(raw.get("bedrooms") or 0)
    except (KeyError, TypeError, ValueError) as e:
        raise SourceUnavailable(f"malformed catalog row: {dict(raw)!r}") from e
    if not (math.isfinite(price) and math.isfinite(beds)) or price < 0 or beds < 0 or beds != int(beds):
        raise SourceUnavailable(f"malformed catalog row: {dict(raw)!r}")
    bedrooms = int(beds)

    amenities: dict[str, bool] = {}
    nested = raw.get("amenities")
    for name in AmenityFlags.names():
        v = nested.get(name) if isinstance(nested, Mapping) else raw.get(name)
        flag = _to_flag(v)
        if flag is not None:
            amenities[name] = flag

    listing_id = str(raw.get("listing_id") or raw.get("id") or raw.get("source_url") or "")
    return ListingRecord(
        listing_id=listing_id,
        title=str(raw.get("title") or ""),
        summary=str(raw.get("summary") or ""),
        price=price,
        bedrooms=bedrooms,
        location=str(raw.get("location") or ""),
        source_url=str(raw.get("source_url") or ""),
        img_url=raw.get("img_url") or None,
        amenities=amenities,
    )


_DEMO_ROWS: list[dict[str, Any]] = [
    {
        "listing_id": "demo-1",
        "title": "2 bed terraced house, Chorlton",
        "summary": "Bright terrace with a south-facing garden, close to the park.",
        "price": 215_000,
        "bedrooms": 2,
        "location": "Manchester",
        "source_url": "https://example.com/listings/demo-1",
        "garden": True,
        "near_green_space": True,
    },
    {
        "listing_id": "demo-2",
        "title": "1 bed flat, Ancoats",
        "summary": "Modern flat with balcony and allocated parking.",
        "price": 165_000,
        "bedrooms": 1,
        "location": "Manchester",
        "source_url": "https://example.com/listings/demo-2",
        "balcony": True,
        "off_street_parking": True,
        "garden": False,
    },
    {
        "listing_id": "demo-3",
        "title": "3 bed semi-detached house, Didsbury",
        "summary": "Family home with driveway and rear garden.",
        "price": 340_000,
        "bedrooms": 3,
        "location": "Manchester",
        "source_url": "https://example.com/listings/demo-3",
        "garden": True,
        "off_street_parking": True,
    },
    {
        "listing_id": "demo-4",
        "title": "2 bed flat, Headingley",
        "summary": "Second-floor flat overlooking the cricket ground.",
        "price": 150_000,
        "bedrooms": 2,
        "location": "Leeds",
        "source_url": "https://example.com/listings/demo-4",
        "balcony": True,
    },
    {
        "listing_id": "demo-5",
        "title": "Studio apartment, Leeds city centre",
        "summary": "Compact studio, walking distance to the station.",
        "price": 95_000,
        "bedrooms": 0,
        "location": "Leeds",
        "source_url": "https://example.com/listings/demo-5",
    },
]


class CatalogListingSource:
    """
    Static in-memory catalog. Price, location and amenity filtering happen
    here, the way a remote search would apply them server-side.
    """
    source_name = "catalog"

    def __init__(self, listings: Iterable[ListingRecord]) -> None:
        self._listings: tuple[ListingRecord, ...] = tuple(listings)

    @classmethod
    def from_dicts(cls, rows: Iterable[Mapping[str, Any]]) -> "CatalogListingSource":
        return cls(record_from_dict(r) for r in rows)

    @classmethod
    def from_file(cls, path: str) -> "CatalogListingSource":
        try:
            rows = read_records(path)
        except (OSError, ValueError) as e:
            raise SourceUnavailable(f"could not read catalog {path}: {e}") from e
        source = cls.from_dicts(rows)
        logger.info("catalog_loaded", extra=fields(path=path, count=len(source)))
        return source

    @classmethod
    def demo(cls) -> "CatalogListingSource":
        return cls.from_dicts(_DEMO_ROWS)

    def __len__(self) -> int:
        return len(self._listings)

    def search(self, query: ListingQuery) -> list[ListingRecord]:
        place = query.location.strip().lower()
        out: list[ListingRecord] = []
        for rec in self._listings:
            if rec.price > query.max_price:
                continue
            if place and place not in rec.location.lower():
                continue
            if not all(rec.has_amenity(a) for a in query.amenities):
                continue
            out.append(rec)
        return out
