# src/firsthome/domain/filters.py
from __future__ import annotations

from typing import Iterable

from firsthome.domain.criteria import AmenityFlags
from firsthome.domain.listing import ListingRecord


def filter_by_bedrooms(
    listings: Iterable[ListingRecord],
    min_bedrooms: int | None,
) -> list[ListingRecord]:
    """Keep listings with at least `min_bedrooms`; None means no constraint."""
    if min_bedrooms is None:
        return list(listings)
    return [rec for rec in listings if rec.bedrooms >= min_bedrooms]


def filter_by_amenities(
    listings: Iterable[ListingRecord],
    amenities: AmenityFlags,
) -> list[ListingRecord]:
    """
    Keep listings that have every requested amenity.

    Unknown flags count as "no" for requested amenities. Amenities the buyer
    did not ask for never exclude a listing.
    """
    wanted = amenities.requested()
    if not wanted:
        return list(listings)
    return [rec for rec in listings if all(rec.has_amenity(name) for name in wanted)]
