# src/firsthome/domain/ports.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from firsthome.domain.listing import ListingRecord


# ----------------------------
# Listing search
# ----------------------------

@dataclass(frozen=True)
class ListingQuery:
    max_price: float
    location: str = ""
    # requested amenity names (AmenityFlags field names); adapters map them
    # to their own keyword tokens
    amenities: tuple[str, ...] = ()
    listing_type: str = "buy"
    page: int = 1


class ListingSource(Protocol):
    source_name: str

    def search(self, query: ListingQuery) -> list[ListingRecord]:
        """Candidate listings for `query`; raises SourceUnavailable on failure."""
        ...
