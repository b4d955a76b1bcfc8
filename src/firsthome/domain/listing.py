# src/firsthome/domain/listing.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ListingRecord:
    listing_id: str
    title: str
    summary: str
    price: float
    bedrooms: int
    location: str
    source_url: str
    img_url: str | None = None
    # amenity name -> flag; a missing key means "unknown"
    amenities: dict[str, bool] = field(default_factory=dict)

    def has_amenity(self, name: str) -> bool:
        return self.amenities.get(name) is True


@dataclass(frozen=True)
class EnrichedListing:
    listing: ListingRecord
    principal: float
    monthly_payment: float
    required_annual_salary: float

    def to_dict(self) -> dict[str, Any]:
        rec = self.listing
        return {
            "id": rec.listing_id,
            "title": rec.title,
            "price": rec.price,
            "summary": rec.summary,
            "img": rec.img_url,
            "bedrooms": rec.bedrooms,
            "location": rec.location,
            "amenities": dict(rec.amenities),
            "principal": self.principal,
            "monthly_payment": self.monthly_payment,
            "required_salary": self.required_annual_salary,
            "src_url": rec.source_url,
        }
