# src/firsthome/api/schemas.py
from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict, Field


# --------------------------------------------
# Matches
# --------------------------------------------

class AmenityRequest(BaseModel):
    garden: bool = False
    balcony: bool = False
    off_street_parking: bool = False
    near_green_space: bool = False


class MatchRequest(BaseModel):
    """
    Search form payload for /matches.

    Numbers may arrive as strings ("200000", "10%"); services/validation.py
    normalizes them, so keep the field types loose.
    """
    model_config = ConfigDict(extra="ignore")

    max_price: float | str | None = None
    location: str = ""
    min_bedrooms: int | str | None = None
    deposit_percent: float | str | None = None
    annual_interest_rate_percent: float | str | None = None
    amenities: AmenityRequest = Field(default_factory=AmenityRequest)


class MatchItem(BaseModel):
    """One enriched listing. Mirrors EnrichedListing.to_dict()."""
    id: str
    title: str
    price: float
    summary: str = ""
    img: str | None = None
    bedrooms: int
    location: str = ""
    amenities: dict[str, bool] = Field(default_factory=dict)

    principal: float
    monthly_payment: float
    required_salary: float

    src_url: str = ""


class MatchResponse(BaseModel):
    source: str
    count: int
    results: list[MatchItem]


class RatesResponse(BaseModel):
    offered_rates: list[float]
    default_interest_rate_percent: float
    default_deposit_percent: float
    loan_term_years: int
    salary_multiple: float
