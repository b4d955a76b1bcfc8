# src/firsthome/services/matching.py
from __future__ import annotations

from collections.abc import Sequence

from firsthome.domain.criteria import SearchCriteria
from firsthome.domain.errors import SourceUnavailable
from firsthome.domain.filters import filter_by_amenities, filter_by_bedrooms
from firsthome.domain.listing import EnrichedListing, ListingRecord
from firsthome.domain.mortgage import (
    DEFAULT_TERM_YEARS,
    SALARY_MULTIPLE,
    check_rate,
    monthly_payment,
    required_annual_salary,
)
from firsthome.domain.ports import ListingQuery, ListingSource


def build_query(criteria: SearchCriteria) -> ListingQuery:
    """
    Translate criteria into a listing search. Only requested amenities are
    passed on; false flags impose nothing at the source.
    """
    return ListingQuery(
        max_price=criteria.max_price,
        location=criteria.location,
        amenities=criteria.amenities.requested(),
    )


def fetch_candidates(source: ListingSource, query: ListingQuery) -> list[ListingRecord]:
    """
    Call the source once. Any failure, or anything that is not a sequence of
    ListingRecord, surfaces as SourceUnavailable with no partial result.
    """
    try:
        raw = source.search(query)
    except SourceUnavailable:
        raise
    except Exception as e:
        raise SourceUnavailable(f"{getattr(source, 'source_name', 'listing source')} failed: {e}") from e

    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        raise SourceUnavailable(f"listing source returned {type(raw).__name__}, expected a sequence")

    candidates = list(raw)
    for item in candidates:
        if not isinstance(item, ListingRecord):
            raise SourceUnavailable(f"listing source returned a {type(item).__name__}, expected ListingRecord")
    return candidates


def enrich_listing(
    listing: ListingRecord,
    criteria: SearchCriteria,
    *,
    term_years: int = DEFAULT_TERM_YEARS,
    salary_multiple: float = SALARY_MULTIPLE,
) -> EnrichedListing:
    principal = criteria.principal_for(listing.price)
    payment = monthly_payment(principal, criteria.annual_interest_rate_percent, term_years)
    return EnrichedListing(
        listing=listing,
        principal=principal,
        monthly_payment=payment,
        required_annual_salary=required_annual_salary(payment, salary_multiple),
    )


def find_matches(
    criteria: SearchCriteria,
    *,
    source: ListingSource,
    term_years: int = DEFAULT_TERM_YEARS,
    salary_multiple: float = SALARY_MULTIPLE,
) -> list[EnrichedListing]:
    """
    criteria -> query -> source -> bedroom/amenity filter -> mortgage enrichment.

    Order is as delivered by the source. An empty list means "no matches".
    Raises InvalidRate before touching the source when the rate is unusable,
    and SourceUnavailable when the source fails.
    """
    check_rate(criteria.annual_interest_rate_percent)

    candidates = fetch_candidates(source, build_query(criteria))

    # sources filter price/location themselves; bedrooms are re-checked here
    kept = filter_by_bedrooms(candidates, criteria.min_bedrooms)
    kept = filter_by_amenities(kept, criteria.amenities)

    return [
        enrich_listing(rec, criteria, term_years=term_years, salary_multiple=salary_multiple)
        for rec in kept
    ]


class AffordabilityEngine:
    """A listing source bound to the lending assumptions used for every search."""

    def __init__(
        self,
        source: ListingSource,
        *,
        term_years: int = DEFAULT_TERM_YEARS,
        salary_multiple: float = SALARY_MULTIPLE,
    ) -> None:
        self.source = source
        self.term_years = term_years
        self.salary_multiple = salary_multiple

    @property
    def source_name(self) -> str:
        return getattr(self.source, "source_name", type(self.source).__name__)

    def find_matches(self, criteria: SearchCriteria) -> list[EnrichedListing]:
        return find_matches(
            criteria,
            source=self.source,
            term_years=self.term_years,
            salary_multiple=self.salary_multiple,
        )
