# src/firsthome/adapters/nestoria_listings.py
from __future__ import annotations

import math
from typing import Any, Dict, List

from firsthome.adapters.logging_utils import fields, get_logger
from firsthome.adapters.nestoria_client import NestoriaClient, make_nestoria_client
from firsthome.domain.errors import SourceUnavailable
from firsthome.domain.listing import ListingRecord
from firsthome.domain.ports import ListingQuery

logger = get_logger(__name__)

# amenity name -> Nestoria keyword token
AMENITY_KEYWORDS: Dict[str, str] = {
    "garden": "garden",
    "balcony": "balcony",
    "off_street_parking": "off_street_parking",
    "near_green_space": "green",  # approximate; Nestoria has no exact token
}


def _to_float(v: Any, field_name: str) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError) as e:
        raise SourceUnavailable(f"malformed listing {field_name}: {v!r}") from e
    if not math.isfinite(f) or f < 0:
        raise SourceUnavailable(f"malformed listing {field_name}: {v!r}")
    return f


def _to_bedrooms(v: Any) -> int:
    # missing or blank means 0; anything else must be a whole, non-negative number
    if v is None or v == "":
        return 0
    f = _to_float(v, "bedroom_number")
    if f != int(f):
        raise SourceUnavailable(f"malformed listing bedroom_number: {v!r}")
    return int(f)


def _keyword_tokens(raw: Dict[str, Any]) -> set[str]:
    # Nestoria returns matched keywords as display text: "Garden, Off Street Parking"
    text = str(raw.get("keywords") or "")
    return {t.strip().lower().replace(" ", "_") for t in text.split(",") if t.strip()}


def _matches_keyword(token: str, kw: str) -> bool:
    # whole words only: "green_space" matches "green", "greenhouse" does not
    return token == kw or token.startswith(kw + "_")


def _amenities_from_keywords(tokens: set[str]) -> Dict[str, bool]:
    # Only positive matches are known; everything else stays unknown.
    found: Dict[str, bool] = {}
    for name, kw in AMENITY_KEYWORDS.items():
        if any(_matches_keyword(tok, kw) for tok in tokens):
            found[name] = True
    return found


def parse_listing(raw: Any) -> ListingRecord:
    if not isinstance(raw, dict):
        raise SourceUnavailable(f"malformed listing: expected object, got {type(raw).__name__}")

    price = _to_float(raw.get("price"), "price")
    url = str(raw.get("lister_url") or "")
    title = str(raw.get("title") or "")

    return ListingRecord(
        listing_id=url or str(raw.get("guid") or title),
        title=title,
        summary=str(raw.get("summary") or ""),
        price=price,
        bedrooms=_to_bedrooms(raw.get("bedroom_number")),
        # search results carry no separate place field; the title is the
        # street/area label ("Alexandra Road, Manchester")
        location=title,
        source_url=url,
        img_url=raw.get("img_url") or None,
        amenities=_amenities_from_keywords(_keyword_tokens(raw)),
    )


def _price_param(price: float) -> int | float:
    # "200000", not "200000.0", in the query string
    return int(price) if float(price).is_integer() else price


class NestoriaListingSource:
    """
    Remote listing search against the Nestoria `search_listings` action.
    Price and location filtering happen server-side.
    """
    source_name = "nestoria"

    def __init__(self, client: NestoriaClient | None = None) -> None:
        self._client = client

    def build_params(self, query: ListingQuery) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "action": "search_listings",
            "listing_type": query.listing_type,
            "place_name": query.location,
            "page": query.page,
            "price_max": _price_param(query.max_price),
        }
        keywords = [AMENITY_KEYWORDS[a] for a in query.amenities if a in AMENITY_KEYWORDS]
        if keywords:
            params["keywords"] = ",".join(keywords)
        return params

    def search(self, query: ListingQuery) -> List[ListingRecord]:
        client = self._client or make_nestoria_client()
        payload = client.get("/api", params=self.build_params(query))

        response = payload.get("response") if isinstance(payload, dict) else None
        listings = response.get("listings") if isinstance(response, dict) else None
        if not isinstance(listings, list):
            raise SourceUnavailable("Nestoria payload has no response.listings list")

        out = [parse_listing(raw) for raw in listings]
        logger.info(
            "nestoria_listings_parsed",
            extra=fields(count=len(out), place_name=query.location),
        )
        return out
