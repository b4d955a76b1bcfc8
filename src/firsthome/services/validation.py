# src/firsthome/services/validation.py

from typing import Any, Iterable

from firsthome.domain.criteria import AmenityFlags, SearchCriteria
from firsthome.domain.errors import InvalidCriteria
from firsthome.domain.mortgage import OFFERED_RATES

# Defaults aligned with the search form
DEFAULT_DEPOSIT_PERCENT = 10.0
DEFAULT_INTEREST_RATE_PERCENT = 6.0

# form field name -> AmenityFlags field
AMENITY_FIELDS = {
    "garden": "garden",
    "needs_garden": "garden",
    "balcony": "balcony",
    "needs_balcony": "balcony",
    "off_street_parking": "off_street_parking",
    "needs_off_street": "off_street_parking",
    "near_green_space": "near_green_space",
    "near_green": "near_green_space",
}

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"", "0", "false", "no", "n", "off"}


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce values like:
      - 200000
      - "200000"
      - "£200,000"
      - "10%"
    into float. Percent signs are stripped; the number is kept as a
    whole percentage.
    """
    if val is None:
        raise InvalidCriteria(f"Missing required numeric field: {field_name}")
    if isinstance(val, bool):
        raise InvalidCriteria(f"Invalid type for {field_name}: bool")
    if isinstance(val, (int, float)):
        return float(val)
    if isinstance(val, str):
        s = val.strip().replace(",", "").lstrip("£")
        if s.endswith("%"):
            s = s[:-1]
        try:
            return float(s)
        except ValueError:
            raise InvalidCriteria(f"Invalid number for {field_name}: {val!r}")
    raise InvalidCriteria(f"Invalid type for {field_name}: {type(val)}")


def _to_bedrooms(val: Any) -> int | None:
    """Blank / "any" means no bedroom filter."""
    if val is None:
        return None
    if isinstance(val, str) and val.strip().lower() in ("", "any"):
        return None
    n = _to_num(val, "min_bedrooms")
    if n != int(n):
        raise InvalidCriteria(f"min_bedrooms must be a whole number, got {val!r}")
    return int(n)


def _to_bool(val: Any, field_name: str) -> bool:
    if isinstance(val, bool):
        return val
    if val is None:
        return False
    s = str(val).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise InvalidCriteria(f"Invalid flag for {field_name}: {val!r}")


def parse_amenities(raw: dict[str, Any]) -> AmenityFlags:
    flags: dict[str, bool] = {}
    nested = raw.get("amenities")
    if isinstance(nested, dict):
        raw = {**raw, **nested}
    for key, name in AMENITY_FIELDS.items():
        if key in raw:
            flags[name] = flags.get(name, False) or _to_bool(raw[key], key)
    return AmenityFlags(**flags)


def parse_criteria(
    raw: dict[str, Any],
    *,
    offered_rates: Iterable[float] = OFFERED_RATES,
    default_deposit_percent: float = DEFAULT_DEPOSIT_PERCENT,
    default_interest_rate_percent: float = DEFAULT_INTEREST_RATE_PERCENT,
) -> SearchCriteria:
    """
    Normalize a loose search-form payload into SearchCriteria.

    Responsibilities:
      - Ensure max_price exists ("budget" is accepted as an alias).
      - Normalize numeric / percent / checkbox fields.
      - Apply form defaults for deposit and rate when omitted.
      - Reject rates outside the offered set.

    Rates and deposits are always whole percentages: "6", 6 and "6%" all
    mean 6%. A fraction such as 0.06 is NOT rescaled; it is simply not an
    offered rate.
    """
    price_raw = raw.get("max_price", raw.get("budget"))
    if price_raw is None or (isinstance(price_raw, str) and not price_raw.strip()):
        raise InvalidCriteria("Missing required field: max_price")
    max_price = _to_num(price_raw, "max_price")

    dep_raw = raw.get("deposit_percent")
    deposit = default_deposit_percent if dep_raw in (None, "") else _to_num(dep_raw, "deposit_percent")

    rate_raw = raw.get("annual_interest_rate_percent", raw.get("interest_rate"))
    rate = default_interest_rate_percent if rate_raw in (None, "") else _to_num(rate_raw, "interest_rate")

    offered = tuple(float(r) for r in offered_rates)
    if offered and rate not in offered:
        allowed = ", ".join(f"{r:g}%" for r in offered)
        raise InvalidCriteria(f"interest rate {rate:g}% is not offered (choose from {allowed})")

    bedrooms_raw = raw.get("min_bedrooms", raw.get("bedrooms"))

    return SearchCriteria(
        max_price=max_price,
        location=str(raw.get("location") or ""),
        min_bedrooms=_to_bedrooms(bedrooms_raw),
        deposit_percent=deposit,
        annual_interest_rate_percent=rate,
        amenities=parse_amenities(raw),
    )
