# src/firsthome/domain/criteria.py
from __future__ import annotations

import math
from dataclasses import dataclass, field, fields

from firsthome.domain.errors import InvalidCriteria


@dataclass(frozen=True)
class AmenityFlags:
    garden: bool = False
    balcony: bool = False
    off_street_parking: bool = False
    near_green_space: bool = False

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def requested(self) -> tuple[str, ...]:
        """Names of the amenities the buyer asked for, in declaration order."""
        return tuple(name for name in self.names() if getattr(self, name))


@dataclass(frozen=True)
class SearchCriteria:
    """
    One search submission. Built fresh per search and discarded afterwards.

    Percentages are whole numbers: deposit_percent=10 means 10% down,
    annual_interest_rate_percent=6 means 6% APR.
    """
    max_price: float
    location: str = ""
    min_bedrooms: int | None = None
    deposit_percent: float = 10.0
    annual_interest_rate_percent: float = 6.0
    amenities: AmenityFlags = field(default_factory=AmenityFlags)

    def __post_init__(self) -> None:
        if not _is_number(self.max_price) or self.max_price <= 0:
            raise InvalidCriteria(f"max_price must be > 0, got {self.max_price!r}")

        if not _is_number(self.deposit_percent) or not (0.0 <= self.deposit_percent < 100.0):
            raise InvalidCriteria(
                f"deposit_percent must be in [0, 100), got {self.deposit_percent!r}"
            )

        if self.min_bedrooms is not None:
            if isinstance(self.min_bedrooms, bool) or not isinstance(self.min_bedrooms, int):
                raise InvalidCriteria(f"min_bedrooms must be an integer, got {self.min_bedrooms!r}")
            if self.min_bedrooms < 0:
                raise InvalidCriteria("min_bedrooms must be non-negative")

        if not isinstance(self.amenities, AmenityFlags):
            raise InvalidCriteria("amenities must be AmenityFlags")

        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "location", (self.location or "").strip())

    def principal_for(self, price: float) -> float:
        """Loan amount left after the deposit is paid on `price`."""
        return price * (1 - self.deposit_percent / 100.0)


def _is_number(v: object) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v)
