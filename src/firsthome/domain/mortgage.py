# src/firsthome/domain/mortgage.py
from __future__ import annotations

import math

from firsthome.domain.errors import InvalidRate

DEFAULT_TERM_YEARS = 25

# Lenders advance at most 4.5x gross annual salary.
SALARY_MULTIPLE = 4.5

# Rates (whole percent) offered by the search form.
OFFERED_RATES: tuple[float, ...] = (3.0, 4.0, 5.0, 6.0)


def check_rate(annual_rate_percent: float) -> float:
    try:
        rate = float(annual_rate_percent)
    except (TypeError, ValueError) as err:
        raise InvalidRate(f"interest rate must be numeric, got {annual_rate_percent!r}") from err
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidRate(f"interest rate must be a positive percentage, got {annual_rate_percent!r}")
    return rate


def monthly_payment(
    principal: float,
    annual_rate_percent: float,
    term_years: int = DEFAULT_TERM_YEARS,
) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * r / (1 - (1 + r)^-n)
    P = loan principal
    r = monthly interest rate (annual_rate_percent / 100 / 12)
    n = number of payments (months)

    The rate is a whole percentage: 6 means 6%.
    No rounding here; formatting is left to the caller.
    """
    rate = check_rate(annual_rate_percent)
    if principal < 0:
        raise ValueError("principal must be non-negative")
    if term_years <= 0:
        raise ValueError("term_years must be > 0")

    r = rate / 100.0 / 12.0
    n = term_years * 12
    # 1 - (1 + r)^-n without cancellation when r is tiny
    denom = -math.expm1(-n * math.log1p(r))
    if denom == 0:
        return principal / n
    return principal * r / denom


def required_annual_salary(payment: float, multiple: float = SALARY_MULTIPLE) -> float:
    """Gross annual salary needed for a lender to approve `payment` per month."""
    if multiple <= 0:
        raise ValueError("salary multiple must be > 0")
    return payment * 12 / multiple
