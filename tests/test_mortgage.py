import math

import pytest
from hypothesis import given, strategies as st

from firsthome.domain.errors import InvalidRate
from firsthome.domain.mortgage import (
    DEFAULT_TERM_YEARS,
    check_rate,
    monthly_payment,
    required_annual_salary,
)


def test_monthly_payment_matches_amortization_formula():
    # 135k at 6% over 25 years: r = 0.005, n = 300
    r, n = 0.005, 300
    expected = 135_000 * r / (1 - (1 + r) ** -n)

    assert monthly_payment(135_000, 6) == pytest.approx(expected)
    assert monthly_payment(135_000, 6) == pytest.approx(869.8, abs=1.0)


def test_default_term_is_25_years():
    assert DEFAULT_TERM_YEARS == 25
    assert monthly_payment(100_000, 5) == monthly_payment(100_000, 5, 25)


def test_zero_principal_pays_nothing():
    assert monthly_payment(0, 4, 25) == 0.0


@pytest.mark.parametrize("rate", [0, 0.0, -1.0, float("nan"), float("inf"), "abc", None])
def test_unusable_rate_raises_invalid_rate(rate):
    with pytest.raises(InvalidRate):
        monthly_payment(100_000, rate)


def test_invalid_rate_is_a_value_error():
    with pytest.raises(ValueError):
        check_rate(0)


def test_negative_principal_and_term_rejected():
    with pytest.raises(ValueError):
        monthly_payment(-1.0, 5)
    with pytest.raises(ValueError):
        monthly_payment(100_000, 5, 0)


def test_required_salary_uses_four_and_a_half_multiple():
    assert required_annual_salary(900.0) == pytest.approx(900.0 * 12 / 4.5)
    assert required_annual_salary(900.0, multiple=4.0) == pytest.approx(2700.0)


principals = st.floats(min_value=0.0, max_value=5_000_000.0)
rates = st.floats(min_value=0.1, max_value=20.0)
terms = st.integers(min_value=1, max_value=40)


@given(principal=principals, rate=rates, term=terms)
def test_payment_is_finite_and_non_negative(principal, rate, term):
    m = monthly_payment(principal, rate, term)

    assert math.isfinite(m)
    assert m >= 0


@given(
    principal=st.floats(min_value=1_000.0, max_value=5_000_000.0),
    rate=rates,
    delta=st.floats(min_value=0.05, max_value=5.0),
    term=terms,
)
def test_higher_rate_costs_more(principal, rate, delta, term):
    assert monthly_payment(principal, rate + delta, term) > monthly_payment(principal, rate, term)


@given(
    principal=principals,
    delta=st.floats(min_value=100.0, max_value=500_000.0),
    rate=rates,
    term=terms,
)
def test_bigger_loan_costs_more(principal, delta, rate, term):
    assert monthly_payment(principal + delta, rate, term) > monthly_payment(principal, rate, term)


@given(
    principal=principals,
    rate=st.floats(min_value=1e-12, max_value=1e-3),
    term=terms,
)
def test_tiny_rates_stay_finite(principal, rate, term):
    m = monthly_payment(principal, rate, term)

    assert math.isfinite(m)
    # a near-zero rate pays back roughly principal / months
    assert m == pytest.approx(principal / (term * 12), rel=1e-3, abs=1e-9)


def test_negligible_rate_pays_back_principal_evenly():
    assert monthly_payment(120_000, 1e-15, 10) == pytest.approx(1_000.0)


def test_rate_that_underflows_to_zero_pays_back_principal_evenly():
    # smallest positive float: the monthly rate underflows to exactly 0
    assert monthly_payment(120_000, 5e-324, 10) == pytest.approx(1_000.0)
