from __future__ import annotations

from typing import Optional

import typer
from loguru import logger

from firsthome.adapters.config import config
from firsthome.adapters.source_factory import make_listing_source
from firsthome.domain.errors import AffordabilityError
from firsthome.services.matching import AffordabilityEngine
from firsthome.services.validation import parse_criteria

app = typer.Typer(help="Find homes you can afford and what they would cost each month.")


@app.command()
def search(
    max_price: float = typer.Option(..., "--max-price", help="Maximum price (£)"),
    location: str = typer.Option("", help="Town, city or postcode; empty searches everywhere"),
    bedrooms: Optional[int] = typer.Option(None, "--bedrooms", help="Minimum bedrooms"),
    deposit: float = typer.Option(config.DEFAULT_DEPOSIT_PERCENT, help="Deposit, % of price"),
    rate: float = typer.Option(config.DEFAULT_INTEREST_RATE_PERCENT, help="Annual interest rate, %"),
    garden: bool = typer.Option(False, "--garden"),
    balcony: bool = typer.Option(False, "--balcony"),
    parking: bool = typer.Option(False, "--parking", help="Off-street parking"),
    green: bool = typer.Option(False, "--green", help="Near green space"),
) -> None:
    """
    Search listings and print the monthly payment and qualifying salary for each.
    """
    payload = {
        "max_price": max_price,
        "location": location,
        "min_bedrooms": bedrooms,
        "deposit_percent": deposit,
        "annual_interest_rate_percent": rate,
        "amenities": {
            "garden": garden,
            "balcony": balcony,
            "off_street_parking": parking,
            "near_green_space": green,
        },
    }

    try:
        engine = AffordabilityEngine(
            make_listing_source(config),
            term_years=config.LOAN_TERM_YEARS,
            salary_multiple=config.SALARY_MULTIPLE,
        )
        criteria = parse_criteria(payload, offered_rates=config.offered_rates)
        results = engine.find_matches(criteria)
    except AffordabilityError as e:
        logger.error("search failed: {}", e)
        raise typer.Exit(code=1)

    logger.info("{} matches from {}", len(results), engine.source_name)

    if not results:
        typer.echo("No matches found.")
        return

    typer.echo("Title\tPrice\tMonthly\tSalary needed")
    for m in results:
        typer.echo(
            f"{m.listing.title}\t"
            f"£{m.listing.price:,.0f}\t"
            f"£{m.monthly_payment:,.0f}/mo\t"
            f"£{m.required_annual_salary:,.0f}/yr"
        )


@app.command()
def rates() -> None:
    """
    Show the offered interest rates and lending assumptions.
    """
    typer.echo("Offered rates: " + ", ".join(f"{r:g}%" for r in config.offered_rates))
    typer.echo(f"Term: {config.LOAN_TERM_YEARS} years, salary multiple: {config.SALARY_MULTIPLE:g}x")


if __name__ == "__main__":
    app()
