# src/firsthome/api/http.py
from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException

from firsthome.adapters.config import config
from firsthome.adapters.logging_utils import fields, get_logger
from firsthome.adapters.source_factory import make_listing_source
from firsthome.domain.errors import InvalidCriteria, InvalidRate, SourceUnavailable
from firsthome.services.matching import AffordabilityEngine
from firsthome.services.validation import parse_criteria
from .schemas import MatchItem, MatchRequest, MatchResponse, RatesResponse

logger = get_logger(__name__)

app = FastAPI(title="firsthome")

SOURCE_ERROR_DETAIL = "Error fetching listings. Try again?"

_engine: AffordabilityEngine | None = None


def get_engine() -> AffordabilityEngine:
    """
    Engine built once from config; tests override this dependency.
    An unreadable catalog is a source failure, reported like any other (502).
    """
    global _engine
    if _engine is None:
        try:
            source = make_listing_source(config)
        except SourceUnavailable as e:
            logger.warning(
                "listing_source_setup_failed",
                extra=fields(source=config.LISTING_SOURCE, error=str(e)),
            )
            raise HTTPException(status_code=502, detail=SOURCE_ERROR_DETAIL) from e
        _engine = AffordabilityEngine(
            source,
            term_years=config.LOAN_TERM_YEARS,
            salary_multiple=config.SALARY_MULTIPLE,
        )
    return _engine


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "listing_source": config.LISTING_SOURCE}


@app.get("/rates", response_model=RatesResponse)
def rates() -> RatesResponse:
    return RatesResponse(
        offered_rates=list(config.offered_rates),
        default_interest_rate_percent=config.DEFAULT_INTEREST_RATE_PERCENT,
        default_deposit_percent=config.DEFAULT_DEPOSIT_PERCENT,
        loan_term_years=config.LOAN_TERM_YEARS,
        salary_multiple=config.SALARY_MULTIPLE,
    )


@app.post("/matches", response_model=MatchResponse)
def matches(payload: MatchRequest, engine: AffordabilityEngine = Depends(get_engine)) -> MatchResponse:
    """
    One search. Criteria problems are 400s; a failed listing source is a 502
    and returns no partial results.
    """
    try:
        criteria = parse_criteria(
            payload.model_dump(),
            offered_rates=config.offered_rates,
            default_deposit_percent=config.DEFAULT_DEPOSIT_PERCENT,
            default_interest_rate_percent=config.DEFAULT_INTEREST_RATE_PERCENT,
        )
        found = engine.find_matches(criteria)
    except (InvalidCriteria, InvalidRate) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except SourceUnavailable as e:
        logger.warning(
            "listing_source_unavailable",
            extra=fields(source=engine.source_name, error=str(e)),
        )
        raise HTTPException(status_code=502, detail=SOURCE_ERROR_DETAIL) from e

    logger.info(
        "matches_found",
        extra=fields(source=engine.source_name, count=len(found)),
    )
    return MatchResponse(
        source=engine.source_name,
        count=len(found),
        results=[MatchItem(**m.to_dict()) for m in found],
    )
