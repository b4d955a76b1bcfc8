# src/firsthome/domain/errors.py
from __future__ import annotations


class AffordabilityError(RuntimeError):
    """Base class for every failure a search attempt can end in."""


class InvalidCriteria(AffordabilityError, ValueError):
    """Criteria rejected before any listing source is contacted."""


class InvalidRate(AffordabilityError, ValueError):
    """Interest rate the mortgage calculator cannot amortize."""


class SourceUnavailable(AffordabilityError):
    """Listing source unreachable, timed out, or returned malformed data."""
