# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from firsthome.adapters.catalog_source import CatalogListingSource
from firsthome.api.http import app, get_engine  # ensures imports resolve; run tests from repo root
from firsthome.services.matching import AffordabilityEngine

from fixtures.listings import scenario_catalog


@pytest.fixture
def catalog() -> CatalogListingSource:
    return scenario_catalog()


@pytest.fixture
def client(catalog):
    app.dependency_overrides[get_engine] = lambda: AffordabilityEngine(catalog)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
