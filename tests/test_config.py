import pytest
from pydantic import ValidationError

from firsthome.adapters.catalog_source import CatalogListingSource
from firsthome.adapters.config import AppConfig
from firsthome.adapters.nestoria_listings import NestoriaListingSource
from firsthome.adapters.source_factory import make_listing_source


def test_defaults(monkeypatch):
    monkeypatch.delenv("FIRSTHOME_LISTING_SOURCE", raising=False)
    cfg = AppConfig()

    assert cfg.LISTING_SOURCE == "catalog"
    assert cfg.LOAN_TERM_YEARS == 25
    assert cfg.SALARY_MULTIPLE == 4.5
    assert cfg.offered_rates == (3.0, 4.0, 5.0, 6.0)


@pytest.mark.parametrize("raw", ["4, 5.5", "[4,5.5]", "4%,5.5%"])
def test_offered_rates_from_env(monkeypatch, raw):
    monkeypatch.setenv("FIRSTHOME_OFFERED_RATES", raw)

    assert AppConfig().offered_rates == (4.0, 5.5)


@pytest.mark.parametrize(
    "env",
    [
        {"FIRSTHOME_OFFERED_RATES": ""},
        {"FIRSTHOME_OFFERED_RATES": "0,5"},
        {"FIRSTHOME_SALARY_MULTIPLE": "0"},
        {"FIRSTHOME_LOAN_TERM_YEARS": "-1"},
        {"FIRSTHOME_LISTING_SOURCE": "zoopla"},
    ],
)
def test_bad_settings_rejected(monkeypatch, env):
    for k, v in env.items():
        monkeypatch.setenv(k, v)

    with pytest.raises(ValidationError):
        AppConfig()


def test_factory_selects_source_variant(monkeypatch):
    monkeypatch.setenv("FIRSTHOME_LISTING_SOURCE", "nestoria")
    assert isinstance(make_listing_source(AppConfig()), NestoriaListingSource)

    monkeypatch.setenv("FIRSTHOME_LISTING_SOURCE", "catalog")
    monkeypatch.delenv("FIRSTHOME_CATALOG_PATH", raising=False)
    source = make_listing_source(AppConfig())
    assert isinstance(source, CatalogListingSource)
    assert len(source) == 5
