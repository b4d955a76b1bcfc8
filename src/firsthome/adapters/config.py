# src/firsthome/adapters/config.py
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Listing source selection
    # -----------------------------
    LISTING_SOURCE: Literal["nestoria", "catalog"] = Field(default="catalog")

    # Optional CSV / JSON / parquet file for the catalog source.
    # Unset -> bundled demo catalog.
    CATALOG_PATH: str | None = Field(default=None)

    # -----------------------------
    # Nestoria integration
    # -----------------------------
    NESTORIA_BASE_URL: str = Field(default="https://api.nestoria.co.uk")
    NESTORIA_COUNTRY: str = Field(default="uk")
    NESTORIA_TIMEOUT_S: float = Field(default=10.0)

    # -----------------------------
    # Affordability assumptions
    # -----------------------------
    LOAN_TERM_YEARS: int = Field(default=25)
    SALARY_MULTIPLE: float = Field(default=4.5)

    # whole percentages, e.g. "3,4,5,6"
    OFFERED_RATES: str = Field(default="3,4,5,6")

    DEFAULT_DEPOSIT_PERCENT: float = Field(default=10.0)
    DEFAULT_INTEREST_RATE_PERCENT: float = Field(default=6.0)

    model_config = SettingsConfigDict(
        env_prefix="FIRSTHOME_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOAN_TERM_YEARS", "SALARY_MULTIPLE", "NESTORIA_TIMEOUT_S", mode="before")
    @classmethod
    def _positive(cls, v: Any) -> Any:
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("value must be numeric") from err
        if f <= 0:
            raise ValueError("value must be > 0")
        return v

    @field_validator("OFFERED_RATES", mode="before")
    @classmethod
    def _rate_list(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            v = ",".join(str(x) for x in v)
        s = str(v).strip().strip("[]")
        parts = [p.strip().replace("%", "") for p in s.split(",") if p.strip()]
        if not parts:
            raise ValueError("OFFERED_RATES must list at least one rate")
        try:
            rates = [float(p) for p in parts]
        except ValueError as err:
            raise ValueError("OFFERED_RATES must be numeric percentages") from err
        if any(r <= 0 for r in rates):
            raise ValueError("OFFERED_RATES must be positive")
        return ",".join(parts)

    @property
    def offered_rates(self) -> tuple[float, ...]:
        return tuple(float(p) for p in self.OFFERED_RATES.split(","))


config = AppConfig()
