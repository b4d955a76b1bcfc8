# src/firsthome/adapters/nestoria_client.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from firsthome.adapters.config import config
from firsthome.adapters.logging_utils import fields, get_logger
from firsthome.domain.errors import SourceUnavailable

logger = get_logger(__name__)


@dataclass(frozen=True)
class NestoriaClient:
    base_url: str
    country: str = "uk"
    timeout_s: float = 10.0

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Single GET with a finite timeout. No retries: a failed search is
        terminal and the user re-submits.
        """
        url = self.base_url.rstrip("/") + "/" + path.lstrip("/")
        query = {"country": self.country, "encoding": "json", **(params or {})}

        try:
            resp = requests.get(
                url,
                headers={"Accept": "application/json"},
                params=query,
                timeout=self.timeout_s,
            )
        except requests.RequestException as e:
            logger.warning("nestoria_request_failed", extra=fields(url=url, error=str(e)))
            raise SourceUnavailable(f"Nestoria request failed: {e!r}") from e

        if resp.status_code >= 400:
            logger.warning(
                "nestoria_http_error",
                extra=fields(url=url, status=resp.status_code),
            )
            raise SourceUnavailable(f"Nestoria HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            return resp.json()
        except ValueError as e:
            raise SourceUnavailable("Nestoria returned a non-JSON body") from e


def make_nestoria_client() -> NestoriaClient:
    return NestoriaClient(
        base_url=config.NESTORIA_BASE_URL,
        country=config.NESTORIA_COUNTRY,
        timeout_s=float(config.NESTORIA_TIMEOUT_S),
    )
