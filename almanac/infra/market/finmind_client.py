"""
Client HTTP de l'API FinMind (données journalières des actions de Taïwan).

Toute défaillance (transport, statut HTTP, `status` applicatif différent de 200, charge utile
illisible) est convertie en `PriceDataUnavailableError`; le repli éventuel est décidé par
`PriceService`.
"""

from __future__ import annotations

import time
from datetime import date
from typing import Any

import httpx
import structlog

from almanac.app.metrics import PRICE_FETCH_LATENCY
from almanac.core.http_constants import FINMIND_STATUS_OK
from almanac.domain.entities import PriceBar
from almanac.domain.errors import ErrorCodes, PriceDataUnavailableError

DAILY_DATASET = "TaiwanStockDaily"


def _to_bar(item: dict[str, Any]) -> PriceBar:
    return PriceBar(
        date=str(item["date"]),
        open=float(item["open"]),
        high=float(item["max"]),
        low=float(item["min"]),
        close=float(item["close"]),
        volume=int(item["Trading_Volume"]),
    )


class FinMindClient:
    """Client synchrone FinMind.

    Args:
        base_url: Racine de l'API (ex: `https://api.finmindtrade.com/api/v4`).
        token: Jeton d'API facultatif (envoyé en `Authorization: Bearer`).
        timeout: Délai maximal par requête, en secondes.
        transport: Transport httpx injecté (tests).
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = httpx.Client(
            base_url=base_url, timeout=timeout, headers=headers, transport=transport
        )
        self._log = structlog.get_logger(__name__).bind(component="finmind")

    def _get_data(self, params: dict[str, str]) -> list[dict[str, Any]]:
        start = time.perf_counter()
        try:
            response = self._http.get("/data", params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as err:
            self._log.warning("finmind_timeout", params=params)
            raise PriceDataUnavailableError(
                code=ErrorCodes.NETWORK_TIMEOUT, details={"dataset": params.get("dataset")}
            ) from err
        except httpx.HTTPStatusError as err:
            self._log.warning("finmind_http_error", status=err.response.status_code)
            raise PriceDataUnavailableError(
                "無法取得股市資料，請稍後再試",
                code=ErrorCodes.API_ERROR,
                details={"status": err.response.status_code},
            ) from err
        except (httpx.HTTPError, ValueError) as err:
            self._log.warning("finmind_request_failed", error=str(err))
            raise PriceDataUnavailableError("無法取得股市資料，請稍後再試") from err
        finally:
            PRICE_FETCH_LATENCY.observe(time.perf_counter() - start)

        if not isinstance(payload, dict) or payload.get("status") != FINMIND_STATUS_OK:
            status = payload.get("status") if isinstance(payload, dict) else None
            self._log.warning("finmind_bad_status", status=status)
            raise PriceDataUnavailableError(
                "API 回應錯誤", code=ErrorCodes.API_ERROR, details={"status": status}
            )
        return payload.get("data") or []

    def get_daily_prices(self, symbol: str, start: date, end: date) -> list[PriceBar]:
        """Bougies journalières de `symbol` entre `start` et `end` (inclus), triées par date."""
        items = self._get_data(
            {
                "dataset": DAILY_DATASET,
                "data_id": symbol,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
            }
        )
        try:
            bars = [_to_bar(item) for item in items]
        except (KeyError, TypeError, ValueError) as err:
            raise PriceDataUnavailableError(
                "API 回應格式錯誤", code=ErrorCodes.API_ERROR, details={"symbol": symbol}
            ) from err
        return sorted(bars, key=lambda bar: bar.date)

    def check_status(self) -> bool:
        """Vrai si l'API répond normalement; ne lève jamais."""
        today = date.today()
        try:
            self._get_data(
                {
                    "dataset": DAILY_DATASET,
                    "data_id": "0050",
                    "start_date": today.isoformat(),
                    "end_date": today.isoformat(),
                }
            )
        except PriceDataUnavailableError:
            return False
        return True
