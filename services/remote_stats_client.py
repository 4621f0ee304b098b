"""Client for the statistics aggregate served by the upstream recruitment API.

The upstream backend exposes ``GET /admin/statistics/advanced``. Its answer is
either the aggregate itself or the aggregate wrapped in a ``data`` key. This
client only fetches and unwraps; deciding whether to trust the payload is left
to :mod:`services.statistics_service`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from config import settings
from middleware.errors import RemoteStatisticsError

logger = logging.getLogger(__name__)

ADVANCED_STATISTICS_PATH = "/admin/statistics/advanced"


class RemoteStatisticsClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (settings.STATS_API_URL if base_url is None else base_url).rstrip("/")
        self.token = settings.STATS_API_TOKEN if token is None else token
        self.timeout = settings.STATS_API_TIMEOUT if timeout is None else timeout
        self._session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def fetch_advanced_statistics(self) -> Optional[Dict[str, Any]]:
        """Return the upstream aggregate, ``None`` when no upstream is configured.

        Raises :class:`RemoteStatisticsError` on transport errors, non-2xx
        answers and bodies that are not JSON objects.
        """

        if not self.enabled:
            return None

        url = f"{self.base_url}{ADVANCED_STATISTICS_PATH}"
        logger.debug("Fetching advanced statistics from %s", url)
        try:
            resp = self._session.get(url, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except requests.RequestException as exc:
            raise RemoteStatisticsError(
                "Failed to fetch advanced statistics", details={"reason": str(exc)}
            ) from exc
        except ValueError as exc:
            raise RemoteStatisticsError(
                "Advanced statistics response is not JSON", details={"reason": str(exc)}
            ) from exc

        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            body = body["data"]
        if not isinstance(body, dict):
            raise RemoteStatisticsError(
                "Advanced statistics response is not an object",
                details={"type": type(body).__name__},
            )
        return body


__all__ = ["ADVANCED_STATISTICS_PATH", "RemoteStatisticsClient"]
