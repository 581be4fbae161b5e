"""xAI Live Search client used as the external post feed."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Protocol

import requests

from xentropy.errors import ExternalFetchError

if TYPE_CHECKING:
    from xentropy.config import XEntropyConfig
    from xentropy.sources.x_posts import TimeWindow


class SearchClient(Protocol):
    def search(self, window: TimeWindow) -> list[dict]: ...


class XSearchClient:
    """POSTs windowed match-all queries and returns the ``results`` list.

    Every failure mode (transport error, non-200, undecodable body, missing
    ``results``) is raised as :class:`ExternalFetchError`. One post at a time
    goes through the shared session.
    """

    def __init__(self, config: XEntropyConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._lock = threading.Lock()
        self._session.headers.update({
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        })

    def build_payload(self, window: TimeWindow) -> dict:
        return {
            "query": self.config.query,
            "search_parameters": {
                "domain_list": list(self.config.domain_list),
                "date_range": {"from": window.start, "to": window.end},
                "max_results": self.config.max_results,
            },
        }

    def search(self, window: TimeWindow) -> list[dict]:
        try:
            with self._lock:
                resp = self._session.post(
                    self.config.base_url,
                    json=self.build_payload(window),
                    timeout=self.config.request_timeout,
                )
        except requests.RequestException as exc:
            raise ExternalFetchError(f"API request failed: {exc.__class__.__name__}: {exc}") from exc

        if resp.status_code != 200:
            raise ExternalFetchError("API request failed", status_code=resp.status_code, body=resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ExternalFetchError("API returned malformed JSON", status_code=200, body=resp.text) from exc

        if not isinstance(data, dict):
            raise ExternalFetchError("API response is not an object", status_code=200, body=resp.text)
        results = data.get("results", [])
        if not isinstance(results, list):
            raise ExternalFetchError("API response 'results' is not a list", status_code=200, body=resp.text)
        return [r for r in results if isinstance(r, dict)]

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> XSearchClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
