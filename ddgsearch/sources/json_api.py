"""
JSON Backend
Shared driver for the token-gated JSON endpoints (images, news, videos)
"""
from typing import Any, Dict, Optional

import requests

from ..core.errors import SearchFailed
from ..core.event_bus import EventBus
from ..core.health import HealthTracker
from ..core.token import TokenProvider
from ..core.transport import Transport
from ..models.search_params import SearchParams
from ..utils.text_utils import extract_next_s
from .base import BaseBackend, Page, PageRequest


class JSONBackend(BaseBackend):
    """
    Fetches a VQD token for the keywords, then pages through ``endpoint``.

    Each body is ``{"results": [...], "next": "<cue>"}``; the cue's ``s``
    parameter selects the next page. Subclasses set ``endpoint``,
    ``result_type`` and ``SAFESEARCH_CODES`` and add their filters.
    """
    endpoint = ""
    result_type: Any = None
    HEADERS = {
        "Referer": "https://duckduckgo.com/",
        "Accept": "*/*",
        "Sec-Fetch-Mode": "cors",
    }

    def __init__(
        self,
        transport: Transport,
        token_provider: TokenProvider,
        event_bus: Optional[EventBus] = None,
        health: Optional[HealthTracker] = None,
    ):
        super().__init__(transport, event_bus=event_bus, health=health)
        self.token_provider = token_provider

    def first_request(self, params: SearchParams) -> PageRequest:
        vqd = self.token_provider.get_token(params.keywords)
        query = {
            "o": "json",
            "q": params.keywords,
            "l": params.region,
            "vqd": vqd,
            "p": self.safesearch_code(params.safesearch),
        }
        query.update(self.filter_params(params))
        return PageRequest("GET", self.endpoint, params=query, headers=dict(self.HEADERS))

    def filter_params(self, params: SearchParams) -> Dict[str, str]:
        """Endpoint-specific query parameters."""
        return {}

    def parse_page(self, response: requests.Response, request: PageRequest) -> Page:
        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchFailed(f"{self.name}: response is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise SearchFailed(f"{self.name}: unexpected JSON payload type {type(payload).__name__}")
        items = payload.get("results") or []
        if not isinstance(items, list):
            raise SearchFailed(f"{self.name}: 'results' is not a list")

        results = [self.result_type.from_api(item) for item in items if isinstance(item, dict)]
        next_s = extract_next_s(str(payload.get("next") or ""))
        next_request = request.with_params(s=next_s) if next_s else None
        return Page(results=results, next_request=next_request)
