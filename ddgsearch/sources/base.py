"""
Backend SDK
Shared pagination driver for every upstream endpoint flavor
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

import requests

from ..core.dedup import ResultCollector
from ..core.errors import SearchError
from ..core.event_bus import EventBus, Events
from ..core.health import HealthTracker
from ..core.transport import Transport
from ..models.search_params import SafeSearch, SearchParams


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRequest:
    """One outbound page request"""
    method: str
    url: str
    params: Optional[Dict[str, Any]] = None
    data: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def with_params(self, **values) -> "PageRequest":
        return replace(self, params={**(self.params or {}), **values})

    def with_data(self, data: Dict[str, Any]) -> "PageRequest":
        return replace(self, data=dict(data))


@dataclass
class Page:
    """What one response yielded"""
    results: List[Any]
    next_request: Optional[PageRequest] = None
    # A terminal marker ("No results." etc.) ends pagination without error.
    terminal: bool = False


class BaseBackend(ABC):
    """
    Stable backend contract.

    Every backend runs the same loop: fetch -> extract -> dedup -> check
    cap/terminal/continuation -> build next request, bounded by ``max_pages``.
    Subclasses only describe the first request and how to parse one response.
    """
    name = "base"
    max_pages = 5
    SAFESEARCH_CODES: Dict[SafeSearch, str] = {}

    def __init__(
        self,
        transport: Transport,
        event_bus: Optional[EventBus] = None,
        health: Optional[HealthTracker] = None,
    ):
        self.transport = transport
        self.event_bus = event_bus
        self.health = health

    @classmethod
    def safesearch_code(cls, level: SafeSearch) -> str:
        """Map a safe-search level to this backend's wire code."""
        return cls.SAFESEARCH_CODES[level]

    @abstractmethod
    def first_request(self, params: SearchParams) -> PageRequest:
        """Build the request for the first page."""
        raise NotImplementedError

    @abstractmethod
    def parse_page(self, response: requests.Response, request: PageRequest) -> Page:
        """Turn one response body into records plus a continuation cue."""
        raise NotImplementedError

    def search(self, params: SearchParams) -> List[Any]:
        """
        Run one search call.

        Returns:
            Deduplicated records, at most ``params.max_results`` when positive

        Raises:
            SearchError: surfaced immediately; partial results are discarded
        """
        started = time.perf_counter()
        try:
            results = self._paginate(params)
        except SearchError as exc:
            if exc.backend is None:
                exc.backend = self.name
            self._record_health(False, started, str(exc))
            raise
        self._record_health(True, started)
        return results

    def _paginate(self, params: SearchParams) -> List[Any]:
        collector = ResultCollector(params.max_results)
        request = self.first_request(params)
        for page_index in range(self.max_pages):
            if collector.is_full():
                break
            response = self.transport.execute(
                request.method,
                request.url,
                params=request.params,
                data=request.data,
                headers=request.headers or None,
            )
            page = self.parse_page(response, request)
            if page.terminal:
                logger.debug("%s: terminal marker on page %d", self.name, page_index + 1)
                break
            added = collector.extend(page.results)
            logger.debug("%s: page %d gave %d new results (%d total)",
                         self.name, page_index + 1, added, len(collector))
            self._emit(Events.SEARCH_PAGE, {
                "backend": self.name,
                "keywords": params.keywords,
                "page": page_index + 1,
                "added": added,
                "total": len(collector),
            })
            if page.next_request is None:
                break
            request = page.next_request
        return collector.results

    def _emit(self, event_type: str, data: dict):
        if self.event_bus is not None:
            self.event_bus.emit(event_type, data)

    def _record_health(self, ok: bool, started: float, error: str = ""):
        if self.health is None:
            return
        latency_ms = (time.perf_counter() - started) * 1000.0
        self.health.record(self.name, ok=ok, latency_ms=latency_ms, error=error)
