"""
DDGS Client
Public entry point: text, image, news and video search
"""
import logging
import random
import time
from typing import Callable, Dict, List, Mapping, Optional, TypeVar

import requests

from .core.backend_selector import BackendSelector
from .core.errors import SearchError
from .core.event_bus import EventBus, Events
from .core.health import HealthTracker
from .core.settings import ClientSettings
from .core.token import TokenProvider
from .core.transport import Transport
from .models.search_params import Backend, SearchParams
from .models.search_result import ImageResult, NewsResult, TextResult, VideoResult
from .sources.html import HTMLBackend
from .sources.images import ImagesBackend
from .sources.lite import LiteBackend
from .sources.news import NewsBackend
from .sources.videos import VideosBackend


logger = logging.getLogger(__name__)

R = TypeVar("R")


class DDGS:
    """
    DuckDuckGo search client

    One instance may serve concurrent searches from several threads. They
    share the session (cookies), the header map and the request pacing;
    everything else belongs to the individual call.
    """

    def __init__(
        self,
        proxy: Optional[str] = None,
        timeout: Optional[float] = None,
        sleep_duration: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        settings: Optional[ClientSettings] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            proxy: Proxy address; falls back to $DDGS_PROXY when omitted
            timeout: Per-request timeout in seconds
            sleep_duration: Pacing sleep in seconds between close requests
            headers: Header overrides merged over the defaults
            settings: Fully built settings (the four options above are ignored)
            event_bus: Receives search lifecycle events
            rng: Source of randomness for ``auto`` text backend selection
            session: Pre-built requests session (tests, custom adapters)
        """
        if settings is None:
            settings = ClientSettings({
                "proxy": proxy,
                "timeout_seconds": timeout,
                "sleep_duration_seconds": sleep_duration,
                "headers": headers,
            })
        self.settings = settings
        self.event_bus = event_bus
        self.health = HealthTracker()
        self.transport = Transport(settings, session=session)
        self.token_provider = TokenProvider(self.transport)

        self.html_backend = HTMLBackend(self.transport, event_bus=event_bus, health=self.health)
        self.lite_backend = LiteBackend(self.transport, event_bus=event_bus, health=self.health)
        self.images_backend = ImagesBackend(self.transport, self.token_provider, event_bus=event_bus, health=self.health)
        self.news_backend = NewsBackend(self.transport, self.token_provider, event_bus=event_bus, health=self.health)
        self.videos_backend = VideosBackend(self.transport, self.token_provider, event_bus=event_bus, health=self.health)
        self.selector = BackendSelector(
            {Backend.HTML: self.html_backend, Backend.LITE: self.lite_backend},
            rng=rng,
            event_bus=event_bus,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.transport.close()

    def text_search(
        self,
        keywords: str,
        region: Optional[str] = None,
        safesearch="moderate",
        timelimit=None,
        backend="auto",
        max_results: int = 0,
    ) -> List[TextResult]:
        """
        Text search via the HTML or Lite backend

        Args:
            keywords: Search query (required)
            region: Region code, e.g. "us-en" (default "wt-wt")
            safesearch: "on" | "moderate" | "off"
            timelimit: "d" | "w" | "m" | "y" | None
            backend: "auto" (random primary + one fallback) | "html" | "lite"
            max_results: Result cap, 0 = as many as pagination yields

        Raises:
            InvalidParams, RateLimited, SearchTimeout, SearchFailed
        """
        params = self._params(keywords, region, safesearch, timelimit, max_results, backend=backend)
        return self._run("text", params, self.selector.search)

    def image_search(
        self,
        keywords: str,
        region: Optional[str] = None,
        safesearch="moderate",
        timelimit=None,
        max_results: int = 0,
    ) -> List[ImageResult]:
        """Image search; records are unique by image URL."""
        params = self._params(keywords, region, safesearch, timelimit, max_results)
        return self._run("images", params, self.images_backend.search)

    def news_search(
        self,
        keywords: str,
        region: Optional[str] = None,
        safesearch="moderate",
        timelimit=None,
        max_results: int = 0,
    ) -> List[NewsResult]:
        """News search; records are unique by article URL, dates are RFC 3339 UTC."""
        params = self._params(keywords, region, safesearch, timelimit, max_results)
        return self._run("news", params, self.news_backend.search)

    def video_search(
        self,
        keywords: str,
        region: Optional[str] = None,
        safesearch="moderate",
        timelimit=None,
        resolution=None,
        duration=None,
        license_videos=None,
        max_results: int = 0,
    ) -> List[VideoResult]:
        """Video search; records are unique by content id."""
        params = self._params(
            keywords, region, safesearch, timelimit, max_results,
            resolution=resolution, duration=duration, license_videos=license_videos,
        )
        return self._run("videos", params, self.videos_backend.search)

    def get_health_snapshot(self) -> Dict[str, dict]:
        return self.health.snapshot()

    def _params(self, keywords, region, safesearch, timelimit, max_results, **extra) -> SearchParams:
        return SearchParams.build(
            keywords,
            region=region,
            safesearch=safesearch,
            timelimit=timelimit,
            max_results=max_results,
            default_region=self.settings.default_region,
            **extra,
        )

    def _run(self, mode: str, params: SearchParams, call: Callable[[SearchParams], List[R]]) -> List[R]:
        self._emit(Events.SEARCH_STARTED, {"mode": mode, "keywords": params.keywords})
        started = time.perf_counter()
        try:
            results = call(params)
        except SearchError as exc:
            logger.debug("%s search for %r failed: %s", mode, params.keywords, exc)
            self._emit(Events.SEARCH_ERROR, {"mode": mode, "keywords": params.keywords, "error": exc.to_dict()})
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info("%s search for %r returned %d results in %.0f ms",
                    mode, params.keywords, len(results), elapsed_ms)
        self._emit(Events.SEARCH_COMPLETED, {
            "mode": mode,
            "keywords": params.keywords,
            "count": len(results),
            "elapsed_ms": elapsed_ms,
        })
        return results

    def _emit(self, event_type: str, data: dict):
        if self.event_bus is not None:
            self.event_bus.emit(event_type, data)
