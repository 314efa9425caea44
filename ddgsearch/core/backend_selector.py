"""
Backend Selector
Chooses HTML or Lite for a text search, with one fallback in auto mode
"""
import logging
import random
from typing import Any, Dict, List, Optional

from .errors import InvalidParams, SearchError
from .event_bus import EventBus, Events
from ..models.search_params import Backend, SearchParams


logger = logging.getLogger(__name__)


class BackendSelector:
    """
    Routes text searches.

    ``auto`` picks the primary with a fair coin from ``rng`` and falls back to
    the other backend once if the primary raises; the fallback's error is the
    one the caller sees. Explicit ``html``/``lite`` never fall back.
    """

    def __init__(self, backends: Dict[Backend, Any], rng: Optional[random.Random] = None,
                 event_bus: Optional[EventBus] = None):
        self.backends = backends
        self.rng = rng if rng is not None else random.Random()
        self.event_bus = event_bus

    def order(self, mode: Backend) -> List[Backend]:
        """Backends to try, in order."""
        if mode is Backend.AUTO:
            if self.rng.randrange(2) == 0:
                return [Backend.HTML, Backend.LITE]
            return [Backend.LITE, Backend.HTML]
        if mode in (Backend.HTML, Backend.LITE):
            return [mode]
        raise InvalidParams(f"Unsupported backend: {mode!r}")

    def search(self, params: SearchParams) -> list:
        order = self.order(params.backend)
        primary = self.backends[order[0]]
        if len(order) < 2:
            return primary.search(params)
        fallback = self.backends[order[1]]
        try:
            return primary.search(params)
        except SearchError as exc:
            logger.warning("%s backend failed (%s); falling back to %s",
                           primary.name, exc, fallback.name)
            if self.event_bus is not None:
                self.event_bus.emit(Events.BACKEND_FALLBACK, {
                    "keywords": params.keywords,
                    "failed": primary.name,
                    "fallback": fallback.name,
                    "error": exc.to_dict(),
                })
        return fallback.search(params)
