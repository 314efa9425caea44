"""
ddgsearch
DuckDuckGo text, image, news and video search without an API key
"""
from .client import DDGS
from .core.errors import InvalidParams, RateLimited, SearchError, SearchFailed, SearchTimeout
from .core.event_bus import EventBus, Events
from .core.settings import ClientSettings
from .models.search_params import Backend, Duration, License, Resolution, SafeSearch, TimeLimit
from .models.search_result import ImageResult, NewsResult, TextResult, VideoResult

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "ClientSettings",
    "DDGS",
    "Duration",
    "EventBus",
    "Events",
    "ImageResult",
    "InvalidParams",
    "License",
    "NewsResult",
    "RateLimited",
    "Resolution",
    "SafeSearch",
    "SearchError",
    "SearchFailed",
    "SearchTimeout",
    "TextResult",
    "TimeLimit",
    "VideoResult",
]
