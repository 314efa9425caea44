from .base import BaseBackend, Page, PageRequest
from .html import HTMLBackend
from .images import ImagesBackend
from .lite import LiteBackend
from .news import NewsBackend
from .videos import VideosBackend

__all__ = [
    "BaseBackend",
    "HTMLBackend",
    "ImagesBackend",
    "LiteBackend",
    "NewsBackend",
    "Page",
    "PageRequest",
    "VideosBackend",
]
