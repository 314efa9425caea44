"""
Search Result Models
One fixed-field record type per backend, deduplicated by a backend-specific identity key
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from ..utils.text_utils import normalize_text


def _text(item: Mapping[str, Any], key: str) -> str:
    value = item.get(key)
    if value is None:
        return ""
    return str(value)


def _int(item: Mapping[str, Any], key: str) -> int:
    try:
        return int(item.get(key) or 0)
    except (TypeError, ValueError):
        return 0


class _Result:
    """Shared behavior: identity key, hashing and dict export"""

    IDENTITY_FIELD = ""

    @property
    def identity(self) -> str:
        return getattr(self, self.IDENTITY_FIELD, "") or ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __hash__(self):
        """Hash based on the identity key for deduplication"""
        return hash((type(self).__name__, self.identity))

    def __eq__(self, other):
        """Equality based on the identity key"""
        if type(other) is type(self):
            return self.identity == other.identity
        return False


@dataclass(eq=False)
class TextResult(_Result):
    """Text (HTML or Lite backend) search result"""
    IDENTITY_FIELD = "href"

    title: str
    href: str
    body: str


@dataclass(eq=False)
class ImageResult(_Result):
    """Image search result"""
    IDENTITY_FIELD = "image"

    title: str
    image: str
    thumbnail: str = ""
    url: str = ""
    height: int = 0
    width: int = 0
    source: str = ""

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "ImageResult":
        return cls(
            title=normalize_text(_text(item, "title")),
            image=_text(item, "image"),
            thumbnail=_text(item, "thumbnail"),
            url=_text(item, "url"),
            height=_int(item, "height"),
            width=_int(item, "width"),
            source=_text(item, "source"),
        )


@dataclass(eq=False)
class NewsResult(_Result):
    """News search result"""
    IDENTITY_FIELD = "url"

    date: str
    title: str
    body: str
    url: str
    image: str = ""
    source: str = ""

    @staticmethod
    def format_date(epoch: Any) -> str:
        """
        Format epoch seconds as an RFC 3339 UTC timestamp

        Missing, non-numeric, non-positive or unrepresentable values give "".
        """
        try:
            seconds = int(float(epoch))
        except (TypeError, ValueError, OverflowError):
            return ""
        if seconds <= 0:
            return ""
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        except (OverflowError, OSError, ValueError):
            return ""

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "NewsResult":
        return cls(
            date=cls.format_date(item.get("date")),
            title=normalize_text(_text(item, "title")),
            body=normalize_text(_text(item, "excerpt")),
            url=_text(item, "url"),
            image=_text(item, "image"),
            source=_text(item, "source"),
        )


@dataclass(eq=False)
class VideoResult(_Result):
    """Video search result"""
    IDENTITY_FIELD = "content"

    content: str
    title: str
    description: str = ""
    publisher: str = ""
    uploader: str = ""
    duration: str = ""
    published: str = ""
    embed_url: str = ""
    provider: str = ""
    images: Dict[str, str] = field(default_factory=dict)
    statistics: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "VideoResult":
        images = item.get("images") if isinstance(item.get("images"), dict) else {}
        statistics = item.get("statistics") if isinstance(item.get("statistics"), dict) else {}
        return cls(
            content=_text(item, "content"),
            title=normalize_text(_text(item, "title")),
            description=normalize_text(_text(item, "description")),
            publisher=_text(item, "publisher"),
            uploader=_text(item, "uploader"),
            duration=_text(item, "duration"),
            published=_text(item, "published"),
            embed_url=_text(item, "embed_url"),
            provider=_text(item, "provider"),
            images={str(k): _text(images, k) for k in images},
            statistics=dict(statistics),
        )
