"""
Search Parameters
Enumerated filters and the validated parameter set for one search call
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type, TypeVar, Union

from ..core.errors import InvalidParams


class SafeSearch(Enum):
    """Safe-search level"""
    ON = "on"
    MODERATE = "moderate"
    OFF = "off"


class TimeLimit(Enum):
    """Time restriction"""
    DAY = "d"
    WEEK = "w"
    MONTH = "m"
    YEAR = "y"
    ALL = ""


class Backend(Enum):
    """Text search backend selection"""
    AUTO = "auto"
    HTML = "html"
    LITE = "lite"


class Resolution(Enum):
    HIGH = "high"
    STANDARD = "standard"
    ALL = ""


class Duration(Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    ALL = ""


class License(Enum):
    CREATIVE_COMMON = "creativeCommon"
    YOUTUBE = "youtube"
    ALL = ""


E = TypeVar("E", bound=Enum)

# Spellings accepted besides member values and names.
_ALIASES = {
    TimeLimit: {"day": TimeLimit.DAY, "week": TimeLimit.WEEK, "month": TimeLimit.MONTH,
                "year": TimeLimit.YEAR, "unrestricted": TimeLimit.ALL, "any": TimeLimit.ALL},
    Resolution: {"any": Resolution.ALL},
    Duration: {"any": Duration.ALL},
    License: {"any": License.ALL, "creativecommon": License.CREATIVE_COMMON},
}


def coerce_enum(enum_cls: Type[E], value: Union[E, str, None], default: E) -> E:
    """
    Accept an enum member, its value, or its (case-insensitive) name

    Raises:
        InvalidParams: the string matches nothing
    """
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    for member in enum_cls:
        if text == member.value or text.upper() == member.name:
            return member
    alias = _ALIASES.get(enum_cls, {}).get(text.lower())
    if alias is not None:
        return alias
    allowed = ", ".join(repr(m.value) for m in enum_cls)
    raise InvalidParams(f"Unsupported {enum_cls.__name__} value {value!r} (expected one of {allowed})")


@dataclass(frozen=True)
class SearchParams:
    """Validated parameters for one search call"""
    keywords: str
    region: str = "wt-wt"
    safesearch: SafeSearch = SafeSearch.MODERATE
    timelimit: TimeLimit = TimeLimit.ALL
    max_results: int = 0  # 0 = unbounded
    backend: Backend = Backend.AUTO
    resolution: Resolution = Resolution.ALL
    duration: Duration = Duration.ALL
    license_videos: License = License.ALL

    @classmethod
    def build(
        cls,
        keywords: str,
        region: Optional[str] = None,
        safesearch=None,
        timelimit=None,
        max_results: Optional[int] = 0,
        backend=None,
        resolution=None,
        duration=None,
        license_videos=None,
        default_region: str = "wt-wt",
    ) -> "SearchParams":
        """
        Validate raw caller input

        Raises:
            InvalidParams: empty keywords, negative cap, or unknown enum values
        """
        keywords = (keywords or "").strip()
        if not keywords:
            raise InvalidParams("keywords is mandatory")
        try:
            cap = int(max_results or 0)
        except (TypeError, ValueError):
            raise InvalidParams(f"max_results must be an integer, got {max_results!r}")
        if cap < 0:
            raise InvalidParams(f"max_results must be >= 0, got {cap}")
        return cls(
            keywords=keywords,
            region=(region or "").strip() or default_region,
            safesearch=coerce_enum(SafeSearch, safesearch, SafeSearch.MODERATE),
            timelimit=coerce_enum(TimeLimit, timelimit, TimeLimit.ALL),
            max_results=cap,
            backend=coerce_enum(Backend, backend, Backend.AUTO),
            resolution=coerce_enum(Resolution, resolution, Resolution.ALL),
            duration=coerce_enum(Duration, duration, Duration.ALL),
            license_videos=coerce_enum(License, license_videos, License.ALL),
        )
