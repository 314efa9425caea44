"""
Client Settings
Resolved configuration for one DDGS client instance
"""
import os
import threading
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidParams


PROXY_ENV_VAR = "DDGS_PROXY"


class ClientSettings:
    """Holds client configuration: defaults, explicit overrides, environment proxy"""

    DEFAULT_HEADERS = {
        "Referer": "https://duckduckgo.com/",
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        "Accept-Language": "en-US,en;q=0.9",
    }

    DEFAULT_SETTINGS = {
        # Transport
        "proxy": None,
        "timeout_seconds": 10.0,
        "headers": DEFAULT_HEADERS,

        # Pacing
        "sleep_duration_seconds": 1.5,
        "sleep_window_seconds": 20.0,

        # Search
        "default_region": "wt-wt",
    }

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None, environ: Optional[Mapping[str, str]] = None):
        """
        Merge overrides into the defaults once; the result does not change afterwards

        Args:
            overrides: Setting name -> value. ``None`` values keep the default.
                ``headers`` is merged into the default header map, caller entries win.
            environ: Environment used for the proxy fallback (defaults to os.environ)
        """
        self._lock = threading.RLock()
        self._settings: Dict[str, Any] = dict(self.DEFAULT_SETTINGS)
        self._settings["headers"] = dict(self.DEFAULT_HEADERS)

        overrides = dict(overrides or {})
        header_overrides = overrides.pop("headers", None) or {}
        for key, value in overrides.items():
            if key not in self.DEFAULT_SETTINGS:
                raise InvalidParams(f"Unknown client setting: {key}")
            if value is not None:
                self._settings[key] = value
        for name, value in dict(header_overrides).items():
            self._settings["headers"][str(name)] = str(value)

        self._settings["proxy"] = self.resolve_proxy(self._settings.get("proxy"), environ)
        self._settings["timeout_seconds"] = self._positive_float("timeout_seconds", allow_zero=False)
        self._settings["sleep_duration_seconds"] = self._positive_float("sleep_duration_seconds", allow_zero=True)
        self._settings["sleep_window_seconds"] = self._positive_float("sleep_window_seconds", allow_zero=True)
        region = str(self._settings.get("default_region") or "").strip()
        self._settings["default_region"] = region or self.DEFAULT_SETTINGS["default_region"]

    @staticmethod
    def resolve_proxy(explicit: Optional[str], environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
        """
        Explicit option first, then the DDGS_PROXY environment variable, else no proxy.

        A bare ``host:port`` is treated as an HTTP proxy.
        """
        env = os.environ if environ is None else environ
        proxy = str(explicit or env.get(PROXY_ENV_VAR, "") or "").strip()
        if not proxy:
            return None
        if "://" not in proxy:
            proxy = f"http://{proxy}"
        return proxy

    def _positive_float(self, key: str, allow_zero: bool) -> float:
        raw = self._settings.get(key)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise InvalidParams(f"Setting {key} must be a number, got {raw!r}")
        if value < 0 or (value == 0 and not allow_zero):
            raise InvalidParams(f"Setting {key} out of range: {value}")
        return value

    def get(self, key: str, default=None) -> Any:
        """Get a setting value (header map is returned as a copy)"""
        with self._lock:
            value = self._settings.get(key, default)
            if isinstance(value, dict):
                return dict(value)
            return value

    @property
    def proxy(self) -> Optional[str]:
        return self._settings["proxy"]

    @property
    def timeout(self) -> float:
        return self._settings["timeout_seconds"]

    @property
    def sleep_duration(self) -> float:
        return self._settings["sleep_duration_seconds"]

    @property
    def sleep_window(self) -> float:
        return self._settings["sleep_window_seconds"]

    @property
    def headers(self) -> Dict[str, str]:
        return self.get("headers")

    @property
    def default_region(self) -> str:
        return self._settings["default_region"]

    def proxies(self) -> Dict[str, str]:
        """requests-style proxy mapping ({} when no proxy is configured)"""
        if not self.proxy:
            return {}
        return {"http": self.proxy, "https": self.proxy}
