"""
HTML Backend
Text search against the full-markup results page
"""
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from ..models.search_params import SafeSearch, SearchParams, TimeLimit
from ..models.search_result import TextResult
from ..utils.text_utils import normalize_text, normalize_url, unwrap_redirect
from .base import BaseBackend, Page, PageRequest


GOOGLE_REDIRECT_PREFIX = "http://www.google.com/search?q="


class HTMLBackend(BaseBackend):
    """html.duckduckgo.com scraper"""

    name = "html"
    max_pages = 5

    SEARCH_URL = "https://html.duckduckgo.com/html"
    NO_RESULTS_MARKER = "No results."
    HEADERS = {
        "Referer": "https://html.duckduckgo.com/",
        "Sec-Fetch-User": "?1",
    }
    SAFESEARCH_CODES = {
        SafeSearch.ON: "1",
        SafeSearch.MODERATE: "-1",
        SafeSearch.OFF: "-2",
    }

    def first_request(self, params: SearchParams) -> PageRequest:
        payload = {
            "q": params.keywords,
            "b": "",
            "kl": params.region,
            "p": self.safesearch_code(params.safesearch),
        }
        if params.timelimit is not TimeLimit.ALL:
            payload["df"] = params.timelimit.value
        return PageRequest("POST", self.SEARCH_URL, data=payload, headers=dict(self.HEADERS))

    def parse_page(self, response: requests.Response, request: PageRequest) -> Page:
        soup = BeautifulSoup(response.content, "html.parser")
        if self.NO_RESULTS_MARKER in soup.get_text():
            return Page(results=[], terminal=True)

        results: List[TextResult] = []
        for block in soup.select("div.result"):
            result = self._parse_block(block)
            if result:
                results.append(result)
        return Page(results=results, next_request=self._next_request(soup, request))

    def _parse_block(self, block) -> Optional[TextResult]:
        """Parse a single result block; None when its link is unusable"""
        link = block.select_one("a.result__url")
        href = (link.get("href") or "").strip() if link else ""
        if not href or href.startswith(GOOGLE_REDIRECT_PREFIX):
            return None
        target = unwrap_redirect(href)
        if target.startswith(GOOGLE_REDIRECT_PREFIX):
            return None

        title_elem = block.select_one("h2")
        body_elem = block.select_one("a.result__snippet")
        return TextResult(
            title=normalize_text(title_elem.get_text() if title_elem else ""),
            href=normalize_url(target),
            body=normalize_text(body_elem.get_text() if body_elem else ""),
        )

    def _next_request(self, soup: BeautifulSoup, request: PageRequest) -> Optional[PageRequest]:
        """Merge the hidden fields of the last "next page" block into the payload"""
        nav_blocks = soup.select("div.nav-link")
        if not nav_blocks:
            return None
        payload = dict(request.data or {})
        for field in nav_blocks[-1].select("input[type='hidden']"):
            name = field.get("name")
            if name:
                payload[name] = field.get("value", "")
        return request.with_data(payload)
