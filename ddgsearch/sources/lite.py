"""
Lite Backend
Text search against the simplified table-based results page
"""
from enum import Enum
from typing import List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from ..models.search_params import SafeSearch, SearchParams, TimeLimit
from ..models.search_result import TextResult
from ..utils.text_utils import normalize_text, normalize_url
from .base import BaseBackend, Page, PageRequest
from .html import GOOGLE_REDIRECT_PREFIX


SPONSORED_LINK_MARKER = "duckduckgo.com/y.js?ad_domain"


class RowState(Enum):
    AWAITING_LINK = "awaiting_link"
    AWAITING_SNIPPET = "awaiting_snippet"


class LiteBackend(BaseBackend):
    """lite.duckduckgo.com scraper"""

    name = "lite"
    max_pages = 5

    SEARCH_URL = "https://lite.duckduckgo.com/lite/"
    NO_MORE_RESULTS_MARKER = "No more results."
    CONTINUATION_FORM_SELECTOR = 'form:has(input[value*="ext"])'
    HEADERS = {
        "Referer": "https://lite.duckduckgo.com/",
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
            "kl": params.region,
        }
        if params.timelimit is not TimeLimit.ALL:
            payload["df"] = params.timelimit.value
        payload["p"] = self.safesearch_code(params.safesearch)
        return PageRequest("POST", self.SEARCH_URL, data=payload, headers=dict(self.HEADERS))

    def parse_page(self, response: requests.Response, request: PageRequest) -> Page:
        soup = BeautifulSoup(response.content, "html.parser")
        if self.NO_MORE_RESULTS_MARKER in soup.get_text():
            return Page(results=[], terminal=True)

        tables = soup.find_all("table")
        rows = tables[-1].find_all("tr") if tables else []
        return Page(results=self.parse_rows(rows), next_request=self._next_request(soup, request))

    def parse_rows(self, rows) -> List[TextResult]:
        """
        Walk the result rows as a two-state machine

        AWAITING_LINK: a row carrying an anchor captures (title, href) when the
        href is usable and moves to AWAITING_SNIPPET; an unusable href leaves
        the state unchanged, so the snippet that follows it is never paired.
        Rows without an anchor (snippets of rejected links, spacers) are skipped.

        AWAITING_SNIPPET: the next row supplies the snippet; the record is
        emitted there and the machine returns to AWAITING_LINK.
        """
        results: List[TextResult] = []
        state = RowState.AWAITING_LINK
        pending: Optional[Tuple[str, str]] = None

        for row in rows:
            if state is RowState.AWAITING_LINK:
                if row.select_one("td.result-snippet") is not None:
                    continue
                link = row.find("a")
                if link is None:
                    continue
                href = (link.get("href") or "").strip()
                if self._is_rejected_link(href):
                    continue
                pending = (link.get_text(), href)
                state = RowState.AWAITING_SNIPPET
            else:
                title, href = pending
                snippet = row.select_one("td.result-snippet")
                results.append(TextResult(
                    title=normalize_text(title),
                    href=normalize_url(href),
                    body=normalize_text(snippet.get_text() if snippet else ""),
                ))
                pending = None
                state = RowState.AWAITING_LINK
        return results

    def _is_rejected_link(self, href: str) -> bool:
        return (
            not href
            or href.startswith(GOOGLE_REDIRECT_PREFIX)
            or SPONSORED_LINK_MARKER in href
        )

    def _next_request(self, soup: BeautifulSoup, request: PageRequest) -> Optional[PageRequest]:
        """Replace the payload with the hidden fields of the last continuation form"""
        forms = soup.select(self.CONTINUATION_FORM_SELECTOR)
        if not forms:
            return None
        payload = {}
        for field in forms[-1].select('input[type="hidden"]'):
            name = field.get("name")
            if name:
                payload[name] = field.get("value", "")
        return request.with_data(payload)
