"""
News Backend
"""
from typing import Dict

from ..models.search_params import SafeSearch, SearchParams, TimeLimit
from ..models.search_result import NewsResult
from .json_api import JSONBackend


class NewsBackend(JSONBackend):
    name = "news"
    max_pages = 5
    endpoint = "https://duckduckgo.com/news.js"
    result_type = NewsResult

    SAFESEARCH_CODES = {
        SafeSearch.ON: "1",
        SafeSearch.MODERATE: "-1",
        SafeSearch.OFF: "-2",
    }

    def filter_params(self, params: SearchParams) -> Dict[str, str]:
        out = {"noamp": "1"}
        if params.timelimit is not TimeLimit.ALL:
            out["df"] = params.timelimit.value
        return out
