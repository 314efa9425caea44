"""
Images Backend
"""
from typing import Dict

from ..models.search_params import SafeSearch, SearchParams, TimeLimit
from ..models.search_result import ImageResult
from .json_api import JSONBackend


class ImagesBackend(JSONBackend):
    name = "images"
    max_pages = 5
    endpoint = "https://duckduckgo.com/i.js"
    result_type = ImageResult

    # The image endpoint has no "moderate" tier of its own.
    SAFESEARCH_CODES = {
        SafeSearch.ON: "1",
        SafeSearch.MODERATE: "1",
        SafeSearch.OFF: "-1",
    }

    def filter_params(self, params: SearchParams) -> Dict[str, str]:
        if params.timelimit is TimeLimit.ALL:
            return {}
        return {"f": f"time:{params.timelimit.value}"}
