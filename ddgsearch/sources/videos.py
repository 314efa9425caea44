"""
Videos Backend
"""
from typing import Dict

from ..models.search_params import Duration, License, Resolution, SafeSearch, SearchParams, TimeLimit
from ..models.search_result import VideoResult
from .json_api import JSONBackend


class VideosBackend(JSONBackend):
    name = "videos"
    max_pages = 8
    endpoint = "https://duckduckgo.com/v.js"
    result_type = VideoResult

    SAFESEARCH_CODES = {
        SafeSearch.ON: "1",
        SafeSearch.MODERATE: "-1",
        SafeSearch.OFF: "-2",
    }

    def filter_params(self, params: SearchParams) -> Dict[str, str]:
        return {"f": self.build_filters(params)}

    @staticmethod
    def build_filters(params: SearchParams) -> str:
        """Comma-joined filter string; empty when nothing is restricted"""
        filters = []
        if params.timelimit is not TimeLimit.ALL:
            filters.append(f"publishedAfter:{params.timelimit.value}")
        if params.resolution is not Resolution.ALL:
            filters.append(f"videoDefinition:{params.resolution.value}")
        if params.duration is not Duration.ALL:
            filters.append(f"videoDuration:{params.duration.value}")
        if params.license_videos is not License.ALL:
            filters.append(f"videoLicense:{params.license_videos.value}")
        return ",".join(filters)
