import json
import unittest

from ddgsearch import DDGS
from ddgsearch.core.errors import RateLimited, SearchFailed
from ddgsearch.models.search_params import SearchParams
from ddgsearch.models.search_result import NewsResult
from ddgsearch.sources.videos import VideosBackend


TOKEN_PAGE = "<html><script>vqd='4-321'</script></html>"


class _Resp:
    def __init__(self, status_code=200, text="", payload=None):
        self.status_code = status_code
        self.text = json.dumps(payload) if payload is not None else text
        self.content = self.text.encode("utf-8")

    def json(self):
        return json.loads(self.text)


class _Session:
    def __init__(self, responses):
        self.headers = {}
        self.proxies = {}
        self.calls = []
        self._responses = list(responses)

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        pass


def _client(responses):
    session = _Session([_Resp(200, TOKEN_PAGE)] + list(responses))
    return DDGS(sleep_duration=0, session=session), session


class TestNewsSearch(unittest.TestCase):
    def test_single_page_news(self):
        client, session = _client([_Resp(200, payload={
            "results": [{"url": "https://a", "title": "T", "excerpt": "B", "date": 1700000000}],
            "next": "",
        })])
        results = client.news_search("x")

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].date, "2023-11-14T22:13:20Z")
        self.assertEqual(results[0].title, "T")
        self.assertEqual(results[0].body, "B")
        self.assertEqual(results[0].url, "https://a")
        self.assertEqual(len(session.calls), 2)

    def test_query_parameters(self):
        client, session = _client([_Resp(200, payload={"results": []})])
        client.news_search("x", region="us-en", safesearch="off", timelimit="w")

        token_call, news_call = session.calls
        self.assertEqual(token_call[0:2], ("GET", "https://duckduckgo.com"))
        self.assertEqual(token_call[2]["params"], {"q": "x"})
        method, url, kwargs = news_call
        self.assertEqual((method, url), ("GET", "https://duckduckgo.com/news.js"))
        self.assertEqual(kwargs["params"], {
            "o": "json", "q": "x", "l": "us-en", "vqd": "4-321", "p": "-2", "noamp": "1", "df": "w",
        })

    def test_missing_or_bad_dates_are_empty(self):
        client, _ = _client([_Resp(200, payload={"results": [
            {"url": "https://a", "title": "A", "excerpt": "", "date": 0},
            {"url": "https://b", "title": "B", "excerpt": ""},
            {"url": "https://c", "title": "C", "excerpt": "", "date": 1700000000000},
            {"url": "https://d", "title": "D", "excerpt": "", "date": 1e300},
            {"url": "https://e", "title": "E", "excerpt": "", "date": "soon"},
        ]})])
        self.assertEqual([r.date for r in client.news_search("x")], ["", "", "", "", ""])

    def test_format_date_never_raises(self):
        self.assertEqual(NewsResult.format_date(1700000000), "2023-11-14T22:13:20Z")
        for value in (None, -5, 1700000000000, 1e300, float("inf"), float("nan"), "x"):
            self.assertEqual(NewsResult.format_date(value), "")

    def test_pagination_is_bounded(self):
        pages = [
            _Resp(200, payload={
                "results": [{"url": f"https://n/{i}", "title": f"N{i}", "excerpt": "", "date": 1700000000}],
                "next": f"news.js?q=x&s={30 * (i + 1)}",
            })
            for i in range(10)
        ]
        client, session = _client(pages)
        results = client.news_search("x")

        self.assertEqual(len(results), 5)
        self.assertEqual(len(session.calls), 6)

    def test_invalid_json_raises_search_failed(self):
        client, _ = _client([_Resp(200, text="<html>not json</html>")])
        with self.assertRaises(SearchFailed):
            client.news_search("x")

    def test_results_must_be_a_list(self):
        client, _ = _client([_Resp(200, payload={"results": "nope"})])
        with self.assertRaises(SearchFailed):
            client.news_search("x")

    def test_throttled_page_raises_rate_limited(self):
        client, _ = _client([_Resp(429)])
        with self.assertRaises(RateLimited) as ctx:
            client.news_search("x")
        self.assertEqual(ctx.exception.backend, "news")

    def test_missing_token_raises_search_failed(self):
        session = _Session([_Resp(200, "<html>no token here</html>")])
        client = DDGS(sleep_duration=0, session=session)
        with self.assertRaises(SearchFailed):
            client.news_search("x")
        self.assertEqual(len(session.calls), 1)


class TestImageSearch(unittest.TestCase):
    def test_pages_with_s_and_dedups_by_image(self):
        client, session = _client([
            _Resp(200, payload={
                "results": [
                    {"title": "One", "image": "https://img/1.png", "thumbnail": "t1", "url": "https://p/1",
                     "height": 10, "width": 20, "source": "Bing"},
                    {"title": "One again", "image": "https://img/1.png"},
                ],
                "next": "i.js?q=x&o=json&p=1&s=100&u=bing&f=,,,&l=wt-wt",
            }),
            _Resp(200, payload={
                "results": [
                    {"title": "Two", "image": "https://img/2.png"},
                    {"title": "One", "image": "https://img/1.png"},
                ],
                "next": "",
            }),
        ])
        results = client.image_search("x")

        self.assertEqual([r.image for r in results], ["https://img/1.png", "https://img/2.png"])
        self.assertEqual(results[0].height, 10)
        self.assertEqual(results[0].width, 20)
        self.assertEqual(len(session.calls), 3)
        self.assertNotIn("s", session.calls[1][2]["params"])
        self.assertEqual(session.calls[2][2]["params"]["s"], "100")
        self.assertEqual(session.calls[2][2]["params"]["vqd"], "4-321")

    def test_safesearch_and_time_filter(self):
        client, session = _client([_Resp(200, payload={"results": []})])
        client.image_search("x", safesearch="moderate", timelimit="m")
        params = session.calls[1][2]["params"]
        self.assertEqual(params["p"], "1")
        self.assertEqual(params["f"], "time:m")

    def test_cap_stops_paging(self):
        client, session = _client([_Resp(200, payload={
            "results": [{"title": str(i), "image": f"https://img/{i}.png"} for i in range(5)],
            "next": "i.js?s=100",
        })])
        results = client.image_search("x", max_results=3)
        self.assertEqual(len(results), 3)
        self.assertEqual(len(session.calls), 2)

    def test_pagination_is_bounded(self):
        pages = [
            _Resp(200, payload={
                "results": [{"title": f"I{i}", "image": f"https://img/p{i}.png"}],
                "next": f"i.js?q=x&s={100 * (i + 1)}",
            })
            for i in range(10)
        ]
        client, session = _client(pages)
        results = client.image_search("x")

        self.assertEqual(len(results), 5)
        self.assertEqual(len(session.calls), 6)
        self.assertEqual(session.calls[-1][2]["params"]["s"], "400")


class TestVideoSearch(unittest.TestCase):
    def test_filter_string(self):
        params = SearchParams.build("x", timelimit="w", resolution="high", duration="short", license_videos="youtube")
        self.assertEqual(
            VideosBackend.build_filters(params),
            "publishedAfter:w,videoDefinition:high,videoDuration:short,videoLicense:youtube",
        )
        self.assertEqual(VideosBackend.build_filters(SearchParams.build("x")), "")

    def test_empty_filter_is_still_sent(self):
        client, session = _client([_Resp(200, payload={"results": []})])
        client.video_search("x")
        self.assertEqual(session.calls[1][1], "https://duckduckgo.com/v.js")
        self.assertEqual(session.calls[1][2]["params"]["f"], "")

    def test_pagination_is_bounded(self):
        pages = [
            _Resp(200, payload={
                "results": [{"content": f"https://v/{i}", "title": f"V{i}", "images": {"large": "l"}}],
                "next": f"v.js?q=x&s={60 * (i + 1)}",
            })
            for i in range(12)
        ]
        client, session = _client(pages)
        results = client.video_search("x")

        self.assertEqual(len(results), 8)
        self.assertEqual(len(session.calls), 9)
        self.assertEqual(results[0].images, {"large": "l"})


if __name__ == "__main__":
    unittest.main()
