import unittest

from ddgsearch import DDGS
from ddgsearch.core.settings import ClientSettings
from ddgsearch.core.transport import Transport
from ddgsearch.models.search_params import SearchParams
from ddgsearch.sources.lite import LiteBackend


class _Resp:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8")


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


SEARCH_BOX = """
<form action="/lite/" method="post">
  <table><tr><td>
    <input class="query" type="text" size="40" name="q" value="golang">
    <input class="submit" type="submit" value="Search">
  </td></tr></table>
</form>"""


def _rows(href, title, snippet, index=1):
    return f"""
    <tr>
      <td valign="top">{index}.&nbsp;</td>
      <td><a rel="nofollow" href="{href}" class="result-link">{title}</a></td>
    </tr>
    <tr>
      <td>&nbsp;&nbsp;&nbsp;</td>
      <td class="result-snippet">{snippet}</td>
    </tr>
    <tr>
      <td>&nbsp;&nbsp;&nbsp;</td>
      <td><span class="link-text">{href}</span></td>
    </tr>
    <tr><td>&nbsp;</td><td>&nbsp;</td></tr>"""


def _page(rows, next_fields=None):
    form = ""
    if next_fields is not None:
        inputs = "".join(f'<input type="hidden" name="{k}" value="{v}">' for k, v in next_fields.items())
        form = f"""
        <form action="/lite/" method="post">
          <input type="submit" class="navbutton" value="Next Page &gt;">{inputs}
        </form>"""
    return f"<html><body>{SEARCH_BOX}<table border='0'>{''.join(rows)}</table>{form}</body></html>"


def _backend(responses):
    session = _Session(responses)
    transport = Transport(ClientSettings({"sleep_duration_seconds": 0}, environ={}), session=session)
    return LiteBackend(transport), session


class TestLiteBackend(unittest.TestCase):
    def test_capped_lite_search_for_golang(self):
        session = _Session([_Resp(200, _page([
            _rows("https://go.dev/", "The Go Programming Language", "Go is an open source programming language.", 1),
            _rows("https://go.dev/doc/", "Documentation - The Go Programming Language", "The Go programming language docs.", 2),
        ]))])
        with DDGS(sleep_duration=0, session=session) as ddgs:
            results = ddgs.text_search("golang", backend="lite", max_results=2)

        self.assertEqual(len(results), 2)
        for result in results:
            self.assertTrue(result.title)
            self.assertTrue(result.href)
            self.assertTrue(result.body)
        self.assertEqual(len(session.calls), 1)
        self.assertEqual(session.calls[0][1], "https://lite.duckduckgo.com/lite/")

    def test_first_request_payload(self):
        backend, session = _backend([_Resp(200, _page([]))])
        backend.search(SearchParams.build("golang", safesearch="on", timelimit="d"))
        method, url, kwargs = session.calls[0]
        self.assertEqual(method, "POST")
        self.assertEqual(kwargs["data"], {"q": "golang", "kl": "wt-wt", "df": "d", "p": "1"})
        self.assertEqual(kwargs["headers"]["Referer"], "https://lite.duckduckgo.com/")

    def test_pairs_links_with_following_snippets(self):
        backend, _ = _backend([_Resp(200, _page([
            _rows("https://a.test/#frag", "  Alpha\n site ", "first   snippet"),
            _rows("https://b.test/", "Beta", "second snippet", 2),
        ]))])
        results = backend.search(SearchParams.build("x"))
        self.assertEqual([(r.title, r.href, r.body) for r in results], [
            ("Alpha site", "https://a.test/", "first snippet"),
            ("Beta", "https://b.test/", "second snippet"),
        ])

    def test_sponsored_link_is_skipped_with_its_snippet(self):
        backend, _ = _backend([_Resp(200, _page([
            _rows("https://duckduckgo.com/y.js?ad_domain=shop.test&amp;ad_provider=x", "Buy now", "ad copy"),
            _rows("https://a.test/", "Alpha", "organic snippet", 2),
        ]))])
        results = backend.search(SearchParams.build("x"))
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].href, "https://a.test/")
        self.assertEqual(results[0].body, "organic snippet")

    def test_google_and_empty_links_are_skipped(self):
        backend, _ = _backend([_Resp(200, _page([
            _rows("http://www.google.com/search?q=x", "Google", "wrapped"),
            _rows("", "Empty", "nothing", 2),
            _rows("https://a.test/", "Alpha", "kept", 3),
        ]))])
        results = backend.search(SearchParams.build("x"))
        self.assertEqual([r.body for r in results], ["kept"])

    def test_duplicates_are_dropped(self):
        backend, _ = _backend([_Resp(200, _page([
            _rows("https://a.test/", "Alpha", "one"),
            _rows("https://a.test/#again", "Alpha again", "two", 2),
        ]))])
        results = backend.search(SearchParams.build("x"))
        self.assertEqual([r.body for r in results], ["one"])

    def test_continuation_form_replaces_payload(self):
        backend, session = _backend([
            _Resp(200, _page([_rows("https://a.test/", "Alpha", "one")],
                             next_fields={"q": "x", "s": "23", "dc": "24", "kl": "wt-wt"})),
            _Resp(200, _page([_rows("https://b.test/", "Beta", "two")])),
        ])
        results = backend.search(SearchParams.build("x", timelimit="m"))

        self.assertEqual([r.href for r in results], ["https://a.test/", "https://b.test/"])
        self.assertEqual(len(session.calls), 2)
        self.assertEqual(session.calls[1][2]["data"], {"q": "x", "s": "23", "dc": "24", "kl": "wt-wt"})

    def test_pagination_is_bounded(self):
        pages = [
            _Resp(200, _page([_rows(f"https://site{i}.test/", f"S{i}", "s")],
                             next_fields={"q": "x", "s": str(23 * (i + 1))}))
            for i in range(10)
        ]
        backend, session = _backend(pages)
        results = backend.search(SearchParams.build("x"))
        self.assertEqual(len(session.calls), 5)
        self.assertEqual(len(results), 5)

    def test_no_more_results_marker_stops(self):
        backend, session = _backend([
            _Resp(200, _page([_rows("https://a.test/", "Alpha", "one")], next_fields={"q": "x", "s": "23"})),
            _Resp(200, "<html><body><table><tr><td>No more results.</td></tr></table></body></html>"),
        ])
        results = backend.search(SearchParams.build("x"))
        self.assertEqual([r.href for r in results], ["https://a.test/"])
        self.assertEqual(len(session.calls), 2)

    def test_parse_rows_without_snippet_row_emits_nothing(self):
        backend, _ = _backend([])
        page = _page([]).replace(
            "<table border='0'></table>",
            "<table border='0'><tr><td><a href='https://a.test/'>Alpha</a></td></tr></table>",
        )
        self.assertEqual(backend.parse_page(_Resp(200, page), backend.first_request(SearchParams.build("x"))).results, [])


if __name__ == "__main__":
    unittest.main()
