"""
Command-line front end
Maps flags onto the DDGS search operations and prints the records
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from .client import DDGS
from .core.errors import SearchError


logger = logging.getLogger("ddgsearch")

MODES = ("text", "images", "news", "videos")

# Fields printed per record in plain-text output
_DISPLAY_FIELDS = {
    "text": ("title", "href", "body"),
    "images": ("title", "image", "url"),
    "news": ("date", "title", "url", "body"),
    "videos": ("title", "content", "duration"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ddgsearch", description="Search DuckDuckGo from the terminal")
    parser.add_argument("-q", "--query", required=True, help="Search keywords")
    parser.add_argument("-m", "--mode", choices=MODES, default="text", help="Search mode")
    parser.add_argument("-s", "--safesearch", choices=("on", "moderate", "off"), default="moderate")
    parser.add_argument("-t", "--timelimit", choices=("d", "w", "m", "y"), default=None,
                        help="Restrict to the past day/week/month/year")
    parser.add_argument("-p", "--proxy", default=None, help="Proxy address, e.g. 127.0.0.1:7890")
    parser.add_argument("-n", "--max-results", type=int, default=10, help="Max number of results (0 = no cap)")
    parser.add_argument("-r", "--region", default="wt-wt", help="Region code")
    parser.add_argument("-b", "--backend", choices=("auto", "html", "lite"), default="auto",
                        help="Text search backend")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def run_search(client: DDGS, args: argparse.Namespace) -> list:
    common = {
        "region": args.region,
        "safesearch": args.safesearch,
        "timelimit": args.timelimit,
        "max_results": args.max_results,
    }
    if args.mode == "text":
        return client.text_search(args.query, backend=args.backend, **common)
    if args.mode == "images":
        return client.image_search(args.query, **common)
    if args.mode == "news":
        return client.news_search(args.query, **common)
    return client.video_search(args.query, **common)


def format_results(mode: str, results: list) -> str:
    blocks = []
    for i, result in enumerate(results, 1):
        record = result.to_dict()
        fields = _DISPLAY_FIELDS[mode]
        lines = [f"[{i}] {fields[0]}: {record.get(fields[0], '')}"]
        lines.extend(f" {name}: {record.get(name, '')}" for name in fields[1:])
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    with DDGS(proxy=args.proxy) as client:
        try:
            results = run_search(client, args)
        except SearchError as exc:
            logger.error("Search error: %s", exc)
            return 1

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    elif results:
        print(format_results(args.mode, results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
