"""
Token Provider
Fetches the short-lived VQD token the JSON endpoints require
"""
import logging
import re

from .errors import SearchFailed
from .transport import Transport


logger = logging.getLogger(__name__)

VQD_RE = re.compile(r"""vqd\s*=\s*["']?([\d-]+)["']?""")


class TokenProvider:
    """Scrapes a VQD token for a keyword string from the engine's root page"""

    TOKEN_URL = "https://duckduckgo.com"

    def __init__(self, transport: Transport):
        self.transport = transport

    def get_token(self, keywords: str) -> str:
        """
        Fetch a fresh token for ``keywords``; tokens are never cached.

        Raises:
            SearchFailed: the page carried no token
        """
        response = self.transport.execute("GET", self.TOKEN_URL, params={"q": keywords})
        match = VQD_RE.search(response.text or "")
        if not match:
            raise SearchFailed(f"VQD token not found for {keywords!r}", metadata={"keywords": keywords})
        logger.debug("Got VQD token for %r", keywords)
        return match.group(1)
