from __future__ import annotations

import logging
from typing import Callable, Optional, Union
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import FALLBACK_DETAIL, REQUEST_HEADERS, RETRY_BACKOFF, RETRY_TOTAL
from .errors import ExtractionError
from .extractor import extract

logger = logging.getLogger("headlines")

Extractor = Callable[[Union[str, bytes], str], str]


# --- Networking helpers ---
def create_session() -> requests.Session:
    s = requests.Session()
    s.headers.update(REQUEST_HEADERS)
    retries = Retry(
        total=RETRY_TOTAL,
        backoff_factor=RETRY_BACKOFF,
        status_forcelist=[429, 500, 502, 503, 504],
    )
    adapter = HTTPAdapter(max_retries=retries)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    return s


class ContentFetcher:
    """Resolves an article URL to its readable text.

    ``fetch_and_extract`` never raises: any failure for one article turns into
    ``FALLBACK_DETAIL`` so the rest of the batch is unaffected.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        extractor: Extractor = extract,
    ):
        self.session = session or create_session()
        self.timeout = timeout
        self.extractor = extractor

    def fetch_and_extract(self, url: str) -> str:
        try:
            return self._fetch_and_extract(url)
        except (requests.RequestException, ValueError, ExtractionError) as e:
            logger.warning("No content for %s: %s", url, e)
            return FALLBACK_DETAIL

    def _fetch_and_extract(self, url: str) -> str:
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Malformed article URL: {url!r}")

        logger.debug("Fetching %s", url)
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        logger.debug("Fetched %s OK", url)
        # relative links resolve against where the page actually came from
        base_url = resp.url or url
        return self.extractor(resp.text, base_url)
