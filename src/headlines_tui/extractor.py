from __future__ import annotations

import logging
from typing import List, Union

import trafilatura
from bs4 import BeautifulSoup

from .errors import ExtractionError

logger = logging.getLogger("headlines")

MIN_PARAGRAPH_WORDS = 4


def extract(html: Union[str, bytes], base_url: str) -> str:
    """Return the readable plain-text body of an article page.

    trafilatura does the heavy lifting; when it finds nothing, the paragraphs
    of the page's ``<article>`` (or ``<main>``) element are used instead.
    """
    if not html:
        raise ExtractionError(f"Empty page for {base_url}")

    try:
        text = trafilatura.extract(
            html, url=base_url, include_comments=False, include_tables=False
        )
    except Exception as e:
        logger.debug("trafilatura failed for %s: %s", base_url, e)
        text = None

    if text and text.strip():
        return text.strip()

    logger.debug("Falling back to paragraph extraction for %s", base_url)
    candidate = "\n\n".join(_paragraphs(html)).strip()
    if not candidate:
        raise ExtractionError(f"No readable text found at {base_url}")
    return candidate


def _paragraphs(html: Union[str, bytes]) -> List[str]:
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "nav", "header", "footer", "aside"]):
        tag.decompose()
    main = soup.find("article") or soup.find("main") or soup
    paras = [p.get_text(" ", strip=True) for p in main.find_all("p")]
    return [p for p in paras if len(p.split()) >= MIN_PARAGRAPH_WORDS]
