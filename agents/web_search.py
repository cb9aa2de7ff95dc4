# agents/web_search.py
import logging
from typing import Dict, List

import requests
from ddgs import DDGS

from config import Settings
from errors import SearchError

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search"


def _serpapi_search(query: str, settings: Settings) -> List[Dict[str, str]]:
    params = {
        "engine": settings.search_engine,
        "q": query,
        "api_key": settings.serpapi_key,
    }
    r = requests.get(SERPAPI_URL, params=params, timeout=settings.request_timeout)
    r.raise_for_status()
    data = r.json()

    hits: List[Dict[str, str]] = []
    for result in data.get("organic_results") or []:
        hits.append({
            "snippet": result.get("snippet") or "",
            "link": result.get("link") or "",
        })
    return hits


def _ddgs_search(query: str, settings: Settings) -> List[Dict[str, str]]:
    hits: List[Dict[str, str]] = []
    with DDGS() as ddgs:
        for r in ddgs.text(query, max_results=settings.max_results):
            hits.append({
                "snippet": r.get("body") or "",
                "link": r.get("href") or "",
            })
    return hits


def search_web(query: str, settings: Settings) -> List[Dict[str, str]]:
    """
    Ordered {snippet, link} hits for a query.

    SerpAPI when a key is configured, DuckDuckGo otherwise. Provider order
    is kept and nothing is filtered here: citation numbering follows it.
    """
    q = (query or "").strip()
    if not q:
        raise ValueError("Search query is required")

    provider = "serpapi" if settings.serpapi_key else "ddgs"
    logger.info("Sending search request to %s with query: %s", provider, q)

    try:
        if settings.serpapi_key:
            hits = _serpapi_search(q, settings)
        else:
            hits = _ddgs_search(q, settings)
    except Exception as e:
        logger.error("Error during search: %s", e)
        raise SearchError(f"Failed to perform search: {e}") from e

    logger.info("Search returned %d results", len(hits))
    return hits
