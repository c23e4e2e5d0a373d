"""Wikipedia lookups for ICAO codes: opensearch, intro extracts, code extraction."""

import re
import sys
import time

import requests

from config import (
    HTTP_TIMEOUT,
    USER_AGENT,
    WIKIPEDIA_AIRPORT_KEYWORDS,
    WIKIPEDIA_API,
    WIKIPEDIA_PAGE_DELAY,
    WIKIPEDIA_QUERY_DELAY,
)

# Tried in order; the keyword is case-insensitive, the code itself must be uppercase
ICAO_PATTERNS = [
    re.compile(r"(?i:ICAO):\s*([A-Z]{4})\b"),
    re.compile(r"(?i:ICAO\s+code)[:\s]+([A-Z]{4})\b"),
    re.compile(r"(?i:ICAO)\s*([A-Z]{4})\b"),
    re.compile(r"(?i:IATA):\s*[A-Z]{3}[,\s]+(?i:ICAO):\s*([A-Z]{4})\b"),
]


def _get(session: requests.Session, params: dict):
    response = session.get(
        WIKIPEDIA_API,
        params={**params, "format": "json"},
        timeout=HTTP_TIMEOUT,
        headers={"User-Agent": USER_AGENT},
    )
    response.raise_for_status()
    return response.json()


def is_airport_related(title: str, description: str) -> bool:
    text = f"{title} {description}".lower()
    return any(keyword in text for keyword in WIKIPEDIA_AIRPORT_KEYWORDS)


def search(session: requests.Session, query: str, limit: int = 5) -> list[dict]:
    """Opensearch, keeping only airport-looking titles."""
    data = _get(session, {"action": "opensearch", "search": query, "limit": limit, "namespace": 0})
    _, titles, descriptions, urls = data[:4]
    results = []
    for i, title in enumerate(titles):
        description = descriptions[i] if i < len(descriptions) else ""
        if is_airport_related(title, description or ""):
            results.append({"title": title, "description": description, "url": urls[i] if i < len(urls) else None})
    return results


def page_extract(session: requests.Session, title: str) -> str | None:
    """Plain-text intro of a page, or None if it does not exist."""
    data = _get(session, {
        "action": "query",
        "titles": title,
        "prop": "extracts",
        "exintro": "true",
        "explaintext": "true",
    })
    pages = data.get("query", {}).get("pages", {})
    for page_id, page in pages.items():
        if page_id == "-1":
            return None
        return page.get("extract") or ""
    return None


def extract_icao(text: str | None) -> str | None:
    if not text:
        return None
    for pattern in ICAO_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None


def search_queries(airport: dict) -> list[str]:
    name = airport.get("airport_name") or ""
    return [
        name,
        f"{name} airport",
        f"{name} {airport.get('city') or ''}".strip(),
        f"{name} {airport.get('country') or ''}".strip(),
    ]


def find_icao(
    session: requests.Session,
    airport: dict,
    page_delay: float = WIKIPEDIA_PAGE_DELAY,
    query_delay: float = WIKIPEDIA_QUERY_DELAY,
) -> dict | None:
    """
    Search Wikipedia for the airport and return
    {icao_code, title, url, search_query} from the first page that names one.
    """
    print(f"    Searching Wikipedia for: {airport.get('airport_name')}", file=sys.stderr)
    for query in search_queries(airport):
        for result in search(session, query):
            print(f"      Checking: {result['title']}", file=sys.stderr)
            code = extract_icao(page_extract(session, result["title"]))
            if code:
                return {
                    "icao_code": code,
                    "title": result["title"],
                    "url": result["url"],
                    "search_query": query,
                }
            time.sleep(page_delay)
        time.sleep(query_delay)
    return None
