#!/usr/bin/env python3
"""
Enrich categorized airports with ICAO codes from a cascade of sources:
manual corrections, a static IATA->ICAO table, the OpenFlights database,
Wikipedia, and finally the LLM. Supports checkpoint resume.
"""

import argparse
import sys
import time
from datetime import datetime, timezone
from pathlib import Path

import requests
from dotenv import load_dotenv

import wiki_lookup
from checkpoint import clear_checkpoint, load_checkpoint, save_checkpoint
from config import (
    AIRPORTS_CATEGORIZED_JSON,
    AIRPORTS_WITH_ICAO_JSON,
    DEFAULT_PROVIDER,
    ICAO_LLM_DELAY,
    ICAO_SUMMARY_JSON,
    KNOWN_ICAO_MAPPINGS,
    MANUAL_ICAO_CORRECTIONS,
    OPENFLIGHTS_EXTENDED_URL,
    PROMPTS,
    PROVIDER_DEFAULTS,
    SOURCES,
    WIKIPEDIA_DELAY,
)
from datafiles import pct, read_json, require_input, write_json
from llm import LLMError, call_llm, check_connection, get_client, parse_json_response, resolve_model
from openflights import download, parse_iata_to_icao

load_dotenv()

STAGE = "add_icao_codes"
ICAO_SOURCES = ("manual_correction", "known_mapping", "openflights", "wikipedia", "llm", "not_found")


def parse_icao_response(text: str | None) -> str | None:
    parsed = parse_json_response(text)
    if not parsed:
        return None
    code = parsed.get("icaoCode")
    if isinstance(code, str) and len(code.strip()) == 4:
        return code.strip().upper()
    return None


def _iata(airport: dict) -> str:
    return str(airport.get("airport_code") or "").upper()


class IcaoEnricher:
    """Runs the source cascade for one airport at a time."""

    def __init__(
        self,
        sources: list[str],
        openflights_mapping: dict[str, dict] | None = None,
        client=None,
        provider: str = DEFAULT_PROVIDER,
        model: str | None = None,
        session: requests.Session | None = None,
        llm_delay: float = ICAO_LLM_DELAY,
        wikipedia_delay: float = WIKIPEDIA_DELAY,
    ):
        self.sources = sources
        self.openflights_mapping = openflights_mapping or {}
        self.client = client
        self.provider = provider
        self.model = model
        self.session = session
        self.llm_delay = llm_delay
        self.wikipedia_delay = wikipedia_delay

    def from_manual(self, airport: dict) -> dict | None:
        correction = MANUAL_ICAO_CORRECTIONS.get(_iata(airport))
        if not correction:
            return None
        result = {"icao_code": correction["icao"], "icao_source": "manual_correction"}
        if correction.get("note"):
            result["correction_note"] = correction["note"]
        return result

    def from_known(self, airport: dict) -> dict | None:
        code = KNOWN_ICAO_MAPPINGS.get(_iata(airport))
        return {"icao_code": code, "icao_source": "known_mapping"} if code else None

    def from_openflights(self, airport: dict) -> dict | None:
        entry = self.openflights_mapping.get(_iata(airport))
        if not entry:
            return None
        return {
            "icao_code": entry["icao"],
            "icao_source": "openflights",
            "openflights_match": {"name": entry["name"], "city": entry["city"], "country": entry["country"]},
        }

    def from_wikipedia(self, airport: dict) -> dict | None:
        if self.session is None or not airport.get("airport_name"):
            return None
        try:
            found = wiki_lookup.find_icao(self.session, airport)
        except (requests.RequestException, ValueError, TypeError) as e:
            print(f"  Wikipedia lookup failed for {airport.get('airport_code')}: {e}", file=sys.stderr)
            return None
        finally:
            time.sleep(self.wikipedia_delay)
        if not found:
            return None
        return {
            "icao_code": found["icao_code"],
            "icao_source": "wikipedia",
            "wikipedia_source": {"title": found["title"], "url": found["url"], "search_query": found["search_query"]},
        }

    def from_llm(self, airport: dict) -> dict | None:
        if self.client is None:
            return None
        prompt = PROMPTS["icao"].format(
            airport_name=airport.get("airport_name"),
            airport_code=airport.get("airport_code"),
            city=airport.get("city"),
            country=airport.get("country"),
        )
        try:
            text, self.model = call_llm(self.client, prompt, self.model, self.provider)
        except LLMError as e:
            print(f"  LLM query failed for {airport.get('airport_code')}: {e}", file=sys.stderr)
            return None
        finally:
            time.sleep(self.llm_delay)
        code = parse_icao_response(text)
        return {"icao_code": code, "icao_source": "llm"} if code else None

    def enrich(self, airport: dict) -> dict:
        lookups = {
            "manual": self.from_manual,
            "known": self.from_known,
            "openflights": self.from_openflights,
            "wikipedia": self.from_wikipedia,
            "llm": self.from_llm,
        }
        for source in self.sources:
            found = lookups[source](airport)
            if found:
                print(f"  {found['icao_source']}: {airport.get('airport_code')} → {found['icao_code']}", file=sys.stderr)
                return {**airport, **found}
        print(f"  ICAO not found for {airport.get('airport_code')}", file=sys.stderr)
        return {**airport, "icao_code": None, "icao_source": "not_found"}


def count_by_source(airports: list[dict]) -> dict[str, int]:
    return {source: sum(1 for a in airports if a.get("icao_source") == source) for source in ICAO_SOURCES}


def print_report(airports: list[dict]) -> None:
    total = len(airports)
    counts = count_by_source(airports)
    with_icao = sum(1 for a in airports if a.get("icao_code"))
    print("\nICAO CODE STATISTICS:", file=sys.stderr)
    print(f"Total airports: {total}", file=sys.stderr)
    print(f"With ICAO codes: {with_icao} ({pct(with_icao, total)})", file=sys.stderr)
    for source, n in counts.items():
        print(f"  {source}: {n} ({pct(n, total)})", file=sys.stderr)


def parse_sources(value: str) -> list[str]:
    sources = [s.strip() for s in value.split(",") if s.strip()]
    unknown = [s for s in sources if s not in SOURCES]
    if unknown:
        raise argparse.ArgumentTypeError(f"Unknown source(s): {', '.join(unknown)}. Choose from {', '.join(SOURCES)}")
    return sources


def load_openflights_mapping(url: str) -> dict[str, dict]:
    """Download failures disable the source rather than abort the run."""
    try:
        mapping = parse_iata_to_icao(download(url))
    except requests.RequestException as e:
        print(f"Warning: Could not download OpenFlights data ({e}); skipping that source.", file=sys.stderr)
        return {}
    print(f"OpenFlights mapping contains {len(mapping)} airports", file=sys.stderr)
    return mapping


def run(
    sources: list[str],
    provider: str,
    model: str,
    input_path: Path,
    output_path: Path,
    summary_path: Path,
    openflights_url: str = OPENFLIGHTS_EXTENDED_URL,
    fresh: bool = False,
) -> list[dict]:
    client = None
    if "llm" in sources:
        client = get_client(provider)
        if not check_connection(client, provider):
            sys.exit(1)
    enricher = IcaoEnricher(
        sources=sources,
        openflights_mapping=load_openflights_mapping(openflights_url) if "openflights" in sources else None,
        client=client,
        provider=provider,
        model=model,
        session=requests.Session() if "wikipedia" in sources else None,
    )

    if fresh:
        clear_checkpoint(STAGE)
    checkpoint = load_checkpoint(STAGE)
    results: dict[str, dict] = checkpoint.get("results", {})

    airports = read_json(input_path)
    print(f"Found {len(airports)} airports to enrich. Sources: {', '.join(sources)}", file=sys.stderr)
    enriched = []
    for i, airport in enumerate(airports, 1):
        key = f"{airport.get('airport_code')}|{airport.get('airport_name')}"
        if key in results:
            enriched.append(results[key])
            continue
        print(f"[{i}/{len(airports)}] Processing: {airport.get('airport_code')} - {airport.get('airport_name')}", file=sys.stderr)
        result = enricher.enrich(airport)
        enriched.append(result)
        results[key] = result
        checkpoint["results"] = results
        checkpoint["model"] = enricher.model
        save_checkpoint(STAGE, checkpoint)

    print_report(enriched)
    write_json(output_path, enriched)
    write_json(summary_path, {
        "statistics": count_by_source(enriched),
        "total_airports": len(enriched),
        "airports_with_icao": sum(1 for a in enriched if a.get("icao_code")),
        "database_size": len(enricher.openflights_mapping),
        "processed_at": datetime.now(timezone.utc).isoformat(),
        "sample_airports": enriched[:5],
    })
    print(f"Done. Wrote {output_path} with {len(enriched)} airports.")
    return enriched


def main() -> None:
    parser = argparse.ArgumentParser(description="Add ICAO codes to airports")
    parser.add_argument("--sources", type=parse_sources, default=list(SOURCES),
                        help=f"Comma-separated lookup order (default: {','.join(SOURCES)})")
    parser.add_argument("--provider", default=DEFAULT_PROVIDER, choices=list(PROVIDER_DEFAULTS.keys()))
    parser.add_argument("--model", default=None, help="Model name (default depends on provider)")
    parser.add_argument("--input", default=AIRPORTS_CATEGORIZED_JSON)
    parser.add_argument("--output", default=AIRPORTS_WITH_ICAO_JSON)
    parser.add_argument("--summary", default=ICAO_SUMMARY_JSON)
    parser.add_argument("--openflights-url", default=OPENFLIGHTS_EXTENDED_URL)
    parser.add_argument("--fresh", action="store_true", help="Ignore saved checkpoint")
    args = parser.parse_args()

    input_path = require_input(Path(args.input), "Run categorize_airports.py first.")
    run(
        sources=args.sources,
        provider=args.provider,
        model=resolve_model(args.provider, args.model),
        input_path=input_path,
        output_path=Path(args.output),
        summary_path=Path(args.summary),
        openflights_url=args.openflights_url,
        fresh=args.fresh,
    )


if __name__ == "__main__":
    main()
