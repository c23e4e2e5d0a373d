#!/usr/bin/env python3
"""
Ask the LLM whether each cleaned city has a commercial airport and collect
the answers as flat airport records. Supports checkpoint resume.
"""

import argparse
import sys
import time
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from checkpoint import clear_checkpoint, load_checkpoint, save_checkpoint
from config import (
    AIRPORTS_FOUND_JSON,
    AIRPORTS_SUMMARY_JSON,
    CITIES_CLEANED_JSON,
    DEFAULT_PROVIDER,
    FIND_AIRPORTS_DELAY,
    PROMPTS,
    PROVIDER_DEFAULTS,
)
from datafiles import read_json, require_input, write_json
from llm import LLMError, call_llm, check_connection, get_client, parse_json_response, resolve_model

load_dotenv()

STAGE = "find_airports"


def parse_airport_response(text: str | None) -> dict | None:
    """Airport record from a reply, or None when there is no (complete) airport."""
    parsed = parse_json_response(text)
    if not parsed or parsed.get("hasAirport") is not True:
        return None
    code, name = parsed.get("airportCode"), parsed.get("airportName")
    if not code or not name:
        return None
    return {
        "country": parsed.get("country"),
        "city": parsed.get("city"),
        "airport_code": str(code).strip().upper(),
        "airport_name": name,
    }


def _key(country: str, city: str) -> str:
    return f"{country}|{city}"


def airports_by_country(airports: list[dict]) -> dict[str, list[dict]]:
    grouped: dict[str, list[dict]] = defaultdict(list)
    for a in airports:
        grouped[a["country"]].append({
            "city": a["city"],
            "airport_code": a["airport_code"],
            "airport_name": a["airport_name"],
        })
    return dict(grouped)


def run(
    provider: str,
    model: str,
    input_path: Path,
    output_path: Path,
    summary_path: Path,
    delay: float,
    fresh: bool = False,
) -> list[dict]:
    client = get_client(provider)
    if not check_connection(client, provider):
        sys.exit(1)
    if fresh:
        clear_checkpoint(STAGE)
    checkpoint = load_checkpoint(STAGE)
    # country|city -> airport dict, or None for "no airport"
    results: dict[str, dict | None] = checkpoint.get("results", {})

    data = read_json(input_path)
    print(f"Found {len(data)} countries to process. Using model: {model}", file=sys.stderr)
    effective_model = model
    processed = 0

    for entry in data:
        country, cities = entry["country"], entry["cities"]
        print(f"\n--- Processing {country} ({len(cities)} cities) ---", file=sys.stderr)
        for city in cities:
            processed += 1
            key = _key(country, city)
            if key in results:
                continue
            print(f"Checking: {city}, {country}", file=sys.stderr)
            prompt = PROMPTS["airport"].format(city=city, country=country)
            try:
                text, effective_model = call_llm(client, prompt, effective_model, provider)
            except LLMError as e:
                # Not checkpointed, so a later run retries it
                print(f"  No response for {city}: {e}", file=sys.stderr)
                time.sleep(delay)
                continue

            airport = parse_airport_response(text)
            if airport:
                # Fall back to the queried location
                airport["city"] = airport["city"] or city
                airport["country"] = airport["country"] or country
                print(f"  Found airport: {airport['airport_code']} - {airport['airport_name']}", file=sys.stderr)
            else:
                print(f"  No airport in {city}", file=sys.stderr)
            results[key] = airport

            checkpoint["results"] = results
            checkpoint["model"] = effective_model
            save_checkpoint(STAGE, checkpoint)
            time.sleep(delay)

    airports = [a for a in results.values() if a]
    write_json(output_path, airports)
    write_json(summary_path, {
        "total_cities_processed": processed,
        "total_airports_found": len(airports),
        "airports_by_country": airports_by_country(airports),
        "processed_at": datetime.now(timezone.utc).isoformat(),
    })
    print(f"\nTotal cities processed: {processed}", file=sys.stderr)
    print(f"Done. Wrote {output_path} with {len(airports)} airports.")
    return airports


def main() -> None:
    parser = argparse.ArgumentParser(description="Find commercial airports for each city via LLM")
    parser.add_argument("--provider", default=DEFAULT_PROVIDER, choices=list(PROVIDER_DEFAULTS.keys()))
    parser.add_argument("--model", default=None, help="Model name (default depends on provider)")
    parser.add_argument("--input", default=CITIES_CLEANED_JSON)
    parser.add_argument("--output", default=AIRPORTS_FOUND_JSON)
    parser.add_argument("--summary", default=AIRPORTS_SUMMARY_JSON)
    parser.add_argument("--delay", type=float, default=FIND_AIRPORTS_DELAY, help="Seconds between queries")
    parser.add_argument("--fresh", action="store_true", help="Ignore saved checkpoint")
    args = parser.parse_args()

    input_path = require_input(Path(args.input), "Run clean_cities.py first.")
    run(
        provider=args.provider,
        model=resolve_model(args.provider, args.model),
        input_path=input_path,
        output_path=Path(args.output),
        summary_path=Path(args.summary),
        delay=args.delay,
        fresh=args.fresh,
    )


if __name__ == "__main__":
    main()
