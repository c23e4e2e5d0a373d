#!/usr/bin/env python3
"""
Categorize airports as Small / Medium / Large by longest runway, with the
runway length asked from the LLM. Supports checkpoint resume.

  Small:  < 800 m      light GA aircraft, private strips
  Medium: 800-1800 m   regional/turboprop, small jet operations
  Large:  >= 1800 m    commercial jets, wide-body, international
"""

import argparse
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from checkpoint import clear_checkpoint, load_checkpoint, save_checkpoint
from config import (
    AIRPORTS_BY_CATEGORY_JSON,
    AIRPORTS_CATEGORIZED_JSON,
    AIRPORTS_FLAT_JSON,
    CATEGORIZE_DELAY,
    DEFAULT_PROVIDER,
    FEET_PER_METER,
    PROMPTS,
    PROVIDER_DEFAULTS,
    RUNWAY_CRITERIA,
    RUNWAY_MAX_PLAUSIBLE,
    RUNWAY_MIN_PLAUSIBLE,
)
from datafiles import pct, read_json, require_input, write_json
from llm import LLMError, call_llm, check_connection, get_client, parse_json_response, resolve_model

load_dotenv()

STAGE = "categorize_airports"
REQUIRED_FIELDS = ("airport_code", "airport_name", "city", "country")


def parse_runway_response(text: str | None) -> dict | None:
    """{length_meters, confidence} from a reply; implausible lengths get low confidence."""
    parsed = parse_json_response(text)
    if not parsed:
        return None
    value = parsed.get("runwayLengthMeters")
    if value is None or isinstance(value, bool):
        return None
    try:
        length = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None

    if length < RUNWAY_MIN_PLAUSIBLE or length > RUNWAY_MAX_PLAUSIBLE:
        print(f"    Suspicious runway length: {length}m (out of range {RUNWAY_MIN_PLAUSIBLE}-{RUNWAY_MAX_PLAUSIBLE}m)", file=sys.stderr)
        return {"length_meters": length, "confidence": "low"}
    return {"length_meters": length, "confidence": parsed.get("confidence") or "unknown"}


def categorize_by_length(length_meters: int) -> dict:
    small, medium, large = RUNWAY_CRITERIA["small"], RUNWAY_CRITERIA["medium"], RUNWAY_CRITERIA["large"]
    if length_meters < small["max_length"]:
        return {
            "size": "Small",
            "category": "small",
            "length_range": f"< {small['max_length']}m",
            "typical_use": small["description"],
        }
    if length_meters < large["min_length"]:
        return {
            "size": "Medium",
            "category": "medium",
            "length_range": f"{medium['min_length']} – {medium['max_length']}m",
            "typical_use": medium["description"],
        }
    return {
        "size": "Large",
        "category": "large",
        "length_range": f"≥ {large['min_length']}m",
        "typical_use": large["description"],
    }


def _unknown(airport: dict) -> dict:
    return {**airport, "size": "Unknown", "runway_length_meters": None, "confidence": "none"}


def categorize_airport(airport: dict, runway: dict | None) -> dict:
    if not runway:
        return _unknown(airport)
    length = runway["length_meters"]
    return {
        **airport,
        "runway_length_meters": length,
        "runway_length_feet": round(length * FEET_PER_METER),
        **categorize_by_length(length),
        "confidence": runway["confidence"],
    }


def _key(airport: dict) -> str:
    return f"{airport.get('airport_code')}|{airport.get('airport_name')}"


def group_by_category(airports: list[dict]) -> dict[str, list[dict]]:
    return {
        "small": [a for a in airports if a.get("category") == "small"],
        "medium": [a for a in airports if a.get("category") == "medium"],
        "large": [a for a in airports if a.get("category") == "large"],
        "unknown": [a for a in airports if a.get("size") == "Unknown"],
    }


def print_report(airports: list[dict]) -> None:
    groups = group_by_category(airports)
    total = len(airports)
    print("\nAIRPORT SIZE DISTRIBUTION:", file=sys.stderr)
    print(f"Total airports: {total}", file=sys.stderr)
    for name, items in groups.items():
        example = f"  e.g. {items[0].get('airport_code')} - {items[0].get('runway_length_meters')}m" if items and name != "unknown" else ""
        print(f"  {name.title()}: {len(items)} ({pct(len(items), total)}){example}", file=sys.stderr)


def run(
    provider: str,
    model: str,
    input_path: Path,
    output_path: Path,
    by_category_path: Path,
    delay: float,
    fresh: bool = False,
) -> list[dict]:
    client = get_client(provider)
    if not check_connection(client, provider):
        sys.exit(1)
    if fresh:
        clear_checkpoint(STAGE)
    checkpoint = load_checkpoint(STAGE)
    results: dict[str, dict] = checkpoint.get("results", {})

    airports = read_json(input_path)
    print(f"Found {len(airports)} airports to categorize. Using model: {model}", file=sys.stderr)
    effective_model = model
    categorized = []

    for i, airport in enumerate(airports, 1):
        key = _key(airport)
        if key in results:
            categorized.append(results[key])
            continue
        print(f"[{i}/{len(airports)}] Checking: {airport.get('airport_code')} - {airport.get('airport_name')}", file=sys.stderr)

        if not all(airport.get(f) for f in REQUIRED_FIELDS):
            print(f"  Skipping invalid airport data: {airport}", file=sys.stderr)
            categorized.append(_unknown(airport))
            continue

        prompt = PROMPTS["runway"].format(**{f: airport[f] for f in REQUIRED_FIELDS})
        try:
            text, effective_model = call_llm(client, prompt, effective_model, provider)
        except LLMError as e:
            print(f"  No response for {airport['airport_code']}: {e}", file=sys.stderr)
            categorized.append(_unknown(airport))
            time.sleep(delay)
            continue

        result = categorize_airport(airport, parse_runway_response(text))
        if result["size"] == "Unknown":
            print(f"  No runway data for {airport['airport_code']}", file=sys.stderr)
        else:
            print(f"  {airport['airport_code']}: {result['runway_length_meters']}m → {result['size']}", file=sys.stderr)
        categorized.append(result)
        results[key] = result

        checkpoint["results"] = results
        checkpoint["model"] = effective_model
        save_checkpoint(STAGE, checkpoint)
        time.sleep(delay)

    print_report(categorized)
    write_json(output_path, categorized)
    write_json(by_category_path, group_by_category(categorized))
    print(f"Done. Wrote {output_path} with {len(categorized)} airports.")
    return categorized


def main() -> None:
    parser = argparse.ArgumentParser(description="Categorize airports by runway length via LLM")
    parser.add_argument("--provider", default=DEFAULT_PROVIDER, choices=list(PROVIDER_DEFAULTS.keys()))
    parser.add_argument("--model", default=None, help="Model name (default depends on provider)")
    parser.add_argument("--input", default=AIRPORTS_FLAT_JSON)
    parser.add_argument("--output", default=AIRPORTS_CATEGORIZED_JSON)
    parser.add_argument("--by-category", default=AIRPORTS_BY_CATEGORY_JSON)
    parser.add_argument("--delay", type=float, default=CATEGORIZE_DELAY, help="Seconds between queries")
    parser.add_argument("--fresh", action="store_true", help="Ignore saved checkpoint")
    args = parser.parse_args()

    input_path = require_input(Path(args.input), "Run reshape_airports.py first.")
    run(
        provider=args.provider,
        model=resolve_model(args.provider, args.model),
        input_path=input_path,
        output_path=Path(args.output),
        by_category_path=Path(args.by_category),
        delay=args.delay,
        fresh=args.fresh,
    )


if __name__ == "__main__":
    main()
