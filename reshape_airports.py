#!/usr/bin/env python3
"""Produce the flat, sorted airport list that later stages read."""

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path

from config import AIRPORTS_FLAT_JSON, AIRPORTS_FLAT_SUMMARY_JSON, AIRPORTS_FOUND_JSON, AIRPORTS_SUMMARY_JSON
from datafiles import read_json, write_json


def flatten_summary(summary: dict) -> list[dict]:
    """Rebuild flat records from a summary's airports_by_country mapping."""
    data = []
    for country, airports in (summary.get("airports_by_country") or {}).items():
        for airport in airports:
            data.append({
                "city": airport.get("city"),
                "airport_code": airport.get("airport_code"),
                "airport_name": airport.get("airport_name"),
                "country": country,
            })
    return data


def sort_airports(data: list[dict]) -> list[dict]:
    return sorted(data, key=lambda a: ((a.get("country") or "").casefold(), (a.get("city") or "").casefold()))


def load_airports(found_path: Path, summary_path: Path) -> list[dict]:
    """Prefer the already-flat found list; otherwise reshape the summary."""
    if found_path.exists():
        data = read_json(found_path)
        if isinstance(data, list) and data and data[0].get("country"):
            print(f"Found {len(data)} flat airports in {found_path}", file=sys.stderr)
            return data
    if summary_path.exists():
        data = flatten_summary(read_json(summary_path))
        if data:
            print(f"Reshaped {len(data)} airports from {summary_path}", file=sys.stderr)
            return data
    return []


def main() -> None:
    parser = argparse.ArgumentParser(description="Reshape found airports into a flat sorted list")
    parser.add_argument("--found", default=AIRPORTS_FOUND_JSON)
    parser.add_argument("--summary", default=AIRPORTS_SUMMARY_JSON)
    parser.add_argument("--output", default=AIRPORTS_FLAT_JSON)
    parser.add_argument("--output-summary", default=AIRPORTS_FLAT_SUMMARY_JSON)
    args = parser.parse_args()

    data = load_airports(Path(args.found), Path(args.summary))
    if not data:
        raise SystemExit("Error: No airports data found. Run find_airports.py first.")

    data = sort_airports(data)
    write_json(Path(args.output), data)
    countries = {a.get("country") for a in data}
    write_json(Path(args.output_summary), {
        "total_airports": len(data),
        "total_countries": len(countries),
        "sample_airports": data[:5],
        "reshaped_at": datetime.now(timezone.utc).isoformat(),
    })

    print("\nFirst 5 airports:", file=sys.stderr)
    for a in data[:5]:
        print(f"  {a.get('airport_code')} - {a.get('airport_name')} ({a.get('city')}, {a.get('country')})", file=sys.stderr)
    print(f"Done. Wrote {args.output} with {len(data)} airports across {len(countries)} countries.")


if __name__ == "__main__":
    main()
