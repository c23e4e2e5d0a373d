#!/usr/bin/env python3
"""
Re-apply verified ICAO fixes and flag LLM-sourced ICAO codes whose regional
prefix does not fit the airport's country.
"""

import argparse
import sys
from pathlib import Path

from config import AIRPORTS_CORRECTED_JSON, AIRPORTS_VALIDATED_JSON, ICAO_REGION_PREFIXES, SUSPICIOUS_ICAO_JSON, VALIDATION_ICAO_CORRECTIONS
from datafiles import pct, read_json, require_input, write_json

SOURCE_KEYS = ("manual_correction", "known_mapping", "openflights", "wikipedia", "llm", "not_found")


def expected_regions(icao: str) -> list[str] | None:
    """Regions for the longest known prefix of icao (2 letters, then 1)."""
    code = icao.upper()
    return ICAO_REGION_PREFIXES.get(code[:2]) or ICAO_REGION_PREFIXES.get(code[:1])


def country_fits(country: str | None, regions: list[str]) -> bool:
    if not country or not isinstance(country, str):
        return False
    country = country.lower()
    return any(r.lower() in country or country in r.lower() for r in regions)


def apply_corrections(airport: dict) -> dict | None:
    """Corrected copy of airport, or None when no fix applies."""
    fixed = VALIDATION_ICAO_CORRECTIONS.get(str(airport.get("airport_code") or "").upper())
    if not fixed or airport.get("icao_code") == fixed:
        return None
    return {**airport, "icao_code": fixed, "icao_source": "manual_correction"}


def check_suspicious(airport: dict) -> dict | None:
    icao = airport.get("icao_code")
    if not icao or not isinstance(icao, str) or airport.get("icao_source") != "llm":
        return None
    regions = expected_regions(icao)
    if not regions or country_fits(airport.get("country"), regions):
        return None
    return {
        "airport": f"{airport.get('airport_code')} ({airport.get('airport_name')})",
        "country": airport.get("country"),
        "icao": icao,
        "expected_region": ", ".join(regions),
        "confidence": airport.get("confidence"),
    }


def validate(airports: list[dict]) -> tuple[list[dict], list[dict], int]:
    """(validated airports, suspicious entries, corrections made)."""
    validated, suspicious = [], []
    corrections = 0
    for airport in airports:
        fixed = apply_corrections(airport)
        if fixed:
            print(f"CORRECTED: {airport.get('airport_code')} {airport.get('icao_code')} → {fixed['icao_code']} ({airport.get('airport_name')})", file=sys.stderr)
            airport = fixed
            corrections += 1
        flagged = check_suspicious(airport)
        if flagged:
            suspicious.append(flagged)
        validated.append(airport)
    return validated, suspicious, corrections


def compute_stats(airports: list[dict], suspicious: list[dict], corrections: int) -> dict:
    return {
        "total": len(airports),
        "with_icao": sum(1 for a in airports if a.get("icao_code")),
        "by_source": {s: sum(1 for a in airports if a.get("icao_source") == s) for s in SOURCE_KEYS},
        "corrections_made": corrections,
        "suspicious_count": len(suspicious),
    }


def print_report(stats: dict, suspicious: list[dict]) -> None:
    for item in suspicious[:10]:
        print(f"? {item['airport']} in {item['country']}", file=sys.stderr)
        print(f"   ICAO: {item['icao']} (expected region: {item['expected_region']})", file=sys.stderr)
        print(f"   Confidence: {item['confidence']}", file=sys.stderr)
    if len(suspicious) > 10:
        print(f"... and {len(suspicious) - 10} more", file=sys.stderr)

    total = stats["total"]
    print("\nVALIDATION SUMMARY:", file=sys.stderr)
    print(f"Total airports: {total}", file=sys.stderr)
    print(f"With ICAO codes: {stats['with_icao']} ({pct(stats['with_icao'], total)})", file=sys.stderr)
    for source, n in stats["by_source"].items():
        print(f"  {source}: {n}", file=sys.stderr)
    print(f"Corrections made: {stats['corrections_made']}", file=sys.stderr)
    print(f"Suspicious codes: {stats['suspicious_count']}", file=sys.stderr)


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate ICAO codes against regional prefixes")
    parser.add_argument("--input", default=AIRPORTS_CORRECTED_JSON)
    parser.add_argument("--output", default=AIRPORTS_VALIDATED_JSON)
    parser.add_argument("--suspicious", default=SUSPICIOUS_ICAO_JSON)
    args = parser.parse_args()

    input_path = require_input(Path(args.input), "Run correct_airports.py first.")
    validated, suspicious, corrections = validate(read_json(input_path))
    stats = compute_stats(validated, suspicious, corrections)
    print_report(stats, suspicious)

    write_json(Path(args.output), validated)
    write_json(Path(args.suspicious), suspicious)
    print(f"Done. Wrote {args.output} ({corrections} corrections, {len(suspicious)} suspicious codes).")


if __name__ == "__main__":
    main()
