#!/usr/bin/env python3
"""
Cross-check ICAO-enriched airports against OpenFlights and correct codes,
cities and names where the matched OpenFlights record disagrees.
"""

import argparse
import sys
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from config import (
    AIRPORTS_CORRECTED_JSON,
    AIRPORTS_WITH_ICAO_JSON,
    CORRECTION_SUMMARY_JSON,
    CORRECTIONS_JSON,
    OPENFLIGHTS_AIRPORTS_JSON,
)
from datafiles import pct, read_json, require_input, write_json
from matching import MatchStrategy
from openflights import load_references
from reconcile import Corrected, NoCorrectionNeeded, Outcome, Unverified, reconcile_all
from records import candidate_from_dict, candidate_identity, candidate_to_dict


def outcome_to_dict(outcome: Outcome) -> dict:
    """Flat pipeline record for one outcome, with the audit trail for corrections."""
    if isinstance(outcome, Unverified):
        return {
            **candidate_to_dict(outcome.record),
            "unverified": True,
            "correction_status": "no_match",
            "match_type": "none",
        }
    if isinstance(outcome, NoCorrectionNeeded):
        return {
            **candidate_to_dict(outcome.record),
            "correction_status": "no_correction_needed",
            "match_type": outcome.strategy.value,
        }
    ref = outcome.reference
    data = candidate_to_dict(outcome.updated)
    if any(c.field == "ICAO" for c in outcome.changes):
        data["icao_source"] = "openflights" if outcome.updated.icao_code else "not_found"
    return {
        **data,
        "correction_status": "corrected",
        "match_type": outcome.strategy.value,
        "corrections": [str(c) for c in outcome.changes],
        "original_data": candidate_identity(outcome.original),
        "openflights_data": {
            "id": ref.id,
            "latitude": ref.latitude,
            "longitude": ref.longitude,
            "altitude": ref.altitude,
        },
    }


def compute_stats(outcomes: list[Outcome]) -> dict:
    strategies = Counter(o.strategy for o in outcomes if not isinstance(o, Unverified))
    return {
        "total": len(outcomes),
        "exact_name_match": strategies[MatchStrategy.EXACT_NAME] + strategies[MatchStrategy.EXACT_NAME_COUNTRY],
        "partial_name_match": strategies[MatchStrategy.PARTIAL_NAME],
        "iata_match": strategies[MatchStrategy.IATA],
        "corrected": sum(1 for o in outcomes if isinstance(o, Corrected)),
        "no_match": sum(1 for o in outcomes if isinstance(o, Unverified)),
    }


def print_outcome(i: int, total: int, outcome: Outcome) -> None:
    record = outcome.original if isinstance(outcome, Corrected) else outcome.record
    print(f"[{i}/{total}] Processing: {record.iata_code} - {record.name}", file=sys.stderr)
    print(f"  {record.city}, {record.country}", file=sys.stderr)
    if isinstance(outcome, Unverified):
        print("  No OpenFlights match found - marking as unverified", file=sys.stderr)
        return
    ref = outcome.reference
    print(f"  Found match ({outcome.strategy.value}): {ref.iata_code}/{ref.icao_code} - {ref.name}", file=sys.stderr)
    if isinstance(outcome, Corrected):
        print("  Corrections needed:", file=sys.stderr)
        for change in outcome.changes:
            print(f"     {change}", file=sys.stderr)
    else:
        print("  No corrections needed", file=sys.stderr)


def print_report(stats: dict, records: list[dict]) -> None:
    total = stats["total"]
    print("\n=== CORRECTION REPORT ===", file=sys.stderr)
    print(f"Total airports processed: {total}", file=sys.stderr)
    print(f"Exact name matches: {stats['exact_name_match']} ({pct(stats['exact_name_match'], total)})", file=sys.stderr)
    print(f"Partial name matches: {stats['partial_name_match']} ({pct(stats['partial_name_match'], total)})", file=sys.stderr)
    print(f"IATA code matches: {stats['iata_match']} ({pct(stats['iata_match'], total)})", file=sys.stderr)
    print(f"Total corrections made: {stats['corrected']} ({pct(stats['corrected'], total)})", file=sys.stderr)
    print(f"Unverified (no match): {stats['no_match']} ({pct(stats['no_match'], total)})", file=sys.stderr)

    examples = [r for r in records if r["correction_status"] == "corrected"][:5]
    if examples:
        print("\nEXAMPLE CORRECTIONS:", file=sys.stderr)
    for r in examples:
        print(f"\n{r['original_data']['airport_code']} → {r['airport_code']} ({r['airport_name']})", file=sys.stderr)
        for correction in r["corrections"]:
            print(f"  {correction}", file=sys.stderr)


def build_summary(stats: dict, records: list[dict], sample_size: int = 10) -> dict:
    corrected = [r for r in records if r["correction_status"] == "corrected"]
    return {
        "statistics": stats,
        "total_airports": len(records),
        "corrections_made": len(corrected),
        "unverified_count": sum(1 for r in records if r.get("unverified")),
        "processed_at": datetime.now(timezone.utc).isoformat(),
        "sample_corrections": [
            {
                "original": r["original_data"],
                "corrected": {k: r[k] for k in ("airport_code", "icao_code", "airport_name", "city", "country")},
                "corrections": r["corrections"],
            }
            for r in corrected[:sample_size]
        ],
    }


def run(input_path: Path, reference_path: Path, output_path: Path, corrections_path: Path, summary_path: Path) -> list[dict]:
    candidates = [candidate_from_dict(a) for a in read_json(input_path)]
    references = load_references(reference_path)
    print(f"Loaded {len(candidates)} airports from {input_path}", file=sys.stderr)
    print(f"Loaded {len(references)} airports from OpenFlights", file=sys.stderr)

    outcomes = reconcile_all(candidates, references)
    for i, outcome in enumerate(outcomes, 1):
        print_outcome(i, len(outcomes), outcome)

    records = [outcome_to_dict(o) for o in outcomes]
    stats = compute_stats(outcomes)
    print_report(stats, records)

    write_json(output_path, records)
    write_json(corrections_path, [r for r in records if r["correction_status"] == "corrected"])
    write_json(summary_path, build_summary(stats, records))
    print(f"Done. Wrote {output_path} ({stats['corrected']} corrected, {stats['no_match']} unverified).")
    return records


def main() -> None:
    parser = argparse.ArgumentParser(description="Correct airport records against OpenFlights")
    parser.add_argument("--input", default=AIRPORTS_WITH_ICAO_JSON)
    parser.add_argument("--reference", default=OPENFLIGHTS_AIRPORTS_JSON, help="OpenFlights JSON from openflights.py")
    parser.add_argument("--output", default=AIRPORTS_CORRECTED_JSON)
    parser.add_argument("--corrections", default=CORRECTIONS_JSON)
    parser.add_argument("--summary", default=CORRECTION_SUMMARY_JSON)
    args = parser.parse_args()

    input_path = require_input(Path(args.input), "Run add_icao_codes.py first.")
    reference_path = require_input(Path(args.reference), "Run openflights.py first.")
    run(input_path, reference_path, Path(args.output), Path(args.corrections), Path(args.summary))


if __name__ == "__main__":
    main()
