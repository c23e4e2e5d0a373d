#!/usr/bin/env python3
"""
Download the OpenFlights airport database and write the reference datasets
used by ICAO enrichment and the correction pass.

airports.dat columns:
  id,name,city,country,iata,icao,latitude,longitude,altitude,timezone,dst,tz_database,type,source
"""

import argparse
import csv
import io
import sys
from datetime import datetime, timezone
from pathlib import Path

import requests

from config import (
    HTTP_TIMEOUT,
    OPENFLIGHTS_AIRPORTS_JSON,
    OPENFLIGHTS_ALL_JSON,
    OPENFLIGHTS_LOOKUP_JSON,
    OPENFLIGHTS_SUMMARY_JSON,
    OPENFLIGHTS_URL,
    OPENFLIGHTS_WITH_CODES_JSON,
    USER_AGENT,
)
from datafiles import pct, read_json, require_input, write_json
from records import ReferenceRecord, clean_value, reference_from_dict, reference_to_dict

MIN_FIELDS = 13


def download(url: str = OPENFLIGHTS_URL) -> str:
    """Fetch a raw .dat file; raises requests.RequestException on failure."""
    print(f"Downloading {url}...", file=sys.stderr)
    response = requests.get(url, timeout=HTTP_TIMEOUT, headers={"User-Agent": USER_AGENT})
    response.raise_for_status()
    return response.text


def _to_int(value: str | None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: str | None) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_row(fields: list[str]) -> ReferenceRecord | None:
    if len(fields) < MIN_FIELDS:
        return None
    f = [clean_value(v) for v in fields]
    return ReferenceRecord(
        id=_to_int(f[0]),
        name=f[1],
        city=f[2],
        country=f[3],
        iata_code=f[4],
        icao_code=f[5],
        latitude=_to_float(f[6]),
        longitude=_to_float(f[7]),
        altitude=_to_int(f[8]),
        timezone=_to_float(f[9]),
        dst=f[10],
        tz_database=f[11],
        type=f[12],
        source=f[13] if len(f) > 13 else None,
    )


def parse_airports(text: str) -> list[ReferenceRecord]:
    """Parse airports.dat content, skipping short or blank lines."""
    airports = []
    for fields in csv.reader(io.StringIO(text)):
        if not fields:
            continue
        record = parse_row(fields)
        if record is not None:
            airports.append(record)
    return airports


def parse_iata_to_icao(text: str) -> dict[str, dict]:
    """IATA -> {icao, name, city, country}, only for well-formed 3/4 letter pairs."""
    mapping: dict[str, dict] = {}
    for fields in csv.reader(io.StringIO(text)):
        if len(fields) < 6:
            continue
        iata, icao = clean_value(fields[4]), clean_value(fields[5])
        if not iata or not icao or len(iata) != 3 or len(icao) != 4:
            continue
        mapping[iata.upper()] = {
            "icao": icao.upper(),
            "name": clean_value(fields[1]),
            "city": clean_value(fields[2]),
            "country": clean_value(fields[3]),
        }
    return mapping


def compute_stats(airports: list[ReferenceRecord]) -> dict:
    stats = {"total": len(airports), "with_both_codes": 0, "iata_only": 0, "icao_only": 0, "neither_code": 0}
    for a in airports:
        if a.iata_code and a.icao_code:
            stats["with_both_codes"] += 1
        elif a.iata_code:
            stats["iata_only"] += 1
        elif a.icao_code:
            stats["icao_only"] += 1
        else:
            stats["neither_code"] += 1
    return stats


def build_datasets(airports: list[ReferenceRecord]) -> dict:
    with_codes = [a for a in airports if a.iata_code and a.icao_code]
    airports_only = [a for a in with_codes if a.type == "airport"]
    return {
        "all": airports,
        "with_both_codes": with_codes,
        "airports_only": airports_only,
        "large_airports": [a for a in airports_only if "international" in (a.name or "").lower()],
        "iata_to_icao": {a.iata_code: a.icao_code for a in with_codes},
    }


def load_references(path: Path) -> list[ReferenceRecord]:
    return [reference_from_dict(item) for item in read_json(path)]


def _write_json(path: Path, data) -> None:
    write_json(path, data)
    print(f"Saved {path}", file=sys.stderr)


def _to_dicts(records: list[ReferenceRecord]) -> list[dict]:
    return [reference_to_dict(r) for r in records]


def save_datasets(datasets: dict, stats: dict, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    _write_json(output_dir / OPENFLIGHTS_ALL_JSON, _to_dicts(datasets["all"]))
    _write_json(output_dir / OPENFLIGHTS_WITH_CODES_JSON, _to_dicts(datasets["with_both_codes"]))
    _write_json(output_dir / OPENFLIGHTS_AIRPORTS_JSON, _to_dicts(datasets["airports_only"]))
    _write_json(output_dir / OPENFLIGHTS_LOOKUP_JSON, datasets["iata_to_icao"])
    _write_json(output_dir / OPENFLIGHTS_SUMMARY_JSON, {
        "statistics": stats,
        "total_airports": len(datasets["all"]),
        "airports_with_both_codes": len(datasets["with_both_codes"]),
        "airports_only": len(datasets["airports_only"]),
        "large_airports": len(datasets["large_airports"]),
        "lookup_table_size": len(datasets["iata_to_icao"]),
        "downloaded_at": datetime.now(timezone.utc).isoformat(),
        "sample_airports": _to_dicts(datasets["with_both_codes"][:10]),
    })


def print_report(stats: dict, airports: list[ReferenceRecord]) -> None:
    total = stats["total"]
    print("\nOPENFLIGHTS DATA STATISTICS:", file=sys.stderr)
    print(f"Total airports: {total}", file=sys.stderr)
    print(f"  With both IATA & ICAO: {stats['with_both_codes']} ({pct(stats['with_both_codes'], total)})", file=sys.stderr)
    print(f"  IATA only: {stats['iata_only']} ({pct(stats['iata_only'], total)})", file=sys.stderr)
    print(f"  ICAO only: {stats['icao_only']} ({pct(stats['icao_only'], total)})", file=sys.stderr)
    print(f"  Neither code: {stats['neither_code']} ({pct(stats['neither_code'], total)})", file=sys.stderr)
    samples = [a for a in airports if a.iata_code and a.icao_code][:5]
    for a in samples:
        print(f"  {a.iata_code}/{a.icao_code} - {a.name} ({a.city}, {a.country})", file=sys.stderr)


def main() -> None:
    parser = argparse.ArgumentParser(description="Download OpenFlights airports and build reference datasets")
    parser.add_argument("--url", default=OPENFLIGHTS_URL, help="airports.dat URL")
    parser.add_argument("--input", default=None, help="Use a local airports.dat instead of downloading")
    parser.add_argument("--output-dir", default=".", help="Directory for the JSON datasets")
    args = parser.parse_args()

    if args.input:
        text = require_input(Path(args.input)).read_text(encoding="utf-8")
    else:
        try:
            text = download(args.url)
        except requests.RequestException as e:
            print(f"Error: Failed to download OpenFlights data: {e}", file=sys.stderr)
            sys.exit(1)

    airports = parse_airports(text)
    stats = compute_stats(airports)
    print_report(stats, airports)
    save_datasets(build_datasets(airports), stats, Path(args.output_dir))
    print(f"Done. Processed {len(airports)} OpenFlights airports into {args.output_dir}")


if __name__ == "__main__":
    main()
