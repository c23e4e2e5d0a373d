#!/usr/bin/env python3
"""Generate an HTML report of the OpenFlights correction pass for manual review."""

import argparse
import html
from collections import Counter, defaultdict
from pathlib import Path

from config import AIRPORTS_CORRECTED_JSON, CORRECTIONS_REPORT_HTML
from datafiles import read_json, require_input
from matching import MatchStrategy

STATUSES = ("no_correction_needed", "corrected", "no_match")
STRATEGIES = [s.value for s in MatchStrategy] + ["none"]


def _friendly_name(key: str) -> str:
    """Turn 'exact_name_country' into 'Exact Name Country'."""
    return key.replace("_", " ").title()


def _changed_field(correction: str) -> str:
    """'ICAO: XXXX → KLAX' -> 'ICAO'."""
    return correction.split(":", 1)[0].strip()


def compute_stats(records: list[dict], sample_size: int = 20) -> dict:
    total = len(records)
    status_counts = Counter(r.get("correction_status") for r in records)

    # strategy -> status -> count
    by_strategy: dict[str, Counter] = defaultdict(Counter)
    for r in records:
        by_strategy[r.get("match_type") or "none"][r.get("correction_status")] += 1

    field_counts: Counter = Counter()
    for r in records:
        for correction in r.get("corrections") or []:
            field_counts[_changed_field(correction)] += 1

    per_status = {
        s: {"count": status_counts[s], "pct": status_counts[s] / total * 100 if total else 0}
        for s in STATUSES
    }
    strategies = []
    for name in STRATEGIES:
        counts = by_strategy.get(name, Counter())
        n = sum(counts.values())
        strategies.append({
            "strategy": name,
            "count": n,
            "corrected": counts["corrected"],
            "unchanged": counts["no_correction_needed"],
            "correction_rate": counts["corrected"] / n * 100 if n else 0,
        })

    samples = [r for r in records if r.get("correction_status") == "corrected"][:sample_size]
    return {
        "total": total,
        "per_status": per_status,
        "strategies": strategies,
        "fields": field_counts.most_common(),
        "samples": samples,
    }


# ---------------------------------------------------------------------------
# HTML generation
# ---------------------------------------------------------------------------

CARD_COLORS = {"no_correction_needed": "#10b981", "corrected": "#f59e0b", "no_match": "#ef4444"}


def _esc(text) -> str:
    return html.escape(str(text))


def _render_html(stats: dict) -> str:
    parts: list[str] = []

    parts.append(f"""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Airport Corrections Report</title>
<style>
  *, *::before, *::after {{ box-sizing: border-box; }}
  body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
         margin: 0; padding: 2rem; background: #f8fafc; color: #1e293b; line-height: 1.6; }}
  h1 {{ margin: 0 0 .25rem; font-size: 1.8rem; }}
  .subtitle {{ color: #64748b; margin-bottom: 2rem; }}
  h2 {{ margin: 2.5rem 0 1rem; font-size: 1.3rem; border-bottom: 2px solid #e2e8f0; padding-bottom: .4rem; }}
  .cards {{ display: flex; gap: 1rem; flex-wrap: wrap; margin-bottom: 1.5rem; }}
  .card {{ border-radius: 10px; padding: 1.25rem 1.5rem; color: #fff; min-width: 200px; flex: 1; }}
  .card .label {{ font-size: .85rem; opacity: .85; margin-bottom: .25rem; }}
  .card .big {{ font-size: 2rem; font-weight: 700; }}
  .card .detail {{ font-size: .8rem; opacity: .8; margin-top: .35rem; }}
  table {{ border-collapse: collapse; width: 100%; margin-bottom: 1.5rem; background: #fff;
           border-radius: 8px; overflow: hidden; box-shadow: 0 1px 3px rgba(0,0,0,.08); }}
  th, td {{ padding: .65rem 1rem; text-align: left; }}
  th {{ background: #f1f5f9; font-weight: 600; font-size: .85rem; color: #475569; text-transform: uppercase; letter-spacing: .03em; }}
  tr:nth-child(even) td {{ background: #f8fafc; }}
  td {{ font-size: .9rem; border-top: 1px solid #e2e8f0; }}
  .num {{ text-align: right; font-variant-numeric: tabular-nums; }}
  .tag {{ display: inline-block; background: #e2e8f0; color: #334155; border-radius: 4px;
          padding: .15rem .45rem; font-size: .78rem; margin: .15rem .2rem .15rem 0; }}
</style>
</head>
<body>
<h1>Airport Corrections Report</h1>
<p class="subtitle">{stats['total']:,} airports checked against OpenFlights</p>
""")

    # --- Status cards ---
    parts.append("<h2>Correction Status</h2>\n<div class='cards'>")
    for status in STATUSES:
        s = stats["per_status"][status]
        parts.append(f"""\
<div class="card" style="background:{CARD_COLORS[status]}">
  <div class="label">{_esc(_friendly_name(status))}</div>
  <div class="big">{s['count']:,}</div>
  <div class="detail">{s['pct']:.1f}% of airports</div>
</div>""")
    parts.append("</div>")

    # --- Strategy table ---
    parts.append("<h2>Match Strategies</h2>\n<table><tr><th>Strategy</th><th class='num'>Matched</th>"
                 "<th class='num'>Corrected</th><th class='num'>Unchanged</th><th class='num'>Correction Rate</th></tr>")
    for s in stats["strategies"]:
        parts.append(f"<tr><td>{_esc(_friendly_name(s['strategy']))}</td><td class='num'>{s['count']:,}</td>"
                     f"<td class='num'>{s['corrected']:,}</td><td class='num'>{s['unchanged']:,}</td>"
                     f"<td class='num'>{s['correction_rate']:.1f}%</td></tr>")
    parts.append("</table>")

    # --- Changed fields ---
    if stats["fields"]:
        parts.append("<h2>Changed Fields</h2>\n<table><tr><th>Field</th><th class='num'>Changes</th></tr>")
        for field_name, n in stats["fields"]:
            parts.append(f"<tr><td>{_esc(field_name)}</td><td class='num'>{n:,}</td></tr>")
        parts.append("</table>")

    # --- Samples ---
    if stats["samples"]:
        parts.append(f"<h2>Sample Corrections ({len(stats['samples'])})</h2>\n<table><tr><th>Before</th>"
                     "<th>After</th><th>Strategy</th><th>Changes</th></tr>")
        for r in stats["samples"]:
            before = r.get("original_data") or {}
            tags = "".join(f"<span class='tag'>{_esc(c)}</span>" for c in r.get("corrections") or [])
            parts.append(f"<tr><td><strong>{_esc(before.get('airport_code'))}</strong> {_esc(before.get('airport_name'))}</td>"
                         f"<td><strong>{_esc(r.get('airport_code'))}</strong> {_esc(r.get('airport_name'))}</td>"
                         f"<td>{_esc(_friendly_name(r.get('match_type') or 'none'))}</td>"
                         f"<td>{tags or '&mdash;'}</td></tr>")
        parts.append("</table>")

    parts.append("</body></html>")
    return "\n".join(parts)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate HTML report of OpenFlights corrections")
    parser.add_argument("--input", default=AIRPORTS_CORRECTED_JSON, help="Output of correct_airports.py")
    parser.add_argument("--output", default=CORRECTIONS_REPORT_HTML, help="Output HTML path")
    parser.add_argument("--samples", type=int, default=20, help="Number of sample corrections to show")
    args = parser.parse_args()

    input_path = require_input(Path(args.input), "Run correct_airports.py first.")
    records = read_json(input_path)
    if not records:
        raise SystemExit(f"No airports found in {input_path}")

    stats = compute_stats(records, sample_size=args.samples)
    out = Path(args.output)
    out.write_text(_render_html(stats), encoding="utf-8")
    print(f"Report written to {out}  ({stats['total']:,} airports, {stats['per_status']['corrected']['count']:,} corrected)")


if __name__ == "__main__":
    main()
