#!/usr/bin/env python3
"""Turn raw LLM city lists into clean, deduplicated city names per country."""

import argparse
import re
import shutil
import sys
from pathlib import Path

from config import CITIES_BACKUP_JSON, CITIES_CLEANED_JSON, CITIES_JSON
from datafiles import read_json, require_input, write_json

MAX_CITY_LENGTH = 50
MIN_CITY_LENGTH = 2

_CLEANUPS = [
    (re.compile(r"^\d+\.\s*"), ""),
    (re.compile(r"^Sure! Here are \d+ beautiful or famous cities in .+?:\s*", re.IGNORECASE), ""),
    (re.compile(r"^Here are \d+ beautiful or famous cities in .+?:\s*", re.IGNORECASE), ""),
    (re.compile(r"\n"), " "),
    (re.compile(r"\s+"), " "),
    (re.compile(r"^and\s+", re.IGNORECASE), ""),
    (re.compile(r"\s+and\.?$", re.IGNORECASE), ""),
    (re.compile(r"[.,]+$"), ""),
]

# Filler words only count as a whole first word, so "Tokyo" and "Athens" survive
SKIP_PATTERNS = [
    re.compile(r"^(sure|here|sorry|but|there|and|or|this|that|with|from|to|in|of|for|as|on|at|by)\b", re.IGNORECASE),
    # "The" is filler unless a capitalised word follows, as in "The Hague"
    re.compile(r"^(?i:the)\b(?!\s+[A-Z])"),
    re.compile(r"territory|country|republic|kingdom|island|ocean|administration|government", re.IGNORECASE),
    re.compile(r"beautiful|famous|cities|list|cannot|provide|recognized|located", re.IGNORECASE),
    # The cities prompt asks for a bare "null" when the model has no answer
    re.compile(r"^null$", re.IGNORECASE),
]


def clean_city_name(text) -> str | None:
    """Return a plausible city name, or None for chatter and junk."""
    if not text or not isinstance(text, str):
        return None
    cleaned = text
    for pattern, repl in _CLEANUPS:
        cleaned = pattern.sub(repl, cleaned)
    cleaned = cleaned.strip()

    if len(cleaned) > MAX_CITY_LENGTH:
        return None
    if any(p.search(cleaned) for p in SKIP_PATTERNS):
        return None
    return cleaned or None


def extract_cities(items) -> list[str] | None:
    """
    Clean one country's raw list. Returns None when the model refused
    (first item mentions "sorry"), which drops the whole country.
    """
    if not isinstance(items, list):
        return []
    if items and isinstance(items[0], str) and "sorry" in items[0].lower():
        return None

    cities: list[str] = []
    for text in items:
        if not isinstance(text, str):
            continue
        if "\n" in text and "." in text:
            # A numbered list packed into one string
            for line in text.split("\n"):
                cleaned = clean_city_name(line)
                if cleaned:
                    cities.append(cleaned)
            continue
        cleaned = clean_city_name(text)
        if not cleaned:
            continue
        if "," in cleaned and "(" not in cleaned:
            for part in cleaned.split(","):
                part_cleaned = clean_city_name(part.strip())
                if part_cleaned:
                    cities.append(part_cleaned)
        else:
            cities.append(cleaned)

    return sorted({c for c in cities if len(c) >= MIN_CITY_LENGTH})


def clean_entries(data: list[dict]) -> tuple[list[dict], int]:
    """Returns (cleaned entries, number of countries removed)."""
    cleaned_data = []
    removed = 0
    for entry in data:
        cities = extract_cities(entry.get("cities"))
        if cities is None:
            removed += 1
            print(f"Removed: {entry.get('country')} (no valid cities)", file=sys.stderr)
        elif not cities:
            removed += 1
            print(f"Removed: {entry.get('country')} (no cities after cleaning)", file=sys.stderr)
        else:
            cleaned_data.append({"country": entry.get("country"), "cities": cities})
            print(f"Cleaned: {entry.get('country')} ({len(cities)} cities)", file=sys.stderr)
    return cleaned_data, removed


def main() -> None:
    parser = argparse.ArgumentParser(description="Clean LLM-generated city lists")
    parser.add_argument("--input", default=CITIES_JSON)
    parser.add_argument("--output", default=CITIES_CLEANED_JSON)
    parser.add_argument("--backup", default=CITIES_BACKUP_JSON, help="Copy of the raw input")
    args = parser.parse_args()

    input_path = require_input(Path(args.input), "Run get_cities.py first.")
    data = read_json(input_path)
    cleaned, removed = clean_entries(data)

    print("\nSummary:", file=sys.stderr)
    print(f"- Original countries: {len(data)}", file=sys.stderr)
    print(f"- Cleaned countries: {len(cleaned)}", file=sys.stderr)
    print(f"- Removed countries: {removed}", file=sys.stderr)
    print(f"- Total cities found: {sum(len(e['cities']) for e in cleaned)}", file=sys.stderr)

    write_json(Path(args.output), cleaned)
    shutil.copyfile(input_path, args.backup)
    print(f"Done. Wrote {args.output}; original backed up to {args.backup}")


if __name__ == "__main__":
    main()
