#!/usr/bin/env python3
"""Ask the LLM for up to ten well-known cities in each country."""

import argparse
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from config import CITIES_DELAY, CITIES_JSON, COUNTRIES_JSON, DEFAULT_PROVIDER, PROMPTS, PROVIDER_DEFAULTS
from datafiles import read_json, require_input, write_json
from llm import LLMError, call_llm, get_client, resolve_model

load_dotenv()


def parse_city_list(text: str | None) -> list[str]:
    """Split a comma-separated reply into trimmed, non-empty names."""
    if not text:
        return []
    return [c.strip() for c in text.split(",") if c.strip()]


def get_cities(client, provider: str, model: str, country: str) -> tuple[list[str], str]:
    prompt = PROMPTS["cities"].format(country=country)
    try:
        text, model = call_llm(client, prompt, model, provider)
    except LLMError as e:
        print(f"Warning: {country}: {e}", file=sys.stderr)
        return [], model
    return parse_city_list(text), model


def run(provider: str, model: str, input_path: Path, output_path: Path, delay: float) -> list[dict]:
    countries = read_json(input_path)
    client = get_client(provider)
    out = []
    for i, country in enumerate(countries, 1):
        print(f"({i}/{len(countries)}) Fetching for {country}", file=sys.stderr)
        cities, model = get_cities(client, provider, model, country)
        out.append({"country": country, "cities": cities})
        time.sleep(delay)
    write_json(output_path, out)
    print(f"Done. Wrote {output_path} with {len(out)} countries.")
    return out


def main() -> None:
    parser = argparse.ArgumentParser(description="List famous cities per country via LLM")
    parser.add_argument("--provider", default=DEFAULT_PROVIDER, choices=list(PROVIDER_DEFAULTS.keys()))
    parser.add_argument("--model", default=None, help="Model name (default depends on provider)")
    parser.add_argument("--input", default=COUNTRIES_JSON, help="JSON list of country names")
    parser.add_argument("--output", default=CITIES_JSON)
    parser.add_argument("--delay", type=float, default=CITIES_DELAY, help="Seconds between queries")
    args = parser.parse_args()

    input_path = require_input(Path(args.input))
    run(args.provider, resolve_model(args.provider, args.model), input_path, Path(args.output), args.delay)


if __name__ == "__main__":
    main()
