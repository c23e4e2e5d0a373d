"""JSON file helpers shared by the pipeline scripts."""

import json
import sys
from pathlib import Path


def require_input(path: Path, hint: str | None = None) -> Path:
    """Exit with an error if a stage's input file is missing."""
    path = Path(path)
    if not path.exists():
        print(f"Error: Input file not found: {path}", file=sys.stderr)
        if hint:
            print(hint, file=sys.stderr)
        sys.exit(1)
    return path


def read_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def pct(n: int, total: int) -> str:
    """Share of total as "12.3%" (0.0% for an empty total)."""
    return f"{n / total * 100:.1f}%" if total else "0.0%"
