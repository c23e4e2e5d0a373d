"""Checkpoint load/save for resume support. Per-stage sections."""

import json
from pathlib import Path

from config import CHECKPOINT_FILE


def load_checkpoint(stage: str, path: str | Path = CHECKPOINT_FILE) -> dict:
    """Load checkpoint for a given stage; returns an empty one if not found."""
    path = Path(path)
    if not path.exists():
        return {"results": {}, "model": None}
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return data.get(stage, {"results": {}, "model": None})


def save_checkpoint(stage: str, checkpoint: dict, path: str | Path = CHECKPOINT_FILE) -> None:
    """Persist checkpoint for a given stage, keeping other stages' sections."""
    path = Path(path)
    if path.exists():
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    else:
        data = {}
    data[stage] = checkpoint
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def clear_checkpoint(stage: str, path: str | Path = CHECKPOINT_FILE) -> None:
    """Drop one stage's saved results (used by --fresh)."""
    save_checkpoint(stage, {"results": {}, "model": None}, path)
