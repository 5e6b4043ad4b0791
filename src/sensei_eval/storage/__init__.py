"""Baseline file persistence."""

from sensei_eval.storage.baseline_store import (
    DEFAULT_BASELINE_FILE,
    load_baseline,
    save_baseline,
    validate_baseline_version,
)

__all__ = [
    "DEFAULT_BASELINE_FILE",
    "load_baseline",
    "save_baseline",
    "validate_baseline_version",
]
