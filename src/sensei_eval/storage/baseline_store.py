"""JSON file storage for baseline files.

Baselines are committed next to the prompts they cover and rewritten
wholesale on every recording. Writes are atomic (write to .tmp, then
rename) to avoid leaving a half-written baseline behind.
"""

from __future__ import annotations

import json
from pathlib import Path

from sensei_eval.errors import BaselineVersionError
from sensei_eval.models.baseline import BASELINE_VERSION, BaselineFile

DEFAULT_BASELINE_FILE = "sensei-eval.baseline.json"


def validate_baseline_version(baseline: BaselineFile) -> None:
    """Raise BaselineVersionError unless the file uses the current format."""
    if baseline.version != BASELINE_VERSION:
        raise BaselineVersionError(
            f"Unsupported baseline version {baseline.version} "
            f"(expected {BASELINE_VERSION}). Re-run 'sensei-eval baseline' to regenerate it."
        )


def save_baseline(baseline: BaselineFile, path: Path) -> Path:
    """Write a baseline as pretty-printed JSON.

    Args:
        baseline: The baseline to persist.
        path: Destination file; parent directories are created.

    Returns:
        The resolved path written to.
    """
    path = path.resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = baseline.model_dump(mode="json")
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)
    return path


def load_baseline(path: Path) -> BaselineFile:
    """Load and validate a baseline file.

    Raises:
        FileNotFoundError: If no file exists at *path*.
        pydantic.ValidationError: If the file does not match the schema.
        BaselineVersionError: If the format version is unsupported.
    """
    content = path.read_text(encoding="utf-8")
    baseline = BaselineFile.model_validate_json(content)
    validate_baseline_version(baseline)
    return baseline
