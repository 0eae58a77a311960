"""Writers for the corpus table and the issue report."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Iterable

import pandas as pd

from .corpus import to_records, validate_corpus, validate_records
from .errors import RunIssue

TABLE_SUFFIXES = (".csv", ".json", ".parquet")


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_table(table: pd.DataFrame, path: Path) -> Path:
    """Write the corpus table; the format follows the file suffix."""
    suffix = path.suffix.lower()
    if suffix not in TABLE_SUFFIXES:
        raise ValueError(f"output must end in one of: {', '.join(TABLE_SUFFIXES)}")
    validate_corpus(table)
    _ensure_parent(path)

    if suffix == ".csv":
        table.to_csv(path, index=False, encoding="utf-8")
    elif suffix == ".json":
        records = validate_records(to_records(table))
        path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
    else:
        table.to_parquet(path, index=False)
    return path


def write_report(issues: Iterable[RunIssue], path: Path) -> Path:
    """Write recoverable issues as a JSON list."""
    _ensure_parent(path)
    payload = [dataclasses.asdict(issue) for issue in issues]
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
