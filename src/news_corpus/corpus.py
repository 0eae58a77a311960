"""Column contract of the corpus table handed to downstream libraries."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from jsonschema import Draft202012Validator, FormatChecker
from jsonschema.exceptions import ValidationError

from .assembler import RESERVED_COLUMNS
from .errors import JoinError, SchemaError

PRESERVED_COLUMNS = ("id", "date", "text")


def default_schema_path() -> Path:
    """Return the path to the bundled corpus record schema."""
    return Path(__file__).resolve().parent / "schemas" / "corpus_record.json"


@lru_cache(maxsize=1)
def load_schema(path: Optional[Path | str] = None) -> Dict[str, Any]:
    """JSON Schema one exported corpus row must satisfy; parsed once per path."""
    schema_path = Path(path) if path else default_schema_path()
    return json.loads(schema_path.read_text(encoding="utf-8"))


def format_errors(errors: Iterable[ValidationError]) -> str:
    """Violations of one row as ``column: message`` pairs, ordered by column."""
    by_column = sorted(
        (str(err.absolute_path[0]) if err.absolute_path else "(row)", err.message)
        for err in errors
    )
    return "; ".join(f"{column}: {message}" for column, message in by_column)


def feature_columns(table: pd.DataFrame) -> List[str]:
    """Every column other than id, date, text and language."""
    return [c for c in table.columns if c not in RESERVED_COLUMNS]


def validate_corpus(table: pd.DataFrame) -> pd.DataFrame:
    """
    Check the shape the downstream corpus constructor expects.

    Raises SchemaError if id/text/date are missing, ids repeat, or any feature
    value is non-numeric or outside [0, 1].
    """
    missing = [c for c in PRESERVED_COLUMNS if c not in table.columns]
    if missing:
        raise SchemaError(f"corpus table lacks columns: {', '.join(missing)}")
    if not pd.api.types.is_integer_dtype(table["id"]):
        raise SchemaError("id column must hold integers")
    dupes = table.loc[table["id"].duplicated(), "id"].tolist()
    if dupes:
        raise SchemaError("id values must be unique", ids=dupes)
    if not table["text"].map(lambda v: isinstance(v, str)).all():
        raise SchemaError("text column must hold strings")
    for column in feature_columns(table):
        values = table[column]
        if not pd.api.types.is_numeric_dtype(values):
            raise SchemaError(f"feature column {column!r} is not numeric")
        out_of_range = ~values.between(0, 1)
        if out_of_range.any():
            raise SchemaError(
                f"feature column {column!r} has values outside [0, 1]",
                ids=table.loc[out_of_range, "id"].tolist(),
            )
    return table


def replace_features(table: pd.DataFrame, features: pd.DataFrame) -> pd.DataFrame:
    """
    Return a new table with the feature columns swapped for ``features``.

    ``features`` is keyed by ``id`` and must cover exactly the table's ids.
    id/date/text (and language, when present) carry over untouched and the
    row order of ``table`` is kept.
    """
    if "id" not in features.columns:
        raise JoinError("feature frame has no id column")
    dupes = features.loc[features["id"].duplicated(), "id"].tolist()
    if dupes:
        raise JoinError("duplicate ids in feature frame", ids=dupes)
    mismatched = sorted(set(table["id"]) ^ set(features["id"]))
    if mismatched:
        raise JoinError("feature ids do not match corpus ids", ids=mismatched)
    clashes = [c for c in features.columns if c in RESERVED_COLUMNS and c != "id"]
    if clashes:
        raise SchemaError(f"feature frame redefines reserved columns: {', '.join(clashes)}")

    kept = [c for c in table.columns if c in RESERVED_COLUMNS]
    replaced = table.loc[:, kept].merge(features, on="id", how="left", validate="one_to_one")
    replaced.index = table.index
    return validate_corpus(replaced)


def to_records(table: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows as plain dicts with ISO dates and native Python numbers."""
    records = []
    for row in table.to_dict(orient="records"):
        plain: Dict[str, Any] = {}
        for key, value in row.items():
            if key == "date":
                plain[key] = None if pd.isna(value) else pd.Timestamp(value).date().isoformat()
            elif hasattr(value, "item"):
                plain[key] = value.item()
            else:
                plain[key] = value
        records.append(plain)
    return records


def validate_records(
    records: List[Dict[str, Any]], schema: Optional[Dict[str, Any]] = None
) -> List[Dict[str, Any]]:
    """
    Validate exported records against the corpus record schema.

    Raises SchemaError with a readable message if validation fails.
    """
    schema_dict = schema or load_schema()
    validator = Draft202012Validator(schema_dict, format_checker=FormatChecker())
    for record in records:
        errors = list(validator.iter_errors(record))
        if errors:
            raise SchemaError(
                f"record {record.get('id')} failed validation: {format_errors(errors)}"
            )
    return records
