"""Build the wide corpus table from article records."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

import pandas as pd

from .errors import JoinError, SchemaError
from .models import ArticleRecord

logger = logging.getLogger(__name__)

BASE_COLUMNS = ("id", "date", "text")
RESERVED_COLUMNS = frozenset(BASE_COLUMNS + ("language",))
DEFAULT_MISSING_SOURCE = "unknown_source"


def _duplicates(values: Iterable[int]) -> List[int]:
    series = pd.Series(list(values), dtype="int64")
    return sorted(series[series.duplicated()].unique().tolist())


def base_frame(records: Sequence[ArticleRecord]) -> pd.DataFrame:
    """``id``, ``date`` and ``text`` columns, one row per record."""
    return pd.DataFrame(
        {
            "id": pd.Series([r.id for r in records], dtype="int64"),
            "date": pd.Series([r.date for r in records], dtype="object"),
            "text": pd.Series([r.text for r in records], dtype="object"),
        }
    )


def validate_one_hot(frame: pd.DataFrame, columns: Sequence[str]) -> None:
    """Raise SchemaError unless every row has exactly one indicator set to 1."""
    block = frame.loc[:, list(columns)]
    if not block.isin([0, 1]).all().all():
        raise SchemaError("source indicators must be 0 or 1")
    sums = block.sum(axis=1)
    bad = sums != 1
    if bad.any():
        ids = frame.loc[bad, "id"].tolist() if "id" in frame.columns else bad[bad].index.tolist()
        raise SchemaError("source indicators are not one-hot", ids=ids)


def one_hot_sources(
    records: Sequence[ArticleRecord],
    missing_source: str = DEFAULT_MISSING_SOURCE,
) -> pd.DataFrame:
    """
    Indicator matrix keyed by ``id``: one 0/1 column per distinct source.

    The column set is collected first (sorted), then each row sets its own
    column. Records without a source go under ``missing_source``.
    """
    sources = {r.source for r in records if r.source is not None}
    if missing_source in sources and any(r.source is None for r in records):
        raise SchemaError(
            f"outlet {missing_source!r} collides with the missing-source column",
            ids=[r.id for r in records if r.source in (None, missing_source)],
        )
    labels = [r.source if r.source is not None else missing_source for r in records]
    columns = sorted(set(labels))
    clashes = sorted(RESERVED_COLUMNS.intersection(columns))
    if clashes:
        raise SchemaError(f"source labels collide with reserved columns: {', '.join(clashes)}")

    position = {name: idx for idx, name in enumerate(columns)}
    matrix = [[0] * len(columns) for _ in labels]
    for row, label in zip(matrix, labels):
        row[position[label]] += 1

    indicators = pd.DataFrame(matrix, columns=columns, dtype="int64")
    indicators.insert(0, "id", pd.Series([r.id for r in records], dtype="int64"))
    validate_one_hot(indicators, columns)
    return indicators


def join_sources(base: pd.DataFrame, indicators: pd.DataFrame) -> pd.DataFrame:
    """Merge indicators onto the base columns by ``id``, one row per id."""
    for name, frame in (("articles", base), ("source indicators", indicators)):
        dupes = _duplicates(frame["id"])
        if dupes:
            raise JoinError(f"duplicate ids in {name}", ids=dupes)

    missing = sorted(set(base["id"]) ^ set(indicators["id"]))
    if missing:
        raise JoinError("ids present on only one side of the join", ids=missing)

    merged = base.merge(indicators, on="id", how="inner", validate="one_to_one")
    if len(merged) != len(base):
        raise JoinError(f"join produced {len(merged)} rows for {len(base)} articles")
    return merged


def derive_language(
    frame: pd.DataFrame,
    french_outlets: Iterable[str],
    *,
    match_tag: str = "fr",
    default_tag: str = "nl",
) -> pd.Series:
    """
    Tag rows ``match_tag`` when exactly one listed outlet column is set.

    Every other row gets ``default_tag``. This is a fixed two-way policy over
    outlet identity; it does not detect language and cannot express a third.
    """
    outlets = list(dict.fromkeys(french_outlets))
    if not outlets:
        logger.warning("No French outlets configured; every row is tagged %r", default_tag)
    absent = [name for name in outlets if name not in frame.columns]
    if absent:
        logger.info("French outlets not present in this corpus: %s", ", ".join(absent))
    present = [name for name in outlets if name in frame.columns]
    if present:
        hits = frame.loc[:, present].sum(axis=1)
    else:
        hits = pd.Series(0, index=frame.index)
    return hits.eq(1).map({True: match_tag, False: default_tag}).rename("language")


def assemble(
    records: Sequence[ArticleRecord],
    french_outlets: Iterable[str],
    *,
    missing_source: str = DEFAULT_MISSING_SOURCE,
    match_tag: str = "fr",
    default_tag: str = "nl",
    sort_by_date: bool = True,
) -> pd.DataFrame:
    """
    Return the corpus table: ``id, date, text, language`` plus source indicators.

    Rows come out in chronological order (null dates last, ties keep id order)
    unless ``sort_by_date`` is False.
    """
    ordered = sorted(records, key=lambda r: r.id)
    indicators = one_hot_sources(ordered, missing_source=missing_source)
    table = join_sources(base_frame(ordered), indicators)
    source_columns = [c for c in indicators.columns if c != "id"]
    language = derive_language(
        table, french_outlets, match_tag=match_tag, default_tag=default_tag
    )
    table.insert(3, "language", language)
    validate_one_hot(table, source_columns)

    if sort_by_date:
        table = table.sort_values(
            "date",
            key=lambda col: pd.to_datetime(col, errors="coerce"),
            kind="stable",
            na_position="last",
        ).reset_index(drop=True)
    logger.info(
        "Assembled corpus: %d row(s), %d source column(s)", len(table), len(source_columns)
    )
    return table
