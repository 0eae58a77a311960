"""End-to-end run: load -> extract -> assemble.

Per-article extraction is independent, so it can run on a thread pool;
records are re-sorted by id before assembly so the table never depends on
completion order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .assembler import DEFAULT_MISSING_SOURCE, assemble
from .errors import IssueReport
from .locales import MonthTable, get_month_table
from .loader import load_articles
from .models import ArticleRecord, PipelineResult, RawArticle
from .text import build_record

logger = logging.getLogger(__name__)


def extract_records(
    articles: List[RawArticle],
    locale: Union[str, MonthTable] = "english",
    issues: Optional[IssueReport] = None,
    max_workers: int = 1,
) -> List[ArticleRecord]:
    """Build one ArticleRecord per article, ordered by id."""
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1.")
    report = issues if issues is not None else IssueReport()
    table = get_month_table(locale)

    if max_workers == 1 or len(articles) < 2:
        records = [build_record(article, table, report) for article in articles]
    else:
        # Each worker gets a private report; merged in id order afterwards.
        def _run(article: RawArticle) -> tuple[ArticleRecord, IssueReport]:
            local = IssueReport()
            return build_record(article, table, local), local

        with ThreadPoolExecutor(max_workers=min(max_workers, len(articles))) as executor:
            results = list(executor.map(_run, articles))
        results.sort(key=lambda item: item[0].id)
        records = []
        for record, local in results:
            records.append(record)
            report.issues.extend(local.issues)

    return sorted(records, key=lambda r: r.id)


def run_pipeline(
    input_dir: Path | str,
    *,
    french_outlets: Iterable[str],
    locale: Union[str, MonthTable] = "english",
    extension: str = ".rtf",
    max_workers: int = 1,
    missing_source: str = DEFAULT_MISSING_SOURCE,
) -> PipelineResult:
    """
    Turn a directory of exported articles into the corpus table.

    CorpusIOError, SchemaError and JoinError propagate. FormatError,
    DateParseError and SourceParseError end up in ``result.issues``.
    """
    report = IssueReport()
    articles = load_articles(input_dir, extension, report)
    records = extract_records(articles, locale, report, max_workers=max_workers)
    table = assemble(records, french_outlets, missing_source=missing_source)
    logger.info(
        "Pipeline finished: %d row(s), %d issue(s)", len(table), len(report)
    )
    return PipelineResult(table=table, records=records, issues=list(report))
