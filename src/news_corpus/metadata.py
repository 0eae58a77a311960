"""Publication date and outlet extraction from the metadata paragraph."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional, Tuple, Union

from .errors import DateParseError, IssueReport, SourceParseError
from .locales import MonthTable, fold_accents, get_month_table, month_number
from .models import RawArticle

# Day, month token (letters, optional trailing period), four-digit year.
DATE_PATTERN = re.compile(r"(?<!\d)(\d{2})\s+([^\W\d_]+\.?)\s+(\d{4})(?!\d)")
_SEPARATOR_RUN = re.compile(r"[\s\-'’]+")
_SPACE_RUN = re.compile(r"\s+")
_IDENTIFIER = re.compile(r"[A-Za-z0-9_]+")

_WEEKDAYS = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    "mon", "tue", "tues", "wed", "thu", "thur", "thurs", "fri", "sat", "sun",
    "maandag", "dinsdag", "woensdag", "donderdag", "vrijdag", "zaterdag", "zondag",
    "ma", "di", "wo", "do", "vr", "za", "zo",
    "lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche",
    "lun", "mar", "mer", "jeu", "ven", "sam", "dim",
)
_PAGE_WORDS = ("p", "pp", "page", "pages", "pag", "blz", "bladzijde", "col")
# Punctuation, digits and whitespace, plus weekday and page words.
_FILLER = re.compile(
    r"(?:[\W\d_]+|(?:%s)\b)*" % "|".join(_WEEKDAYS + _PAGE_WORDS), re.IGNORECASE
)


def _find_date(paragraph: str, table: MonthTable) -> Tuple[Optional[re.Match], Optional[int]]:
    """Return the first match whose token is a known month, else the first match."""
    first = None
    for match in DATE_PATTERN.finditer(paragraph):
        first = first or match
        month = month_number(match.group(2), table)
        if month is not None:
            return match, month
    return first, None


def extract_date(paragraph: str, locale: Union[str, MonthTable] = "english") -> date:
    """
    Parse ``<dd> <month> <yyyy>`` out of a metadata paragraph.

    Raises DateParseError when nothing matches, the month token is unknown for
    the locale, or the day does not exist in that month.
    """
    table = get_month_table(locale)
    match, month = _find_date(paragraph, table)
    if match is None:
        raise DateParseError(f"no date found in {paragraph!r}")
    if month is None:
        raise DateParseError(f"unknown month {match.group(2)!r} in {paragraph!r}")
    day, year = int(match.group(1)), int(match.group(3))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise DateParseError(f"invalid date {match.group(0)!r}: {exc}") from exc


def normalize_source(name: str) -> str:
    """Outlet label to identifier: hyphens, apostrophes and spaces to ``_``, ASCII only."""
    cleaned = _SEPARATOR_RUN.sub(" ", name.strip().strip("*").strip())
    return _SPACE_RUN.sub("_", fold_accents(cleaned).strip())


def _is_filler(segment: str) -> bool:
    """True when a segment holds nothing but a date, weekday or page reference."""
    remainder = fold_accents(DATE_PATTERN.sub(" ", segment))
    return _FILLER.fullmatch(remainder) is not None


def extract_source(paragraph: str) -> str:
    """
    Return the outlet identifier from a ``*``-delimited metadata paragraph.

    The outlet is the segment before the first ``*``. When that segment is
    only a date (optionally with a weekday or page reference), the next
    segment is used instead, so ``Le Soir * 12 jan 2020`` and
    ``Monday 12 jan 2020, p. 4 * Le Soir`` both give ``Le_Soir``. Anything
    that does not normalize to letters, digits and ``_`` is rejected.
    """
    if "*" not in paragraph:
        raise SourceParseError(f"no '*' delimiter in {paragraph!r}")
    candidate = next((s for s in paragraph.split("*") if not _is_filler(s)), None)
    if candidate is None:
        raise SourceParseError(f"no outlet name around '*' in {paragraph!r}")
    source = normalize_source(candidate)
    if not _IDENTIFIER.fullmatch(source) or not re.search(r"[A-Za-z]", source):
        raise SourceParseError(f"{candidate.strip()!r} is not an outlet name in {paragraph!r}")
    return source


def extract_metadata(
    article: RawArticle,
    locale: Union[str, MonthTable] = "english",
    issues: Optional[IssueReport] = None,
) -> Tuple[Optional[date], Optional[str]]:
    """
    Return ``(date, source)`` for an article.

    Parse failures are recorded in ``issues`` and come back as None so the row
    keeps its place in the table.
    """
    report = issues if issues is not None else IssueReport()
    line = article.metadata_line
    published: Optional[date] = None
    source: Optional[str] = None

    try:
        published = extract_date(line, locale)
    except DateParseError as exc:
        exc.position = article.position
        report.record(exc, path=article.path)

    try:
        source = extract_source(line)
    except SourceParseError as exc:
        exc.position = article.position
        report.record(exc, path=article.path)

    return published, source
