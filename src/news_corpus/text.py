"""Body extraction and the text-cleaning chain."""

from __future__ import annotations

import re
import string
from typing import Optional, Union

from .errors import IssueReport
from .locales import MonthTable, strip_accents
from .metadata import extract_metadata
from .models import ArticleRecord, RawArticle

# Title, metadata line, byline, summary.
HEADER_PARAGRAPHS = 4

_DIGITS = re.compile(r"\d+")
_PUNCTUATION = re.compile(f"[{re.escape(string.punctuation)}]+")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def extract_body(article: RawArticle) -> str:
    """Join every paragraph after the header block with single spaces."""
    return " ".join(article.paragraphs[HEADER_PARAGRAPHS:])


def normalize_text(text: str) -> str:
    """
    Lowercase, strip accents, digits and punctuation, collapse whitespace.

    Punctuation is deleted (not replaced) before the non-alphanumeric sweep,
    and whitespace collapses last. The output is a fixed point of this chain.
    """
    text = text.lower()
    text = strip_accents(text)
    text = _DIGITS.sub("", text)
    text = _PUNCTUATION.sub("", text)
    text = _NON_ALNUM.sub(" ", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def build_record(
    article: RawArticle,
    locale: Union[str, MonthTable] = "english",
    issues: Optional[IssueReport] = None,
) -> ArticleRecord:
    published, source = extract_metadata(article, locale, issues)
    return ArticleRecord(
        id=article.position,
        date=published,
        source=source,
        text=normalize_text(extract_body(article)),
    )
