"""Data models for the article-to-corpus pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
from pydantic import BaseModel, Field

from .errors import RunIssue


@dataclass(frozen=True)
class RawArticle:
    """Paragraphs of one exported article, in document order."""

    path: Path
    position: int
    paragraphs: Tuple[str, ...]

    @property
    def title(self) -> str:
        return self.paragraphs[0] if self.paragraphs else ""

    @property
    def metadata_line(self) -> str:
        return self.paragraphs[1] if len(self.paragraphs) > 1 else ""


class ArticleRecord(BaseModel):
    """One article after metadata extraction and body normalization."""

    id: int = Field(..., ge=1, description="1-based position in the input listing.")
    date: Optional[dt.date] = Field(
        None, description="Publication date; None when it could not be parsed."
    )
    source: Optional[str] = Field(
        None, description="ASCII outlet identifier; None when it could not be parsed."
    )
    text: str = Field("", description="Normalized body text.")


@dataclass
class PipelineResult:
    table: pd.DataFrame
    records: List[ArticleRecord]
    issues: List[RunIssue] = field(default_factory=list)
