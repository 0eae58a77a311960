"""Error types and the per-run issue report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


class CorpusError(Exception):
    """Base class for every pipeline error."""


class CorpusIOError(CorpusError, OSError):
    """Input directory missing, unreadable, or without matching files."""


class FormatError(CorpusError):
    """A single article file could not be parsed as rich text."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path.name}: {reason}")


class MetadataError(CorpusError):
    """Paragraph-1 metadata could not be extracted."""

    def __init__(self, reason: str, position: Optional[int] = None):
        self.reason = reason
        self.position = position
        super().__init__(reason)


class DateParseError(MetadataError):
    pass


class SourceParseError(MetadataError):
    pass


class SchemaError(CorpusError):
    """The corpus table breaks its column contract (one-hot, ranges, names)."""

    def __init__(self, message: str, ids: Iterable[int] = ()):
        self.ids = list(ids)
        if self.ids:
            message = f"{message} (ids: {', '.join(str(i) for i in self.ids)})"
        super().__init__(message)


class JoinError(CorpusError):
    """Article ids are duplicated or missing after a join."""

    def __init__(self, message: str, ids: Iterable[int] = ()):
        self.ids = list(ids)
        if self.ids:
            message = f"{message} (ids: {', '.join(str(i) for i in self.ids)})"
        super().__init__(message)


@dataclass
class RunIssue:
    kind: str
    path: str
    position: int | None
    reason: str


@dataclass
class IssueReport:
    """Recoverable problems collected during one run."""

    issues: List[RunIssue] = field(default_factory=list)

    def record(
        self, error: CorpusError, *, path: Path | str | None = None, position: int | None = None
    ) -> RunIssue:
        name = Path(path).name if path else ""
        if position is None:
            position = getattr(error, "position", None)
        reason = getattr(error, "reason", None) or str(error)
        issue = RunIssue(kind=type(error).__name__, path=name, position=position, reason=reason)
        logger.warning("%s in %s (position %s): %s", issue.kind, name or "?", position, reason)
        self.issues.append(issue)
        return issue

    def of_kind(self, kind: type[CorpusError]) -> List[RunIssue]:
        return [issue for issue in self.issues if issue.kind == kind.__name__]

    def __iter__(self) -> Iterator[RunIssue]:
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def __bool__(self) -> bool:
        return bool(self.issues)
