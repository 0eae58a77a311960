"""Read exported article files into paragraph lists."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Callable, Dict, List, Optional

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from striprtf.striprtf import rtf_to_text

from .errors import CorpusIOError, FormatError, IssueReport
from .models import RawArticle

logger = logging.getLogger(__name__)


def _split_paragraphs(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(path, f"not valid UTF-8 ({exc.reason})") from exc


def read_rtf(path: Path) -> List[str]:
    data = path.read_bytes()
    try:
        raw = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        # Exports from older tools carry raw cp1252 bytes.
        raw = data.decode("cp1252", errors="replace")
    if not raw.lstrip().startswith("{\\rtf"):
        raise FormatError(path, "missing {\\rtf header")
    try:
        text = rtf_to_text(raw, errors="ignore")
    except Exception as exc:
        raise FormatError(path, f"unreadable RTF: {exc}") from exc
    return _split_paragraphs(text)


def read_docx(path: Path) -> List[str]:
    try:
        document = Document(str(path))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise FormatError(path, f"unreadable DOCX: {exc}") from exc
    return [p.text.strip() for p in document.paragraphs if (p.text or "").strip()]


def read_txt(path: Path) -> List[str]:
    return _split_paragraphs(_read_text(path))


READERS: Dict[str, Callable[[Path], List[str]]] = {
    ".rtf": read_rtf,
    ".docx": read_docx,
    ".txt": read_txt,
}


def read_paragraphs(path: Path) -> List[str]:
    """Return the non-blank, trimmed paragraphs of one article file."""
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        raise FormatError(path, f"unsupported extension {path.suffix!r}")
    return reader(path)


def list_article_files(directory: Path | str, extension: str) -> List[Path]:
    """
    List article files in name order.

    Raises CorpusIOError if the directory is missing, unreadable, or has no
    file with the requested extension.
    """
    root = Path(directory)
    suffix = extension.lower() if extension.startswith(".") else f".{extension.lower()}"
    if not root.is_dir():
        raise CorpusIOError(f"input directory not found: {root}")
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise CorpusIOError(f"cannot read input directory {root}: {exc}") from exc
    paths = sorted(
        (p for p in entries if p.is_file() and p.suffix.lower() == suffix),
        key=lambda p: p.name,
    )
    if not paths:
        raise CorpusIOError(f"no {suffix} files in {root}")
    return paths


def load_articles(
    directory: Path | str,
    extension: str = ".rtf",
    issues: Optional[IssueReport] = None,
) -> List[RawArticle]:
    """
    Load every matching file as a RawArticle.

    Files that fail with FormatError are recorded in ``issues`` and skipped;
    positions are numbered over the files that loaded, so they stay contiguous.
    """
    report = issues if issues is not None else IssueReport()
    articles: List[RawArticle] = []
    for path in list_article_files(directory, extension):
        try:
            paragraphs = read_paragraphs(path)
        except FormatError as exc:
            report.record(exc, path=path)
            continue
        except OSError as exc:
            raise CorpusIOError(f"cannot read {path}: {exc}") from exc
        articles.append(
            RawArticle(path=path, position=len(articles) + 1, paragraphs=tuple(paragraphs))
        )
    logger.info("Loaded %d article(s) from %s", len(articles), directory)
    return articles
