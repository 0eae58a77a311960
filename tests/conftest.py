from pathlib import Path
from typing import Iterable, List

import pytest
from docx import Document


def article_paragraphs(metadata: str, body: Iterable[str], title: str = "Headline") -> List[str]:
    """Title, metadata line, byline, summary, then body paragraphs."""
    return [title, metadata, "By Staff Writer", "Short summary.", *body]


def _rtf_escape(text: str) -> str:
    out = []
    for ch in text:
        if ch in "\\{}":
            out.append("\\" + ch)
        elif ord(ch) > 127:
            out.append(f"\\u{ord(ch)}?")
        else:
            out.append(ch)
    return "".join(out)


def write_rtf(path: Path, paragraphs: Iterable[str]) -> Path:
    body = "\\par\n".join(_rtf_escape(p) for p in paragraphs)
    path.write_text("{\\rtf1\\ansi\\deff0\n" + body + "\\par\n}", encoding="utf-8")
    return path


def write_docx(path: Path, paragraphs: Iterable[str]) -> Path:
    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    doc.save(str(path))
    return path


@pytest.fixture
def scenario_dir(tmp_path):
    """Three articles from three outlets, one per RTF file."""
    folder = tmp_path / "articles"
    folder.mkdir()
    write_rtf(folder / "a1.rtf", article_paragraphs("12 jan 2020 * Le Soir", ["Hello, World!"]))
    write_rtf(folder / "a2.rtf", article_paragraphs("05 mar 2021 * De Tijd", ["Test 123."]))
    write_rtf(folder / "a3.rtf", article_paragraphs("20 dec 2019 * Metro FR", ["Économie!!"]))
    return folder
