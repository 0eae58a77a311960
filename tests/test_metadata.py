from datetime import date
from pathlib import Path

import pytest

from news_corpus.errors import DateParseError, IssueReport, SourceParseError
from news_corpus.locales import get_month_table
from news_corpus.metadata import extract_date, extract_metadata, extract_source
from news_corpus.models import RawArticle


@pytest.mark.parametrize(
    "paragraph, locale, expected",
    [
        ("12 jan 2020 * Le Soir", "english", date(2020, 1, 12)),
        ("Le Soir * 03 August 2018, p. 4", "english", date(2018, 8, 3)),
        ("De Standaard * 14 mrt. 2019", "dutch", date(2019, 3, 14)),
        ("De Tijd * 01 Oktober 2021", "dutch", date(2021, 10, 1)),
        ("Le Soir * 09 févr. 2020", "french", date(2020, 2, 9)),
        ("La Libre * 15 aout 2017", "french", date(2017, 8, 15)),
        ("L'Echo * 24 décembre 2016", "french", date(2016, 12, 24)),
    ],
)
def test_extract_date_per_locale(paragraph, locale, expected):
    assert extract_date(paragraph, locale) == expected


def test_extract_date_uses_locale_table():
    with pytest.raises(DateParseError):
        extract_date("De Tijd * 14 mrt 2019", "english")


def test_extract_date_accepts_injected_table():
    table = {"brumaire": 11}
    assert extract_date("Gazette * 02 brumaire 1799", table) == date(1799, 11, 2)


def test_extract_date_rejects_impossible_day():
    with pytest.raises(DateParseError) as excinfo:
        extract_date("Le Soir * 31 feb 2020", "english")
    assert "31 feb 2020" in str(excinfo.value)


def test_extract_date_without_match():
    with pytest.raises(DateParseError):
        extract_date("Le Soir * yesterday", "english")


def test_unknown_locale_is_rejected():
    with pytest.raises(ValueError):
        get_month_table("klingon")


@pytest.mark.parametrize(
    "paragraph, expected",
    [
        ("12 jan 2020 * Le Soir", "Le_Soir"),
        ("Le Soir * 12 jan 2020", "Le_Soir"),
        ("** Het Laatste-Nieuws ** 12 jan 2020 * p. 3", "Het_Laatste_Nieuws"),
        ("La Dernière Heure * 01 mai 2020", "La_Derniere_Heure"),
        ("Grenz-Echo * Sport", "Grenz_Echo"),
        ("12 jan 2020, p. 4 * Le Soir", "Le_Soir"),
        ("Monday 12 jan 2020 * Le Soir", "Le_Soir"),
        ("maandag 14 mrt. 2019, blz. 3 * De Standaard", "De_Standaard"),
        ("Vendredi 01 mai 2020 * La Dernière Heure", "La_Derniere_Heure"),
        ("L'Echo * 24 décembre 2016", "L_Echo"),
    ],
)
def test_extract_source_normalizes_outlet(paragraph, expected):
    assert extract_source(paragraph) == expected


@pytest.mark.parametrize(
    "paragraph",
    [
        "12 jan 2020 Le Soir",
        "12 jan 2020 * p. 4",
        "12 jan 2020 * 2020",
        "Le Soir, p. 4 * 12 jan 2020",
        "Le Soir (Bruxelles) * 12 jan 2020",
        "... * 12 jan 2020 !",
    ],
)
def test_extract_source_rejects_paragraphs_without_clean_outlet(paragraph):
    with pytest.raises(SourceParseError):
        extract_source(paragraph)


def test_extract_metadata_keeps_row_with_nulls_and_records_issues():
    article = RawArticle(
        path=Path("bad.rtf"), position=7, paragraphs=("Title", "no metadata here", "x", "y")
    )
    issues = IssueReport()

    published, source = extract_metadata(article, "english", issues)

    assert published is None
    assert source is None
    assert [i.kind for i in issues] == ["DateParseError", "SourceParseError"]
    assert all(i.position == 7 and i.path == "bad.rtf" for i in issues)
