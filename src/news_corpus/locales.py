"""Month-name tables used to parse press-database dates.

Tables are plain mappings so callers can inject their own; nothing here
depends on the host's locale settings.
"""

from __future__ import annotations

import unicodedata
from typing import Dict, Mapping, Optional, Union

MonthTable = Mapping[str, int]


def strip_accents(text: str) -> str:
    """Remove combining marks after NFKD decomposition ('é' -> 'e')."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold_accents(text: str) -> str:
    """Strip diacritics and drop characters with no ASCII form."""
    return strip_accents(text).encode("ascii", "ignore").decode("ascii")


def _table(names: Mapping[int, tuple[str, ...]]) -> Dict[str, int]:
    table: Dict[str, int] = {}
    for month, tokens in names.items():
        for token in tokens:
            table[token] = month
            table[fold_accents(token)] = month
    return table


ENGLISH: Dict[str, int] = _table(
    {
        1: ("january", "jan"),
        2: ("february", "feb"),
        3: ("march", "mar"),
        4: ("april", "apr"),
        5: ("may",),
        6: ("june", "jun"),
        7: ("july", "jul"),
        8: ("august", "aug"),
        9: ("september", "sep", "sept"),
        10: ("october", "oct"),
        11: ("november", "nov"),
        12: ("december", "dec"),
    }
)

DUTCH: Dict[str, int] = _table(
    {
        1: ("januari", "jan"),
        2: ("februari", "feb"),
        3: ("maart", "mrt", "maa"),
        4: ("april", "apr"),
        5: ("mei",),
        6: ("juni", "jun"),
        7: ("juli", "jul"),
        8: ("augustus", "aug"),
        9: ("september", "sep", "sept"),
        10: ("oktober", "okt"),
        11: ("november", "nov"),
        12: ("december", "dec"),
    }
)

FRENCH: Dict[str, int] = _table(
    {
        1: ("janvier", "janv", "jan"),
        2: ("février", "févr", "fév"),
        3: ("mars", "mar"),
        4: ("avril", "avr"),
        5: ("mai",),
        6: ("juin",),
        7: ("juillet", "juil"),
        8: ("août",),
        9: ("septembre", "sept", "sep"),
        10: ("octobre", "oct"),
        11: ("novembre", "nov"),
        12: ("décembre", "déc"),
    }
)

LOCALES: Dict[str, Dict[str, int]] = {
    "english": ENGLISH,
    "dutch": DUTCH,
    "french": FRENCH,
}


def get_month_table(locale: Union[str, MonthTable]) -> MonthTable:
    """Return the month table for a locale name, or pass a custom table through."""
    if not isinstance(locale, str):
        return locale
    try:
        return LOCALES[locale.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown locale {locale!r}; expected one of: {', '.join(sorted(LOCALES))}"
        ) from None


def month_number(token: str, table: MonthTable) -> Optional[int]:
    """Resolve a month token (any case, optional trailing period) to 1..12."""
    key = token.strip().rstrip(".").lower()
    if key in table:
        return table[key]
    return table.get(fold_accents(key))
