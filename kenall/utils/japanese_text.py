"""
Script normalization for registry text columns.

Handles:
- Full-width digits to ASCII digits
- Hyphen / tilde / comma variants to the punctuation the parsers expect
- Half-width katakana (with voiced marks) to full-width katakana

Kanji and full-width brackets are left untouched. Kanji columns additionally
get half-width parentheses folded to full-width (normalize_kanji); kana
columns keep them, since the kana grammar is written with them.
"""

import jaconv

PUNCTUATION_MAP = str.maketrans(
    {
        "−": "-",  # U+2212 minus sign
        "－": "-",  # U+FF0D
        "‐": "-",  # U+2010
        "‑": "-",  # U+2011
        "–": "-",  # U+2013
        "―": "-",  # U+2015
        "～": "〜",  # U+FF5E -> U+301C
        "，": "、",
        "､": "、",  # half-width ideographic comma
        "･": "・",
        "｢": "「",
        "｣": "」",
        "｡": "。",
    }
)


def normalize_digits(text: str) -> str:
    """Convert full-width digits to ASCII."""
    return jaconv.z2h(text, kana=False, ascii=False, digit=True)


def normalize_kana(text: str) -> str:
    """Convert half-width katakana to full-width, merging voiced marks."""
    return jaconv.h2z(text, kana=True, ascii=False, digit=False)


def normalize_script(text: str) -> str:
    """Normalize one kanji or kana column."""
    if not text:
        return ""
    text = normalize_kana(text)
    text = normalize_digits(text)
    return text.translate(PUNCTUATION_MAP)


KANJI_BRACKET_MAP = str.maketrans({"(": "（", ")": "）"})


def normalize_kanji(text: str) -> str:
    """Normalize one kanji column: normalize_script plus full-width parentheses."""
    return normalize_script(text).translate(KANJI_BRACKET_MAP)
