"""Registry-side records: raw KEN_ALL rows, town groups and output records."""

import re
from dataclasses import dataclass, field, replace

from kenall.utils.japanese_text import normalize_kanji, normalize_script

# KEN_ALL.CSV column positions
COL_JIS_CODE = 0
COL_OLD_POSTAL_CODE = 1
COL_POSTAL_CODE = 2
COL_PREFECTURE_KANA = 3
COL_CITY_KANA = 4
COL_TOWN_KANA = 5
COL_PREFECTURE = 6
COL_CITY = 7
COL_TOWN = 8
COL_SPLIT_TOWN = 9
COL_KOAZA_BANCHI = 10
COL_HAS_CHOME = 11
COL_MULTI_TOWN = 12
COL_UPDATE_STATUS = 13
COL_CHANGE_REASON = 14

COLUMN_COUNT = 15

POSTAL_CODE_PATTERN = re.compile(r"[0-9]{7}")


class RegistryRowError(ValueError):
    """A registry line that cannot be turned into a RawRow."""

    def __init__(self, line_no: int, reason: str):
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason


def _flag(value: str) -> bool:
    return value.strip() == "1"


def _int(value: str) -> int:
    value = value.strip()
    return int(value) if value.isdigit() else 0


@dataclass(frozen=True)
class RawRow:
    """One physical KEN_ALL line with its text columns already normalized."""

    line_no: int
    jis_code: str
    old_postal_code: str
    postal_code: str
    prefecture_kana: str
    city_kana: str
    town_kana: str
    prefecture: str
    city: str
    town: str
    split_town: bool = False  # one town spread over several postal codes
    koaza_banchi: bool = False
    has_chome: bool = False
    multi_town: bool = False  # one postal code covering several towns
    update_status: int = 0
    change_reason: int = 0
    continued: bool = False  # town text continues on the next row

    @classmethod
    def from_columns(cls, columns: list[str], line_no: int = 0) -> "RawRow":
        """
        Build a RawRow from decoded CSV columns.

        Raises:
            RegistryRowError: wrong column count or malformed postal code
        """
        if len(columns) != COLUMN_COUNT:
            raise RegistryRowError(
                line_no, f"expected {COLUMN_COUNT} columns, got {len(columns)}"
            )

        postal_code = normalize_script(columns[COL_POSTAL_CODE].strip())
        if not POSTAL_CODE_PATTERN.fullmatch(postal_code):
            raise RegistryRowError(line_no, f"invalid postal code {postal_code!r}")

        def text(idx: int) -> str:
            return normalize_script(columns[idx].strip())

        def kanji(idx: int) -> str:
            return normalize_kanji(columns[idx].strip())

        return cls(
            line_no=line_no,
            jis_code=columns[COL_JIS_CODE].strip(),
            old_postal_code=columns[COL_OLD_POSTAL_CODE].strip(),
            postal_code=postal_code,
            prefecture_kana=text(COL_PREFECTURE_KANA),
            city_kana=text(COL_CITY_KANA),
            town_kana=text(COL_TOWN_KANA),
            prefecture=kanji(COL_PREFECTURE),
            city=kanji(COL_CITY),
            town=kanji(COL_TOWN),
            split_town=_flag(columns[COL_SPLIT_TOWN]),
            koaza_banchi=_flag(columns[COL_KOAZA_BANCHI]),
            has_chome=_flag(columns[COL_HAS_CHOME]),
            multi_town=_flag(columns[COL_MULTI_TOWN]),
            update_status=_int(columns[COL_UPDATE_STATUS]),
            change_reason=_int(columns[COL_CHANGE_REASON]),
        )

    @property
    def group_key(self) -> tuple[str, str, str]:
        return (self.postal_code, self.prefecture_kana, self.city_kana)

    def mark_continued(self) -> "RawRow":
        return replace(self, continued=True)


@dataclass(frozen=True)
class TownGroup:
    """Consecutive rows that together spell one logical town text."""

    rows: tuple[RawRow, ...]

    def __post_init__(self):
        if not self.rows:
            raise ValueError("TownGroup needs at least one row")

    @property
    def head(self) -> RawRow:
        return self.rows[0]

    @property
    def postal_code(self) -> str:
        return self.head.postal_code


@dataclass(frozen=True)
class MergedText:
    """Concatenated town text of a TownGroup, kanji and kana side by side."""

    kanji: str
    kana: str


@dataclass(frozen=True)
class PostalRecord:
    """One output record per expanded town."""

    postal_code: str
    prefecture: str
    city: str
    town: str
    prefecture_kana: str
    city_kana: str
    town_kana: str

    FIELDS = (
        "postal_code",
        "prefecture",
        "city",
        "town",
        "prefecture_kana",
        "city_kana",
        "town_kana",
    )

    def as_row(self) -> list[str]:
        return [getattr(self, name) for name in self.FIELDS]


@dataclass
class NormalizeResult:
    """Result summary of a normalization run."""

    records: list[PostalRecord] = field(default_factory=list)
    errors: list[RegistryRowError] = field(default_factory=list)
    groups: int = 0
    mismatches: int = 0
