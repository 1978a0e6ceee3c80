"""Parse artifacts for one merged town text and the expanded town entries."""

import enum
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Exclusion:
    """
    A nested clause inside a bracket payload, e.g. 「１７４を除く」.

    Its content is never an area name; `items` is the clause text split on
    the grammar's separator, kept for numeric/reference analysis.
    """

    raw_text: str
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class Item:
    """
    One separator-delimited entry of a bracket payload.

    `text` is the payload-level text with every exclusion clause cut out,
    so "中一里山「...」長尾山" has text "中一里山長尾山" and one exclusion.
    """

    text: str
    exclusions: tuple[Exclusion, ...] = ()

    @property
    def is_exclusion_only(self) -> bool:
        return not self.text and bool(self.exclusions)


@dataclass(frozen=True)
class BracketPayload:
    raw_text: str
    items: tuple[Item, ...] = ()


@dataclass(frozen=True)
class ParseNode:
    base: str
    payloads: tuple[BracketPayload, ...] = ()


class PayloadKind(str, enum.Enum):
    SUPPRESSED = "suppressed"
    LITERAL = "literal"
    NUMERIC_ONLY = "numeric_only"
    ENUMERATION = "enumeration"


@dataclass(frozen=True)
class ClassifiedPayload:
    payload: BracketPayload
    kind: PayloadKind
    # Enumeration: surviving sub-area names. Literal: the single suffix text.
    names: tuple[str, ...] = field(default=())

    @property
    def literal(self) -> str:
        return "".join(self.names) if self.kind is PayloadKind.LITERAL else ""


@dataclass(frozen=True)
class TownEntry:
    name: str
    kana: str
