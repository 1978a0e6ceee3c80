"""
Continuation merging for KEN_ALL rows.

The registry cuts long town texts into several physical rows (mid-word and
mid-bracket). It carries no explicit continuation column, so a row is taken
as the continuation of the previous one when both share postal code,
prefecture kana and city kana, and either
- the kanji text accumulated so far still has an unclosed bracket, or
- the row does not claim that its postal code covers several towns.
"""

from collections.abc import Iterable, Iterator

from kenall.models.registry import MergedText, RawRow, TownGroup
from kenall.utils.brackets import KANA_GRAMMAR, KANJI_GRAMMAR


def continues(group: list[RawRow], row: RawRow) -> bool:
    """True when `row` continues the town text of `group`."""
    if not group or row.group_key != group[-1].group_key:
        return False
    kanji = "".join(r.town for r in group)
    if KANJI_GRAMMAR.open_depth(kanji) > 0:
        return True
    return not row.multi_town


def group_rows(rows: Iterable[RawRow]) -> Iterator[TownGroup]:
    """
    Split an ordered row stream into TownGroups.

    Every row of a group except the last is marked `continued`.
    """
    current: list[RawRow] = []
    for row in rows:
        if continues(current, row):
            current[-1] = current[-1].mark_continued()
            current.append(row)
            continue
        if current:
            yield TownGroup(tuple(current))
        current = [row]
    if current:
        yield TownGroup(tuple(current))


def merge_group(group: TownGroup) -> MergedText:
    """
    Concatenate the town fragments of a group, kanji and kana independently.

    Kanji fragments are always joined. A kana fragment that repeats the
    previous one while the kana so far has no open bracket is skipped: the
    registry repeats an unsplit kana on every physical row.
    """
    kanji = "".join(row.town for row in group.rows)

    kana_parts: list[str] = []
    for row in group.rows:
        if (
            kana_parts
            and row.town_kana == kana_parts[-1]
            and KANA_GRAMMAR.open_depth("".join(kana_parts)) == 0
        ):
            continue
        kana_parts.append(row.town_kana)

    return MergedText(kanji=kanji, kana="".join(kana_parts))
