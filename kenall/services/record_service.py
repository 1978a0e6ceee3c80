"""Record assembly: expanded towns back onto the pass-through row fields."""

from kenall.models.registry import PostalRecord, TownGroup
from kenall.models.town import TownEntry


def assemble_records(group: TownGroup, entries: list[TownEntry]) -> list[PostalRecord]:
    """One PostalRecord per entry, sharing the group's postal code and names."""
    head = group.head
    return [
        PostalRecord(
            postal_code=head.postal_code,
            prefecture=head.prefecture,
            city=head.city,
            town=entry.name,
            prefecture_kana=head.prefecture_kana,
            city_kana=head.city_kana,
            town_kana=entry.kana,
        )
        for entry in entries
    ]
