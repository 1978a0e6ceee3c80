"""
Registry normalization pipeline.

Rows -> TownGroups -> merged kanji/kana texts -> two independent parses ->
classification and expansion per script -> positional pairing -> records.
"""

from collections.abc import Iterable, Iterator

import structlog

from kenall.models.registry import (
    NormalizeResult,
    PostalRecord,
    RawRow,
    RegistryRowError,
    TownGroup,
)
from kenall.services.continuation_service import group_rows, merge_group
from kenall.services.expansion_service import TownExpander, pair_entries
from kenall.services.qualifier_service import KANA_RULES, KANJI_RULES, QualifierRules
from kenall.services.record_service import assemble_records

logger = structlog.get_logger()


class RegistryNormalizer:
    """Turns KEN_ALL rows into one PostalRecord per expanded town."""

    def __init__(
        self,
        kanji_rules: QualifierRules = KANJI_RULES,
        kana_rules: QualifierRules = KANA_RULES,
    ):
        self.kanji = TownExpander(kanji_rules)
        self.kana = TownExpander(kana_rules)

    def normalize_group(self, group: TownGroup) -> list[PostalRecord]:
        records, _ = self._normalize_group(group)
        return records

    def _normalize_group(self, group: TownGroup) -> tuple[list[PostalRecord], bool]:
        merged = merge_group(group)

        kanji_node = self.kanji.parse(merged.kanji)
        kana_node = self.kana.parse(merged.kana)

        kanji_names = self.kanji.expand(
            kanji_node, self.kanji.classifier.classify_node(kanji_node)
        )
        kana_names = self.kana.expand(
            kana_node, self.kana.classifier.classify_node(kana_node)
        )

        entries, mismatch = pair_entries(
            kanji_names,
            kana_names,
            kana_annotated=bool(kana_node.payloads),
            postal_code=group.postal_code,
        )
        return assemble_records(group, entries), mismatch

    def run(self, rows: Iterable[RawRow | RegistryRowError]) -> NormalizeResult:
        """
        Normalize an ordered row stream.

        RegistryRowError items (produced by the reader for malformed lines)
        are collected into the result; they never stop the run.
        """
        result = NormalizeResult()

        def valid_rows() -> Iterator[RawRow]:
            for row in rows:
                if isinstance(row, RegistryRowError):
                    logger.warning("Skipping malformed row", line_no=row.line_no, reason=row.reason)
                    result.errors.append(row)
                    continue
                yield row

        for group in group_rows(valid_rows()):
            records, mismatch = self._normalize_group(group)
            result.records.extend(records)
            result.groups += 1
            if mismatch:
                result.mismatches += 1

        logger.info(
            "Normalization complete",
            groups=result.groups,
            records=len(result.records),
            errors=len(result.errors),
            mismatches=result.mismatches,
        )
        return result
