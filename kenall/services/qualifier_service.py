"""
Classification of bracket payloads.

Each payload of a parsed town text is tagged as one of:
- Suppressed: blanket qualifier (全域, 成田国際空港内...) or a repeat of the base
- Literal: floor / building suffix glued onto the base (高層棟, 46階)
- NumericOnly: house numbers, chome and chiwari ranges over the base itself
- Enumeration: named sub-areas, each producing its own town

The phrase lists and patterns live in QualifierRules so they can be
extended without touching the parser or the classifier.
"""

import re
from dataclasses import dataclass

from kenall.models.town import (
    BracketPayload,
    ClassifiedPayload,
    Item,
    ParseNode,
    PayloadKind,
)
from kenall.utils.brackets import KANA_GRAMMAR, KANJI_GRAMMAR, Grammar


@dataclass(frozen=True)
class QualifierRules:
    """Phrase sets and patterns for one script."""

    grammar: Grammar
    blanket_phrases: frozenset[str]
    blanket_patterns: tuple[re.Pattern, ...]
    floor_pattern: re.Pattern
    # Base text numbered as 地割 blocks: group(1) is the area name.
    subdivision_pattern: re.Pattern
    # Whole town texts that are not a town name at all.
    blank_town_patterns: tuple[re.Pattern, ...]
    numeric_head_pattern: re.Pattern
    numeric_tail_pattern: re.Pattern

    def is_blanket(self, text: str) -> bool:
        if text in self.blanket_phrases:
            return True
        return any(p.search(text) for p in self.blanket_patterns)

    def is_floor(self, text: str) -> bool:
        return bool(self.floor_pattern.fullmatch(text))

    def is_blank_town(self, base: str) -> bool:
        return any(p.search(base) for p in self.blank_town_patterns)

    def subdivided_name(self, base: str) -> str | None:
        """Leading area name when `base` is a 地割 numbering, else None."""
        match = self.subdivision_pattern.match(base)
        return match.group(1) if match else None

    def is_numeric(self, text: str) -> bool:
        """True for house-number, chome and range items that name no area."""
        text = text.strip()
        if not text:
            return True
        return bool(
            self.numeric_head_pattern.match(text)
            or self.numeric_tail_pattern.search(text)
        )

    def clean_base(self, base: str) -> str:
        if self.is_blank_town(base):
            return ""
        name = self.subdivided_name(base)
        if name is not None:
            base = name
        return self.grammar.strip_glyphs(base)


KANJI_RULES = QualifierRules(
    grammar=KANJI_GRAMMAR,
    blanket_phrases=frozenset(
        {
            "全域",
            "次のビルを除く",
            "その他",
            "丁目",
            "番地",
            "無番地",
            "地階・階層不明",
        }
    ),
    blanket_patterns=(re.compile(r"空港内$"),),
    floor_pattern=re.compile(r"\d+階"),
    subdivision_pattern=re.compile(r"(\D*?)第?\d+地割"),
    blank_town_patterns=(
        re.compile(r"^以下に掲載がない場合$"),
        re.compile(r"の次に.*がくる場合"),
        re.compile(r"村一円$"),
    ),
    numeric_head_pattern=re.compile(r"^第?\d"),
    numeric_tail_pattern=re.compile(
        r"\d(?:丁目|番地|番|号|地割|線)?(?:以上|以下|以外|を除く)?$"
    ),
)

KANA_RULES = QualifierRules(
    grammar=KANA_GRAMMAR,
    blanket_phrases=frozenset(
        {
            "ゼンイキ",
            "ツギノビルヲノゾク",
            "ソノタ",
            "チョウメ",
            "バンチ",
            "ムバンチ",
            "チカイ・カイソウフメイ",
        }
    ),
    blanket_patterns=(re.compile(r"クウコウナイ$"),),
    floor_pattern=re.compile(r"\d+カイ"),
    subdivision_pattern=re.compile(r"(\D*?)(?:ダイ)?\d+チワリ"),
    blank_town_patterns=(
        re.compile(r"^イカニケイサイガナイバアイ$"),
        re.compile(r"ノツギニ.*ガクルバアイ"),
        re.compile(r"(?:ソン|ムラ)イチエン$"),
    ),
    numeric_head_pattern=re.compile(r"^(?:ダイ)?\d"),
    numeric_tail_pattern=re.compile(
        r"\d(?:チョウメ|バンチ|バン|ゴウ|チワリ|セン)?(?:イジョウ|イカ|イガイ|ヲノゾク)?$"
    ),
)


class QualifierClassifier:
    """Tags the payloads of a ParseNode for the town expander."""

    def __init__(self, rules: QualifierRules):
        self.rules = rules

    def classify_node(self, node: ParseNode) -> list[ClassifiedPayload]:
        """Classify every payload of `node`, in order."""
        rules = self.rules

        if rules.is_blank_town(node.base):
            return [ClassifiedPayload(p, PayloadKind.SUPPRESSED) for p in node.payloads]
        if rules.subdivided_name(node.base) is not None:
            return [ClassifiedPayload(p, PayloadKind.NUMERIC_ONLY) for p in node.payloads]

        floors = [self._is_floor_payload(p) for p in node.payloads]
        result = []
        for i, payload in enumerate(node.payloads):
            before_floor = any(floors[i + 1:])
            result.append(self.classify(payload, node.base, before_floor=before_floor))
        return result

    def classify(
        self,
        payload: BracketPayload,
        base: str,
        before_floor: bool = False,
    ) -> ClassifiedPayload:
        """
        Classify one payload against its base text.

        Args:
            payload: parsed bracket payload
            base: base text of the enclosing town text
            before_floor: a floor payload follows this one in the same text
        """
        rules = self.rules
        items = payload.items

        if not items:
            return ClassifiedPayload(payload, PayloadKind.SUPPRESSED)

        if len(items) == 1 and not items[0].exclusions:
            sole = items[0].text
            if sole == base or rules.is_blanket(sole):
                return ClassifiedPayload(payload, PayloadKind.SUPPRESSED)
            if rules.is_floor(sole) or (before_floor and not rules.is_numeric(sole)):
                literal = rules.grammar.strip_glyphs(sole)
                return ClassifiedPayload(payload, PayloadKind.LITERAL, (literal,))

        names = tuple(name for name in (self._area_name(item) for item in items) if name)
        if not names:
            return ClassifiedPayload(payload, PayloadKind.NUMERIC_ONLY)
        return ClassifiedPayload(payload, PayloadKind.ENUMERATION, names)

    def _is_floor_payload(self, payload: BracketPayload) -> bool:
        items = payload.items
        return len(items) == 1 and self.rules.is_floor(items[0].text)

    def _area_name(self, item: Item) -> str:
        """Sub-area name carried by `item`, or "" for numeric/exclusion items."""
        if item.is_exclusion_only:
            return ""
        text = self.rules.grammar.strip_glyphs(item.text)
        if self.rules.is_numeric(text) or self.rules.is_blanket(text):
            return ""
        return text
