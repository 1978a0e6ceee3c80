"""Town expansion: classified payloads to ordered town names, and kana pairing."""

import structlog

from kenall.models.town import ClassifiedPayload, ParseNode, PayloadKind, TownEntry
from kenall.services.qualifier_service import QualifierClassifier, QualifierRules
from kenall.utils.brackets import parse_town_text

logger = structlog.get_logger()


class TownExpander:
    """Expands one merged town text of a single script into town names."""

    def __init__(self, rules: QualifierRules):
        self.rules = rules
        self.classifier = QualifierClassifier(rules)

    def parse(self, text: str) -> ParseNode:
        return parse_town_text(text, self.rules.grammar)

    def expand_text(self, text: str) -> list[str]:
        node = self.parse(text)
        return self.expand(node, self.classifier.classify_node(node))

    def expand(self, node: ParseNode, classified: list[ClassifiedPayload]) -> list[str]:
        """
        Build the ordered town names for one parsed text.

        The first name is always the cleaned base (plus any literal suffix).
        Each enumerated sub-area adds base + name, in payload and item order,
        with no deduplication.
        """
        base = self.rules.clean_base(node.base)
        head = base
        names: list[str] = []

        for cp in classified:
            if cp.kind is PayloadKind.LITERAL:
                head += cp.literal
            elif cp.kind is PayloadKind.ENUMERATION:
                names.extend(base + name for name in cp.names)

        return [head] + names


def pair_entries(
    kanji_names: list[str],
    kana_names: list[str],
    kana_annotated: bool = True,
    postal_code: str = "",
) -> tuple[list[TownEntry], bool]:
    """
    Zip kanji and kana names by position.

    Args:
        kanji_names: expansion of the kanji text
        kana_names: expansion of the kana text
        kana_annotated: the kana text carried at least one bracket payload
        postal_code: used for logging only

    Returns:
        (entries, mismatch). On a count mismatch only the base entry keeps
        its kana and every other entry gets an empty kana. When the kana was
        never annotated its base is shared by every entry and no mismatch is
        reported; an info event is logged instead.
    """
    if len(kanji_names) == len(kana_names):
        return [TownEntry(n, k) for n, k in zip(kanji_names, kana_names)], False

    kana_base = kana_names[0] if kana_names else ""

    if not kana_annotated:
        logger.info(
            "Unannotated kana shared",
            postal_code=postal_code,
            kana=kana_base,
            entries=len(kanji_names),
        )
        return [TownEntry(n, kana_base) for n in kanji_names], False

    logger.warning(
        "Kana expansion mismatch",
        postal_code=postal_code,
        kanji=kanji_names,
        kana=kana_names,
    )
    entries = [TownEntry(kanji_names[0], kana_base)]
    entries.extend(TownEntry(n, "") for n in kanji_names[1:])
    return entries, True
