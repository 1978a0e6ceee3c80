"""
Bracket parsing for registry town texts.

A town text is split into its base (text outside every top-level bracket)
and an ordered list of bracket payloads. Each payload is split on the
grammar's separator into items; nested exclusion clauses become part of
the item they appear in but never contribute to its name.

Two grammars exist because the registry writes kana annotations with
different glyphs than kanji ones:

    kanji: 犬落瀬（内金矢、下久保「１７４を除く」、...）
    kana:  ｲﾇｵﾄｾ(ｳﾁｶﾅﾔ､ｼﾓｸﾎﾞ<174ｦﾉｿﾞｸ>､...)

Parsing is a single left-to-right scan with depth counters. Unterminated
brackets extend to the end of the text; stray closers are dropped.
"""

from dataclasses import dataclass

from kenall.models.town import BracketPayload, Exclusion, Item, ParseNode


@dataclass(frozen=True)
class Grammar:
    """Glyphs used by one script of the registry."""

    open: str
    close: str
    exclusion_open: str
    exclusion_close: str
    separator: str

    @property
    def glyphs(self) -> str:
        return self.open + self.close + self.exclusion_open + self.exclusion_close

    def open_depth(self, text: str) -> int:
        """Number of outer brackets still open at the end of `text`."""
        depth = 0
        for ch in text:
            if ch == self.open:
                depth += 1
            elif ch == self.close and depth > 0:
                depth -= 1
        return depth

    def strip_glyphs(self, text: str) -> str:
        return "".join(ch for ch in text if ch not in self.glyphs).strip()


KANJI_GRAMMAR = Grammar(
    open="（",
    close="）",
    exclusion_open="「",
    exclusion_close="」",
    separator="、",
)

# Kana text reuses parentheses at the top level and switches to angle
# brackets for every deeper level.
KANA_GRAMMAR = Grammar(
    open="(",
    close=")",
    exclusion_open="<",
    exclusion_close=">",
    separator="、",
)


class _PayloadBuilder:
    """Accumulates one top-level payload while the scanner is inside it."""

    def __init__(self, grammar: Grammar):
        self.grammar = grammar
        self.raw: list[str] = []
        self.items: list[Item] = []
        self._text: list[str] = []
        self._exclusions: list[Exclusion] = []
        self._clause: list[str] = []

    def add_text(self, ch: str):
        self._text.append(ch)

    def add_clause_text(self, ch: str):
        self._clause.append(ch)

    def close_clause(self):
        raw = "".join(self._clause)
        parts = tuple(p.strip() for p in raw.split(self.grammar.separator) if p.strip())
        self._exclusions.append(Exclusion(raw_text=raw, items=parts))
        self._clause = []

    def close_item(self):
        text = "".join(self._text).strip()
        if text or self._exclusions:
            self.items.append(Item(text=text, exclusions=tuple(self._exclusions)))
        self._text = []
        self._exclusions = []

    def build(self) -> BracketPayload:
        self.close_item()
        return BracketPayload(raw_text="".join(self.raw), items=tuple(self.items))


def parse_town_text(text: str, grammar: Grammar) -> ParseNode:
    """
    Parse one merged town text.

    Args:
        text: normalized town text (kanji or kana)
        grammar: glyph set matching the script of `text`

    Returns:
        ParseNode with the trimmed base and the payloads in text order
    """
    base: list[str] = []
    payloads: list[BracketPayload] = []
    current: _PayloadBuilder | None = None
    depth = 0
    clause_depth = 0

    for ch in text:
        if current is None:
            if ch == grammar.open:
                current = _PayloadBuilder(grammar)
                depth = 1
            elif ch not in (grammar.close, grammar.exclusion_close):
                base.append(ch)
            continue

        if clause_depth > 0:
            if ch == grammar.exclusion_open:
                clause_depth += 1
                current.add_clause_text(ch)
            elif ch == grammar.exclusion_close:
                clause_depth -= 1
                if clause_depth == 0:
                    current.close_clause()
                else:
                    current.add_clause_text(ch)
            elif ch == grammar.open:
                depth += 1
                current.add_clause_text(ch)
            elif ch == grammar.close and depth > 1:
                depth -= 1
                current.add_clause_text(ch)
            elif ch == grammar.close:
                # clause left open at the end of the payload
                clause_depth = 0
                current.close_clause()
                payloads.append(current.build())
                current = None
                depth = 0
                continue
            else:
                current.add_clause_text(ch)
            current.raw.append(ch)
            continue

        if ch == grammar.open:
            depth += 1
        elif ch == grammar.close:
            depth -= 1
            if depth == 0:
                payloads.append(current.build())
                current = None
                continue
        elif ch == grammar.exclusion_open:
            clause_depth = 1
        elif ch == grammar.exclusion_close:
            pass
        elif ch == grammar.separator and depth == 1:
            current.close_item()
        else:
            current.add_text(ch)
        current.raw.append(ch)

    if current is not None:
        if clause_depth > 0:
            current.close_clause()
        payloads.append(current.build())

    return ParseNode(base="".join(base).strip(), payloads=tuple(payloads))
