"""Tests for bracket payload classification."""

import re
from dataclasses import replace

import pytest

from kenall.models.town import PayloadKind
from kenall.services.qualifier_service import KANA_RULES, KANJI_RULES, QualifierClassifier
from kenall.utils.brackets import KANJI_GRAMMAR, parse_town_text


@pytest.fixture
def kanji():
    return QualifierClassifier(KANJI_RULES)


@pytest.fixture
def kana():
    return QualifierClassifier(KANA_RULES)


def _kinds(classifier, text):
    node = parse_town_text(text, classifier.rules.grammar)
    return [cp.kind for cp in classifier.classify_node(node)]


class TestSuppressed:
    def test_self_duplicate(self, kanji, kana):
        assert _kinds(kanji, "賀集（賀集）") == [PayloadKind.SUPPRESSED]
        assert _kinds(kana, "カシュウ(カシュウ)") == [PayloadKind.SUPPRESSED]

    @pytest.mark.parametrize("text", ["厚内（全域）", "西新宿（次のビルを除く）", "一鍬田（成田国際空港内）"])
    def test_blanket_kanji(self, kanji, text):
        assert _kinds(kanji, text) == [PayloadKind.SUPPRESSED]

    @pytest.mark.parametrize("text", ["アツナイ(ゼンイキ)", "ヒトクワダ(ナリタコクサイクウコウナイ)"])
    def test_blanket_kana(self, kana, text):
        assert _kinds(kana, text) == [PayloadKind.SUPPRESSED]

    def test_blank_town_suppresses_everything(self, kanji):
        assert _kinds(kanji, "琴平町の次に1〜426番地がくる場合（川東）") == [PayloadKind.SUPPRESSED]


class TestLiteral:
    def test_floor_and_building(self, kanji):
        node = parse_town_text("名駅ミッドランドスクエア（高層棟）（46階）", KANJI_GRAMMAR)
        classified = kanji.classify_node(node)
        assert [cp.kind for cp in classified] == [PayloadKind.LITERAL, PayloadKind.LITERAL]
        assert [cp.literal for cp in classified] == ["高層棟", "46階"]

    def test_kana_floor(self, kana):
        assert _kinds(kana, "メイエキミッドランドスクエア(コウソウトウ)(46カイ)") == [
            PayloadKind.LITERAL,
            PayloadKind.LITERAL,
        ]

    def test_building_without_floor_is_enumeration(self, kanji):
        assert _kinds(kanji, "名駅ミッドランドスクエア（高層棟）") == [PayloadKind.ENUMERATION]


class TestNumericOnly:
    @pytest.mark.parametrize(
        "text",
        [
            "土樋（1丁目「11を除く」）",
            "滝沢（下川原190-1）",
            "箱石（第2地割「70〜136」〜第4地割「3〜11」）",
            "仁礼町（3153-1〜3153-1100「峰の原」）",
            "牧之原（250〜343番地「255、256を除く」）",
            "大江（1丁目、2丁目「651、662番地」以外、3丁目5、13-4、687番地）",
        ],
    )
    def test_numeric_payloads(self, kanji, text):
        assert _kinds(kanji, text) == [PayloadKind.NUMERIC_ONLY]

    def test_subdivided_base(self, kanji, kana):
        assert _kinds(kanji, "種市第24地割〜第25地割（緑ケ丘町、横手）") == [PayloadKind.NUMERIC_ONLY]
        assert _kinds(kana, "タネイチダイ24チワリ-ダイ25チワリ(ミドリガオカチョウ、ヨコテ)") == [
            PayloadKind.NUMERIC_ONLY
        ]


class TestEnumeration:
    def test_names_survive_and_numbers_drop(self, kanji):
        node = parse_town_text("南山（430番地以上「1770-1〜2を除く」、大谷地、折渡）", KANJI_GRAMMAR)
        (cp,) = kanji.classify_node(node)
        assert cp.kind is PayloadKind.ENUMERATION
        assert cp.names == ("大谷地", "折渡")

    def test_exclusion_content_is_discarded(self, kanji):
        node = parse_town_text("添川（渡戸沢「筍沢温泉」）", KANJI_GRAMMAR)
        (cp,) = kanji.classify_node(node)
        assert cp.names == ("渡戸沢",)

    def test_number_inside_name_is_kept(self, kanji):
        node = parse_town_text("泉沢（烏帽子「榛名湖畔」、烏帽子国有林77林班）", KANJI_GRAMMAR)
        (cp,) = kanji.classify_node(node)
        assert cp.names == ("烏帽子", "烏帽子国有林77林班")

    def test_unknown_qualifier_over_expands(self, kanji):
        node = parse_town_text("本町（地下街）", KANJI_GRAMMAR)
        (cp,) = kanji.classify_node(node)
        assert cp.kind is PayloadKind.ENUMERATION
        assert cp.names == ("地下街",)

    def test_rules_are_extensible(self):
        rules = replace(
            KANJI_RULES,
            blanket_phrases=KANJI_RULES.blanket_phrases | {"地下街"},
            blanket_patterns=KANJI_RULES.blanket_patterns + (re.compile(r"港湾区域$"),),
        )
        classifier = QualifierClassifier(rules)
        assert _kinds(classifier, "本町（地下街）") == [PayloadKind.SUPPRESSED]
        assert _kinds(classifier, "本町（東京港湾区域）") == [PayloadKind.SUPPRESSED]


class TestNumericRule:
    @pytest.mark.parametrize("text", ["1丁目", "2丁目以外", "687番地", "下川原190-1", "第40地割〜第45地割", "430番地以上"])
    def test_kanji_numeric(self, text):
        assert KANJI_RULES.is_numeric(text)

    @pytest.mark.parametrize("text", ["大谷地", "烏帽子国有林77林班", "東堀川通中立売通下る", "七百"])
    def test_kanji_names(self, text):
        assert not KANJI_RULES.is_numeric(text)

    @pytest.mark.parametrize("text", ["1チョウメ", "2チョウメイガイ", "シモカワラ190-1", "ダイ2チワリ-ダイ4チワリ"])
    def test_kana_numeric(self, text):
        assert KANA_RULES.is_numeric(text)

    def test_kana_name_with_number(self):
        assert not KANA_RULES.is_numeric("エボシコクユウリン77リンハン")
