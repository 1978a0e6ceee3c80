"""Tests for the in-memory postal code index."""

import zipfile

import pytest

from kenall.models.registry import PostalRecord
from kenall.services.lookup_service import PostalCodeIndex, load_index, parse_postal_code
from kenall.utils.ken_all_csv import write_records


def _record(postal_code, town, prefecture="北海道", city="札幌市中央区"):
    return PostalRecord(
        postal_code=postal_code,
        prefecture=prefecture,
        city=city,
        town=town,
        prefecture_kana="ホッカイドウ",
        city_kana="サッポロシチュウオウク",
        town_kana="",
    )


@pytest.fixture
def index():
    return PostalCodeIndex(
        [
            _record("0600007", "北七条西"),
            _record("0600007", "北七条西一丁目"),
            _record("0600041", "大通東"),
            _record("0300801", "新町", prefecture="青森県", city="青森市"),
        ]
    )


class TestParsePostalCode:
    @pytest.mark.parametrize("code", ["0600007", "060-0007", "０６０－０００７", " 060-0007 "])
    def test_accepted_forms(self, code):
        assert parse_postal_code(code) == "0600007"

    @pytest.mark.parametrize("code", ["", "060", "06000071", "abc-defg", "06-00007"])
    def test_rejected(self, code):
        assert parse_postal_code(code) is None


class TestPostalCodeIndex:
    def test_len_counts_distinct_codes(self, index):
        assert len(index) == 3

    def test_lookup_keeps_registry_order(self, index):
        assert [r.town for r in index.lookup("060-0007")] == ["北七条西", "北七条西一丁目"]

    def test_lookup_unknown(self, index):
        assert index.lookup("9999999") == []

    def test_lookup_invalid(self, index):
        with pytest.raises(ValueError):
            index.lookup("12345")

    def test_filter(self, index):
        assert [r.town for r in index.filter(prefecture="青森県")] == ["新町"]
        assert len(index.filter(city="札幌市中央区")) == 3
        assert len(index.filter()) == 4


class TestLoadIndex:
    def test_from_normalized_csv(self, tmp_path, index):
        path = tmp_path / "normalized.csv"
        with path.open("w", encoding="utf-8", newline="") as fp:
            write_records(index.filter(), fp)

        loaded = load_index(path)

        assert len(loaded) == 3
        assert loaded.lookup("0600007") == index.lookup("0600007")

    def test_from_registry_zip(self, tmp_path, line):
        text = line("南山（430番地以上「1770-1～2を除く」、大谷地、折渡）", "ﾐﾅﾐﾔﾏ(430ﾊﾞﾝﾁｲｼﾞｮｳ<1770-1-2ｦﾉｿﾞｸ>､ｵｵﾔﾁ､ｵﾘﾜﾀﾘ)")
        path = tmp_path / "ken_all.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("KEN_ALL.CSV", text.encode("cp932"))

        loaded = load_index(path)

        assert [r.town for r in loaded.lookup("0330071")] == ["南山", "南山大谷地", "南山折渡"]
        assert [r.town_kana for r in loaded.lookup("0330071")] == [
            "ミナミヤマ",
            "ミナミヤマオオヤチ",
            "ミナミヤマオリワタリ",
        ]
