"""In-memory postal code index over normalized records."""

import re
from collections.abc import Iterable
from pathlib import Path

import structlog

from kenall.models.registry import PostalRecord
from kenall.services.normalizer_service import RegistryNormalizer
from kenall.utils.japanese_text import normalize_script
from kenall.utils.ken_all_csv import DEFAULT_ENCODING, read_records, read_registry

logger = structlog.get_logger()

POSTAL_CODE_QUERY = re.compile(r"([0-9]{3})-?([0-9]{4})")


def parse_postal_code(code: str) -> str | None:
    """Return the 7-digit form of "1234567" / "123-4567" (full-width ok), else None."""
    match = POSTAL_CODE_QUERY.fullmatch(normalize_script(code.strip()))
    if not match:
        return None
    return match.group(1) + match.group(2)


class PostalCodeIndex:
    """Postal code -> records, in registry order."""

    def __init__(self, records: Iterable[PostalRecord] = ()):
        self._by_code: dict[str, list[PostalRecord]] = {}
        self._records: list[PostalRecord] = []
        self.add_all(records)

    def add_all(self, records: Iterable[PostalRecord]):
        for record in records:
            self._records.append(record)
            self._by_code.setdefault(record.postal_code, []).append(record)

    def __len__(self) -> int:
        return len(self._by_code)

    def lookup(self, code: str) -> list[PostalRecord]:
        """
        Records for a postal code.

        Raises:
            ValueError: `code` is not a postal code
        """
        postal_code = parse_postal_code(code)
        if postal_code is None:
            raise ValueError(f"invalid postal code: {code!r}")
        return list(self._by_code.get(postal_code, []))

    def filter(self, prefecture: str | None = None, city: str | None = None) -> list[PostalRecord]:
        return [
            r
            for r in self._records
            if (prefecture is None or r.prefecture == prefecture)
            and (city is None or r.city == city)
        ]


def load_index(path: Path, encoding: str = DEFAULT_ENCODING) -> PostalCodeIndex:
    """
    Build an index from a KEN_ALL csv/zip, or from a csv written by
    write_records (recognized by its header line).
    """
    path = Path(path)
    if path.suffix.lower() == ".csv":
        with path.open(encoding="utf-8", errors="replace") as fp:
            header = fp.readline().strip()
        if header == ",".join(PostalRecord.FIELDS):
            with path.open(encoding="utf-8") as fp:
                index = PostalCodeIndex(read_records(fp))
            logger.info("Index loaded", path=str(path), postal_codes=len(index))
            return index

    result = RegistryNormalizer().run(read_registry(path, encoding))
    index = PostalCodeIndex(result.records)
    logger.info("Index built from registry", path=str(path), postal_codes=len(index))
    return index
