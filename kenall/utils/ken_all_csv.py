"""
KEN_ALL.CSV reading and normalized CSV writing.

The official file is distributed as ken_all.zip holding one Shift-JIS
(cp932) CSV without a header. Reading decodes it, tokenizes it with the
csv module and hands each line to RawRow.from_columns.
"""

import csv
import io
import zipfile
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from kenall.models.registry import PostalRecord, RawRow, RegistryRowError

DEFAULT_ENCODING = "cp932"


def iter_columns(lines: Iterable[str]) -> Iterator[tuple[int, list[str]]]:
    """Yield (line_no, columns) for every non-blank CSV line (1-based)."""
    reader = csv.reader(lines)
    for columns in reader:
        if not columns or not any(c.strip() for c in columns):
            continue
        yield reader.line_num, columns


def iter_rows(lines: Iterable[str]) -> Iterator[RawRow | RegistryRowError]:
    """
    Yield a RawRow per line, or the RegistryRowError describing why the line
    could not be parsed. Malformed lines never stop the iteration.
    """
    for line_no, columns in iter_columns(lines):
        try:
            yield RawRow.from_columns(columns, line_no=line_no)
        except RegistryRowError as e:
            yield e


def rows_from_text(text: str) -> list[RawRow | RegistryRowError]:
    return list(iter_rows(io.StringIO(text)))


def _decode(raw: bytes, encoding: str) -> str:
    if raw.startswith(b"\xef\xbb\xbf"):
        return raw.decode("utf-8-sig")
    return raw.decode(encoding)


def read_registry_text(path: Path, encoding: str = DEFAULT_ENCODING) -> str:
    """
    Decoded text of a KEN_ALL csv, or of the first .csv member of a zip.

    Raises:
        FileNotFoundError: `path` does not exist
        ValueError: the zip holds no csv
    """
    path = Path(path)
    if zipfile.is_zipfile(path):
        with zipfile.ZipFile(path) as zf:
            members = [n for n in zf.namelist() if n.lower().endswith(".csv")]
            if not members:
                raise ValueError(f"no csv member in {path}")
            raw = zf.read(members[0])
    else:
        raw = path.read_bytes()
    return _decode(raw, encoding)


def read_registry(path: Path, encoding: str = DEFAULT_ENCODING) -> list[RawRow | RegistryRowError]:
    return rows_from_text(read_registry_text(path, encoding))


def write_records(records: Iterable[PostalRecord], fp: TextIO) -> int:
    """Write a header and one line per record. Returns the record count."""
    writer = csv.writer(fp, lineterminator="\n")
    writer.writerow(PostalRecord.FIELDS)
    count = 0
    for record in records:
        writer.writerow(record.as_row())
        count += 1
    return count


def read_records(fp: TextIO) -> Iterator[PostalRecord]:
    """Read back a file produced by write_records."""
    reader = csv.DictReader(fp)
    for row in reader:
        yield PostalRecord(**{name: row.get(name) or "" for name in PostalRecord.FIELDS})
