"""Batch jobs: download the registry and write normalized CSV output."""

import sys
from pathlib import Path

import structlog

from kenall.clients.japan_post import JapanPostClient, extract_registry
from kenall.config import settings
from kenall.models.registry import NormalizeResult
from kenall.services.normalizer_service import RegistryNormalizer
from kenall.utils.ken_all_csv import read_registry, write_records

logger = structlog.get_logger()


async def download_registry(dest: Path | None = None) -> Path:
    """Download ken_all.zip and extract KEN_ALL.CSV into `dest` (default data_dir)."""
    dest = Path(dest) if dest else settings.data_path
    client = JapanPostClient()
    try:
        archive = await client.download_registry()
    finally:
        await client.close()
    return extract_registry(archive, dest)


def normalize_registry(
    source: Path,
    output: Path | None = None,
    encoding: str | None = None,
) -> NormalizeResult:
    """
    Normalize a KEN_ALL csv/zip and write the records as CSV.

    Args:
        source: KEN_ALL.CSV or ken_all.zip
        output: target CSV path; stdout when None
        encoding: source encoding, default settings.registry_encoding
    """
    rows = read_registry(source, encoding or settings.registry_encoding)
    result = RegistryNormalizer().run(rows)

    if output is None:
        write_records(result.records, sys.stdout)
    else:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("w", encoding="utf-8", newline="") as fp:
            count = write_records(result.records, fp)
        logger.info("Records written", path=str(output), records=count)

    return result
