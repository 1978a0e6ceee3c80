"""
Japan Post postal code registry download.

The nationwide registry is published as ken_all.zip (one cp932 CSV,
KEN_ALL.CSV) under https://www.post.japanpost.jp/zipcode/dl/.
"""

import io
import zipfile
from pathlib import Path
from urllib.parse import urlsplit

import httpx
import structlog

from kenall.clients.base_client import BaseAPIClient
from kenall.config import settings

logger = structlog.get_logger()


class JapanPostClient(BaseAPIClient):
    """Downloads the KEN_ALL registry archive."""

    def __init__(
        self,
        registry_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        url = urlsplit(registry_url or settings.registry_url)
        super().__init__(
            base_url=f"{url.scheme}://{url.netloc}",
            timeout=settings.download_timeout,
            transport=transport,
        )
        self.registry_path = url.path

    async def download_registry(self) -> bytes:
        """Fetch the registry zip and return its raw bytes."""
        logger.info("Downloading registry", url=self.base_url + self.registry_path)
        content = await self.get_bytes(self.registry_path)
        logger.info("Registry downloaded", size=len(content))
        return content


def extract_registry(archive: bytes, dest: Path) -> Path:
    """
    Write the CSV member of a registry zip into `dest`.

    Returns:
        Path of the extracted CSV

    Raises:
        ValueError: the archive holds no csv
    """
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        members = [n for n in zf.namelist() if n.lower().endswith(".csv")]
        if not members:
            raise ValueError("registry archive holds no csv")
        target = dest / Path(members[0]).name
        target.write_bytes(zf.read(members[0]))
    logger.info("Registry extracted", path=str(target))
    return target
