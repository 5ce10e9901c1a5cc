"""
Shared utilities for the fetch step.
Provides download, caching, URL lookup, and logging helpers.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from urllib.parse import unquote, urlparse
from urllib.request import urlopen, urlretrieve

from storm_report.config_paths import RAW_DATA_DIR
from storm_report.logging_config import setup_logger
from storm_report.settings import get_sources

logger = setup_logger("fetch.utils")

# ---------------------------------------------------------------------------
# URL registry — maps a keyword tag to a line-match pattern in dataset_sources.txt
# ---------------------------------------------------------------------------
SOURCE_TAGS = {
    "noaa_storm_data": "StormData.csv",
}


def read_sources_file() -> list[str]:
    """Return all configured source URLs from dataset_sources.txt."""
    urls = [source["url"] for source in get_sources()]
    if not urls:
        logger.error("No sources configured in dataset_sources.txt")
    return urls


def get_url_for_tag(tag: str) -> str | None:
    """
    Look up a URL from dataset_sources.txt by matching the tag pattern.
    Returns the first matching URL or None.
    """
    pattern = SOURCE_TAGS.get(tag)
    if not pattern:
        logger.warning("Unknown source tag: %s", tag)
        return None

    for url in read_sources_file():
        if pattern in unquote(url):
            return url

    logger.warning("No URL matched tag '%s' (pattern: '%s')", tag, pattern)
    return None


def filename_from_url(url: str) -> str:
    """Extract a clean filename from a URL, stripping query params and %-escapes."""
    parsed = urlparse(url)
    name = os.path.basename(unquote(parsed.path))
    if name:
        return name
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:10]
    return f"download_{digest}.bin"


def download_file(url: str, dest_dir: Path | None = None, force: bool = False) -> Path | None:
    """
    Download a file from *url* into *dest_dir* (default: data/raw/).
    Skips download if the file already exists and *force* is False.
    Returns the local Path on success, None on failure.
    """
    dest_dir = dest_dir or RAW_DATA_DIR
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest_path = dest_dir / filename_from_url(url)

    if dest_path.exists() and not force:
        logger.info("Already cached: %s", dest_path.name)
        return dest_path

    logger.info("Downloading %s ...", dest_path.name)
    try:
        # An HTML error page in place of the archive is a failed download
        with urlopen(url) as resp:
            content_type = resp.headers.get("Content-Type", "")
        if "text/html" in content_type:
            logger.error("Expected a data file but got HTML from %s", url)
            return None

        urlretrieve(url, dest_path)
        logger.info("Saved: %s (%d bytes)", dest_path.name, dest_path.stat().st_size)
        return dest_path
    except Exception as exc:
        logger.error("Failed to download %s: %s", url, exc, exc_info=True)
        dest_path.unlink(missing_ok=True)
        return None


def fetch_by_tag(tag: str, force: bool = False) -> Path | None:
    """Convenience: resolve tag → URL → download."""
    url = get_url_for_tag(tag)
    if url is None:
        return None
    return download_file(url, force=force)
