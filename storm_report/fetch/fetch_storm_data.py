"""
Fetch the NOAA storm database (bz2-compressed CSV).
Downloads to data/raw/.
"""
from __future__ import annotations

import sys
from pathlib import Path

from storm_report.fetch.fetch_utils import fetch_by_tag, logger

TAG = "noaa_storm_data"


def main(force: bool = False) -> Path | None:
    logger.info("Fetching NOAA storm database...")
    result = fetch_by_tag(TAG, force=force)
    if result:
        logger.info("Success: %s", result)
    else:
        logger.error("Failed to fetch NOAA storm database")
    return result


if __name__ == "__main__":
    if main("--force" in sys.argv[1:]) is None:
        sys.exit(1)
