"""JSON file persistence for site indexes."""

import json
import logging
import os
import tempfile
from pathlib import Path

from sitebot.models.index import SiteIndex

logger = logging.getLogger(__name__)


def save_index(index: SiteIndex, path: str | Path) -> Path:
    """Write the index to ``path``, fully replacing any previous file.

    The JSON is written to a temporary file in the same directory and
    renamed over the target, so a reader never sees a partial file.
    Write errors propagate.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(index.to_dict(), fh)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Saved index with %d vectors to %s", len(index), target)
    return target


def load_index(path: str | Path) -> SiteIndex | None:
    """Read an index file.

    Returns None if the file does not exist. Raises ValueError (including
    json.JSONDecodeError) or KeyError if the file is not a valid index.
    """
    source = Path(path)
    if not source.exists():
        return None

    with source.open(encoding="utf-8") as fh:
        data = json.load(fh)

    if not isinstance(data, dict):
        raise ValueError(f"index file {source} does not contain a JSON object")

    return SiteIndex.from_dict(data)
