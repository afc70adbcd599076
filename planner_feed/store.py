# -*- coding: utf-8 -*-
import logging
import tempfile
import typing as t
from pathlib import Path

logger = logging.getLogger(__name__)

# Last successful planner response, overwritten by every fetch
DEFAULT_CACHE_FILE = Path(tempfile.gettempdir()) / "canvastui.json"


class CacheStore:
    """Single-blob store at a fixed path.

    Reads and writes are whole-file with no locking; the last writer wins.
    """

    def __init__(self, path: t.Union[str, Path] = DEFAULT_CACHE_FILE) -> None:
        self.path = Path(path)

    def read(self) -> t.Optional[bytes]:
        """Return the stored blob, or None if it is missing or unreadable."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No cache file at %s", self.path)
            return None
        except OSError as e:
            logger.info("Could not read cache file %s: %s", self.path, e)
            return None

    def write(self, data: bytes) -> None:
        """Replace the stored blob.

        :param data: Raw response body to keep for the next run.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(data)
