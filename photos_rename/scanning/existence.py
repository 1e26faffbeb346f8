import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from .. import config


@dataclass(frozen=True)
class ExistenceResult:
    found: bool
    original_name: Optional[str] = None


class ExistenceOracle:
    """
    Answers "is there a file called X in this directory, ignoring case?"

    The directory listing is cached and tagged with the directory it
    describes. A query with use_cache=False, or against another directory,
    rescans. The cache does not see changes made after the scan, so callers
    decide when a fresh listing is needed (see invalidate()).
    """

    def __init__(self):
        self._cache_dir: Optional[Path] = None
        # lower-cased name -> on-disk names (several on case-sensitive file systems)
        self._cache: Dict[str, Tuple[str, ...]] = {}
        self.scan_count = 0

    def exists_ci(self, directory: Path, filename: str, use_cache: bool = True) -> ExistenceResult:
        names = self.matches_ci(directory, filename, use_cache)
        if not names:
            return ExistenceResult(False, None)
        return ExistenceResult(True, names[0])

    def matches_ci(self, directory: Path, filename: str, use_cache: bool = True) -> Tuple[str, ...]:
        """Every on-disk name in directory equal to filename ignoring case."""
        if not filename:
            return ()
        listing = self._listing(Path(directory), use_cache)
        return listing.get(filename.lower(), ())

    def invalidate(self):
        self._cache_dir = None
        self._cache = {}

    def _listing(self, directory: Path, use_cache: bool) -> Dict[str, Tuple[str, ...]]:
        if use_cache and self._cache_dir is not None and self._cache_dir == directory:
            return self._cache

        grouped: Dict[str, list] = {}
        with os.scandir(directory) as it:
            for entry in it:
                grouped.setdefault(entry.name.lower(), []).append(entry.name)

        # Sorted so that original_name does not depend on enumeration order
        self._cache = {key: tuple(sorted(names)) for key, names in grouped.items()}
        self._cache_dir = directory
        self.scan_count += 1
        logging.log(config.TRACE_LEVEL, f"Listed {directory}: {len(self._cache)} entries")
        return self._cache
