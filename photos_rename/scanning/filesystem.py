import os
import logging
from pathlib import Path
from typing import Iterator, List, Optional

from ..config import RenameConfig
from ..models import Candidate
from ..metadata.dates import parse_capture_datetime
from ..metadata.extract import MetadataExtractor
from .existence import ExistenceOracle


class CandidateScanner:
    def __init__(self,
                 rename_config: Optional[RenameConfig] = None,
                 metadata: Optional[MetadataExtractor] = None,
                 oracle: Optional[ExistenceOracle] = None):
        self.config = rename_config or RenameConfig()
        self.metadata = metadata or MetadataExtractor()
        self.oracle = oracle or ExistenceOracle()

    def scan(self, directory: Path) -> Iterator[Candidate]:
        """
        Generator that yields a Candidate for every dated image directly
        inside directory. Files without a usable capture time are skipped.
        """
        directory = Path(directory)
        logging.debug(f"Processing directory '{directory}'")

        for path in self._iter_files(directory):
            candidate = self._process_single_file(path)
            if candidate:
                yield candidate

    def _process_single_file(self, path: Path) -> Optional[Candidate]:
        logging.debug(f"-- File: {path}")

        if path.name.startswith("."):
            # Hidden files, AppleDouble "._" resource forks included
            logging.debug("   Hidden file, skipped.")
            return None

        if not self.config.is_image(path.suffix):
            logging.debug("   Not an image, skipped.")
            return None

        tags = self.metadata.read_tags(path)
        field = self.config.datetime_field
        if field not in tags:
            logging.debug(f"   No '{field}' field (not a jpeg?). Skipped.")
            return None

        date_str = tags[field]
        logging.debug(f"   Datetime: [{date_str}]")
        capture_dt = parse_capture_datetime(date_str, self.config.input_datetime_format)
        if capture_dt is None:
            logging.debug(f"   Unable to parse '{field}'. Skipped.")
            return None

        raw_name = self._find_raw_sibling(path)
        if raw_name:
            logging.debug(f"   Raw file: {raw_name} (exists)")
        else:
            logging.debug(f"   Raw file: {path.stem}{self.config.raw_extension} (does not exist)")

        return Candidate(
            directory=path.parent,
            name=path.name,
            capture_datetime=capture_dt,
            raw_name=raw_name,
        )

    def _find_raw_sibling(self, path: Path) -> Optional[str]:
        """On-disk name of <stem><raw extension>, whatever its case."""
        wanted = f"{path.stem}{self.config.raw_extension}"
        for name in self.oracle.matches_ci(path.parent, wanted, use_cache=True):
            if name != path.name and (path.parent / name).is_file():
                return name
        return None

    def _iter_files(self, directory: Path) -> Iterator[Path]:
        """Regular files directly inside directory, in a stable order."""
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except (OSError, PermissionError) as e:
            logging.warning(f"Cannot list {directory}: {e}")
            return

        # Sort for stable traversal order
        entries.sort(key=lambda e: (e.name.lower(), e.name))

        files: List[Path] = []
        for e in entries:
            if e.is_file(follow_symlinks=False):
                files.append(Path(e.path))
            else:
                logging.debug(f"-- Entry: {e.path} is not a regular file, skipped.")

        for f in files:
            yield f
