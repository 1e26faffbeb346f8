import logging
from pathlib import Path
from typing import Dict

import exifread

from ..exceptions import MetadataExtractionError

# exifread stores embedded previews as raw bytes under these keys
THUMBNAIL_TAGS = ('JPEGThumbnail', 'TIFFThumbnail')


class MetadataExtractor:
    """
    Reads the EXIF block of an image and exposes it as plain strings.

    exifread names tags after their IFD ('EXIF DateTimeOriginal',
    'Image Model'). Each tag is published under that full name and under
    its short name ('DateTimeOriginal'); on a short name clash the first
    IFD read wins.
    """

    def read_tags(self, path: Path) -> Dict[str, str]:
        """
        Returns a tag name -> value mapping, empty when the file has no
        readable EXIF data.
        """
        try:
            raw_tags = self._process(path)
        except MetadataExtractionError as e:
            logging.warning(f"{e}")
            return {}

        tags: Dict[str, str] = {}
        for key, value in raw_tags.items():
            if key in THUMBNAIL_TAGS:
                continue
            text = str(value).strip()
            tags[key] = text
            short = key.split(' ', 1)[-1]
            tags.setdefault(short, text)
        return tags

    def _process(self, path: Path):
        try:
            with path.open('rb') as f:
                # details=False skips MakerNotes, which we never read
                return exifread.process_file(f, details=False)
        except Exception as e:
            raise MetadataExtractionError(f"ExifRead failed for {path}: {e}") from e
