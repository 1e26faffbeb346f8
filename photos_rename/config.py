"""
Configuration constants for the photo renamer.
"""
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .exceptions import InvalidExtensionError

# --- File Type Definitions ---
IMAGE_EXTS = frozenset({'.jpg', '.jpeg'})
DEFAULT_RAW_EXTENSION = '.RW2'

# Values accepted by --enforce-extension ('' means "keep the original")
ENFORCEABLE_EXTS = ('jpg', 'jpeg')

# --- Metadata Parsing ---
DATETIME_FIELD = 'DateTimeOriginal'

# strptime format of the EXIF value
INPUT_DATETIME_FORMAT = '%Y:%m:%d %H:%M:%S'

# --- Logging ---
# Below DEBUG: one line per directory listing and per checked name
TRACE_LEVEL = 5

# --- Naming ---
# strftime format of the new file name (extension excluded)
NAME_BASE_FORMAT = '%Y_%m%d_%H%M%S'


@dataclass(frozen=True)
class RenameConfig:
    """
    Everything the scanner and the planner need to know about naming.
    Defaults reproduce the behaviour of the command line tool.
    """
    raw_extension: str = DEFAULT_RAW_EXTENSION
    datetime_field: str = DATETIME_FIELD
    input_datetime_format: str = INPUT_DATETIME_FORMAT
    name_base_format: str = NAME_BASE_FORMAT
    image_extensions: FrozenSet[str] = IMAGE_EXTS
    enforced_extension: Optional[str] = None  # None, 'jpg' or 'jpeg'

    def is_image(self, ext: str) -> bool:
        return ext.lower() in self.image_extensions


def normalize_enforced_extension(value: Optional[str]) -> Optional[str]:
    """
    Turns the user supplied extension into its canonical form.

    '', None -> None; 'JPG', '.jpg' -> 'jpg'; 'Jpeg', '.JPEG' -> 'jpeg'.
    Anything else raises InvalidExtensionError.
    """
    if value is None:
        return None
    cleaned = value.strip().lower()
    if cleaned.startswith('.'):
        cleaned = cleaned[1:]
    if not cleaned:
        return None
    if cleaned not in ENFORCEABLE_EXTS:
        raise InvalidExtensionError(value)
    return cleaned


def normalize_raw_extension(value: str) -> str:
    value = value.strip()
    if not value or value == '.':
        raise InvalidExtensionError(value, allowed="any non-empty extension")
    return value if value.startswith('.') else f'.{value}'
