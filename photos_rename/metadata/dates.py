"""
Parsing of EXIF timestamps and formatting of new name bases.
"""
from datetime import datetime
from typing import Optional

from .. import config


def parse_capture_datetime(value: Optional[str],
                           pattern: str = config.INPUT_DATETIME_FORMAT) -> Optional[datetime]:
    """
    Parses an EXIF date string ("YYYY:MM:DD HH:MM:SS" by default).
    Returns None when the value is missing or does not match the pattern.
    """
    if not value:
        return None
    # Some cameras pad the ASCII field with NULs
    clean = value.strip().strip('\x00').strip()
    try:
        return datetime.strptime(clean, pattern)
    except ValueError:
        return None


def format_name_base(dt: datetime, pattern: str = config.NAME_BASE_FORMAT) -> str:
    """2023-08-03 15:08:50 -> '2023_0803_150850' with the default pattern."""
    return dt.strftime(pattern)
