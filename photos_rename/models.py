import enum
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


class ExtensionKind(enum.Enum):
    JPG = 'jpg'
    JPEG = 'jpeg'
    OTHER = 'other'

    @classmethod
    def from_extension(cls, ext: str) -> 'ExtensionKind':
        """Case-insensitive, the leading dot is optional."""
        cleaned = ext.lower().lstrip('.')
        if cleaned == 'jpg':
            return cls.JPG
        if cleaned == 'jpeg':
            return cls.JPEG
        return cls.OTHER

    def alternate(self) -> Optional['ExtensionKind']:
        """The other spelling of the same format, if there is one."""
        if self is ExtensionKind.JPG:
            return ExtensionKind.JPEG
        if self is ExtensionKind.JPEG:
            return ExtensionKind.JPG
        return None


@dataclass(frozen=True)
class Candidate:
    """
    An image found during a scan, eligible for renaming.
    """
    directory: Path
    name: str                           # on-disk name, original case
    capture_datetime: Optional[datetime] = None
    raw_name: Optional[str] = None      # on-disk name of the raw sibling

    @property
    def source_path(self) -> Path:
        return self.directory / self.name

    @property
    def stem(self) -> str:
        return Path(self.name).stem

    @property
    def ext(self) -> str:
        return Path(self.name).suffix

    @property
    def raw_path(self) -> Optional[Path]:
        if self.raw_name is None:
            return None
        return self.directory / self.raw_name

    @property
    def raw_ext(self) -> Optional[str]:
        if self.raw_name is None:
            return None
        return Path(self.raw_name).suffix


@dataclass(frozen=True)
class RenamePair:
    source: Path
    target: Path

    @property
    def do_rename(self) -> bool:
        # Case-sensitive: 'a.JPG' -> 'a.jpg' is a real rename
        return str(self.source) != str(self.target)


@dataclass
class ExecutionResult:
    """Counters for a completed (or simulated) run."""
    planned: int = 0
    no_op: int = 0
    renamed: int = 0
    failed: int = 0
    dry_run: bool = False
