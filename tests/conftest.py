import pytest
from pathlib import Path
from photos_rename.metadata.extract import MetadataExtractor


class FakeMetadata(MetadataExtractor):
    """Serves 'DateTimeOriginal' from a {file name: value} dict instead of reading EXIF."""

    def __init__(self, dates=None):
        self.dates = dict(dates or {})
        self.calls = []

    def read_tags(self, path):
        self.calls.append(Path(path).name)
        value = self.dates.get(Path(path).name)
        if value is None:
            return {}
        return {"DateTimeOriginal": value, "EXIF DateTimeOriginal": value}


@pytest.fixture
def fake_metadata():
    return FakeMetadata()


@pytest.fixture
def make_files():
    """Creates small files with distinct contents."""
    def populate(directory: Path, *names):
        for name in names:
            (directory / name).write_bytes(b"data:" + name.encode())
        return directory
    return populate


@pytest.fixture
def photo_dir(tmp_path):
    """An empty directory to drop photos into."""
    d = tmp_path / "photos"
    d.mkdir()
    return d


@pytest.fixture
def listing():
    """Returns a snapshot function: sorted names and contents of a directory."""
    def snapshot(directory: Path):
        return sorted((p.name, p.read_bytes()) for p in directory.iterdir())
    return snapshot
