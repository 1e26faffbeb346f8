import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__, config
from .config import RenameConfig, normalize_enforced_extension, normalize_raw_extension
from .core import PhotosRenameApp
from .exceptions import (
    DirectoryNotFoundError,
    PhotosRenameError,
    TooManyDirectoriesError,
    UsageError,
)
from .organization.mover import ExecutionMode


class _ArgumentParser(argparse.ArgumentParser):
    """Flag errors exit with status 1 instead of argparse's 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        raise UsageError(f"{self.prog}: error: {message}")


def setup_logging(debug: bool = False, trace: bool = False):
    """Console logging; nothing is written inside the processed directory."""
    logging.addLevelName(config.TRACE_LEVEL, "TRACE")
    if trace:
        log_level = config.TRACE_LEVEL
    elif debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.getLogger().setLevel(log_level)

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv: Optional[List[str]] = None):
    p = _ArgumentParser(
        prog="photos-rename",
        description="Rename JPEG files as per their EXIF creation date. "
                    "Also rename the corresponding raw file if it exists.",
    )

    p.add_argument("directories", nargs="*", type=Path, metavar="DIRECTORY",
                   help="Directory to process (default: current directory)")

    p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    p.add_argument("-n", "--dry-run", action="store_true", help="Show what would be renamed, rename nothing")
    p.add_argument("-e", "--enforce-extension", default=None, metavar="EXT",
                   help="Extension of renamed images: '', 'jpg' or 'jpeg' (default: keep)")
    p.add_argument("-v", "--verbose", action="store_true", help="Also list files that keep their name")
    p.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    p.add_argument("-t", "--trace", action="store_true", help="Enable trace logging (implies --debug)")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s version {__version__}")

    p.add_argument("--raw-extension", default=config.DEFAULT_RAW_EXTENSION, metavar="EXT",
                   help=f"Extension of the paired raw files (default: {config.DEFAULT_RAW_EXTENSION})")
    p.add_argument("--report-csv", type=Path, default=None, metavar="PATH",
                   help="Also write the rename plan to this CSV file")

    return p.parse_args(argv)


def build_config(args) -> RenameConfig:
    return RenameConfig(
        raw_extension=normalize_raw_extension(args.raw_extension),
        enforced_extension=normalize_enforced_extension(args.enforce_extension),
    )


def resolve_directory(args) -> Path:
    if len(args.directories) >= 2:
        raise TooManyDirectoriesError(args.directories)
    directory = args.directories[0] if args.directories else Path(".")
    if not directory.is_dir():
        raise DirectoryNotFoundError(directory)
    return directory


def run(argv: Optional[List[str]] = None, app_factory=PhotosRenameApp) -> int:
    """Runs the tool and returns the process exit code."""
    try:
        args = parse_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return e.exit_code

    setup_logging(args.debug, args.trace)

    try:
        # Fatal configuration problems abort before anything is scanned
        directory = resolve_directory(args)
        rename_config = build_config(args)

        app = app_factory(rename_config)
        mode = ExecutionMode(
            dry_run=args.dry_run,
            skip_confirmation=args.yes,
            verbose=args.verbose,
        )
        result = app.run(directory, mode, report_csv=args.report_csv)
    except PhotosRenameError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception:
        logging.exception("Fatal error during renaming.")
        return 1

    if not result.dry_run and result.planned:
        logging.info(f"Renamed {result.renamed} file(s), {result.failed} failure(s).")
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
