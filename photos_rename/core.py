import logging
from pathlib import Path
from typing import Optional

from .config import RenameConfig
from .exceptions import DirectoryNotFoundError
from .metadata.extract import MetadataExtractor
from .models import ExecutionResult
from .organization.mover import ExecutionMode, PlanExecutor
from .organization.planner import RenamePlanner
from .reporting import PlanReporter
from .scanning.existence import ExistenceOracle
from .scanning.filesystem import CandidateScanner


class PhotosRenameApp:
    def __init__(self,
                 rename_config: Optional[RenameConfig] = None,
                 metadata: Optional[MetadataExtractor] = None,
                 executor: Optional[PlanExecutor] = None):
        self.config = rename_config or RenameConfig()
        self.oracle = ExistenceOracle()
        self.scanner = CandidateScanner(self.config, metadata=metadata, oracle=self.oracle)
        self.planner = RenamePlanner(self.config, oracle=self.oracle)
        self.executor = executor or PlanExecutor()

    def plan(self, directory: Path):
        """Scan + Plan, without touching the disk."""
        directory = Path(directory)
        if not directory.is_dir():
            raise DirectoryNotFoundError(directory)
        return self.planner.build_plan(self.scanner.scan(directory))

    def run(self,
            directory: Path,
            mode: ExecutionMode,
            report_csv: Optional[Path] = None) -> ExecutionResult:
        """
        1. Scan the directory for dated images
        2. Plan collision-free target names
        3. Report, confirm and rename
        """
        plan = self.plan(directory)
        logging.debug(f"Planned {len(plan)} pair(s) for {directory}")

        if report_csv:
            self.executor.reporter.write_csv(plan, report_csv)

        return self.executor.execute(plan, mode)
