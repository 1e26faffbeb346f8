import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from tqdm import tqdm

from ..exceptions import ConfirmationDeclined, FileOperationError
from ..models import ExecutionResult, RenamePair
from ..reporting import PlanReporter


@dataclass(frozen=True)
class ExecutionMode:
    dry_run: bool = False
    skip_confirmation: bool = False
    verbose: bool = False


def ask_confirmation(count: int) -> bool:
    try:
        answer = input(f"Rename {count} file(s)? (y/N) ")
    except EOFError:
        # Closed or exhausted stdin counts as "no"
        print()
        return False
    return answer.strip().lower() == 'y'


class PlanExecutor:
    def __init__(self,
                 reporter: Optional[PlanReporter] = None,
                 confirm: Callable[[int], bool] = ask_confirmation,
                 show_progress: bool = True):
        self.reporter = reporter or PlanReporter()
        self.confirm = confirm
        self.show_progress = show_progress

    def execute(self, plan: List[RenamePair], mode: ExecutionMode) -> ExecutionResult:
        """
        Reports the plan, asks for confirmation when required, then renames.
        Raises ConfirmationDeclined before touching anything if the user
        does not answer 'y'.
        """
        result = ExecutionResult(dry_run=mode.dry_run)
        count = self.reporter.report_plan(plan, verbose=mode.verbose)
        result.planned = count
        result.no_op = len(plan) - count

        if mode.dry_run:
            logging.info(f"[DRY RUN] {count} rename(s) not performed.")
            return result

        if count == 0:
            logging.info("No files need renaming.")
            return result

        if not mode.skip_confirmation and not self.confirm(count):
            raise ConfirmationDeclined()

        to_process = [pair for pair in plan if pair.do_rename]
        for pair in tqdm(to_process, desc="Renaming", disable=not self.show_progress):
            try:
                self._rename(pair.source, pair.target)
                result.renamed += 1
            except FileOperationError as e:
                logging.error(f"{e}")
                result.failed += 1

        return result

    def _rename(self, src: Path, dest: Path):
        logging.debug(f"Rename {src} -> {dest}")

        # Never overwrite a file that appeared after planning
        if dest.exists() and not self._same_file(src, dest):
            raise FileOperationError(src, dest, "target already exists")

        try:
            os.rename(src, dest)
        except OSError as e:
            raise FileOperationError(src, dest, e) from e

    def _same_file(self, src: Path, dest: Path) -> bool:
        # Case-only renames on a case-insensitive file system
        try:
            return src.samefile(dest)
        except OSError:
            return False
