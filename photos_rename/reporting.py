import csv
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .models import RenamePair


class PlanReporter:
    """
    Prints the rename plan for the user and optionally exports it as CSV.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def report_plan(self, plan: List[RenamePair], verbose: bool = False) -> int:
        """
        Prints one line per rename (and per no-op when verbose).
        Returns the number of actual renames.
        """
        count = 0
        for pair in plan:
            if pair.do_rename:
                count += 1
                self._write(f"{pair.source} -> {pair.target.name}")
            elif verbose:
                self._write(f"{pair.source} (no-op)")

        self._write(f"{count} file(s) to rename.")
        return count

    def write_csv(self, plan: List[RenamePair], output_csv: Path):
        headers = ["Source", "Target", "Action"]

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            for pair in plan:
                action = "rename" if pair.do_rename else "no-op"
                writer.writerow([str(pair.source), str(pair.target), action])

        logging.info(f"Plan written to {output_csv} ({len(plan)} rows)")

    def _write(self, line: str):
        print(line, file=self.stream)
