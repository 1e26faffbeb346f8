import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .. import config
from ..config import RenameConfig
from ..metadata.dates import format_name_base
from ..models import Candidate, ExtensionKind, RenamePair
from ..scanning.existence import ExistenceOracle
from .letters import encode


class TargetRegistry:
    """
    Target names already handed out during the current run.
    Keys ignore case: two targets differing only in case would collide
    on a case-insensitive file system.
    """

    def __init__(self):
        self._claimed: Dict[Tuple[Path, str], Path] = {}

    def _key(self, path: Path) -> Tuple[Path, str]:
        return (path.parent, path.name.lower())

    def claim(self, path: Path):
        key = self._key(path)
        if key in self._claimed:
            raise ValueError(f"Target {path} already claimed by {self._claimed[key]}")
        self._claimed[key] = path

    def is_claimed(self, path: Path) -> bool:
        return self._key(path) in self._claimed

    def __contains__(self, path: Path) -> bool:
        return self.is_claimed(path)

    def __len__(self) -> int:
        return len(self._claimed)


class RenamePlanner:
    """
    Computes a collision-free rename plan.

    For each candidate, suffixes '', 'a', 'b', ... 'z', 'aa' ... are tried in
    that order until the image target, its jpg/jpeg alternate spelling and
    the raw target are all free. A name is free when no file other than the
    one being renamed matches it (ignoring case) and no earlier candidate of
    this run claimed it.
    """

    def __init__(self,
                 rename_config: Optional[RenameConfig] = None,
                 oracle: Optional[ExistenceOracle] = None):
        self.config = rename_config or RenameConfig()
        self.oracle = oracle or ExistenceOracle()
        self.registry = TargetRegistry()
        self.claimed_raw: Set[Path] = set()

    def build_plan(self, candidates: Iterable[Candidate]) -> List[RenamePair]:
        self.registry = TargetRegistry()
        self.claimed_raw = set()
        plan: List[RenamePair] = []
        for cand in candidates:
            plan.extend(self.plan_candidate(cand))
        return plan

    def plan_candidate(self, cand: Candidate) -> List[RenamePair]:
        if cand.capture_datetime is None:
            raise ValueError(f"Candidate {cand.source_path} has no capture time")

        # A raw file follows only the first image that claims it
        if cand.raw_path is not None and cand.raw_path in self.claimed_raw:
            logging.debug(f"   Raw file {cand.raw_name} already paired with an earlier image, left out.")
            cand = replace(cand, raw_name=None)

        name_base = format_name_base(cand.capture_datetime, self.config.name_base_format)
        ext = self._effective_extension(cand)
        alt_kind = ExtensionKind.from_extension(ext).alternate()

        # One fresh listing per candidate, reused while probing its suffixes
        self.oracle.invalidate()

        counter = -1
        while True:
            stem = name_base + encode(counter)
            target = f"{stem}{ext}"
            alt_target = f"{stem}.{alt_kind.value}" if alt_kind else None
            raw_target = f"{stem}{cand.raw_ext}" if cand.raw_name else None

            taken = self._is_taken(cand.directory, target, cand.name)
            if not taken and alt_target:
                taken = self._is_taken(cand.directory, alt_target, cand.name)
            if not taken and raw_target:
                taken = self._is_taken(cand.directory, raw_target, cand.raw_name)

            if not taken:
                break
            counter += 1

        pairs = [RenamePair(cand.source_path, cand.directory / target)]
        self.registry.claim(cand.directory / target)
        if raw_target:
            pairs.append(RenamePair(cand.raw_path, cand.directory / raw_target))
            self.registry.claim(cand.directory / raw_target)
            self.claimed_raw.add(cand.raw_path)

        logging.debug(f"   Target: {target}" + (f", raw target: {raw_target}" if raw_target else ""))
        return pairs

    def _effective_extension(self, cand: Candidate) -> str:
        if self.config.enforced_extension:
            return f".{self.config.enforced_extension}"
        return cand.ext

    def _is_taken(self, directory: Path, name: str, own_name: str) -> bool:
        # The file being renamed never blocks itself
        if name == own_name:
            return False

        others = [n for n in self.oracle.matches_ci(directory, name, use_cache=True) if n != own_name]
        if others:
            logging.log(config.TRACE_LEVEL, f"   {name}: taken on disk by {others[0]}")
            return True

        if self.registry.is_claimed(directory / name):
            logging.log(config.TRACE_LEVEL, f"   {name}: already claimed in this run")
            return True

        return False
