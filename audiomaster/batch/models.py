"""Batch run models."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..processing.models import JobOutcome


@dataclass
class FailedFile:
    """An input that never became a job (e.g. removed mid-run)."""

    input_file: Path
    message: str


@dataclass
class BatchResult:
    """Counters and per-file outcomes of one batch run."""

    input_dir: Path
    output_dir: Path
    preset: Optional[str] = None
    outcomes: List[JobOutcome] = field(default_factory=list)
    rejected: List[FailedFile] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def error_count(self) -> int:
        failed_jobs = sum(1 for outcome in self.outcomes if not outcome.success)
        return failed_jobs + len(self.rejected)

    @property
    def total(self) -> int:
        return len(self.outcomes) + len(self.rejected)

    @property
    def output_files(self) -> List[Path]:
        return [o.job.output_file for o in self.outcomes if o.success]
