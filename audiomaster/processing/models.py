"""Processing domain models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..core.config import FileConfig
from ..core.exceptions import MissingInputFileError
from ..settings.models import MasteringSettings


@dataclass(frozen=True)
class AnalysisResult:
    """Levels read from ffmpeg's diagnostic output.

    ``peak_level`` and ``rms_level`` are None when ffmpeg printed nothing
    recognisable for them.
    """

    duration: float = 0.0
    peak_level: Optional[float] = None
    rms_level: Optional[float] = None

    @property
    def dynamic_range(self) -> float:
        """Peak-to-RMS distance in dB, 0 when either level is missing."""
        if self.peak_level is None or self.rms_level is None:
            return 0.0
        return abs(self.peak_level - self.rms_level)

    @property
    def is_undetected(self) -> bool:
        """True when the levels cannot be trusted for normal mastering.

        Each level is either missing or reads exactly 0.0 dBFS. A real
        signal never measures 0.0 peak and 0.0 RMS at once, so that
        combination is treated as a failed measurement.
        """
        return (self.peak_level or 0) == 0 and (self.rms_level or 0) == 0

    @property
    def peak_assessment(self) -> str:
        """Assessment of peak level quality."""
        if self.peak_level is None:
            return "Peak level not detected"
        elif self.peak_level > -1:
            return "⚠️  Peak level is very high (may be clipped)"
        elif self.peak_level > -3:
            return "⚠️  Peak level is high"
        else:
            return "✓ Peak level is good"

    @property
    def dynamic_range_assessment(self) -> str:
        """Assessment of dynamic range quality."""
        if self.peak_level is None or self.rms_level is None:
            return ""
        if self.dynamic_range < 8:
            return "⚠️  Low dynamic range (heavily compressed)"
        elif self.dynamic_range < 14:
            return "⚠️  Moderate dynamic range"
        else:
            return "✓ Good dynamic range"


class JobState(Enum):
    """Lifecycle of a single mastering job."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    ANALYSIS_FAILED = "analysis_failed"
    ANALYSIS_SUCCEEDED = "analysis_succeeded"
    MASTERING = "mastering"
    MASTER_SUCCEEDED = "master_succeeded"
    MASTER_FAILED = "master_failed"
    SIMPLIFIED_MASTERING = "simplified_mastering"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_success(self) -> bool:
        return self in (JobState.MASTER_SUCCEEDED, JobState.SUCCEEDED)


class MasteringMode(Enum):
    """Which filter chain produced the output file."""

    NORMAL = "normal"
    SIMPLIFIED = "simplified"


@dataclass(frozen=True)
class MasteringJob:
    """One input file to master, with the settings to master it with."""

    input_file: Path
    output_file: Optional[Path] = None
    settings: MasteringSettings = field(default_factory=MasteringSettings)

    def __post_init__(self):
        """Validate the input and derive the output path."""
        input_file = Path(self.input_file)
        if not input_file.exists():
            raise MissingInputFileError(
                f"Input file not found: {input_file}", file_path=str(input_file)
            )
        object.__setattr__(self, "input_file", input_file)

        if self.output_file is None:
            output_file = input_file.with_name(
                f"{input_file.stem}{FileConfig.OUTPUT_SUFFIX}{input_file.suffix}"
            )
        else:
            output_file = Path(self.output_file)
        object.__setattr__(self, "output_file", output_file)

    @property
    def name(self) -> str:
        return self.input_file.name


@dataclass
class JobOutcome:
    """Result of running one job through the orchestrator."""

    job: MasteringJob
    state: JobState = JobState.IDLE
    history: List[JobState] = field(default_factory=list)
    analysis: Optional[AnalysisResult] = None
    mode: Optional[MasteringMode] = None
    error: Optional[Exception] = None
    elapsed_seconds: float = 0.0

    def transition(self, state: JobState) -> None:
        """Move to ``state``, keeping the path taken."""
        self.history.append(self.state)
        self.state = state

    @property
    def success(self) -> bool:
        return self.state.is_success

    @property
    def message(self) -> str:
        """One-line summary for logs and tables."""
        if self.success:
            return f"Mastered ({self.mode.value}): {self.job.output_file.name}"
        if self.error is not None:
            return str(self.error)
        return f"Stopped in state {self.state.value}"
