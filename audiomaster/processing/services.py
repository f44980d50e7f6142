"""Mastering orchestration: analysis, mastering and the simplified fallback."""

import logging
import time
from typing import Callable, List, Optional, Type

from .filters import SIMPLIFIED_FILTER_CHAIN, build_filter_chain
from .models import AnalysisResult, JobOutcome, JobState, MasteringJob, MasteringMode
from .parser import parse_analysis, parse_progress
from .runner import FFmpegRunner, ProcessResult
from ..core.config import EncoderConfig, ProcessConfig
from ..core.exceptions import (
    AnalysisError,
    AudioMasterError,
    ExternalProcessError,
    MasteringError,
    SimplifiedMasteringError,
)

logger = logging.getLogger(__name__)

ANALYSIS_FILTER = (
    "astats=metadata=1:reset=1,ametadata=print:key=lavfi.astats.Overall.RMS_level"
)

ProgressCallback = Callable[[MasteringJob, str], None]


def _tail(text: str) -> str:
    return text[-ProcessConfig.ERROR_TAIL_CHARS:].strip()


class MasteringOrchestrator:
    """Runs one job through analysis and mastering.

    Normal mastering that fails is retried once with the simplified chain.
    Inputs whose levels cannot be detected go straight to the simplified
    chain.
    """

    def __init__(
        self,
        runner: Optional[FFmpegRunner] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.runner = runner or FFmpegRunner()
        self.on_progress = on_progress

    def analysis_args(self, job: MasteringJob) -> List[str]:
        return ["-i", str(job.input_file), "-af", ANALYSIS_FILTER, "-f", "null", "-"]

    def mastering_args(self, job: MasteringJob, filter_chain: str) -> List[str]:
        return [
            "-i",
            str(job.input_file),
            "-af",
            filter_chain,
            *EncoderConfig.output_args(),
            "-y",
            str(job.output_file),
        ]

    async def analyze(self, job: MasteringJob) -> AnalysisResult:
        """Run the read-only diagnostic pass and parse its output."""
        try:
            result = await self.runner.run(self.analysis_args(job))
        except ExternalProcessError as e:
            raise AnalysisError(
                "Audio analysis failed",
                command=e.command,
                output=e.output,
                details=str(e),
            )

        if not result.ok:
            raise AnalysisError(
                "Audio analysis failed",
                command=result.command,
                returncode=result.returncode,
                output=result.output,
                details=_tail(result.output),
            )

        return parse_analysis(result.output)

    async def master(self, job: MasteringJob) -> None:
        """Master with the chain built from the job's settings."""
        await self._transcode(job, build_filter_chain(job.settings), MasteringError)

    async def master_simplified(self, job: MasteringJob) -> None:
        """Master with the fixed aggressive loudness chain."""
        await self._transcode(job, SIMPLIFIED_FILTER_CHAIN, SimplifiedMasteringError)

    async def _transcode(
        self,
        job: MasteringJob,
        filter_chain: str,
        error_cls: Type[ExternalProcessError],
    ) -> ProcessResult:
        job.output_file.parent.mkdir(parents=True, exist_ok=True)

        def on_chunk(text: str) -> None:
            marker = parse_progress(text)
            if marker and self.on_progress is not None:
                self.on_progress(job, marker)

        label = "Mastering" if error_cls is MasteringError else "Simplified mastering"
        try:
            result = await self.runner.run(self.mastering_args(job, filter_chain), on_chunk)
        except ExternalProcessError as e:
            self._discard_output(job)
            raise error_cls(
                f"{label} failed", command=e.command, output=e.output, details=str(e)
            )

        if not result.ok:
            self._discard_output(job)
            logger.error(
                "%s failed for %s (exit %s):\n%s",
                label,
                job.name,
                result.returncode,
                _tail(result.output),
            )
            raise error_cls(
                f"{label} failed (exit code {result.returncode})",
                command=result.command,
                returncode=result.returncode,
                output=result.output,
            )
        return result

    @staticmethod
    def _discard_output(job: MasteringJob) -> None:
        # ffmpeg -y creates the file before it fails or is killed
        try:
            job.output_file.unlink()
        except FileNotFoundError:
            pass
        else:
            logger.debug("Removed partial output %s", job.output_file)

    async def process(self, job: MasteringJob) -> JobOutcome:
        """Walk the job through the state machine and report how it ended.

        Job-level failures are recorded on the outcome, never raised.
        """
        outcome = JobOutcome(job=job)
        started = time.monotonic()

        def move(state: JobState) -> None:
            logger.debug("%s: %s -> %s", job.name, outcome.state.value, state.value)
            outcome.transition(state)

        logger.info("Mastering %s -> %s", job.input_file, job.output_file)

        move(JobState.ANALYZING)
        try:
            outcome.analysis = await self.analyze(job)
        except AnalysisError as e:
            outcome.error = e
            move(JobState.ANALYSIS_FAILED)
            outcome.elapsed_seconds = time.monotonic() - started
            return outcome
        move(JobState.ANALYSIS_SUCCEEDED)

        if outcome.analysis.is_undetected:
            logger.warning(
                "Levels not detected for %s, using simplified mastering", job.name
            )
        else:
            move(JobState.MASTERING)
            try:
                await self.master(job)
            except MasteringError as e:
                logger.warning(
                    "Normal mastering failed for %s, retrying simplified: %s",
                    job.name,
                    e.message,
                )
                move(JobState.MASTER_FAILED)
            else:
                outcome.mode = MasteringMode.NORMAL
                move(JobState.MASTER_SUCCEEDED)
                outcome.elapsed_seconds = time.monotonic() - started
                return outcome

        move(JobState.SIMPLIFIED_MASTERING)
        try:
            await self.master_simplified(job)
        except SimplifiedMasteringError as e:
            outcome.error = e
            move(JobState.FAILED)
        else:
            outcome.mode = MasteringMode.SIMPLIFIED
            move(JobState.SUCCEEDED)

        outcome.elapsed_seconds = time.monotonic() - started
        return outcome

    async def process_or_raise(self, job: MasteringJob) -> JobOutcome:
        """Like :meth:`process`, but raise the terminal error on failure."""
        outcome = await self.process(job)
        if not outcome.success:
            if isinstance(outcome.error, AudioMasterError):
                raise outcome.error
            raise AudioMasterError(outcome.message)
        return outcome
