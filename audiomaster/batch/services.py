"""Batch driver: master every audio file in a directory."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, List, Optional

from .models import BatchResult, FailedFile
from ..core.exceptions import ConfigurationError, MissingInputFileError
from ..processing.models import JobOutcome, MasteringJob
from ..processing.services import MasteringOrchestrator
from ..settings.models import MasteringSettings
from ..settings.presets import get_preset
from ..storage.services import FileManager

logger = logging.getLogger(__name__)

StartCallback = Callable[[int, int, Path], None]
FinishCallback = Callable[[JobOutcome], None]


def max_workers() -> int:
    return os.cpu_count() or 1


class BatchProcessor:
    """Runs the orchestrator over a directory of files.

    Files are processed one at a time unless ``jobs`` asks for more, in
    which case at most ``min(jobs, cpu_count)`` ffmpeg processes run at
    once. A failed file never stops the run.
    """

    def __init__(
        self,
        orchestrator: Optional[MasteringOrchestrator] = None,
        jobs: int = 1,
        on_start: Optional[StartCallback] = None,
        on_finish: Optional[FinishCallback] = None,
    ):
        if jobs < 1:
            raise ConfigurationError("jobs must be at least 1", parameter="jobs")
        self.orchestrator = orchestrator or MasteringOrchestrator()
        self.jobs = min(jobs, max_workers())
        self.on_start = on_start
        self.on_finish = on_finish

    @staticmethod
    def settings_for(
        preset: Optional[str], base_settings: Optional[MasteringSettings] = None
    ) -> MasteringSettings:
        """Fresh settings for one job; unknown presets fall back silently."""
        settings = get_preset(preset)
        if settings is not None:
            return settings
        return base_settings if base_settings is not None else MasteringSettings()

    @staticmethod
    def _notify(callback: Optional[Callable], *args) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            logger.exception("Progress callback failed")

    async def run(
        self,
        input_dir: Path,
        output_dir: Path,
        preset: Optional[str] = None,
        base_settings: Optional[MasteringSettings] = None,
    ) -> BatchResult:
        input_dir = Path(input_dir)
        file_manager = FileManager(output_dir)
        result = BatchResult(
            input_dir=input_dir, output_dir=file_manager.output_dir, preset=preset
        )

        input_files = file_manager.find_audio_files(input_dir)
        if not input_files:
            logger.warning("No audio files found in %s", input_dir)
            return result

        logger.info("Processing %d file(s) from %s", len(input_files), input_dir)
        file_manager.ensure_output_dir()

        semaphore = asyncio.Semaphore(self.jobs)
        total = len(input_files)

        async def run_one(index: int, input_file: Path):
            async with semaphore:
                self._notify(self.on_start, index, total, input_file)
                try:
                    job = MasteringJob(
                        input_file=input_file,
                        output_file=file_manager.output_path_for(input_file),
                        settings=self.settings_for(preset, base_settings),
                    )
                    outcome = await self.orchestrator.process(job)
                except MissingInputFileError as e:
                    logger.error("Skipping %s: %s", input_file.name, e)
                    return FailedFile(input_file=input_file, message=str(e))
                except Exception as e:
                    logger.exception("Unexpected error on %s", input_file.name)
                    return FailedFile(input_file=input_file, message=str(e))

                if outcome.success:
                    logger.info("Done: %s", job.output_file.name)
                else:
                    logger.error("Failed: %s - %s", input_file.name, outcome.message)
                self._notify(self.on_finish, outcome)
                return outcome

        finished: List = await asyncio.gather(
            *(run_one(i, path) for i, path in enumerate(input_files, 1))
        )
        for item in finished:
            if isinstance(item, FailedFile):
                result.rejected.append(item)
            else:
                result.outcomes.append(item)

        logger.info(
            "Batch complete: %d succeeded, %d failed",
            result.success_count,
            result.error_count,
        )
        return result
