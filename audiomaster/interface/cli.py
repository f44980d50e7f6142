"""CLI command for the audio mastering tool."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .display import AudioDisplay, ProgressTracker
from ..batch.services import BatchProcessor
from ..core.config import AppInfo, Paths, ProcessConfig
from ..core.exceptions import AudioMasterError, ConfigurationError
from ..core.logging_util import setup_logging
from ..processing.models import JobOutcome
from ..processing.runner import FFmpegRunner
from ..processing.services import MasteringOrchestrator
from ..settings.presets import PRESET_NAMES, get_preset, is_known_preset, list_presets
from ..settings.services import load_settings, save_settings
from ..storage.services import FileManager

logger = logging.getLogger(__name__)

# Initialize Rich console and Typer app
console = Console()
app = typer.Typer(
    name=AppInfo.NAME,
    help=AppInfo.DESCRIPTION,
    rich_markup_mode="rich",
    add_completion=False,
)

# Initialize display components
display = AudioDisplay(console)
progress = ProgressTracker(console)


def handle_error(error: Exception) -> None:
    """Centralized error handling."""
    if isinstance(error, AudioMasterError):
        display.show_error_message(error.message)
        if error.details:
            console.print(f"[dim]Details: {error.details}[/dim]")
    else:
        display.show_error_message(f"Unexpected error: {str(error)}")

    raise typer.Exit(1)


@app.command()
def master(
    input_dir: Path = typer.Argument(
        Path(Paths.DEFAULT_INPUT_DIR), help="Directory containing audio files"
    ),
    output_dir: Path = typer.Argument(
        Path(Paths.DEFAULT_OUTPUT_DIR), help="Directory for mastered files"
    ),
    preset: Optional[str] = typer.Argument(
        None, help=f"Preset name ({', '.join(PRESET_NAMES)})"
    ),
    settings_file: Optional[Path] = typer.Option(
        None, "--settings", "-s", help="Load base settings from a JSON file"
    ),
    save_settings_file: Optional[Path] = typer.Option(
        None, "--save-settings", help="Write the effective settings to a JSON file"
    ),
    show_presets: bool = typer.Option(
        False, "--list-presets", help="List available presets and exit"
    ),
    timeout: float = typer.Option(
        ProcessConfig.DEFAULT_TIMEOUT_SECONDS,
        "--timeout",
        "-t",
        help="Seconds before an ffmpeg run is killed (0 disables)",
    ),
    jobs: int = typer.Option(
        1, "--jobs", "-j", help="Files to master in parallel (capped at CPU count)"
    ),
    ffmpeg: Optional[str] = typer.Option(
        None, "--ffmpeg", help="Path to the ffmpeg binary"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 if any file fails"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
):
    """Master every audio file in INPUT_DIR into OUTPUT_DIR."""
    setup_logging(verbose)

    try:
        if show_presets:
            display.show_presets_table({name: get_preset(name) for name in list_presets()})
            return

        if timeout < 0:
            raise ConfigurationError("Timeout cannot be negative", parameter="timeout")

        display.show_app_header()
        display.show_run_config(input_dir, output_dir, preset, jobs)

        if not input_dir.exists():
            display.show_warning_message(f"Input directory does not exist: {input_dir}")
            Paths.ensure_dir(input_dir)
            display.show_info_message(
                f"Created {input_dir}. Add audio files to it and run again."
            )
            return

        if preset and not is_known_preset(preset):
            logger.warning("Unknown preset %r, using default settings", preset)
            display.show_warning_message(
                f"Unknown preset. Available: {', '.join(PRESET_NAMES)}"
            )
            display.show_info_message("Continuing with default settings...")

        base_settings = load_settings(settings_file) if settings_file else None
        effective = BatchProcessor.settings_for(preset, base_settings)
        if save_settings_file:
            save_settings(effective, save_settings_file)
            display.show_success_message(f"Settings saved: {save_settings_file}")
        if verbose:
            display.show_settings(effective, title="Effective Settings")

        files = FileManager().find_audio_files(input_dir)
        if not files:
            display.show_warning_message(f"No audio files found in {input_dir}")
            return
        display.show_file_list(files)

        def on_finish(outcome: JobOutcome) -> None:
            progress.finish(outcome)
            if verbose and outcome.analysis is not None:
                display.show_analysis_report(outcome.analysis, outcome.job.name)
            display.show_outcome(outcome)

        runner = FFmpegRunner(binary=ffmpeg, timeout=timeout or None)
        orchestrator = MasteringOrchestrator(runner, on_progress=progress.update)
        processor = BatchProcessor(
            orchestrator, jobs=jobs, on_start=progress.start, on_finish=on_finish
        )

        with progress.batch_progress():
            result = asyncio.run(
                processor.run(input_dir, output_dir, preset, base_settings)
            )

        display.show_batch_summary(result)
        if strict and result.error_count:
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e)
