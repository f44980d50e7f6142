"""Rich console display components for the audio mastering tool."""

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from ..batch.models import BatchResult
from ..core.config import AppInfo, FileConfig
from ..processing.models import AnalysisResult, JobOutcome, MasteringJob
from ..settings.models import MasteringSettings


def _db(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.2f} dBFS"


class AudioDisplay:
    """Handles all rich console output for mastering runs."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize with optional console instance."""
        self.console = console or Console()

    def show_app_header(self) -> None:
        """Display application header with branding."""
        header_text = Text()
        header_text.append(AppInfo.NAME.upper(), style="bold blue")
        header_text.append(f" v{AppInfo.VERSION}", style="dim")
        header_text.append(f"\n{AppInfo.DESCRIPTION}", style="italic")

        panel = Panel(Align.center(header_text), border_style="blue", padding=(1, 2))
        self.console.print(panel)

    def show_run_config(
        self, input_dir: Path, output_dir: Path, preset: Optional[str], jobs: int = 1
    ) -> None:
        """Display batch run configuration."""
        formats = ", ".join(
            ext.lstrip(".").upper() for ext in FileConfig.SUPPORTED_INPUT_FORMATS
        )
        config_lines = [
            f"Input: {input_dir}",
            f"Output: {output_dir}",
            f"Preset: {preset or 'default'}",
        ]
        if jobs > 1:
            config_lines.append(f"Workers: {jobs}")

        config_text = " | ".join(config_lines)
        panel = Panel.fit(
            f"[bold blue]Batch Configuration[/bold blue]\n{config_text}\n"
            f"[dim]Supported formats: {formats}[/dim]",
            border_style="blue",
        )
        self.console.print(panel)

    def show_file_list(self, files: List[Path]) -> None:
        """Display the files about to be processed."""
        self.console.print(f"[blue]{len(files)} file(s) to process:[/blue]")
        for i, path in enumerate(files, 1):
            self.console.print(f"  [dim]{i}.[/dim] {path.name}")

    def show_settings(self, settings: MasteringSettings, title: str = "Settings") -> None:
        """Display a settings bundle section by section."""
        table = Table(title=title)
        table.add_column("Stage", style="cyan")
        table.add_column("Enabled", justify="center")
        table.add_column("Parameters", style="magenta")

        def on(flag: bool) -> str:
            return "[green]on[/green]" if flag else "[dim]off[/dim]"

        s = settings
        table.add_row("Normalize", on(s.normalize.enabled), f"level {s.normalize.level}")
        table.add_row(
            "Compressor",
            on(s.compressor.enabled),
            f"threshold {s.compressor.threshold} dB, ratio {s.compressor.ratio}, "
            f"attack {s.compressor.attack} ms, release {s.compressor.release} ms",
        )
        table.add_row(
            "Equalizer",
            on(s.equalizer.enabled),
            f"low {s.equalizer.low_gain} dB, mid {s.equalizer.mid_gain} dB, "
            f"high {s.equalizer.high_gain} dB",
        )
        table.add_row(
            "Limiter",
            on(s.limiter.enabled),
            f"ceiling {s.limiter.ceiling} dB, release {s.limiter.release} ms",
        )
        table.add_row(
            "Stereo", on(s.stereo_enhancer.enabled), f"width {s.stereo_enhancer.width}"
        )
        self.console.print(table)

    def show_presets_table(self, presets: Dict[str, MasteringSettings]) -> None:
        """Display the preset catalog."""
        table = Table(title="Mastering Presets")
        table.add_column("Preset", style="cyan")
        table.add_column("Compressor", style="magenta")
        table.add_column("EQ low/mid/high", justify="right", style="green")
        table.add_column("Ceiling", justify="right", style="yellow")

        for name, s in presets.items():
            table.add_row(
                name,
                f"{s.compressor.threshold} dB @ {s.compressor.ratio}:1",
                f"{s.equalizer.low_gain}/{s.equalizer.mid_gain}/{s.equalizer.high_gain}",
                f"{s.limiter.ceiling} dB",
            )

        self.console.print(table)

    def show_analysis_report(
        self, analysis: AnalysisResult, filename: Optional[str] = None
    ) -> None:
        """Display levels read from the analysis pass."""
        title = "Analysis"
        if filename:
            title += f": {filename}"

        table = Table(title=title)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="magenta")
        table.add_column("Assessment", style="yellow")

        table.add_row("Duration", f"{analysis.duration:.2f} seconds", "")
        table.add_row("Peak Level", _db(analysis.peak_level), analysis.peak_assessment)
        table.add_row("RMS Level", _db(analysis.rms_level), "")
        table.add_row(
            "Dynamic Range",
            f"{analysis.dynamic_range:.2f} dB",
            analysis.dynamic_range_assessment,
        )

        self.console.print(table)

    def show_outcome(self, outcome: JobOutcome) -> None:
        if outcome.success:
            self.show_success_message(outcome.message)
        else:
            self.show_error_message(f"{outcome.job.name} - {outcome.message}")

    def show_batch_summary(self, result: BatchResult) -> None:
        """Display per-file results and the final counters."""
        table = Table(title="Batch Results")
        table.add_column("#", justify="right", style="cyan", no_wrap=True)
        table.add_column("File", style="magenta")
        table.add_column("Mode", justify="center")
        table.add_column("Result")
        table.add_column("Time", justify="right", style="dim")

        for i, outcome in enumerate(result.outcomes, 1):
            mode = outcome.mode.value if outcome.mode else "-"
            status = (
                "[green]✓ ok[/green]"
                if outcome.success
                else f"[red]✗ {outcome.state.value}[/red]"
            )
            table.add_row(
                str(i),
                outcome.job.name,
                mode,
                status,
                f"{outcome.elapsed_seconds:.1f}s",
            )
        for failed in result.rejected:
            table.add_row("-", failed.input_file.name, "-", "[red]✗ skipped[/red]", "")

        self.console.print(table)
        self.show_success_message(f"Succeeded: {result.success_count} file(s)")
        if result.error_count:
            self.show_error_message(f"Failed: {result.error_count} file(s)")

    def show_success_message(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"[green]✓ {message}[/green]")

    def show_warning_message(self, message: str) -> None:
        """Display a warning message."""
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def show_error_message(self, message: str) -> None:
        """Display an error message."""
        self.console.print(f"[red]✗ {message}[/red]")

    def show_info_message(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(f"[blue]ℹ {message}[/blue]")


class ProgressTracker:
    """Transient per-file progress fed by ffmpeg ``time=`` markers."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize with optional console instance."""
        self.console = console or Console()
        self._progress: Optional[Progress] = None
        self._tasks: Dict[Path, TaskID] = {}

    @contextmanager
    def batch_progress(self):
        """Context manager that owns the live progress display."""
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.fields[marker]}", style="dim"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            self._progress = progress
            try:
                yield self
            finally:
                self._progress = None
                self._tasks.clear()

    def start(self, index: int, total: int, input_file: Path) -> None:
        if self._progress is None:
            return
        self._tasks[input_file] = self._progress.add_task(
            f"({index}/{total}) {input_file.name}", total=None, marker=""
        )

    def update(self, job: MasteringJob, marker: str) -> None:
        """Show the latest position marker for ``job``."""
        task = self._tasks.get(job.input_file)
        if self._progress is None or task is None:
            return
        self._progress.update(task, marker=marker)

    def finish(self, outcome: JobOutcome) -> None:
        task = self._tasks.pop(outcome.job.input_file, None)
        if self._progress is None or task is None:
            return
        self._progress.remove_task(task)
