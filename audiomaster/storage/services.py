"""File discovery and output path handling."""

import logging
from pathlib import Path
from typing import List, Optional

from ..core.config import FileConfig
from ..core.exceptions import AudioMasterError

logger = logging.getLogger(__name__)


class FileManager:
    """Handles the file-system side of a batch run."""

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize with optional output directory."""
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()

    @staticmethod
    def is_audio_file(path: Path) -> bool:
        """True for a regular file with a supported audio extension."""
        return path.is_file() and path.suffix.lower() in FileConfig.SUPPORTED_INPUT_FORMATS

    def find_audio_files(self, directory: Path) -> List[Path]:
        """List supported audio files directly inside ``directory``.

        Subdirectories are not searched. A missing directory yields an
        empty list.
        """
        directory = Path(directory)
        if not directory.is_dir():
            return []

        try:
            files = [p for p in directory.iterdir() if self.is_audio_file(p)]
        except OSError as e:
            raise AudioMasterError(
                f"Failed to list directory: {directory}", details=str(e)
            )
        return sorted(files, key=lambda p: p.name)

    def ensure_output_dir(self) -> Path:
        """Create the output directory if it is missing."""
        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created directory: %s", self.output_dir)
        return self.output_dir

    def output_path_for(self, input_file: Path) -> Path:
        """``<output_dir>/<stem>_mastered.mp3`` for a batch input."""
        filename = (
            f"{Path(input_file).stem}{FileConfig.OUTPUT_SUFFIX}"
            f"{FileConfig.BATCH_OUTPUT_FORMAT}"
        )
        return self.output_dir / filename
