"""Configuration constants and settings for the audio mastering tool."""

import os
from pathlib import Path
from typing import Optional


class EncoderConfig:
    """Fixed output encoding parameters passed to ffmpeg."""

    CODEC = "libmp3lame"
    BITRATE = "320k"
    SAMPLE_RATE = 44100
    CHANNELS = 2

    @classmethod
    def output_args(cls) -> list:
        """ffmpeg arguments describing the output stream."""
        return [
            "-c:a",
            cls.CODEC,
            "-b:a",
            cls.BITRATE,
            "-ar",
            str(cls.SAMPLE_RATE),
            "-ac",
            str(cls.CHANNELS),
        ]


class FileConfig:
    """File handling configuration."""

    SUPPORTED_INPUT_FORMATS = [".wav", ".mp3", ".flac", ".aac", ".m4a", ".ogg", ".wma"]
    OUTPUT_SUFFIX = "_mastered"
    BATCH_OUTPUT_FORMAT = ".mp3"
    SETTINGS_ENCODING = "utf-8"


class FilterLimits:
    """Ranges ffmpeg accepts for each filter parameter."""

    EQ_GAIN_DB = (-20.0, 20.0)
    COMP_THRESHOLD_DB = (-60.0, -1.0)
    COMP_RATIO = (1.0, 20.0)
    COMP_ATTACK_MS = (0.01, 1000.0)
    COMP_RELEASE_MS = (0.01, 9000.0)

    # Centre frequency and bandwidth (Hz) of each equalizer band
    EQ_LOW_BAND = (100, 50)
    EQ_MID_BAND = (1000, 100)
    EQ_HIGH_BAND = (10000, 200)


class ProcessConfig:
    """External process settings."""

    FFMPEG_BINARY = "ffmpeg"
    FFMPEG_ENV_VAR = "AUDIOMASTER_FFMPEG"
    DEFAULT_TIMEOUT_SECONDS = 3600.0
    STDERR_CHUNK_SIZE = 4096
    ERROR_TAIL_CHARS = 2500

    @classmethod
    def ffmpeg_binary(cls, override: Optional[str] = None) -> str:
        """Resolve the ffmpeg executable, honouring overrides."""
        return override or os.environ.get(cls.FFMPEG_ENV_VAR) or cls.FFMPEG_BINARY


class AppInfo:
    """Application metadata."""

    NAME = "audiomaster"
    VERSION = "1.0.0"
    DESCRIPTION = "Batch audio mastering with ffmpeg presets"
    AUTHOR = ""


class Paths:
    """Default paths and directories."""

    DEFAULT_INPUT_DIR = "input"
    DEFAULT_OUTPUT_DIR = "output"

    @staticmethod
    def ensure_dir(path: Path) -> Path:
        """Ensure directory exists and return it."""
        path.mkdir(parents=True, exist_ok=True)
        return path
