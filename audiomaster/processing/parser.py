"""Parsers for ffmpeg's stderr diagnostics."""

import re
from typing import Optional

from .models import AnalysisResult

DURATION_RE = re.compile(r"Duration: (\d{2}):(\d{2}):(\d{2}\.\d{2})")
PEAK_RE = re.compile(r"Max level: (-?\d+\.\d+) dBFS")
RMS_RE = re.compile(r"RMS level: (-?\d+\.\d+) dBFS")
PROGRESS_RE = re.compile(r"time=(\d{2}):(\d{2}):(\d{2}\.\d{2})")


def _hms_to_seconds(hours: str, minutes: str, seconds: str) -> float:
    return int(hours) * 3600 + int(minutes) * 60 + float(seconds)


def parse_analysis(output: str) -> AnalysisResult:
    """Extract duration, peak and RMS level from diagnostic text.

    Anything not found stays undetected; this never raises.
    """
    duration = 0.0
    peak_level = None
    rms_level = None

    m = DURATION_RE.search(output)
    if m:
        duration = _hms_to_seconds(*m.groups())

    m = PEAK_RE.search(output)
    if m:
        peak_level = float(m.group(1))

    m = RMS_RE.search(output)
    if m:
        rms_level = float(m.group(1))

    return AnalysisResult(duration=duration, peak_level=peak_level, rms_level=rms_level)


def parse_progress(chunk: str) -> Optional[str]:
    """Return the latest ``time=HH:MM:SS.ss`` marker in a stderr chunk."""
    matches = PROGRESS_RE.findall(chunk)
    if not matches:
        return None
    return "time={}:{}:{}".format(*matches[-1])
