import pytest

from audiomaster.processing.models import AnalysisResult
from audiomaster.processing.parser import parse_analysis, parse_progress


def test_duration_is_parsed_to_seconds() -> None:
    result = parse_analysis("  Duration: 00:02:03.45, start: 0.000000, bitrate: 320 kb/s")

    assert result.duration == pytest.approx(123.45)


def test_duration_with_hours() -> None:
    result = parse_analysis("Duration: 01:00:00.50")

    assert result.duration == pytest.approx(3600.5)


def test_levels_and_dynamic_range() -> None:
    text = "Max level: -3.20 dBFS\nsomething else\nRMS level: -12.10 dBFS\n"

    result = parse_analysis(text)

    assert result.peak_level == pytest.approx(-3.20)
    assert result.rms_level == pytest.approx(-12.10)
    assert result.dynamic_range == pytest.approx(8.90, abs=0.01)
    assert not result.is_undetected


def test_no_patterns_leaves_everything_undetected() -> None:
    result = parse_analysis("ffmpeg version 6.0 Copyright (c) 2000-2023\n")

    assert result.duration == 0
    assert result.peak_level is None
    assert result.rms_level is None
    assert result.dynamic_range == 0
    assert result.is_undetected


def test_empty_text() -> None:
    assert parse_analysis("") == AnalysisResult()


def test_first_match_wins() -> None:
    text = "Max level: -1.00 dBFS\nMax level: -9.00 dBFS\n"

    assert parse_analysis(text).peak_level == pytest.approx(-1.0)


def test_only_peak_detected() -> None:
    result = parse_analysis("Max level: -6.00 dBFS")

    assert result.rms_level is None
    assert result.dynamic_range == 0
    assert not result.is_undetected


def test_zero_levels_count_as_undetected() -> None:
    result = parse_analysis("Max level: 0.00 dBFS\nRMS level: 0.00 dBFS\n")

    assert result.peak_level == 0
    assert result.rms_level == 0
    assert result.is_undetected


def test_parse_progress_returns_last_marker() -> None:
    chunk = "size=1kB time=00:00:01.00 bitrate=1\rsize=2kB time=00:00:02.50 bitrate=1"

    assert parse_progress(chunk) == "time=00:00:02.50"


def test_parse_progress_without_marker() -> None:
    assert parse_progress("Stream mapping:\n  Stream #0:0 -> #0:0") is None


@pytest.mark.parametrize(
    "peak, rms, undetected",
    [
        (0.0, None, True),
        (None, 0.0, True),
        (0.0, -12.0, False),
        (None, -12.0, False),
    ],
)
def test_one_missing_level_with_zero_other(peak, rms, undetected) -> None:
    assert AnalysisResult(peak_level=peak, rms_level=rms).is_undetected is undetected
