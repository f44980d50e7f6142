import asyncio
import os

import pytest

from audiomaster.core.exceptions import ExternalProcessError, ProcessTimeoutError
from audiomaster.processing.models import JobState, MasteringJob, MasteringMode
from audiomaster.processing.runner import FFmpegRunner
from audiomaster.processing.services import MasteringOrchestrator
from tests.utils.fake_ffmpeg import make_inputs, write_fake_ffmpeg

pytestmark = pytest.mark.skipif(os.name != "posix", reason="needs an executable script")


@pytest.fixture
def fake_ffmpeg(tmp_path):
    return write_fake_ffmpeg(tmp_path)


def test_run_collects_stderr(fake_ffmpeg, tmp_path) -> None:
    song = make_inputs(tmp_path / "in", ["song.wav"])[0]
    runner = FFmpegRunner(binary=str(fake_ffmpeg), timeout=30)

    result = asyncio.run(runner.run(["-i", str(song), "-f", "null", "-"]))

    assert result.ok
    assert result.command[0] == str(fake_ffmpeg)
    assert "Duration: 00:00:02.00" in result.output
    assert "RMS level: -14.50 dBFS" in result.output


def test_run_streams_chunks(fake_ffmpeg, tmp_path) -> None:
    song = make_inputs(tmp_path / "in", ["song.wav"])[0]
    out = tmp_path / "song.mp3"
    chunks = []

    result = asyncio.run(
        FFmpegRunner(binary=str(fake_ffmpeg)).run(
            ["-i", str(song), "-af", "volume=4dB", "-y", str(out)], chunks.append
        )
    )

    assert result.ok
    assert "time=00:00:01.00" in "".join(chunks)
    assert out.exists()


def test_nonzero_exit_is_returned(fake_ffmpeg, tmp_path) -> None:
    song = make_inputs(tmp_path / "in", ["fail.wav"])[0]

    result = asyncio.run(
        FFmpegRunner(binary=str(fake_ffmpeg)).run(
            ["-i", str(song), "-y", str(tmp_path / "x.mp3")]
        )
    )

    assert result.returncode == 1
    assert "Error initializing filter" in result.output


def test_missing_binary(tmp_path) -> None:
    runner = FFmpegRunner(binary=str(tmp_path / "no-such-ffmpeg"))

    with pytest.raises(ExternalProcessError) as excinfo:
        asyncio.run(runner.run(["-version"]))

    assert excinfo.value.command[0] == str(tmp_path / "no-such-ffmpeg")


def test_stalled_process_is_killed(fake_ffmpeg, tmp_path) -> None:
    song = make_inputs(tmp_path / "in", ["hang.wav"])[0]
    runner = FFmpegRunner(binary=str(fake_ffmpeg), timeout=0.5)

    with pytest.raises(ProcessTimeoutError) as excinfo:
        asyncio.run(runner.run(["-i", str(song), "-f", "null", "-"]))

    assert excinfo.value.timeout == 0.5


def test_binary_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("AUDIOMASTER_FFMPEG", "/opt/ffmpeg/bin/ffmpeg")

    assert FFmpegRunner().binary == "/opt/ffmpeg/bin/ffmpeg"
    assert FFmpegRunner(binary="ffmpeg6").binary == "ffmpeg6"


def test_orchestrator_end_to_end(fake_ffmpeg, tmp_path) -> None:
    broken, silent, song = make_inputs(
        tmp_path / "in", ["broken.wav", "silent.wav", "song.wav"]
    )
    orchestrator = MasteringOrchestrator(FFmpegRunner(binary=str(fake_ffmpeg), timeout=30))

    ok = asyncio.run(orchestrator.process(MasteringJob(song)))
    quiet = asyncio.run(orchestrator.process(MasteringJob(silent)))
    bad = asyncio.run(orchestrator.process(MasteringJob(broken)))

    assert ok.state is JobState.MASTER_SUCCEEDED
    assert ok.analysis.dynamic_range == pytest.approx(13.25)
    assert (tmp_path / "in" / "song_mastered.wav").exists()
    assert quiet.mode is MasteringMode.SIMPLIFIED
    assert bad.state is JobState.ANALYSIS_FAILED


def test_timed_out_mastering_removes_output(fake_ffmpeg, tmp_path) -> None:
    song = make_inputs(tmp_path / "in", ["stall.wav"])[0]
    job = MasteringJob(song, tmp_path / "out" / "stall_mastered.mp3")
    orchestrator = MasteringOrchestrator(FFmpegRunner(binary=str(fake_ffmpeg), timeout=0.5))

    outcome = asyncio.run(orchestrator.process(job))

    assert outcome.state is JobState.FAILED
    assert JobState.MASTER_FAILED in outcome.history
    assert not job.output_file.exists()


def test_failed_exit_removes_output(fake_ffmpeg, tmp_path) -> None:
    song = make_inputs(tmp_path / "in", ["fail.wav"])[0]
    job = MasteringJob(song, tmp_path / "out" / "fail_mastered.mp3")
    orchestrator = MasteringOrchestrator(FFmpegRunner(binary=str(fake_ffmpeg), timeout=30))

    outcome = asyncio.run(orchestrator.process(job))

    assert outcome.state is JobState.FAILED
    assert not job.output_file.exists()
