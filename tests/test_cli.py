import json
import os

import pytest
from typer.testing import CliRunner

from audiomaster.interface.cli import app
from audiomaster.settings.presets import get_preset
from tests.utils.fake_ffmpeg import make_inputs, write_fake_ffmpeg

runner = CliRunner()

posix_only = pytest.mark.skipif(os.name != "posix", reason="needs an executable script")


def test_list_presets() -> None:
    result = runner.invoke(app, ["--list-presets"])

    assert result.exit_code == 0
    for name in ("pop", "rock", "classical", "loudness"):
        assert name in result.output


def test_missing_input_dir_is_created(tmp_path) -> None:
    input_dir = tmp_path / "input"

    result = runner.invoke(app, [str(input_dir), str(tmp_path / "output")])

    assert result.exit_code == 0
    assert input_dir.is_dir()
    assert not (tmp_path / "output").exists()


def test_empty_input_dir(tmp_path) -> None:
    (tmp_path / "in").mkdir()

    result = runner.invoke(app, [str(tmp_path / "in"), str(tmp_path / "out")])

    assert result.exit_code == 0
    assert "No audio files found" in result.output


def test_negative_timeout_is_rejected(tmp_path) -> None:
    result = runner.invoke(app, [str(tmp_path), str(tmp_path), "--timeout", "-1"])

    assert result.exit_code == 1


def test_malformed_settings_file_exits_nonzero(tmp_path) -> None:
    make_inputs(tmp_path / "in", ["a.wav"])
    settings = tmp_path / "settings.json"
    settings.write_text("{oops")

    result = runner.invoke(
        app, [str(tmp_path / "in"), str(tmp_path / "out"), "--settings", str(settings)]
    )

    assert result.exit_code == 1
    assert "Failed to load settings" in result.output


@posix_only
def test_batch_run(tmp_path) -> None:
    fake = write_fake_ffmpeg(tmp_path)
    make_inputs(tmp_path / "in", ["a.wav", "b_fail.flac", "c.mp3", "readme.txt"])
    out = tmp_path / "out"

    result = runner.invoke(
        app, [str(tmp_path / "in"), str(out), "pop", "--ffmpeg", str(fake)]
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == ["a_mastered.mp3", "c_mastered.mp3"]
    assert "Succeeded: 2 file(s)" in result.output
    assert "Failed: 1 file(s)" in result.output


@posix_only
def test_strict_exit_code(tmp_path) -> None:
    fake = write_fake_ffmpeg(tmp_path)
    make_inputs(tmp_path / "in", ["fail.wav"])

    result = runner.invoke(
        app,
        [str(tmp_path / "in"), str(tmp_path / "out"), "--ffmpeg", str(fake), "--strict"],
    )

    assert result.exit_code == 1


@posix_only
def test_unknown_preset_warns_and_continues(tmp_path) -> None:
    fake = write_fake_ffmpeg(tmp_path)
    make_inputs(tmp_path / "in", ["a.wav"])

    result = runner.invoke(
        app, [str(tmp_path / "in"), str(tmp_path / "out"), "jazz", "--ffmpeg", str(fake)]
    )

    assert result.exit_code == 0
    assert "Unknown preset" in result.output
    assert (tmp_path / "out" / "a_mastered.mp3").exists()


@posix_only
def test_save_settings(tmp_path) -> None:
    fake = write_fake_ffmpeg(tmp_path)
    make_inputs(tmp_path / "in", ["a.wav"])
    saved = tmp_path / "rock.json"

    result = runner.invoke(
        app,
        [
            str(tmp_path / "in"),
            str(tmp_path / "out"),
            "rock",
            "--ffmpeg",
            str(fake),
            "--save-settings",
            str(saved),
        ],
    )

    assert result.exit_code == 0
    assert json.loads(saved.read_text()) == get_preset("rock").to_dict()
