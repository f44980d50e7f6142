#!/usr/bin/env python3
"""
Audio Master - batch mastering tool.

Runs every audio file in a directory through ffmpeg with an equalizer,
compressor, gain and limiter chain built from a preset or a settings file.
"""

from audiomaster.interface.cli import app

if __name__ == "__main__":
    app()
