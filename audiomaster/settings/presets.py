"""Named mastering presets, tuned for loudness."""

from typing import Dict, List, Optional

from .models import (
    CompressorSettings,
    EqualizerSettings,
    LimiterSettings,
    MasteringSettings,
    NormalizeSettings,
    StereoEnhancerSettings,
)

# loudnorm is disabled in every preset; loudness comes from the
# compressor, the fixed gain stage and the limiter instead.
_PRESETS: Dict[str, MasteringSettings] = {
    "pop": MasteringSettings(
        normalize=NormalizeSettings(enabled=False, level=-16.0),
        compressor=CompressorSettings(
            enabled=True, threshold=-10, ratio=4, attack=2, release=100
        ),
        equalizer=EqualizerSettings(enabled=True, low_gain=1, mid_gain=1, high_gain=2),
        limiter=LimiterSettings(enabled=True, ceiling=-0.1, release=5),
        stereo_enhancer=StereoEnhancerSettings(enabled=False, width=1.1),
    ),
    "rock": MasteringSettings(
        normalize=NormalizeSettings(enabled=False, level=-14.0),
        compressor=CompressorSettings(
            enabled=True, threshold=-8, ratio=6, attack=1, release=80
        ),
        equalizer=EqualizerSettings(enabled=True, low_gain=3, mid_gain=2, high_gain=4),
        limiter=LimiterSettings(enabled=True, ceiling=-0.1, release=3),
        stereo_enhancer=StereoEnhancerSettings(enabled=False, width=1.3),
    ),
    "classical": MasteringSettings(
        normalize=NormalizeSettings(enabled=False, level=-23.0),
        compressor=CompressorSettings(
            enabled=True, threshold=-15, ratio=3, attack=5, release=150
        ),
        equalizer=EqualizerSettings(enabled=True, low_gain=0, mid_gain=0, high_gain=1),
        limiter=LimiterSettings(enabled=True, ceiling=-0.5, release=10),
        stereo_enhancer=StereoEnhancerSettings(enabled=False, width=1.0),
    ),
    "loudness": MasteringSettings(
        normalize=NormalizeSettings(enabled=False, level=-12.0),
        compressor=CompressorSettings(
            enabled=True, threshold=-6, ratio=8, attack=0.5, release=30
        ),
        equalizer=EqualizerSettings(enabled=True, low_gain=2, mid_gain=3, high_gain=3),
        limiter=LimiterSettings(enabled=True, ceiling=-0.05, release=2),
        stereo_enhancer=StereoEnhancerSettings(enabled=False, width=1.0),
    ),
}

PRESET_NAMES = tuple(_PRESETS)


def list_presets() -> List[str]:
    """Return the preset names in catalog order."""
    return list(PRESET_NAMES)


def is_known_preset(name: Optional[str]) -> bool:
    """True if ``name`` matches a preset, ignoring case."""
    return bool(name) and name.lower() in _PRESETS


def get_preset(name: Optional[str]) -> Optional[MasteringSettings]:
    """Look up a preset by name, case-insensitively.

    Returns None for an empty or unknown name; callers decide whether that
    is worth a warning.
    """
    if not name:
        return None
    return _PRESETS.get(name.lower())
