"""Settings domain models."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict


@dataclass(frozen=True)
class NormalizeSettings:
    """Loudness normalization target."""

    enabled: bool = True
    level: float = -1.0


@dataclass(frozen=True)
class CompressorSettings:
    """Dynamic range compressor parameters (dB, ratio, ms)."""

    enabled: bool = True
    threshold: float = -12
    ratio: float = 4
    attack: float = 5
    release: float = 50


@dataclass(frozen=True)
class EqualizerSettings:
    """Three-band equalizer gains in dB."""

    enabled: bool = True
    low_gain: float = 0
    mid_gain: float = 1
    high_gain: float = 2


@dataclass(frozen=True)
class LimiterSettings:
    """Output limiter parameters."""

    enabled: bool = True
    ceiling: float = -0.1
    release: float = 5


@dataclass(frozen=True)
class StereoEnhancerSettings:
    """Stereo width adjustment."""

    enabled: bool = True
    width: float = 1.2


@dataclass(frozen=True)
class MasteringSettings:
    """Complete settings bundle for one mastering run.

    Bundles are immutable. The ``with_*`` methods return a modified copy,
    so a preset switch or a CLI override never leaks into another job.
    """

    normalize: NormalizeSettings = field(default_factory=NormalizeSettings)
    compressor: CompressorSettings = field(default_factory=CompressorSettings)
    equalizer: EqualizerSettings = field(default_factory=EqualizerSettings)
    limiter: LimiterSettings = field(default_factory=LimiterSettings)
    stereo_enhancer: StereoEnhancerSettings = field(
        default_factory=StereoEnhancerSettings
    )

    def with_normalization(self, enabled: bool, level: float = -1.0) -> "MasteringSettings":
        return replace(self, normalize=NormalizeSettings(enabled, level))

    def with_compressor(
        self,
        enabled: bool,
        threshold: float = -12,
        ratio: float = 4,
        attack: float = 5,
        release: float = 50,
    ) -> "MasteringSettings":
        return replace(
            self,
            compressor=CompressorSettings(enabled, threshold, ratio, attack, release),
        )

    def with_equalizer(
        self,
        enabled: bool,
        low_gain: float = 0,
        mid_gain: float = 0,
        high_gain: float = 0,
    ) -> "MasteringSettings":
        return replace(
            self, equalizer=EqualizerSettings(enabled, low_gain, mid_gain, high_gain)
        )

    def with_limiter(
        self, enabled: bool, ceiling: float = -0.1, release: float = 5
    ) -> "MasteringSettings":
        return replace(self, limiter=LimiterSettings(enabled, ceiling, release))

    def with_stereo_enhancer(self, enabled: bool, width: float = 1.2) -> "MasteringSettings":
        return replace(self, stereo_enhancer=StereoEnhancerSettings(enabled, width))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the settings file shape."""
        return {
            "normalize": {
                "enabled": self.normalize.enabled,
                "level": self.normalize.level,
            },
            "compressor": {
                "enabled": self.compressor.enabled,
                "threshold": self.compressor.threshold,
                "ratio": self.compressor.ratio,
                "attack": self.compressor.attack,
                "release": self.compressor.release,
            },
            "equalizer": {
                "enabled": self.equalizer.enabled,
                "lowGain": self.equalizer.low_gain,
                "midGain": self.equalizer.mid_gain,
                "highGain": self.equalizer.high_gain,
            },
            "limiter": {
                "enabled": self.limiter.enabled,
                "ceiling": self.limiter.ceiling,
                "release": self.limiter.release,
            },
            "stereoEnhancer": {
                "enabled": self.stereo_enhancer.enabled,
                "width": self.stereo_enhancer.width,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MasteringSettings":
        """Build a bundle from the settings file shape.

        Missing sections or keys keep their defaults. The older flat form
        (``"normalize": true`` with a sibling ``"normalizeLevel"``) is
        accepted too.

        Raises:
            TypeError: if ``data`` or one of its sections is not a mapping.
        """
        if not isinstance(data, dict):
            raise TypeError("settings must be a JSON object")

        normalize = data.get("normalize", {})
        if isinstance(normalize, bool):
            normalize = {
                "enabled": normalize,
                "level": data.get("normalizeLevel", NormalizeSettings.level),
            }

        comp = _section(data, "compressor")
        eq = _section(data, "equalizer")
        lim = _section(data, "limiter")
        stereo = _section(data, "stereoEnhancer")
        if not isinstance(normalize, dict):
            raise TypeError("'normalize' must be an object or a boolean")

        return cls(
            normalize=NormalizeSettings(
                enabled=bool(normalize.get("enabled", NormalizeSettings.enabled)),
                level=normalize.get("level", NormalizeSettings.level),
            ),
            compressor=CompressorSettings(
                enabled=bool(comp.get("enabled", CompressorSettings.enabled)),
                threshold=comp.get("threshold", CompressorSettings.threshold),
                ratio=comp.get("ratio", CompressorSettings.ratio),
                attack=comp.get("attack", CompressorSettings.attack),
                release=comp.get("release", CompressorSettings.release),
            ),
            equalizer=EqualizerSettings(
                enabled=bool(eq.get("enabled", EqualizerSettings.enabled)),
                low_gain=eq.get("lowGain", EqualizerSettings.low_gain),
                mid_gain=eq.get("midGain", EqualizerSettings.mid_gain),
                high_gain=eq.get("highGain", EqualizerSettings.high_gain),
            ),
            limiter=LimiterSettings(
                enabled=bool(lim.get("enabled", LimiterSettings.enabled)),
                ceiling=lim.get("ceiling", LimiterSettings.ceiling),
                release=lim.get("release", LimiterSettings.release),
            ),
            stereo_enhancer=StereoEnhancerSettings(
                enabled=bool(stereo.get("enabled", StereoEnhancerSettings.enabled)),
                width=stereo.get("width", StereoEnhancerSettings.width),
            ),
        )


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise TypeError(f"'{key}' must be an object")
    return value
