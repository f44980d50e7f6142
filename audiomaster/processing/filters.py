"""ffmpeg audio filter-chain construction."""

from typing import List, Tuple

from ..core.config import FilterLimits
from ..settings.models import MasteringSettings

GAIN_STAGE = "volume=4dB"
LIMITER_STAGE = "alimiter=level_in=1:level_out=0.95:limit=-0.1dB:attack=1:release=5"

# Used when the user's settings contribute no shaping stages, and as the
# whole chain for simplified mastering.
SIMPLIFIED_FILTER_CHAIN = ",".join(
    [
        "acompressor=threshold=-12dB:ratio=6:attack=1:release=50",
        "volume=6dB",
        LIMITER_STAGE,
    ]
)


def clamp(value: float, limits: Tuple[float, float]) -> float:
    """Limit ``value`` to the inclusive ``(lo, hi)`` range."""
    lo, hi = limits
    return max(lo, min(hi, value))


def format_number(value: float) -> str:
    """Render a parameter the way ffmpeg docs write it: 2, -0.5, 0.01."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _equalizer_stage(band: Tuple[int, int], gain: float) -> str:
    freq, width = band
    g = format_number(clamp(gain, FilterLimits.EQ_GAIN_DB))
    return f"equalizer=f={freq}:width_type=h:width={width}:g={g}"


def build_filter_chain(settings: MasteringSettings) -> str:
    """Build the comma-joined ``-af`` argument for normal mastering.

    Equalizer bands with zero gain are skipped. The gain and limiter
    stages are always present, so when neither the equalizer nor the
    compressor adds anything the simplified chain is returned instead.
    """
    filters: List[str] = []

    eq = settings.equalizer
    if eq.enabled:
        if eq.low_gain != 0:
            filters.append(_equalizer_stage(FilterLimits.EQ_LOW_BAND, eq.low_gain))
        if eq.mid_gain != 0:
            filters.append(_equalizer_stage(FilterLimits.EQ_MID_BAND, eq.mid_gain))
        if eq.high_gain != 0:
            filters.append(_equalizer_stage(FilterLimits.EQ_HIGH_BAND, eq.high_gain))

    comp = settings.compressor
    if comp.enabled:
        threshold = format_number(clamp(comp.threshold, FilterLimits.COMP_THRESHOLD_DB))
        ratio = format_number(clamp(comp.ratio, FilterLimits.COMP_RATIO))
        attack = format_number(clamp(comp.attack, FilterLimits.COMP_ATTACK_MS))
        release = format_number(clamp(comp.release, FilterLimits.COMP_RELEASE_MS))
        filters.append(
            f"acompressor=threshold={threshold}dB:ratio={ratio}"
            f":attack={attack}:release={release}"
        )

    filters.append(GAIN_STAGE)
    filters.append(LIMITER_STAGE)

    if len(filters) <= 2:
        return SIMPLIFIED_FILTER_CHAIN

    return ",".join(filters)
