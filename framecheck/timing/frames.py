"""
Frame-unit time conversion.

All timing windows are expressed in 60Hz frames regardless of how often
the input device is actually sampled.
"""

from __future__ import annotations

FRAME_RATE = 60.0

_MICROS_PER_SECOND = 1_000_000


def frames_between(later: float, earlier: float, frame_rate: float = FRAME_RATE) -> float:
    """
    Convert the gap between two timestamps (seconds) into frames.

    The gap is rounded to whole microseconds first so that round
    millisecond gaps map to exact frame counts (50 ms -> 3.0 frames).

    Args:
        later: Later timestamp in seconds.
        earlier: Earlier timestamp in seconds.
        frame_rate: Frames per second.

    Returns:
        Elapsed frames (negative if ``later`` precedes ``earlier``).
    """
    micros = round((later - earlier) * _MICROS_PER_SECOND)
    return micros * frame_rate / _MICROS_PER_SECOND


def frames_to_ms(frames: float, frame_rate: float = FRAME_RATE) -> float:
    """Convert a frame count to milliseconds."""
    return frames * 1000.0 / frame_rate
