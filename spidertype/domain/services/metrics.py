"""Metrics engine: WPM, accuracy and consistency for a keystroke stream.

WPM uses the standard five-characters-per-word convention. All rounding is
half-up so scores match what the browser client displays.
"""

import math
from typing import Sequence

from ..entities.typing_session import KeystrokeSnapshot, TypingMetrics

CHARS_PER_WORD = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positive values."""
    return int(math.floor(value + 0.5))


def count_errors(typed: str, target: str, overflow_counts_as_error: bool = True) -> int:
    """Count position-wise mismatches between typed text and target text.

    Characters typed past the end of the target count as one error each
    when ``overflow_counts_as_error`` is set, and are ignored otherwise.
    """
    errors = sum(1 for typed_char, target_char in zip(typed, target) if typed_char != target_char)
    if overflow_counts_as_error and len(typed) > len(target):
        errors += len(typed) - len(target)
    return errors


def accuracy_percent(typed_length: int, error_count: int) -> int:
    if typed_length <= 0:
        return 100
    return round_half_up(100 * (typed_length - error_count) / typed_length)


def raw_wpm(typed_length: int, elapsed_ms: float) -> int:
    """Unpenalized words per minute; 0 when no time has elapsed."""
    minutes = elapsed_ms / 60000
    if minutes <= 0:
        return 0
    return round_half_up((typed_length / CHARS_PER_WORD) / minutes)


def net_wpm(wpm_raw: int, error_count: int, elapsed_ms: float) -> int:
    """Raw WPM minus errors amortized over elapsed time, floored at 0."""
    minutes = elapsed_ms / 60000
    if minutes <= 0:
        return 0
    penalty = (error_count / CHARS_PER_WORD) / minutes
    return max(0, round_half_up(wpm_raw - penalty))


def sample_wpm(chars_typed: int, elapsed_ms: float) -> int:
    """Character-based WPM sample recorded once per elapsed second."""
    return raw_wpm(chars_typed, elapsed_ms)


def compute_metrics(snapshot: KeystrokeSnapshot, overflow_counts_as_error: bool = True) -> TypingMetrics:
    """Derive live metrics from a keystroke snapshot.

    Args:
        snapshot: Typed prefix, target text and elapsed milliseconds.
        overflow_counts_as_error: Whether characters typed beyond the
            target length are scored as incorrect. When False the typed
            text is truncated to the target length before measuring.

    Returns:
        TypingMetrics: Character counts, accuracy and WPM.
    """
    target = snapshot.target_text
    typed = snapshot.typed_text
    if not target:
        # Nothing to compare against
        return TypingMetrics()
    if not overflow_counts_as_error:
        typed = typed[: len(target)]

    errors = count_errors(typed, target, overflow_counts_as_error)
    typed_length = len(typed)
    wpm_raw = raw_wpm(typed_length, snapshot.elapsed_ms)

    return TypingMetrics(
        correct_char_count=typed_length - errors,
        incorrect_char_count=errors,
        error_count=errors,
        accuracy_percent=accuracy_percent(typed_length, errors),
        wpm_raw=wpm_raw,
        wpm_net=net_wpm(wpm_raw, errors, snapshot.elapsed_ms),
    )


def consistency_score(wpm_history: Sequence[int]) -> int:
    """Normalized inverse of the spread of per-second WPM samples.

    Returns 0 when fewer than two samples exist or every sample is 0.
    """
    if len(wpm_history) < 2:
        return 0
    highest = max(wpm_history)
    if highest <= 0:
        return 0
    spread = (highest - min(wpm_history)) / highest
    return round_half_up(max(0.0, 100 * (1 - spread)))
