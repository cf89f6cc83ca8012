"""Unit tests for the metrics engine."""

import pytest

from spidertype.domain.entities import KeystrokeSnapshot
from spidertype.domain.services.metrics import (
    accuracy_percent,
    compute_metrics,
    consistency_score,
    count_errors,
    net_wpm,
    raw_wpm,
    round_half_up,
    sample_wpm,
)


def snapshot(typed: str, target: str, elapsed_ms: float = 60000) -> KeystrokeSnapshot:
    return KeystrokeSnapshot(typed_text=typed, target_text=target, elapsed_ms=elapsed_ms)


class TestCharacterComparison:
    """Tests for position-wise error counting."""

    def test_single_mismatch(self):
        """Test that 'xello' against 'hello' yields one error."""
        metrics = compute_metrics(snapshot("xello", "hello"))

        assert metrics.correct_char_count == 4
        assert metrics.incorrect_char_count == 1
        assert metrics.error_count == 1
        assert metrics.accuracy_percent == 80

    def test_prefix_is_compared_only_up_to_typed_length(self):
        """Test that untyped target characters are not errors."""
        metrics = compute_metrics(snapshot("hel", "hello world"))

        assert metrics.error_count == 0
        assert metrics.correct_char_count == 3
        assert metrics.accuracy_percent == 100

    def test_counts_sum_to_typed_length(self):
        """Test that correct plus incorrect equals the typed length."""
        for typed in ["", "h", "hx", "hxllo", "abcde", "hello"]:
            metrics = compute_metrics(snapshot(typed, "hello"))
            assert metrics.correct_char_count + metrics.incorrect_char_count == len(typed)

    def test_overflow_counts_as_error_by_default(self):
        """Test that characters past the target are incorrect by default."""
        metrics = compute_metrics(snapshot("hello!!", "hello"))

        assert metrics.error_count == 2
        assert metrics.correct_char_count == 5
        assert metrics.incorrect_char_count == 2
        assert metrics.accuracy_percent == 71

    def test_overflow_ignored_when_disabled(self):
        """Test that overflow is truncated away when not scored."""
        metrics = compute_metrics(snapshot("hello!!", "hello"), overflow_counts_as_error=False)

        assert metrics.error_count == 0
        assert metrics.correct_char_count == 5
        assert metrics.incorrect_char_count == 0
        assert metrics.accuracy_percent == 100

    def test_count_errors_overflow_flag(self):
        """Test count_errors directly with and without overflow scoring."""
        assert count_errors("abcd", "abc") == 1
        assert count_errors("abcd", "abc", overflow_counts_as_error=False) == 0
        assert count_errors("xbc", "abc") == 1


class TestDegenerateMetrics:
    """Tests for well-defined fallbacks on degenerate input."""

    def test_empty_input_is_fully_accurate(self):
        """Test that nothing typed means 100% accuracy and 0 WPM."""
        metrics = compute_metrics(snapshot("", "hello"))

        assert metrics.accuracy_percent == 100
        assert metrics.wpm_raw == 0
        assert metrics.wpm_net == 0

    def test_empty_target(self):
        """Test that an empty target yields accuracy 100 and WPM 0."""
        metrics = compute_metrics(snapshot("abc", ""))

        assert metrics.accuracy_percent == 100
        assert metrics.wpm_raw == 0
        assert metrics.wpm_net == 0

    def test_zero_elapsed_time(self):
        """Test that zero elapsed time yields WPM 0 instead of dividing by zero."""
        metrics = compute_metrics(snapshot("hello", "hello", elapsed_ms=0))

        assert metrics.wpm_raw == 0
        assert metrics.wpm_net == 0
        assert metrics.accuracy_percent == 100

    def test_accuracy_percent_zero_length(self):
        assert accuracy_percent(0, 0) == 100


class TestWpm:
    """Tests for raw and net words per minute."""

    def test_raw_wpm_five_chars_per_word(self):
        """Test that 50 characters in 30 seconds is 20 WPM."""
        assert raw_wpm(50, 30000) == 20

    def test_net_wpm_subtracts_amortized_errors(self):
        """Test that 5 errors in 30 seconds cost 2 WPM."""
        assert net_wpm(20, 5, 30000) == 18

    def test_net_wpm_never_negative(self):
        """Test that the error penalty floors at zero."""
        assert net_wpm(2, 50, 60000) == 0

    def test_rounding_is_half_up(self):
        """Test that 2.5 WPM rounds to 3 like the browser client does."""
        assert raw_wpm(25, 120000) == 3
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2

    def test_sample_wpm_matches_character_rate(self):
        """Test the per-second sample formula."""
        assert sample_wpm(1, 1000) == 12
        assert sample_wpm(4, 2000) == 24
        assert sample_wpm(0, 0) == 0

    @pytest.mark.parametrize(
        "typed,target,elapsed_ms",
        [
            ("hello", "hello", 1000),
            ("hxllo", "hello", 1000),
            ("xxxxx", "hello", 1000),
            ("the quick brown fox", "the quick brown fox", 4000),
            ("tha quack brawn fax", "the quick brown fox", 4000),
            ("a", "b", 60000),
        ],
    )
    def test_net_never_exceeds_raw(self, typed, target, elapsed_ms):
        """Test that net WPM is bounded by raw WPM and zero."""
        metrics = compute_metrics(snapshot(typed, target, elapsed_ms))

        assert 0 <= metrics.wpm_net <= metrics.wpm_raw
        assert 0 <= metrics.accuracy_percent <= 100


class TestConsistency:
    """Tests for the consistency score."""

    def test_single_sample_is_undefined(self):
        assert consistency_score([50]) == 0

    def test_empty_history(self):
        assert consistency_score([]) == 0

    def test_zero_variance_is_perfect(self):
        assert consistency_score([50, 50, 50]) == 100

    def test_all_zero_samples(self):
        assert consistency_score([0, 0, 0]) == 0

    def test_spread_relative_to_peak(self):
        """Test that the score is the inverse of (max - min) / max."""
        assert consistency_score([40, 50]) == 80
        assert consistency_score([10, 100]) == 10
        assert consistency_score([0, 60, 60]) == 0
