"""WPM, accuracy and consistency calculation utilities."""

import statistics

CHARS_PER_WORD: float = 5.0


def calculate_wpm(key_count: int, duration_ms: float) -> float:
    """Calculate words per minute.

    Args:
        key_count: Number of keystrokes (correct ones for net WPM, all of them for raw WPM)
        duration_ms: Duration in milliseconds

    Returns:
        WPM (words per minute), or 0.0 if duration is zero
    """
    if duration_ms <= 0:
        return 0.0

    words = key_count / CHARS_PER_WORD
    minutes = duration_ms / 60000.0
    return words / minutes if minutes > 0 else 0.0


def calculate_accuracy(correct_keystrokes: int, total_keystrokes: int) -> float:
    """Calculate the fraction of keystrokes that were correct.

    Args:
        correct_keystrokes: Keystrokes that matched the target character
        total_keystrokes: All keystrokes typed

    Returns:
        Accuracy between 0.0 and 1.0, or 0.0 if nothing was typed
    """
    if total_keystrokes <= 0:
        return 0.0
    return min(1.0, max(0.0, correct_keystrokes / total_keystrokes))


def calculate_consistency(samples: list[float]) -> float:
    """Calculate typing consistency from periodic WPM samples.

    Uses the coefficient of variation: 100 * (1 - stddev / mean).

    Args:
        samples: Instantaneous WPM values, one per elapsed second

    Returns:
        Consistency between 0 and 100. Fewer than two samples score 100,
        a zero mean scores 0.
    """
    if len(samples) < 2:
        return 100.0

    mean = statistics.fmean(samples)
    if mean <= 0:
        return 0.0

    stddev = statistics.pstdev(samples, mu=mean)
    return min(100.0, max(0.0, 100.0 * (1.0 - stddev / mean)))


def calculate_progress(done: float, total: float) -> float:
    """Calculate a progress ratio capped to [0, 1].

    An empty total counts as finished.
    """
    if total <= 0:
        return 1.0
    return min(1.0, max(0.0, done / total))
