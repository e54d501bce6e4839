"""
Weighting strategies: turn raw counts into per-number sampling weights.

hot  - hot stays hot: more frequent numbers weigh more, recent appearances
       break ties between equally frequent numbers.
cold - cold rebounds: the least frequent numbers weigh most.

Every weight is strictly positive, so no number is ever excluded from
generation. The functions here are deterministic.
"""
from ssq_ai.config import HOT_RECENCY_BONUS, HOT_SMOOTHING
from ssq_ai.core.errors import ConfigurationError
from ssq_ai.core.records import Algorithm, BallFrequency


def hot_weights(counts, hits=None, window_len=0,
                bonus=HOT_RECENCY_BONUS, smoothing=HOT_SMOOTHING):
    """
    weight = frequency + smoothing + bonus * hits / window_len

    Args:
        counts: {number: frequency}
        hits: {number: appearances within the recent window}
        window_len: number of draws in the recent window
        bonus: recency bonus for a number present in every recent draw
        smoothing: floor that keeps never-drawn numbers selectable
    """
    if not 0 <= bonus < 1:
        raise ConfigurationError(f"Recency bonus must be in [0, 1), got {bonus}")
    if smoothing <= 0:
        raise ConfigurationError(f"Smoothing must be positive, got {smoothing}")

    hits = hits or {}
    weights = {}
    for number, freq in counts.items():
        recency = bonus * hits.get(number, 0) / window_len if window_len > 0 else 0.0
        weights[number] = freq + smoothing + recency
    return weights


def cold_weights(counts):
    """weight = max_frequency - frequency + 1"""
    max_freq = max(counts.values()) if counts else 0
    return {number: float(max_freq - freq + 1) for number, freq in counts.items()}


def compute_weights(counts, algorithm, hits=None, window_len=0):
    """
    Per-number weights for one pool.

    Returns:
        {number: weight} with the same keys as `counts`
    """
    algorithm = Algorithm.parse(algorithm)

    if algorithm is Algorithm.HOT:
        return hot_weights(counts, hits, window_len)
    if algorithm is Algorithm.COLD:
        return cold_weights(counts)

    raise ConfigurationError(f"No weighting rule for {algorithm!r}")


def build_frequencies(counts, weights):
    """Frequency entries ordered by ascending number"""
    return tuple(
        BallFrequency(number=n, frequency=counts[n], weight=weights[n])
        for n in sorted(counts)
    )


def rank_by_weight(entries):
    """Heaviest first; equal weights keep ascending number order"""
    return sorted(sorted(entries, key=lambda e: e.number),
                  key=lambda e: e.weight, reverse=True)
