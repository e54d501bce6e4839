"""
Public entry points of the prediction engine.

    analyze_frequency(records, algorithm)   -> (red, blue) frequency entries
    generate_predictions(records, algorithm) -> PredictionBatch (top 10)

Both are pure functions of their arguments. Invalid input raises
InputError, an unknown algorithm raises ConfigurationError; neither
produces partial output.
"""
import numpy as np

from ssq_ai.config import HOT_RECENT_WINDOW, ITERATION_COUNT, PREDICTION_COUNT
from ssq_ai.core.models import generate_candidates
from ssq_ai.core.records import Algorithm
from ssq_ai.features.features import count_frequencies, recent_hits
from ssq_ai.models.frequency_model import compute_weights, build_frequencies


def analyze_frequency(records, algorithm, window=HOT_RECENT_WINDOW):
    """
    Frequency and weight of every red (1..33) and blue (1..16) number.

    Args:
        records: sequence of DrawRecord
        algorithm: "hot", "cold" or an Algorithm member
        window: recent draws considered for the hot recency bonus

    Returns:
        (red_frequencies, blue_frequencies), each a tuple of BallFrequency
        in ascending number order
    """
    algorithm = Algorithm.parse(algorithm)
    records = list(records)

    red_counts, blue_counts = count_frequencies(records)
    red_hits, blue_hits, window_len = recent_hits(records, window)

    red_weights = compute_weights(red_counts, algorithm, red_hits, window_len)
    blue_weights = compute_weights(blue_counts, algorithm, blue_hits, window_len)

    return (
        build_frequencies(red_counts, red_weights),
        build_frequencies(blue_counts, blue_weights),
    )


def generate_predictions(records, algorithm, rng=None, seed=None,
                         iterations=ITERATION_COUNT, top_n=PREDICTION_COUNT):
    """
    Ranked prediction candidates built from the weights of analyze_frequency.

    Args:
        records: sequence of DrawRecord
        algorithm: "hot", "cold" or an Algorithm member
        rng: numpy Generator used for sampling
        seed: seed for a new Generator when `rng` is not given
        iterations: sampling attempt cap
        top_n: maximum number of candidates returned

    Returns:
        PredictionBatch; check `.degraded` for a short result
    """
    algorithm = Algorithm.parse(algorithm)
    red_frequencies, blue_frequencies = analyze_frequency(records, algorithm)

    if rng is None:
        rng = np.random.default_rng(seed)

    return generate_candidates(
        red_frequencies, blue_frequencies,
        rng=rng, iterations=iterations, top_n=top_n, algorithm=algorithm
    )
