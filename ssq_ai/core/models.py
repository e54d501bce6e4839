"""
Candidate generation and scoring
Weighted sampling over both pools, ranked by combined weight
"""
import numpy as np

from ssq_ai.config import RED_BALLS_PER_DRAW, PREDICTION_COUNT, ITERATION_COUNT
from ssq_ai.core.errors import InputError
from ssq_ai.core.records import PredictionBatch, PredictionCandidate


# ============================================
# SAMPLING
# ============================================
def _pool_arrays(entries):
    """Numbers and normalized probabilities of one pool"""
    numbers = np.array([e.number for e in entries], dtype=int)
    weights = np.array([e.weight for e in entries], dtype=float)

    if len(numbers) == 0:
        raise InputError("Empty number pool")
    if not np.all(np.isfinite(weights)) or np.any(weights <= 0):
        raise InputError("All weights must be finite and strictly positive")

    return numbers, weights / weights.sum()


def sample_red_balls(numbers, probs, rng, n_numbers=RED_BALLS_PER_DRAW):
    """
    Draw `n_numbers` distinct balls, each pick proportional to the weight
    of what is left in the pool. Sorted ascending.
    """
    picked = rng.choice(numbers, size=n_numbers, replace=False, p=probs)
    return tuple(sorted(int(n) for n in picked))


def sample_blue_ball(numbers, probs, rng):
    return int(rng.choice(numbers, p=probs))


# ============================================
# SCORING
# ============================================
def score_candidate(red_balls, blue_ball, red_weights, blue_weights,
                    red_total, blue_total):
    """
    Weight share of the 6 red balls plus weight share of the blue ball,
    in percent. Raising any constituent weight never lowers the score.
    """
    red_share = sum(red_weights[n] for n in red_balls) / red_total
    blue_share = blue_weights[blue_ball] / blue_total
    return round(100.0 * (red_share + blue_share), 6)


def rank_candidates(candidates):
    """Highest score first, then lowest first red ball, then lowest blue ball"""
    return sorted(
        candidates,
        key=lambda c: (-c.score, c.red_balls[0], c.blue_ball)
    )


# ============================================
# GENERATION
# ============================================
def generate_candidates(red_frequencies, blue_frequencies, rng=None,
                        iterations=ITERATION_COUNT, top_n=PREDICTION_COUNT,
                        algorithm=None):
    """
    Sample `iterations` candidates and keep the best `top_n` distinct ones.

    Two candidates with the same red balls never both survive; the higher
    scoring one is kept. If the budget runs out before `top_n` distinct red
    sets were found, the batch is returned short and flagged degraded.

    Args:
        red_frequencies: BallFrequency entries of the red pool
        blue_frequencies: BallFrequency entries of the blue pool
        rng: numpy Generator, a fresh unseeded one when omitted
        iterations: sampling attempt cap
        top_n: number of predictions wanted

    Returns:
        PredictionBatch
    """
    if rng is None:
        rng = np.random.default_rng()
    if iterations < 0:
        raise InputError(f"iterations must be >= 0, got {iterations}")

    red_numbers, red_probs = _pool_arrays(red_frequencies)
    blue_numbers, blue_probs = _pool_arrays(blue_frequencies)

    if len(red_numbers) < RED_BALLS_PER_DRAW:
        raise InputError(
            f"Red pool has {len(red_numbers)} numbers, need at least {RED_BALLS_PER_DRAW}"
        )

    red_weights = {e.number: e.weight for e in red_frequencies}
    blue_weights = {e.number: e.weight for e in blue_frequencies}
    red_total = sum(red_weights.values())
    blue_total = sum(blue_weights.values())

    best = {}
    for _ in range(iterations):
        red_balls = sample_red_balls(red_numbers, red_probs, rng)
        blue_ball = sample_blue_ball(blue_numbers, blue_probs, rng)
        score = score_candidate(red_balls, blue_ball, red_weights, blue_weights,
                                red_total, blue_total)

        current = best.get(red_balls)
        if current is None or score > current.score:
            best[red_balls] = PredictionCandidate(red_balls, blue_ball, score)

    ranked = rank_candidates(best.values())[:top_n]

    return PredictionBatch(
        candidates=tuple(ranked),
        requested=top_n,
        attempts=iterations,
        algorithm=algorithm,
    )


def portfolio_statistics(candidates):
    """Spread of a prediction list, for display"""
    candidates = list(candidates)
    all_numbers = set()
    for c in candidates:
        all_numbers.update(c.red_balls)

    overlaps = []
    for i in range(len(candidates)):
        for j in range(i + 1, len(candidates)):
            overlap = len(set(candidates[i].red_balls) & set(candidates[j].red_balls))
            overlaps.append(overlap)

    scores = [c.score for c in candidates]

    return {
        'total_predictions': len(candidates),
        'unique_red_numbers': len(all_numbers),
        'unique_blue_numbers': len({c.blue_ball for c in candidates}),
        'avg_overlap': float(np.mean(overlaps)) if overlaps else 0.0,
        'max_overlap': max(overlaps) if overlaps else 0,
        'best_score': max(scores) if scores else 0.0,
        'worst_score': min(scores) if scores else 0.0,
    }
