"""
Verify local draw history quality - with chi-square uniformity checks
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent))

import numpy as np
from scipy.stats import chisquare

from ssq_ai.config import CSV_PATH, RED_BALLS_PER_DRAW
from ssq_ai.core.errors import InputError
from ssq_ai.data.history import load_history, get_last_update
from ssq_ai.features.features import validate_records, count_frequencies


def uniformity_test(counts):
    """Chi-square test of observed counts against a uniform pool"""
    observed = np.array([counts[n] for n in sorted(counts)], dtype=float)
    result = chisquare(observed)
    return {
        'chi2': float(result.statistic),
        'df': len(observed) - 1,
        'p_value': float(result.pvalue),
        'fair': bool(result.pvalue > 0.05),
    }


def quality_report(records):
    """Frequency extremes and uniformity verdict for both pools"""
    validate_records(records)
    red_counts, blue_counts = count_frequencies(records)

    ranked = sorted(red_counts.items(), key=lambda kv: (-kv[1], kv[0]))
    expected_red = len(records) * RED_BALLS_PER_DRAW / len(red_counts)

    issues = [r.issue for r in records]
    duplicates = len(records) - len(set(issues))

    return {
        'n_draws': len(records),
        'date_range': (min(r.date for r in records), max(r.date for r in records)),
        'duplicate_issues': duplicates,
        'expected_red_frequency': expected_red,
        'most_frequent_red': ranked[:10],
        'least_frequent_red': ranked[-10:],
        'red_uniformity': uniformity_test(red_counts),
        'blue_uniformity': uniformity_test(blue_counts),
    }


def main():
    records = load_history(CSV_PATH)

    print("=" * 70)
    print("📊 DATA QUALITY REPORT")
    print("=" * 70)
    print(f"\n📈 Total Draws: {len(records)}")
    print(f"🕒 Last update: {get_last_update(CSV_PATH) or 'unknown'}")

    if not records:
        print("❌ No draws found in local history!")
        return 1

    try:
        report = quality_report(records)
    except InputError as e:
        print(f"\n⚠️  DATA ISSUE: {e}")
        return 1

    start, end = report['date_range']
    print(f"📅 Date Range: {start} to {end}")
    print("   ✅ All numbers valid")

    expected = report['expected_red_frequency']
    print(f"\n🔥 Top 10 Most Frequent Red Balls:")
    for num, count in report['most_frequent_red']:
        deviation = (count - expected) / expected * 100
        print(f"   {num:2d}: {count:3d} times ({deviation:+.1f}% vs expected)")

    print(f"\n❄️  Top 10 Least Frequent Red Balls:")
    for num, count in report['least_frequent_red']:
        deviation = (count - expected) / expected * 100
        print(f"   {num:2d}: {count:3d} times ({deviation:+.1f}% vs expected)")

    for pool in ('red', 'blue'):
        test = report[f'{pool}_uniformity']
        print(f"\n📐 Chi-Square Test ({pool}):")
        print(f"   Chi²: {test['chi2']:.2f} (df={test['df']})")
        print(f"   P-value: {test['p_value']:.4f}")
        print(f"   Verdict: {'✅ FAIR (uniform)' if test['fair'] else '⚠️ POSSIBLE DEVIATION'}")

    if report['duplicate_issues']:
        print(f"\n⚠️  {report['duplicate_issues']} duplicate issue numbers")
    else:
        print(f"\n✅ No duplicate issues")

    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
