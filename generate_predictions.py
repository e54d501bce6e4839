"""
Print frequency summary and top predictions from the local history

Usage:
    python generate_predictions.py
    python generate_predictions.py --algorithm cold
    python generate_predictions.py --algorithm hot --seed 42 --csv data/ssq_history.csv
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from ssq_ai.core.engine import analyze_frequency, generate_predictions
from ssq_ai.core.errors import SsqError
from ssq_ai.core.models import portfolio_statistics
from ssq_ai.data.history import load_history, get_last_update
from ssq_ai.features.features import frequency_table
from ssq_ai.models.frequency_model import rank_by_weight
from ssq_ai.config import CSV_PATH, GAME_NAME, logger


def parse_args(argv):
    """Very small flag parser: --algorithm, --seed, --csv"""
    options = {'algorithm': 'hot', 'seed': None, 'csv': CSV_PATH}
    i = 0
    while i < len(argv):
        flag = argv[i]
        if flag in ('--algorithm', '--seed', '--csv') and i + 1 < len(argv):
            value = argv[i + 1]
            if flag == '--seed':
                value = int(value)
            elif flag == '--csv':
                value = Path(value)
            options[flag[2:]] = value
            i += 2
        else:
            raise SystemExit(f"Unknown argument: {flag}\n{__doc__}")
    return options


def print_top(title, entries, n=5):
    table = frequency_table(entries).set_index('number')
    print(f"\n{title}")
    for entry in rank_by_weight(entries)[:n]:
        pct = table.loc[entry.number, 'percentage']
        print(f"   {entry.number:02d}: {entry.frequency:3d} times, "
              f"weight {entry.weight:6.2f} ({pct:4.1f}%)")


def main(argv=None):
    options = parse_args(sys.argv[1:] if argv is None else argv)

    print("=" * 70)
    print(f"🎰 {GAME_NAME.upper()} - FREQUENCY-WEIGHTED PREDICTIONS")
    print("=" * 70)

    records = load_history(options['csv'])
    last_update = get_last_update(options['csv'])
    print(f"\n📊 Draws loaded: {len(records)}"
          f" (last update: {last_update or 'unknown'})")
    if records:
        print(f"   Latest: {records[-1]}")

    try:
        red, blue = analyze_frequency(records, options['algorithm'])
        batch = generate_predictions(records, options['algorithm'], seed=options['seed'])
    except SsqError as e:
        logger.error(f"Cannot generate predictions: {e}")
        print(f"\n❌ {e}")
        return 1

    print_top(f"🔴 Top red balls ({options['algorithm']})", red)
    print_top(f"🔵 Top blue balls ({options['algorithm']})", blue, n=3)

    print("\n" + "=" * 70)
    print("🎟️  PREDICTIONS")
    print("=" * 70)
    for i, candidate in enumerate(batch, 1):
        print(f"  {i:2d}. {candidate}")

    if batch.degraded:
        print(f"\n⚠️  Only {batch.count} of {batch.requested} distinct predictions produced")

    stats = portfolio_statistics(batch)
    print(f"\n  Unique red numbers: {stats['unique_red_numbers']}/33")
    print(f"  Avg red overlap:    {stats['avg_overlap']:.2f}")
    print("\n  ⚠️  Past frequencies do not change the odds of the next draw.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
