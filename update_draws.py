"""
Merge new draws into the local history and mirror them into SQLite.
Draws come from a CSV you already have, or are typed in by hand.

Usage:
    python update_draws.py
    python update_draws.py --import downloads/ssq_export.csv
    python update_draws.py --manual 2026015 2026-02-10 3,9,14,20,27,31 7
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from ssq_ai.core.db import init_db
from ssq_ai.core.errors import InputError
from ssq_ai.core.records import DrawRecord
from ssq_ai.data.history import (
    load_history, save_history, merge_records, import_to_db,
    get_last_update, needs_refresh
)
from ssq_ai.features.features import validate_records
from ssq_ai.config import CSV_PATH, logger


def show_latest(records):
    """Show latest draws in local history"""
    print(f"\n📊 Total draws: {len(records)}")
    print(f"🕒 Last update: {get_last_update(CSV_PATH) or 'never'}")
    print(f"📅 Latest 5:")
    for record in records[-5:][::-1]:
        print(f"   {record}")


def parse_manual(issue, date_str, reds_str, blue_str):
    return DrawRecord.from_dict({
        'issue': issue,
        'date': date_str,
        'red_balls': [int(x.strip()) for x in reds_str.split(",")],
        'blue_ball': int(blue_str),
    })


def manual_input():
    """Interactive manual input"""
    print("\n✏️  Manual input mode")
    print("   (Type 'done' to finish)\n")

    new = []
    while True:
        issue = input("   Issue or 'done': ").strip()
        if issue.lower() == 'done':
            break

        date_str = input("   Date (YYYY-MM-DD): ").strip()
        reds_str = input("   Red balls (comma-separated): ").strip()
        blue_str = input("   Blue ball: ").strip()

        try:
            record = parse_manual(issue, date_str, reds_str, blue_str)
            validate_records([record])
        except (InputError, ValueError) as e:
            print(f"   ❌ {e}")
            continue

        new.append(record)
        print(f"   ✅ Queued: {record}")

    return new


def apply_update(existing, new):
    """Merge, persist to CSV and mirror to SQLite. Returns merged records."""
    if new:
        validate_records(new)

    merged, added = merge_records(existing, new)
    save_history(merged, CSV_PATH)
    import_to_db(merged)

    print(f"\n✅ Added {added} new draws, {len(merged)} in history")
    return merged


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    init_db()

    print("=" * 60)
    print("🎱 DOUBLE COLOR BALL - UPDATE DRAWS")
    print("=" * 60)

    existing = load_history(CSV_PATH)

    try:
        if len(argv) >= 2 and argv[0] == '--import':
            new = load_history(Path(argv[1]))
            logger.info(f"Importing {len(new)} draws from {argv[1]}")
        elif len(argv) >= 5 and argv[0] == '--manual':
            new = [parse_manual(*argv[1:5])]
        elif not argv:
            show_latest(existing)
            if not needs_refresh(CSV_PATH):
                print("\nℹ️  History already updated today")
            response = input("\nDo you want to enter draws manually? (y/n): ").strip().lower()
            new = manual_input() if response == 'y' else []
        else:
            print(__doc__)
            return 2

        merged = apply_update(existing, new)
    except (InputError, ValueError) as e:
        logger.error(f"Update failed: {e}")
        print(f"❌ {e}")
        return 1

    show_latest(merged)
    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
