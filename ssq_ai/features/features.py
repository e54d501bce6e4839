"""
Frequency aggregation for Double Color Ball draws
"""
from collections import Counter

import pandas as pd

from ssq_ai.config import (
    RED_NUMBERS, BLUE_NUMBERS, RED_BALL_MIN, RED_BALL_MAX,
    BLUE_BALL_MIN, BLUE_BALL_MAX, RED_BALLS_PER_DRAW, DATE_FORMAT
)
from ssq_ai.core.errors import InputError


def validate_records(records):
    """
    Check that there is something to aggregate and that every record
    holds 6 distinct red balls in 1..33 and a blue ball in 1..16.
    """
    if not records:
        raise InputError("No draw records supplied")

    for record in records:
        reds = record.red_balls
        if len(reds) != RED_BALLS_PER_DRAW:
            raise InputError(
                f"Draw {record.issue}: expected {RED_BALLS_PER_DRAW} red balls, got {len(reds)}"
            )
        if len(set(reds)) != len(reds):
            raise InputError(f"Draw {record.issue}: duplicate red balls {list(reds)}")
        for n in reds:
            if n < RED_BALL_MIN or n > RED_BALL_MAX:
                raise InputError(f"Draw {record.issue}: red ball {n} out of range")
        if record.blue_ball < BLUE_BALL_MIN or record.blue_ball > BLUE_BALL_MAX:
            raise InputError(f"Draw {record.issue}: blue ball {record.blue_ball} out of range")


def count_frequencies(records):
    """
    Count appearances per number, one dict per pool.

    Every pool number is present, including the ones never drawn.

    Returns:
        red_counts: {number: count} for 1..33
        blue_counts: {number: count} for 1..16
    """
    validate_records(records)

    red = Counter()
    blue = Counter()
    for record in records:
        red.update(record.red_balls)
        blue[record.blue_ball] += 1

    red_counts = {n: red.get(n, 0) for n in RED_NUMBERS}
    blue_counts = {n: blue.get(n, 0) for n in BLUE_NUMBERS}

    return red_counts, blue_counts


def sort_by_recency(records):
    """Oldest first, by draw date then issue"""
    return sorted(records, key=lambda r: (r.date, r.issue))


def recent_hits(records, window):
    """
    Appearances within the `window` most recent draws.

    Recency is measured in draws, not calendar days.

    Returns:
        red_hits, blue_hits, window_len (the effective window size)
    """
    recent = sort_by_recency(records)[-window:] if window > 0 else []

    red = Counter()
    blue = Counter()
    for record in recent:
        red.update(record.red_balls)
        blue[record.blue_ball] += 1

    red_hits = {n: red.get(n, 0) for n in RED_NUMBERS}
    blue_hits = {n: blue.get(n, 0) for n in BLUE_NUMBERS}
    return red_hits, blue_hits, len(recent)


def frequency_table(entries):
    """
    Tabular view of one pool for display.
    `percentage` is the weight share within the pool.
    """
    df = pd.DataFrame(
        [e.to_dict() for e in entries],
        columns=["number", "frequency", "weight"]
    )
    total = df["weight"].sum()
    df["percentage"] = df["weight"] / total * 100 if total > 0 else 0.0
    return df


def records_to_frame(records):
    """One row per draw, in the CSV column layout"""
    rows = []
    for record in records:
        row = {"issue": record.issue, "date": record.date.strftime(DATE_FORMAT)}
        for i, n in enumerate(record.red_balls, 1):
            row[f"red{i}"] = n
        row["blue_ball"] = record.blue_ball
        rows.append(row)
    return pd.DataFrame(rows)
