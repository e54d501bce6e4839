"""
Local draw history: CSV file plus SQLite mirror.

CSV layout:
    # LastUpdate: 2026-02-12
    issue,date,red1,red2,red3,red4,red5,red6,blue_ball
    2026015,2026-02-10,3,9,14,20,27,31,7

Only the newest MAX_RECORDS draws are kept. Nothing here fetches data
from the network.
"""
import logging
from datetime import date, datetime
from pathlib import Path

import pandas as pd

from ssq_ai.config import (
    CSV_PATH, CSV_COLUMNS, MAX_RECORDS, LAST_UPDATE_PREFIX, DATE_FORMAT
)
from ssq_ai.core.db import SsqDraw, get_session
from ssq_ai.core.errors import InputError
from ssq_ai.core.records import DrawRecord
from ssq_ai.features.features import records_to_frame

logger = logging.getLogger(__name__)


def _read_first_line(path):
    with open(path, 'r', encoding='utf-8') as f:
        return f.readline().strip()


def get_last_update(path=CSV_PATH):
    """Date from the '# LastUpdate:' comment line, None if absent"""
    path = Path(path)
    if not path.exists():
        return None

    first_line = _read_first_line(path)
    if not first_line.startswith(LAST_UPDATE_PREFIX):
        return None

    try:
        return datetime.strptime(first_line[len(LAST_UPDATE_PREFIX):].strip(), DATE_FORMAT).date()
    except ValueError:
        logger.warning(f"Unreadable update marker in {path}: {first_line!r}")
        return None


def load_history(path=CSV_PATH, max_records=MAX_RECORDS):
    """
    Load local history, keeping the newest `max_records` rows.

    Returns an empty list when the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No local history at {path}")
        return []

    skip = 1 if _read_first_line(path).startswith(LAST_UPDATE_PREFIX.strip()) else 0

    try:
        df = pd.read_csv(path, skiprows=skip, dtype={'issue': str, 'date': str})
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as e:
        raise InputError(f"Failed to parse {path}: {e}") from e

    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise InputError(f"{path} is missing columns: {', '.join(missing)}")

    if df[CSV_COLUMNS].isna().any().any():
        bad = df[df[CSV_COLUMNS].isna().any(axis=1)]['issue'].tolist()
        raise InputError(f"{path} has incomplete rows: {bad[:5]}")

    records = [DrawRecord.from_dict(row) for row in df[CSV_COLUMNS].to_dict('records')]

    if len(records) > max_records:
        records = records[-max_records:]

    logger.info(f"Loaded {len(records)} draws from {path}")
    return records


def save_history(records, path=CSV_PATH, today=None, max_records=MAX_RECORDS):
    """Write the newest `max_records` draws with today's update marker"""
    path = Path(path)
    today = today or date.today()
    records = list(records)[-max_records:]

    path.parent.mkdir(parents=True, exist_ok=True)
    df = records_to_frame(records) if records else pd.DataFrame(columns=CSV_COLUMNS)

    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(f"{LAST_UPDATE_PREFIX}{today.strftime(DATE_FORMAT)}\n")
        df[CSV_COLUMNS].to_csv(f, index=False)

    logger.info(f"Saved {len(records)} draws to {path}")
    return path


def merge_records(existing, new):
    """
    Union of two record lists, deduplicated by issue and sorted by issue.

    Returns:
        (merged, added_count)
    """
    merged = {r.issue: r for r in existing}
    added = 0
    for record in new:
        if record.issue not in merged:
            merged[record.issue] = record
            added += 1

    ordered = sorted(merged.values(), key=lambda r: r.issue)
    logger.info(f"Merged history: {added} new draws, {len(ordered)} total")
    return ordered, added


def needs_refresh(path=CSV_PATH, today=None):
    """True when there is no local data or it was last updated before today"""
    today = today or date.today()
    path = Path(path)
    if not path.exists():
        return True

    last_update = get_last_update(path)
    if last_update is None:
        return True
    return last_update < today


# ============================================
# SQLITE MIRROR
# ============================================
def import_to_db(records, session=None):
    """Insert draws whose issue is not stored yet. Returns inserted count."""
    own_session = session is None
    if own_session:
        session = get_session()
    try:
        known = {issue for (issue,) in session.query(SsqDraw.issue).all()}
        inserted = 0
        for record in records:
            if record.issue in known:
                continue
            reds = record.red_balls
            session.add(SsqDraw(
                issue=record.issue,
                draw_date=record.date.strftime(DATE_FORMAT),
                red1=reds[0], red2=reds[1], red3=reds[2],
                red4=reds[3], red5=reds[4], red6=reds[5],
                blue_ball=record.blue_ball,
            ))
            known.add(record.issue)
            inserted += 1
        session.commit()
        logger.info(f"Inserted {inserted} draws into database")
        return inserted
    except Exception as e:
        session.rollback()
        logger.error(f"Error inserting draws: {e}")
        raise
    finally:
        if own_session:
            session.close()


def load_from_db(session=None):
    """All stored draws ordered by issue"""
    own_session = session is None
    if own_session:
        session = get_session()
    try:
        rows = session.query(SsqDraw).order_by(SsqDraw.issue).all()
        return [
            DrawRecord(
                issue=row.issue,
                date=row.draw_date,
                red_balls=tuple(row.get_red_balls()),
                blue_ball=row.blue_ball,
            )
            for row in rows
        ]
    finally:
        if own_session:
            session.close()
