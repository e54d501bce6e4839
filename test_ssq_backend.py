"""
Tests for the history store, SQLite mirror, data report and HTTP backend
Runs under pytest, or directly: python test_ssq_backend.py
"""
import sys
import tempfile
from datetime import date, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ssq_ai.core.db import init_db
from ssq_ai.core.errors import InputError
from ssq_ai.core.records import DrawRecord
from ssq_ai.data.history import (
    load_history, save_history, get_last_update, merge_records,
    needs_refresh, import_to_db, load_from_db
)


def make_history(n, start=0):
    records = []
    for i in range(start, start + n):
        first = i % 28 + 1
        records.append(DrawRecord(
            issue=f"{2020001 + i}",
            date=date(2020, 1, 2) + timedelta(days=2 * i),
            red_balls=tuple(range(first, first + 6)),
            blue_ball=i % 16 + 1,
        ))
    return records


def test_history_csv():
    print("=" * 60)
    print("TEST 1: CSV history")
    print("=" * 60)
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "ssq_history.csv"

        assert load_history(path) == []
        assert get_last_update(path) is None
        assert needs_refresh(path)

        records = make_history(30)
        save_history(records, path, today=date(2026, 2, 12))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "# LastUpdate: 2026-02-12"
        assert lines[1] == "issue,date,red1,red2,red3,red4,red5,red6,blue_ball"
        assert lines[2] == "2020001,2020-01-02,1,2,3,4,5,6,1"

        loaded = load_history(path)
        print(f"  Loaded {len(loaded)} draws")
        assert loaded == records
        assert get_last_update(path) == date(2026, 2, 12)
        assert not needs_refresh(path, today=date(2026, 2, 12))
        assert needs_refresh(path, today=date(2026, 2, 13))
    print("  PASSED")


def test_history_without_marker():
    print("\n" + "=" * 60)
    print("TEST 2: CSV without update marker")
    print("=" * 60)
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "plain.csv"
        path.write_text(
            "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
            "2024001,2024-01-02,1,8,15,22,29,33,16\n",
            encoding="utf-8"
        )
        records = load_history(path)
        assert len(records) == 1
        assert records[0].red_balls == (1, 8, 15, 22, 29, 33)
        assert records[0].issue == "2024001"
        assert get_last_update(path) is None
        assert needs_refresh(path, today=date(2024, 1, 3))
    print("  PASSED")


def test_history_cap():
    print("\n" + "=" * 60)
    print("TEST 3: History keeps the newest 500 draws")
    print("=" * 60)
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "ssq_history.csv"
        records = make_history(510)

        save_history(records, path, today=date(2026, 1, 1), max_records=600)
        loaded = load_history(path)
        assert len(loaded) == 500
        assert loaded[0].issue == records[10].issue
        assert loaded[-1].issue == records[-1].issue

        save_history(records, path, today=date(2026, 1, 1))
        assert len(path.read_text(encoding="utf-8").splitlines()) == 502
    print("  PASSED")


def test_malformed_csv():
    print("\n" + "=" * 60)
    print("TEST 4: Malformed CSV rejected")
    print("=" * 60)
    with tempfile.TemporaryDirectory() as tmp:
        missing = Path(tmp) / "missing.csv"
        missing.write_text("issue,date,red1\n1,2024-01-02,5\n", encoding="utf-8")
        incomplete = Path(tmp) / "incomplete.csv"
        incomplete.write_text(
            "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
            "2024001,2024-01-02,1,8,15,22,29,,16\n",
            encoding="utf-8"
        )
        fractional = Path(tmp) / "fractional.csv"
        fractional.write_text(
            "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
            "2024001,2024-01-02,1,8,15,22,29,33.6,16\n",
            encoding="utf-8"
        )
        for path in (missing, incomplete, fractional):
            try:
                load_history(path)
            except InputError:
                continue
            raise AssertionError(f"{path.name} accepted")
    print("  PASSED")


def test_merge_records():
    print("\n" + "=" * 60)
    print("TEST 5: Merge deduplicates by issue")
    print("=" * 60)
    existing = make_history(10)
    new = make_history(8, start=5)
    merged, added = merge_records(existing, list(reversed(new)))

    print(f"  Added {added}, total {len(merged)}")
    assert added == 3
    assert len(merged) == 13
    issues = [r.issue for r in merged]
    assert issues == sorted(issues)
    assert len(set(issues)) == len(issues)
    print("  PASSED")


def test_database_mirror():
    print("\n" + "=" * 60)
    print("TEST 6: SQLite mirror")
    print("=" * 60)
    engine = create_engine("sqlite://")
    init_db(bind=engine)
    Session = sessionmaker(bind=engine)

    records = make_history(12)
    session = Session()
    try:
        assert import_to_db(records[:8], session) == 8
        assert import_to_db(records, session) == 4
        loaded = load_from_db(session)
    finally:
        session.close()

    print(f"  Database holds {len(loaded)} draws")
    assert loaded == records
    print("  PASSED")


def test_quality_report():
    print("\n" + "=" * 60)
    print("TEST 7: Data quality report")
    print("=" * 60)
    from verify_data import quality_report

    records = make_history(60)
    report = quality_report(records)
    print(f"  Red chi² p={report['red_uniformity']['p_value']:.4f}")

    assert report['n_draws'] == 60
    assert report['duplicate_issues'] == 0
    assert report['red_uniformity']['df'] == 32
    assert report['blue_uniformity']['df'] == 15
    assert 0.0 <= report['blue_uniformity']['p_value'] <= 1.0
    assert len(report['most_frequent_red']) == 10

    try:
        quality_report([])
    except InputError:
        pass
    else:
        raise AssertionError("empty history accepted")
    print("  PASSED")


def test_manual_draw_entry():
    print("\n" + "=" * 60)
    print("TEST 8: Manual draw entry")
    print("=" * 60)
    from update_draws import parse_manual

    record = parse_manual("2026015", "2026-02-10", "31, 3,9,14,20,27", "7")
    assert record.issue == "2026015"
    assert record.date == date(2026, 2, 10)
    assert sorted(record.red_balls) == [3, 9, 14, 20, 27, 31]
    assert record.blue_ball == 7

    try:
        parse_manual("2026016", "2026-02-12", "1,2,3", "7")
    except InputError:
        pass
    else:
        raise AssertionError("short red list accepted")
    print("  PASSED")


def test_http_backend():
    print("\n" + "=" * 60)
    print("TEST 9: HTTP backend")
    print("=" * 60)
    from fastapi.testclient import TestClient
    import main

    original_path = main.CSV_PATH
    client = TestClient(main.app)
    with tempfile.TemporaryDirectory() as tmp:
        try:
            main.CSV_PATH = Path(tmp) / "ssq_history.csv"

            response = client.get("/frequency", params={"algorithm": "hot"})
            assert response.status_code == 422

            save_history(make_history(40), main.CSV_PATH, today=date(2026, 3, 1))

            health = client.get("/").json()
            assert health["records"] == 40
            assert health["last_update"] == "2026-03-01"

            freq = client.get("/frequency", params={"algorithm": "cold"}).json()
            assert [e["number"] for e in freq["red"]] == list(range(1, 34))
            assert len(freq["blue"]) == 16
            assert all(e["weight"] > 0 for e in freq["red"])

            body = client.get("/predictions", params={"algorithm": "hot", "seed": 3}).json()
            print(f"  {body['count']} predictions, degraded={body['degraded']}")
            assert body["count"] == 10 and body["requested"] == 10
            assert not body["degraded"]
            scores = [p["score"] for p in body["predictions"]]
            assert scores == sorted(scores, reverse=True)

            for endpoint in ("/frequency", "/predictions"):
                response = client.get(endpoint, params={"algorithm": "warm"})
                assert response.status_code == 400
        finally:
            main.CSV_PATH = original_path
    print("  PASSED")


def test_health_check_with_bad_history():
    print("\n" + "=" * 60)
    print("TEST 10: Health check on a malformed history")
    print("=" * 60)
    from fastapi.testclient import TestClient
    import main

    original_path = main.CSV_PATH
    client = TestClient(main.app)
    with tempfile.TemporaryDirectory() as tmp:
        try:
            main.CSV_PATH = Path(tmp) / "ssq_history.csv"
            main.CSV_PATH.write_text(
                "# LastUpdate: 2026-03-01\n"
                "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
                "2024001,2024-01-02,1,8,15,22,29,33.6,16\n",
                encoding="utf-8"
            )

            response = client.get("/")
            body = response.json()
            print(f"  status={body['status']}: {body.get('error')}")
            assert response.status_code == 200
            assert body["status"] == "degraded"
            assert body["records"] == 0
            assert body["last_update"] == "2026-03-01"
            assert "33.6" in body["error"]

            response = client.get("/predictions", params={"algorithm": "hot"})
            assert response.status_code == 422
        finally:
            main.CSV_PATH = original_path
    print("  PASSED")


def main():
    print()
    print("=" * 60)
    print("  SSQ AI - BACKEND TEST SUITE")
    print("=" * 60)

    tests = [
        ("CSV history", test_history_csv),
        ("CSV without marker", test_history_without_marker),
        ("History cap", test_history_cap),
        ("Malformed CSV", test_malformed_csv),
        ("Merge records", test_merge_records),
        ("SQLite mirror", test_database_mirror),
        ("Quality report", test_quality_report),
        ("Manual draw entry", test_manual_draw_entry),
        ("HTTP backend", test_http_backend),
        ("Health check on bad history", test_health_check_with_bad_history),
    ]

    results = []
    for name, test_fn in tests:
        try:
            test_fn()
            passed = True
        except Exception as e:
            print(f"  FAILED: {e}")
            import traceback
            traceback.print_exc()
            passed = False
        results.append((name, passed))

    print("\n" + "=" * 60)
    print("  RESULTS")
    print("=" * 60)
    for name, passed in results:
        icon = "✅" if passed else "❌"
        print(f"  {icon} {name}: {'PASS' if passed else 'FAIL'}")

    n_passed = sum(1 for _, p in results if p)
    print(f"\n  Total: {n_passed}/{len(results)} passed")
    print("=" * 60)
    return 0 if n_passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
