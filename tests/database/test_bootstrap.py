from __future__ import annotations

from pathlib import Path

from shift_tracker.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- holidays; seeded yearly
    INSERT INTO t (name) VALUES ('a;b');
    INSERT INTO t (name) VALUES ("c;d");
    SELECT 1
    """

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t (name) VALUES ('a;b')",
        'INSERT INTO t (name) VALUES ("c;d")',
        "SELECT 1",
    ]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);\n"

    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_schema_declares_one_record_per_user_and_day():
    schema = (DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")
    statements = list(_iter_sql_statements(_strip_create_db_and_use(schema)))

    attendance = next(s for s in statements if "attendance_records" in s and s.upper().startswith("CREATE TABLE"))
    assert "UNIQUE" in attendance.upper()
    assert any("public_holidays" in s for s in statements)
