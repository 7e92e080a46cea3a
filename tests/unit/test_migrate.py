"""Unit tests for the dbmate-format parsing in `core.migrate`."""

from __future__ import annotations

from pathlib import Path

import pytest

from core import migrate

MIGRATIONS = Path(__file__).resolve().parents[2] / "db" / "migrations"


def test_up_section_stops_at_down_marker():
    text = "-- migrate:up\nCREATE TABLE t (id int);\n\n-- migrate:down\nDROP TABLE t;\n"
    assert migrate.up_section(text) == "CREATE TABLE t (id int);"


def test_up_section_without_down_marker():
    assert migrate.up_section("-- migrate:up\nSELECT 1;") == "SELECT 1;"


def test_up_section_requires_marker():
    with pytest.raises(migrate.MigrationError):
        migrate.up_section("CREATE TABLE t (id int);")


def test_migration_files_sorted(tmp_path):
    for name in ("20240102_b.sql", "20240101_a.sql", "notes.txt"):
        (tmp_path / name).write_text("-- migrate:up\nSELECT 1;\n", encoding="utf-8")
    assert [p.name for p in migrate.migration_files(tmp_path)] == ["20240101_a.sql", "20240102_b.sql"]


def test_missing_directory(tmp_path):
    with pytest.raises(migrate.MigrationError):
        migrate.migration_files(tmp_path / "nope")


def test_shipped_contacts_migration_creates_the_table():
    files = migrate.migration_files(MIGRATIONS)
    assert files
    up = migrate.up_section(files[0].read_text(encoding="utf-8"))
    assert "CREATE TABLE IF NOT EXISTS contacts" in up
    assert "DROP TABLE" not in up
