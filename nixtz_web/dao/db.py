"""SQLite helpers for the web application."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Iterable, Sequence

import click
from flask import Flask, current_app, g

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"
SEEDS_DIR = Path(__file__).resolve().parent.parent / "seeds"
MIGRATIONS = ("0001_init",)


class DatabaseError(RuntimeError):
    """Raised when the SQLite layer encounters an unexpected error."""


def get_db() -> sqlite3.Connection:
    """Return a connection for the current request context."""
    if "db" not in g:
        database_path = current_app.config["DATABASE"]
        g.db = sqlite3.connect(database_path)
        g.db.row_factory = sqlite3.Row
        g.db.execute("PRAGMA foreign_keys = ON")
    return g.db  # type: ignore[return-value]


def close_db(_: object | None = None) -> None:
    """Close the connection stored in the application context."""
    db = g.pop("db", None)
    if db is not None:
        db.close()


def init_app(app: Flask) -> None:
    """Attach teardown handlers and CLI commands to the app."""
    app.teardown_appcontext(close_db)
    app.cli.add_command(init_db_command)


def ensure_schema(app: Flask) -> None:
    """Apply pending migrations (and seeds on first install)."""
    initialize_database(app, drop_existing=False, seed=bool(app.config.get("SEED_DATA", True)))


def initialize_database(app: Flask, *, drop_existing: bool, seed: bool = True) -> None:
    database_path = Path(app.config["DATABASE"])
    if drop_existing and database_path.exists():
        database_path.unlink()

    with app.app_context():
        db = get_db()
        try:
            fresh = not _has_migrations_table(db)
            installed = fresh
            for version in MIGRATIONS:
                if not fresh and _has_version(db, version):
                    continue
                _apply_scripts(db, [MIGRATIONS_DIR / f"{version}.sql"])
                fresh = False
            # Seeds only land on a brand new database.
            if seed and installed and _is_empty(db):
                _apply_scripts(db, [SEEDS_DIR / "seed.sql"])
            db.commit()
        finally:
            close_db(None)


def _apply_scripts(db: sqlite3.Connection, scripts: Iterable[Path]) -> None:
    for script in scripts:
        sql = script.read_text(encoding="utf-8")
        try:
            db.executescript(sql)
        except sqlite3.Error as exc:
            raise DatabaseError(f"{script.name}: {exc}") from exc


def _has_migrations_table(db: sqlite3.Connection) -> bool:
    cursor = db.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_migrations'"
    )
    return cursor.fetchone() is not None


def _has_version(db: sqlite3.Connection, version: str) -> bool:
    version_cursor = db.execute("SELECT 1 FROM schema_migrations WHERE version = ?", (version,))
    return version_cursor.fetchone() is not None


def _is_empty(db: sqlite3.Connection) -> bool:
    row = db.execute("SELECT COUNT(1) FROM staff_profiles").fetchone()
    return not row or not row[0]


def query_one(sql: str, params: Sequence[Any] | None = None) -> sqlite3.Row | None:
    cur = get_db().execute(sql, params or [])
    try:
        return cur.fetchone()
    finally:
        cur.close()


def query_all(sql: str, params: Sequence[Any] | None = None) -> list[sqlite3.Row]:
    cur = get_db().execute(sql, params or [])
    try:
        return cur.fetchall()
    finally:
        cur.close()


def execute(sql: str, params: Sequence[Any] | None = None) -> int:
    db = get_db()
    cur = db.execute(sql, params or [])
    db.commit()
    return cur.rowcount


@click.command("init-db")
@click.option("--force", is_flag=True, help="Recreate the database from scratch.")
@click.option("--no-seed", is_flag=True, help="Skip the demo staff seed.")
def init_db_command(force: bool, no_seed: bool) -> None:
    """Initialize the database using the bundled migrations and seeds."""
    app = current_app._get_current_object()  # type: ignore[attr-defined]
    initialize_database(app, drop_existing=force, seed=not no_seed)
    click.echo("Database initialized.")
