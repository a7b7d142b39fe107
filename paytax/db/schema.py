"""SQLite database schema definition."""

import sqlite3
from pathlib import Path

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS tax_brackets (
    id TEXT PRIMARY KEY,
    business_id TEXT,
    country TEXT NOT NULL,
    tax_type TEXT NOT NULL,
    min_income TEXT NOT NULL,
    max_income TEXT,
    tax_rate TEXT NOT NULL,
    fixed_amount TEXT,
    effective_date TEXT NOT NULL,
    end_date TEXT,
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_tax_brackets_lookup
    ON tax_brackets (country, tax_type, is_active);

CREATE TABLE IF NOT EXISTS employee_tax_profiles (
    employee_id TEXT PRIMARY KEY,
    country TEXT,
    tax_id TEXT,
    filing_status TEXT NOT NULL DEFAULT 'single',
    allowances INTEGER NOT NULL DEFAULT 0,
    additional_withholding TEXT NOT NULL DEFAULT '0',
    exempt_from_federal INTEGER NOT NULL DEFAULT 0,
    exempt_from_state INTEGER NOT NULL DEFAULT 0,
    exempt_from_local INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


def create_schema(db_path: Path) -> sqlite3.Connection:
    """Create the database schema. Returns the connection."""
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.executescript(SCHEMA_SQL)
    conn.execute(
        "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
        (SCHEMA_VERSION,),
    )
    conn.commit()
    return conn
