#!/usr/bin/env python3
"""
Back up the workshop management tables as a plain SQL file of INSERT
statements (one per row), in dependency order so it can be replayed into a
fresh schema created by import_schema.py.

Execute this script from the repository root:
    python export_database.py
"""

import os
import sys
from datetime import date, datetime
from decimal import Decimal

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection

from workshop_mgmt.database import engine
from workshop_mgmt.models import ALL_TABLES


def sql_literal(value) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return f"'{value.isoformat()}'"
    return "'" + str(value).replace("'", "''") + "'"


def dump_tables(conn: Connection) -> str:
    """Render every known table as INSERT statements"""
    existing = set(inspect(conn).get_table_names())
    lines = [
        "-- KTM Database Backup",
        f"-- Generated: {datetime.now().isoformat()}",
        "",
    ]
    if conn.dialect.name == "postgresql":
        lines += ["SET client_encoding = 'UTF8';", "SET standard_conforming_strings = on;", ""]

    for table in ALL_TABLES:
        if table not in existing:
            print(f"   Skipping {table}: table not found")
            continue

        result = conn.execute(text(f'SELECT * FROM "{table}"'))
        columns = ", ".join(f'"{c}"' for c in result.keys())
        rows = result.fetchall()
        print(f"   Exporting {table}: {len(rows)} rows")

        for row in rows:
            values = ", ".join(sql_literal(v) for v in row)
            lines.append(f'INSERT INTO "{table}" ({columns}) VALUES ({values});')
        if rows:
            lines.append("")

    return "\n".join(lines) + "\n"


def export_database(directory: str = ".") -> str:
    print("Connecting to database...")
    with engine.connect() as conn:
        dump = dump_tables(conn)

    filename = os.path.join(directory, f"ktm_backup_{date.today().isoformat()}.sql")
    with open(filename, "w", encoding="utf-8") as f:
        f.write(dump)

    print("\nExport completed successfully!")
    print(f"File: {filename}")
    print(f"Size: {os.path.getsize(filename) / 1024:.2f} KB")
    return filename


if __name__ == "__main__":
    try:
        export_database()
    except Exception as e:
        print("\nExport failed!")
        print(f"Error: {e}")
        sys.exit(1)
