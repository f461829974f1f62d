#!/usr/bin/env python3
"""
Create the workshop management schema (six tables plus the score and profit
triggers) in the configured database, then list what is there.

Execute this script from the repository root:
    python import_schema.py
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from workshop_mgmt.database import engine
from workshop_mgmt.schema_setup import describe_store, init_store


def import_schema():
    print(f"Connecting to {engine.url.render_as_string(hide_password=True)} ...")

    try:
        init_store(engine)
    except Exception as e:
        print("\nImport failed!")
        print(f"Error: {e}")
        return False

    print("Schema imported successfully!")

    store = describe_store(engine)
    print("\nTables:")
    for table in store["tables"]:
        print(f"   - {table}")

    print("\nTriggers:")
    for trigger in store["triggers"]:
        print(f"   - {trigger}")

    print("\n" + "=" * 50)
    print("Database setup complete!")
    print("=" * 50)
    return True


if __name__ == "__main__":
    sys.exit(0 if import_schema() else 1)
