"""
Backup export helpers
"""

from datetime import date
from decimal import Decimal

from export_database import dump_tables, sql_literal


def test_sql_literal():
    assert sql_literal(None) == "NULL"
    assert sql_literal(True) == "TRUE"
    assert sql_literal(12) == "12"
    assert sql_literal(Decimal("10.50")) == "10.50"
    assert sql_literal(date(2024, 3, 31)) == "'2024-03-31'"
    assert sql_literal("O'Brien") == "'O''Brien'"


def test_dump_tables_in_dependency_order(seeded, engine):
    with engine.connect() as conn:
        dump = dump_tables(conn)

    lines = [line for line in dump.splitlines() if line.startswith("INSERT")]
    tables = [line.split('"')[1] for line in lines]
    assert tables == ["area_incharge", "area", "workshop_ic", "workshop", "manages"]

    assert '"First Name"' in lines[0]
    assert "'Ravi'" in lines[0]
    assert "'North Zone'" in lines[1]
