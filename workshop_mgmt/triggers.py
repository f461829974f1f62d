"""
Store-side triggers for the two computed columns.

workshop.score and revenue.profit are owned by the database: the API never
writes them, it only reads back whatever the triggers produced. The formulas
are plain SQL expressions over the row's own columns, taken from settings
(WORKSHOP_SCORE_EXPRESSION, REVENUE_PROFIT_EXPRESSION), so a deployment can
swap them without touching code.

Both dialects use the same shape: an AFTER INSERT / AFTER UPDATE OF <inputs>
trigger that re-runs an UPDATE on the affected row. The inner UPDATE only sets
the computed column, so it never re-fires the UPDATE OF trigger.
"""

import logging
from typing import List

from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)


# (table, computed column, key columns, input columns)
COMPUTED_COLUMNS = {
    "score": ("workshop", "score", ("wk_code",), ("manpower", "customer_visits", "recovery")),
    "profit": ("revenue", "profit", ("wk_code", "year", "quarter"), ("total_sales", "service_cost")),
}


def _key_match(keys) -> str:
    return " AND ".join(f"{k} = NEW.{k}" for k in keys)


def _sqlite_statements(name: str, expression: str) -> List[str]:
    table, column, keys, inputs = COMPUTED_COLUMNS[name]
    body = f"UPDATE {table} SET {column} = ({expression}) WHERE {_key_match(keys)};"
    return [
        f"DROP TRIGGER IF EXISTS trg_{table}_{column}_insert",
        f"DROP TRIGGER IF EXISTS trg_{table}_{column}_update",
        f"CREATE TRIGGER trg_{table}_{column}_insert AFTER INSERT ON {table} "
        f"FOR EACH ROW BEGIN {body} END",
        f"CREATE TRIGGER trg_{table}_{column}_update AFTER UPDATE OF {', '.join(inputs)} ON {table} "
        f"FOR EACH ROW BEGIN {body} END",
    ]


def _postgresql_statements(name: str, expression: str) -> List[str]:
    table, column, keys, inputs = COMPUTED_COLUMNS[name]
    function = f"refresh_{table}_{column}"
    return [
        f"""
        CREATE OR REPLACE FUNCTION {function}() RETURNS trigger AS $$
        BEGIN
            UPDATE {table} SET {column} = ({expression}) WHERE {_key_match(keys)};
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql
        """,
        f"DROP TRIGGER IF EXISTS trg_{table}_{column} ON {table}",
        f"CREATE TRIGGER trg_{table}_{column} AFTER INSERT OR UPDATE OF {', '.join(inputs)} ON {table} "
        f"FOR EACH ROW EXECUTE FUNCTION {function}()",
    ]


def trigger_statements(dialect: str, score_expression: str, profit_expression: str) -> List[str]:
    """DDL that (re)creates the score and profit triggers for a dialect"""
    if dialect == "sqlite":
        build = _sqlite_statements
    elif dialect == "postgresql":
        build = _postgresql_statements
    else:
        raise ValueError(f"Computed-column triggers are not available for dialect '{dialect}'")

    return build("score", score_expression) + build("profit", profit_expression)


def install_triggers(conn: Connection, score_expression: str, profit_expression: str) -> None:
    """Install the computed-column triggers on an open connection and commit"""
    statements = trigger_statements(conn.dialect.name, score_expression, profit_expression)
    for statement in statements:
        # Driver-level execution: the DDL contains $$ and casts that must not be
        # parsed as bind parameters
        conn.exec_driver_sql(statement)
    conn.commit()
    logger.info(f"Installed computed-column triggers ({conn.dialect.name})")
