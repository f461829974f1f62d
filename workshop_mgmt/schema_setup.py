import logging
from typing import Dict, List, Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from workshop_mgmt import models  # noqa: F401  registers the tables on Base
from workshop_mgmt.config import settings
from workshop_mgmt.database import Base
from workshop_mgmt.triggers import install_triggers

logger = logging.getLogger(__name__)


def init_store(store_engine: Engine, with_triggers: Optional[bool] = None) -> None:
    """Create any missing tables and (re)install the computed-column triggers"""
    if with_triggers is None:
        with_triggers = settings.install_triggers

    Base.metadata.create_all(bind=store_engine)

    if with_triggers:
        with store_engine.connect() as conn:
            install_triggers(
                conn,
                settings.workshop_score_expression,
                settings.revenue_profit_expression,
            )
    else:
        logger.info("INSTALL_TRIGGERS is off; leaving existing store triggers untouched")


def describe_store(store_engine: Engine) -> Dict[str, List[str]]:
    """Tables and triggers currently present in the store"""
    tables = sorted(inspect(store_engine).get_table_names())

    with store_engine.connect() as conn:
        if store_engine.dialect.name == "sqlite":
            rows = conn.execute(text(
                "SELECT name, tbl_name FROM sqlite_master WHERE type = 'trigger' ORDER BY name"
            ))
        else:
            rows = conn.execute(text("""
                SELECT trigger_name, event_object_table
                FROM information_schema.triggers
                WHERE trigger_schema = 'public'
                ORDER BY trigger_name
            """))
        triggers = sorted({f"{name} on {table}" for name, table in rows})

    return {"tables": tables, "triggers": triggers}
