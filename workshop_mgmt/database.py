from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from workshop_mgmt.config import settings


def create_store_engine(url: str, **kwargs):
    """Create an engine with the per-connection setup every store connection needs"""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    elif url.startswith("postgresql"):
        kwargs.setdefault("connect_args", {"connect_timeout": settings.db_connect_timeout})

    store_engine = create_engine(url, **kwargs)

    @event.listens_for(store_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        if store_engine.dialect.name == "postgresql":
            # Ensure search_path is set to public schema
            cursor.execute("SET search_path TO public")
        elif store_engine.dialect.name == "sqlite":
            # SQLite ignores REFERENCES clauses unless asked per connection
            cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return store_engine


engine = create_store_engine(settings.database_connection_url, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
