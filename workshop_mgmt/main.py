import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from workshop_mgmt.config import settings
from workshop_mgmt.database import engine, get_db
from workshop_mgmt.handlers import register_exception_handlers
from workshop_mgmt.schema_setup import init_store
from workshop_mgmt.workshop import workshop_route
from workshop_mgmt.area_incharge import aic_route
from workshop_mgmt.workshop_ic import wic_route

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_store(engine)
    logger.info(f"Store ready ({engine.dialect.name})")
    yield


app = FastAPI(title="KTM Workshop Management API", version="1.0.0", lifespan=lifespan)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["*"],
)

# Workshops first: its /revenue routes must win over any generic route that
# could capture the same prefix.
app.include_router(workshop_route.router)

app.include_router(aic_route.router)

app.include_router(wic_route.router)


@app.get("/")
async def root():
    return {"message": "KTM Workshop Management API is running. All backend routes are active."}


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "database": engine.dialect.name}


@app.get("/db-test")
def db_test(db: Session = Depends(get_db)):
    """Query the store once to verify the connection"""
    try:
        rows = db.execute(text('SELECT * FROM area_incharge LIMIT 1'))
        data = [dict(row._mapping) for row in rows]
    except Exception as e:
        logger.error(f"Error running DB test query: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Database test failed. Check server logs and DB credentials."}
        )
    return {"message": "Database connection successful. Data preview:", "data": data}
