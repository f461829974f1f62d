"""
Shared fixtures: a fresh in-memory SQLite store (tables and triggers) per test
and a TestClient whose requests run against it.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workshop_mgmt.database import create_store_engine, get_db
from workshop_mgmt.main import app
from workshop_mgmt.schema_setup import init_store


@pytest.fixture
def engine():
    store_engine = create_store_engine("sqlite://", poolclass=StaticPool)
    init_store(store_engine, with_triggers=True)
    yield store_engine
    store_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager: the app lifespan would initialise the
    # configured store instead of the test one.
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(client):
    """One AIC with an area, a WIC and a workshop managed by that WIC"""
    assert client.post("/api/aics", json={"ID": 1, "FirstName": "Ravi", "MiddleName": "Kumar", "LastName": "Sharma"}).status_code == 201
    assert client.post("/api/aics/areas", json={"Area_Name": "North Zone", "AIC_ID": 1}).status_code == 201
    assert client.post(
        "/api/wics",
        json={"WkICID": 10, "FName": "Anil", "MName": None, "LName": "Mehta", "Rating": 4, "AreaIC": 1},
    ).status_code == 201
    assert client.post(
        "/api/workshops",
        json={
            "wk_code": 100,
            "wk_name": "KTM Pune Central",
            "area": "north zone",
            "manpower": 10,
            "customer_visits": 100,
            "recovery": "Yes",
        },
    ).status_code == 201
    assert client.post("/api/wics/manages", json={"WkshpID": 100, "ICID": 10}).status_code == 201
    return client
