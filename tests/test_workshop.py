"""
Workshop and Revenue routes, including the store-computed score and profit
"""

import pytest


def test_workshop_is_created_with_normalised_area_and_score(seeded):
    rows = seeded.get("/api/workshops").json()
    assert len(rows) == 1
    workshop = rows[0]
    assert workshop["wk_code"] == 100
    assert workshop["area"] == "North Zone"
    assert workshop["recovery"] == "yes"
    # 10 * 2 + 100 * 0.5 + 10
    assert workshop["score"] == pytest.approx(80)


def test_workshop_accepts_camel_case_keys(seeded):
    response = seeded.post(
        "/api/workshops",
        json={"wkCode": 101, "wkName": "KTM Nashik", "wkArea": "NORTH ZONE", "manpower": 4},
    )
    assert response.status_code == 201
    assert response.json()["wk_code"] == 101

    workshop = seeded.get("/api/workshops/area/North Zone").json()[-1]
    assert workshop["wk_name"] == "KTM Nashik"
    assert workshop["customer_visits"] is None
    assert workshop["recovery"] is None
    assert workshop["score"] == pytest.approx(8)


def test_workshop_requires_existing_area(seeded):
    response = seeded.post(
        "/api/workshops",
        json={"wk_code": 102, "wk_name": "Nowhere", "area": "south zone", "manpower": 1},
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Area 'South Zone' does not exist. Cannot assign workshop."


def test_duplicate_workshop_is_conflict(seeded):
    response = seeded.post(
        "/api/workshops",
        json={"wk_code": 100, "wk_name": "Again", "area": "North Zone", "manpower": 1},
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Workshop with code 100 already exists."


def test_invalid_recovery_is_rejected(seeded):
    response = seeded.post(
        "/api/workshops",
        json={"wk_code": 103, "wk_name": "X", "area": "North Zone", "manpower": 1, "recovery": "maybe"},
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid value for recovery")


def test_update_workshop_recomputes_score(seeded):
    response = seeded.put(
        "/api/workshops/100",
        json={"wk_name": "KTM Pune", "area": "North Zone", "manpower": 5, "customer_visits": 20, "recovery": "no"},
    )
    assert response.status_code == 200
    assert response.json()["affected_rows"] == 1

    workshop = seeded.get("/api/workshops").json()[0]
    assert workshop["wk_name"] == "KTM Pune"
    assert workshop["score"] == pytest.approx(20)


def test_update_unknown_workshop_is_not_found(seeded):
    response = seeded.put("/api/workshops/555", json={"wk_name": "X", "area": "North Zone", "manpower": 1})
    assert response.status_code == 404
    assert response.json()["message"] == "Workshop code 555 not found."


def test_search_workshops(seeded):
    assert [w["wk_code"] for w in seeded.get("/api/workshops/search", params={"term": "pune"}).json()] == [100]
    assert seeded.get("/api/workshops/search", params={"term": "delhi"}).json() == []
    assert seeded.get("/api/workshops/search").status_code == 400


def test_workshops_by_area_ignores_case(seeded):
    assert [w["wk_code"] for w in seeded.get("/api/workshops/area/north zone").json()] == [100]
    assert seeded.get("/api/workshops/area/Elsewhere").json() == []


def test_revenue_lifecycle(seeded):
    response = seeded.post(
        "/api/workshops/revenue",
        json={"wkcode": 100, "year": 2024, "quarter": 1, "total_sales": 1000, "service_cost": 250},
    )
    assert response.status_code == 201
    assert response.json()["quarter"] == 1

    entry = seeded.get("/api/workshops/100/revenue").json()[0]
    assert entry["total_sales"] == pytest.approx(1000)
    assert entry["profit"] == pytest.approx(750)

    response = seeded.put("/api/workshops/revenue/100/2024/1", json={"total_sales": 1500, "service_cost": 300})
    assert response.status_code == 200
    entry = seeded.get("/api/workshops/revenue").json()[0]
    assert entry["profit"] == pytest.approx(1200)

    assert seeded.delete("/api/workshops/revenue/100/2024/1").status_code == 200
    assert seeded.get("/api/workshops/revenue").json() == []
    assert seeded.delete("/api/workshops/revenue/100/2024/1").status_code == 404


def test_revenue_without_service_cost(seeded):
    seeded.post("/api/workshops/revenue", json={"wk_code": 100, "year": 2024, "quarter": 2, "total_sales": 400})
    entry = seeded.get("/api/workshops/revenue").json()[0]
    assert entry["service_cost"] is None
    assert entry["profit"] == pytest.approx(400)


def test_revenue_ordering(seeded):
    for year, quarter in [(2023, 4), (2024, 1), (2024, 3)]:
        seeded.post(
            "/api/workshops/revenue",
            json={"wkcode": 100, "year": year, "quarter": quarter, "total_sales": 10, "service_cost": 1},
        )
    keys = [(r["year"], r["quarter"]) for r in seeded.get("/api/workshops/revenue").json()]
    assert keys == [(2024, 3), (2024, 1), (2023, 4)]


def test_duplicate_revenue_is_conflict(seeded):
    payload = {"wkcode": 100, "year": 2024, "quarter": 1, "total_sales": 10, "service_cost": 1}
    seeded.post("/api/workshops/revenue", json=payload)
    response = seeded.post("/api/workshops/revenue", json=payload)
    assert response.status_code == 409
    assert response.json()["message"] == "Revenue entry already exists for Workshop 100, Year 2024, Quarter 1."


def test_revenue_requires_existing_workshop(seeded):
    response = seeded.post(
        "/api/workshops/revenue",
        json={"wkcode": 404, "year": 2024, "quarter": 1, "total_sales": 10},
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Workshop code 404 does not exist."


def test_revenue_quarter_out_of_range(seeded):
    response = seeded.post(
        "/api/workshops/revenue",
        json={"wkcode": 100, "year": 2024, "quarter": 5, "total_sales": 10},
    )
    assert response.status_code == 400
    assert seeded.get("/api/workshops/revenue").json() == []


def test_update_missing_revenue_is_not_found(seeded):
    response = seeded.put("/api/workshops/revenue/100/2030/2", json={"total_sales": 1, "service_cost": 0})
    assert response.status_code == 404
    assert response.json()["message"] == "Revenue entry not found or no changes were made."


def test_delete_workshop_cascades(seeded):
    seeded.post(
        "/api/workshops/revenue",
        json={"wkcode": 100, "year": 2024, "quarter": 1, "total_sales": 10, "service_cost": 1},
    )

    response = seeded.delete("/api/workshops/100")
    assert response.status_code == 200
    assert response.json()["affected_rows"] == 1

    assert seeded.get("/api/workshops").json() == []
    assert seeded.get("/api/workshops/100/revenue").json() == []
    assert seeded.get("/api/wics/manages/workshop/100").json() == []
    # The in-charge itself is untouched
    assert len(seeded.get("/api/wics").json()) == 1


def test_franchise_scenario(client):
    """Build the hierarchy from scratch, then tear it down in dependency order"""
    assert client.post("/api/aics", json={"ID": 7, "FirstName": "Asha", "LastName": "Rao"}).status_code == 201
    assert client.post("/api/aics/areas", json={"Area_Name": "Goa", "AIC_ID": 7}).status_code == 201
    assert client.post(
        "/api/wics", json={"WkICID": 70, "FName": "Dev", "LName": "Naik", "Rating": 3, "AreaIC": 7}
    ).status_code == 201
    assert client.post(
        "/api/workshops",
        json={"wk_code": 700, "wk_name": "KTM Panaji", "area": "goa", "manpower": 6, "customer_visits": 40, "recovery": "no"},
    ).status_code == 201
    assert client.post("/api/wics/manages", json={"WkshpID": 700, "ICID": 70}).status_code == 201
    assert client.post(
        "/api/workshops/revenue",
        json={"wkcode": 700, "year": 2024, "quarter": 4, "total_sales": 5000.50, "service_cost": 1200.25},
    ).status_code == 201

    assert client.get("/api/workshops/700/revenue").json()[0]["profit"] == pytest.approx(3800.25)

    # Parents are protected while children exist
    assert client.delete("/api/aics/areas/Goa").status_code == 409
    assert client.delete("/api/aics/7").status_code == 409

    assert client.delete("/api/workshops/700").status_code == 200
    assert client.delete("/api/aics/areas/Goa").status_code == 200
    assert client.delete("/api/wics/70").status_code == 200
    assert client.delete("/api/aics/7").status_code == 200

    for path in ["/api/aics", "/api/aics/areas", "/api/wics", "/api/workshops", "/api/wics/manages", "/api/workshops/revenue"]:
        assert client.get(path).json() == []
