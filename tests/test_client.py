"""
API client and client-side store, run against the in-process app
"""

from decimal import Decimal

import pytest
import requests

from workshop_mgmt.client.api import ApiError, WorkshopApiClient
from workshop_mgmt.client.store import ClientStore, Entity, FormMode, FormState, preview_profit


@pytest.fixture
def api(seeded):
    return WorkshopApiClient(base_url="", session=seeded)


@pytest.fixture
def store(api):
    client_store = ClientStore(api)
    client_store.refresh_primary()
    return client_store


def test_api_client_round_trip(api):
    assert [a["ID"] for a in api.list_aics()] == [1]
    assert api.list_workshops_by_area("North Zone")[0]["wk_code"] == 100
    assert api.add_revenue({"wkcode": 100, "year": 2024, "quarter": 2, "total_sales": 90, "service_cost": 30})["year"] == 2024
    assert api.list_revenue_by_workshop(100)[0]["profit"] == pytest.approx(60)


def test_api_client_raises_server_message(api):
    with pytest.raises(ApiError) as excinfo:
        api.add_aic({"ID": 1, "FirstName": "Dup", "LastName": "Dup"})
    assert excinfo.value.status_code == 409
    assert excinfo.value.message == "AIC with ID 1 already exists."


def test_refresh_primary_loads_every_slice(store):
    assert [a["ID"] for a in store.items("aics")] == [1]
    assert [a["Area_Name"] for a in store.items("areas")] == ["North Zone"]
    assert [w["wk_code"] for w in store.items("workshops")] == [100]
    assert [w["WkICID"] for w in store.items("wics")] == [10]
    assert store.items("manages") == [{"WkshpID": 100, "ICID": 10}]
    assert store.items("revenue") == []
    assert all(store.slices[name].loaded for name in ["aics", "areas", "workshops", "wics", "manages", "revenue"])


def test_selecting_rows_loads_dependent_views(store):
    store.select_aic(store.items("aics")[0])
    assert store.forms[Entity.AIC].mode is FormMode.EDIT
    assert [a["Area_Name"] for a in store.items("aic_areas")] == ["North Zone"]
    assert [w["WkICID"] for w in store.items("aic_wics")] == [10]

    store.select_area(store.items("areas")[0])
    assert [w["wk_code"] for w in store.items("area_workshops")] == [100]

    store.select_workshop(store.items("workshops")[0])
    assert store.items("workshop_managers") == [{"WkshpID": 100, "ICID": 10}]
    assert store.items("workshop_revenue") == []
    assert store.forms[Entity.REVENUE].mode is FormMode.ADD
    assert store.forms[Entity.REVENUE].values == {"wkcode": 100}

    store.select_wic(store.items("wics")[0])
    assert store.items("wic_workshops") == [{"WkshpID": 100, "ICID": 10}]
    assert store.forms[Entity.MANAGES].values == {"ICID": 10}


def test_submit_in_add_mode_creates(store):
    store.new_form(Entity.AIC, ID=2, FirstName="Meera", LastName="Iyer")
    assert store.submit(Entity.AIC) is True
    assert [a["ID"] for a in store.items("aics")] == [1, 2]
    assert store.notifications[-1].kind == "success"
    assert store.forms[Entity.AIC].mode is FormMode.ADD
    assert store.forms[Entity.AIC].values == {}


def test_submit_in_add_mode_never_turns_into_update(store):
    # The key exists in the local list, but the form was opened with "new"
    store.new_form(Entity.AIC, ID=1, FirstName="Other", LastName="Person")
    assert store.submit(Entity.AIC) is False
    assert store.notifications[-1].kind == "error"
    assert store.notifications[-1].message == "Operation failed: AIC with ID 1 already exists."
    assert store.items("aics")[0]["FirstName"] == "Ravi"


def test_submit_in_edit_mode_updates_and_strips_computed_fields(store):
    store.select_workshop(store.items("workshops")[0])
    store.set_field(Entity.WORKSHOP, "manpower", 20)
    assert store.submit(Entity.WORKSHOP) is True

    workshop = store.items("workshops")[0]
    assert workshop["manpower"] == 20
    # 20 * 2 + 100 * 0.5 + 10
    assert workshop["score"] == pytest.approx(100)


def test_revenue_edit_and_preview(store):
    store.select_workshop(store.items("workshops")[0])
    store.set_field(Entity.REVENUE, "year", 2024)
    store.set_field(Entity.REVENUE, "quarter", 1)
    store.set_field(Entity.REVENUE, "total_sales", "1000")
    store.set_field(Entity.REVENUE, "service_cost", "400")
    assert store.revenue_preview() == 600
    assert store.submit(Entity.REVENUE) is True
    assert store.items("workshop_revenue")[0]["profit"] == pytest.approx(600)

    store.select_revenue(store.items("revenue")[0])
    store.set_field(Entity.REVENUE, "service_cost", 100)
    assert store.submit(Entity.REVENUE) is True
    assert store.items("revenue")[0]["profit"] == pytest.approx(900)


def test_area_and_manages_cannot_be_edited(store):
    store.select_area(store.items("areas")[0])
    assert store.submit(Entity.AREA) is False
    assert store.notifications[-1].kind == "error"


def test_delete_clears_views_of_the_deleted_record(store):
    store.select_workshop(store.items("workshops")[0])
    assert store.delete(Entity.WORKSHOP) is True

    assert store.items("workshops") == []
    assert store.items("manages") == []
    assert store.selected[Entity.WORKSHOP] is None
    assert store.slices["workshop_managers"].loaded is False


def test_delete_without_selection_is_refused(store):
    assert store.delete(Entity.WIC) is False
    assert store.notifications[-1].message.startswith("Select a record")


def test_failed_delete_keeps_data_and_reports(store):
    store.select_aic(store.items("aics")[0])
    assert store.delete(Entity.AIC) is False
    assert store.notifications[-1].message.startswith("Operation failed: Cannot delete AIC ID 1")
    assert len(store.items("aics")) == 1


def test_search_and_empty_term_reload(store):
    store.search(Entity.WORKSHOP, "nashik")
    assert store.items("workshops") == []

    store.search(Entity.WORKSHOP, "  ")
    assert [w["wk_code"] for w in store.items("workshops")] == [100]

    store.search(Entity.WIC, "anil")
    assert [w["WkICID"] for w in store.items("wics")] == [10]

    with pytest.raises(ValueError):
        store.search(Entity.REVENUE, "x")


def test_fetch_error_empties_slice_and_notifies(store):
    store.select_area({"Area_Name": "North Zone", "AIC_ID": 1})
    store._fetch("area_workshops", "workshops", lambda: store.api.search_aics(""))
    assert store.slices["area_workshops"].items == []
    assert store.slices["area_workshops"].error is not None
    assert store.notifications[-1].kind == "error"


def test_preview_profit():
    assert preview_profit(100, None) == 100
    assert preview_profit("250.50", "50.25") == Decimal("200.25")
    assert preview_profit("abc", 1) is None


class _UnreachableSession:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


def test_api_client_wraps_connection_failures():
    api = WorkshopApiClient(base_url="http://ktm.invalid", session=_UnreachableSession())
    with pytest.raises(ApiError) as excinfo:
        api.list_aics()
    assert excinfo.value.status_code == 0
    assert "connection refused" in excinfo.value.message


def test_store_reports_connection_failures():
    store = ClientStore(WorkshopApiClient(base_url="http://ktm.invalid", session=_UnreachableSession()))
    store.new_form(Entity.AIC, ID=5, FirstName="Asha", LastName="Rao")

    assert store.submit(Entity.AIC) is False
    messages = [n.message for n in store.notifications]
    assert messages[0].startswith("Operation failed: Could not reach the server")
    assert all(n.kind == "error" for n in store.notifications)
    assert store.slices["aics"].items == []
    assert store.slices["aics"].error.startswith("Could not reach the server")

    store.select_workshop({"wk_code": 100})
    assert store.slices["workshop_revenue"].loaded is True
    assert store.slices["workshop_revenue"].error is not None


def test_edit_updates_the_selected_row_even_if_key_fields_change(api, store):
    api.add_revenue({"wkcode": 100, "year": 2024, "quarter": 1, "total_sales": 1000, "service_cost": 400})
    store.refresh_primary()

    store.select_revenue(store.items("revenue")[0])
    store.set_field(Entity.REVENUE, "year", 2030)
    store.set_field(Entity.REVENUE, "service_cost", 100)
    assert store.submit(Entity.REVENUE) is True

    rows = store.items("revenue")
    assert [(r["year"], r["quarter"]) for r in rows] == [(2024, 1)]
    assert rows[0]["profit"] == pytest.approx(900)


def test_edit_without_selection_is_refused(store):
    store.forms[Entity.WORKSHOP] = FormState(FormMode.EDIT, {"wk_code": 100, "wk_name": "X"})
    assert store.submit(Entity.WORKSHOP) is False
    assert store.notifications[-1].message.startswith("Select a record")
