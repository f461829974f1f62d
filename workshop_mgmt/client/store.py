"""
Client-side state for the workshop management UI.

ClientStore holds one slice per entity list and one per secondary view, plus
one form per entity. All changes go through the action methods below. A form's
mode (ADD or EDIT) is set by the action that opened it: selecting a row puts it
in EDIT, new_form() puts it in ADD, and submit() dispatches on that flag alone.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

from workshop_mgmt.client.api import ApiError, WorkshopApiClient

logger = logging.getLogger(__name__)


class Entity(str, Enum):
    AIC = "aic"
    AREA = "area"
    WORKSHOP = "workshop"
    WIC = "wic"
    REVENUE = "revenue"
    MANAGES = "manages"


class FormMode(str, Enum):
    ADD = "add"
    EDIT = "edit"


@dataclass
class EntitySlice:
    items: List[dict] = field(default_factory=list)
    loaded: bool = False
    error: Optional[str] = None


@dataclass
class FormState:
    mode: FormMode = FormMode.ADD
    values: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Notification:
    message: str
    kind: str = "success"


# Key fields identify the record a form edits; store-computed fields are
# never sent back to the API.
KEY_FIELDS: Dict[Entity, Tuple[str, ...]] = {
    Entity.AIC: ("ID",),
    Entity.AREA: ("Area_Name",),
    Entity.WORKSHOP: ("wk_code",),
    Entity.WIC: ("WkICID",),
    Entity.REVENUE: ("wkcode", "year", "quarter"),
    Entity.MANAGES: ("WkshpID", "ICID"),
}

COMPUTED_FIELDS = {"score", "profit"}

LABELS = {
    Entity.AIC: "Area In-Charges",
    Entity.AREA: "Areas",
    Entity.WORKSHOP: "Workshops",
    Entity.WIC: "Workshop In-Charges",
    Entity.REVENUE: "Revenue",
    Entity.MANAGES: "Management Links",
}

PRIMARY_SLICES = {
    Entity.AIC: "aics",
    Entity.AREA: "areas",
    Entity.WORKSHOP: "workshops",
    Entity.WIC: "wics",
    Entity.REVENUE: "revenue",
    Entity.MANAGES: "manages",
}

VIEW_SLICES = (
    "aic_areas",
    "aic_wics",
    "area_workshops",
    "workshop_managers",
    "workshop_revenue",
    "wic_workshops",
)


def preview_profit(total_sales, service_cost) -> Optional[Decimal]:
    """
    Advisory profit shown while a revenue form is being filled in.
    The stored profit is always the value read back from the API.
    """
    try:
        sales = Decimal(str(total_sales))
        cost = Decimal(str(service_cost)) if service_cost not in (None, "") else Decimal("0")
    except (InvalidOperation, ValueError):
        return None
    return sales - cost


class ClientStore:
    def __init__(self, api: WorkshopApiClient):
        self.api = api
        self.slices: Dict[str, EntitySlice] = {
            name: EntitySlice() for name in list(PRIMARY_SLICES.values()) + list(VIEW_SLICES)
        }
        self.forms: Dict[Entity, FormState] = {entity: FormState() for entity in Entity}
        self.notifications: List[Notification] = []
        self.selected: Dict[Entity, Optional[dict]] = {entity: None for entity in Entity}

    # ============ Read side ============

    def items(self, name: str) -> List[dict]:
        return self.slices[name].items

    def _notify(self, message: str, kind: str = "success"):
        self.notifications.append(Notification(message=message, kind=kind))

    def dismiss(self, index: int = 0):
        if 0 <= index < len(self.notifications):
            self.notifications.pop(index)

    def _fetch(self, name: str, label: str, loader: Callable[[], List[dict]]):
        state = self.slices[name]
        try:
            state.items = loader()
            state.error = None
        except ApiError as e:
            logger.warning(f"Fetching {label} failed: {e.message}")
            state.items = []
            state.error = e.message
            self._notify(f"Error fetching {label}: {e.message}", "error")
        state.loaded = True

    def _clear(self, *names: str):
        for name in names:
            self.slices[name] = EntitySlice()

    def refresh_primary(self):
        """Re-fetch every primary list"""
        self._fetch("aics", LABELS[Entity.AIC], self.api.list_aics)
        self._fetch("areas", LABELS[Entity.AREA], self.api.list_areas)
        self._fetch("workshops", LABELS[Entity.WORKSHOP], self.api.list_workshops)
        self._fetch("wics", LABELS[Entity.WIC], self.api.list_wics)
        self._fetch("manages", LABELS[Entity.MANAGES], self.api.list_manages)
        self._fetch("revenue", LABELS[Entity.REVENUE], self.api.list_revenue)

    # ============ Selection ============

    def select_aic(self, row: dict):
        self.selected[Entity.AIC] = row
        self.forms[Entity.AIC] = FormState(FormMode.EDIT, dict(row))
        aic_id = row["ID"]
        self._fetch("aic_areas", f"areas for AIC {aic_id}", lambda: self.api.list_areas_by_aic(aic_id))
        self._fetch("aic_wics", f"WICs for AIC {aic_id}", lambda: self.api.list_wics_by_area_ic(aic_id))

    def select_area(self, row: dict):
        self.selected[Entity.AREA] = row
        self.forms[Entity.AREA] = FormState(FormMode.EDIT, dict(row))
        name = row["Area_Name"]
        self._fetch("area_workshops", f"workshops in {name}", lambda: self.api.list_workshops_by_area(name))

    def select_workshop(self, row: dict):
        self.selected[Entity.WORKSHOP] = row
        self.forms[Entity.WORKSHOP] = FormState(FormMode.EDIT, dict(row))
        wk_code = row["wk_code"]
        self._fetch(
            "workshop_managers",
            f"managers for workshop {wk_code}",
            lambda: self.api.list_manages_by_workshop(wk_code)
        )
        self._fetch(
            "workshop_revenue",
            f"revenue for workshop {wk_code}",
            lambda: self.api.list_revenue_by_workshop(wk_code)
        )
        # Ready for a new quarter of this workshop
        self.forms[Entity.REVENUE] = FormState(FormMode.ADD, {"wkcode": wk_code})

    def select_wic(self, row: dict):
        self.selected[Entity.WIC] = row
        self.forms[Entity.WIC] = FormState(FormMode.EDIT, dict(row))
        wic_id = row["WkICID"]
        self._fetch(
            "wic_workshops",
            f"workshops managed by WIC {wic_id}",
            lambda: self.api.list_manages_by_wic(wic_id)
        )
        self.forms[Entity.MANAGES] = FormState(FormMode.ADD, {"ICID": wic_id})

    def select_revenue(self, row: dict):
        self.selected[Entity.REVENUE] = row
        self.forms[Entity.REVENUE] = FormState(FormMode.EDIT, dict(row))

    def select_manages(self, row: dict):
        self.selected[Entity.MANAGES] = row
        self.forms[Entity.MANAGES] = FormState(FormMode.EDIT, dict(row))

    # ============ Forms ============

    def new_form(self, entity: Entity, **values):
        self.selected[entity] = None
        self.forms[entity] = FormState(FormMode.ADD, dict(values))

    def set_field(self, entity: Entity, name: str, value: Any):
        self.forms[entity].values[name] = value

    def revenue_preview(self) -> Optional[Decimal]:
        values = self.forms[Entity.REVENUE].values
        if values.get("total_sales") in (None, ""):
            return None
        return preview_profit(values["total_sales"], values.get("service_cost"))

    def _payload(self, entity: Entity) -> Dict[str, Any]:
        return {k: v for k, v in self.forms[entity].values.items() if k not in COMPUTED_FIELDS}

    def _key(self, entity: Entity) -> Optional[Tuple[Any, ...]]:
        values = self.forms[entity].values
        key = tuple(values.get(name) for name in KEY_FIELDS[entity])
        if any(part in (None, "") for part in key):
            return None
        return key

    def _selected_key(self, entity: Entity) -> Optional[Tuple[Any, ...]]:
        row = self.selected[entity]
        if row is None:
            return None
        return tuple(row.get(name) for name in KEY_FIELDS[entity])

    # ============ Mutations ============

    def _mutate(self, action: Callable[[], dict], after: Optional[Callable[[], None]] = None) -> bool:
        try:
            result = action()
        except ApiError as e:
            self._notify(f"Operation failed: {e.message}", "error")
            self.refresh_primary()
            return False

        self._notify(result.get("message", "Operation completed successfully."))
        self.refresh_primary()
        if after is not None:
            after()
        return True

    def _refresh_views(self):
        """Reload the secondary views of whatever is currently selected"""
        if self.selected[Entity.AIC] is not None:
            aic_id = self.selected[Entity.AIC]["ID"]
            self._fetch("aic_areas", f"areas for AIC {aic_id}", lambda: self.api.list_areas_by_aic(aic_id))
            self._fetch("aic_wics", f"WICs for AIC {aic_id}", lambda: self.api.list_wics_by_area_ic(aic_id))
        if self.selected[Entity.AREA] is not None:
            name = self.selected[Entity.AREA]["Area_Name"]
            self._fetch("area_workshops", f"workshops in {name}", lambda: self.api.list_workshops_by_area(name))
        if self.selected[Entity.WORKSHOP] is not None:
            wk_code = self.selected[Entity.WORKSHOP]["wk_code"]
            self._fetch(
                "workshop_managers",
                f"managers for workshop {wk_code}",
                lambda: self.api.list_manages_by_workshop(wk_code)
            )
            self._fetch(
                "workshop_revenue",
                f"revenue for workshop {wk_code}",
                lambda: self.api.list_revenue_by_workshop(wk_code)
            )
        if self.selected[Entity.WIC] is not None:
            wic_id = self.selected[Entity.WIC]["WkICID"]
            self._fetch(
                "wic_workshops",
                f"workshops managed by WIC {wic_id}",
                lambda: self.api.list_manages_by_wic(wic_id)
            )

    def submit(self, entity: Entity) -> bool:
        """Create or update the entity's form record depending on its mode"""
        form = self.forms[entity]
        payload = self._payload(entity)

        if form.mode is FormMode.ADD:
            creators = {
                Entity.AIC: self.api.add_aic,
                Entity.AREA: self.api.add_area,
                Entity.WORKSHOP: self.api.add_workshop,
                Entity.WIC: self.api.add_wic,
                Entity.REVENUE: self.api.add_revenue,
                Entity.MANAGES: self.api.add_manages,
            }
            action = partial(creators[entity], payload)
        else:
            if entity in (Entity.AREA, Entity.MANAGES):
                self._notify(f"{LABELS[entity]} cannot be edited; delete and re-add instead.", "error")
                return False
            # Identify the record by the row that was selected; edits to key
            # fields in the form never retarget the update
            key = self._selected_key(entity)
            if key is None:
                self._notify(f"Select a record from {LABELS[entity]} before saving.", "error")
                return False
            updaters = {
                Entity.AIC: lambda: self.api.update_aic(*key, payload),
                Entity.WORKSHOP: lambda: self.api.update_workshop(*key, payload),
                Entity.WIC: lambda: self.api.update_wic(*key, payload),
                Entity.REVENUE: lambda: self.api.update_revenue(*key, payload),
            }
            action = updaters[entity]

        def reset():
            self.forms[entity] = FormState()
            self._refresh_views()

        return self._mutate(action, reset)

    def delete(self, entity: Entity) -> bool:
        """Delete the record identified by the entity's form"""
        key = self._key(entity)
        if key is None:
            self._notify(f"Select a record from {LABELS[entity]} to delete.", "error")
            return False

        deleters = {
            Entity.AIC: self.api.delete_aic,
            Entity.AREA: self.api.delete_area,
            Entity.WORKSHOP: self.api.delete_workshop,
            Entity.WIC: self.api.delete_wic,
            Entity.REVENUE: self.api.delete_revenue,
            Entity.MANAGES: self.api.delete_manages,
        }

        def reset():
            self.forms[entity] = FormState()
            if self.selected[entity] is not None and tuple(
                self.selected[entity].get(name) for name in KEY_FIELDS[entity]
            ) == key:
                self.selected[entity] = None
                self._clear(*self._views_of(entity))
            self._refresh_views()

        return self._mutate(lambda: deleters[entity](*key), reset)

    @staticmethod
    def _views_of(entity: Entity) -> Tuple[str, ...]:
        return {
            Entity.AIC: ("aic_areas", "aic_wics"),
            Entity.AREA: ("area_workshops",),
            Entity.WORKSHOP: ("workshop_managers", "workshop_revenue"),
            Entity.WIC: ("wic_workshops",),
        }.get(entity, ())

    # ============ Search ============

    def search(self, entity: Entity, term: str):
        """Filter a primary list by name; an empty term reloads the full list"""
        searchers = {
            Entity.AIC: (self.api.search_aics, self.api.list_aics),
            Entity.WORKSHOP: (self.api.search_workshops, self.api.list_workshops),
            Entity.WIC: (self.api.search_wics, self.api.list_wics),
        }
        if entity not in searchers:
            raise ValueError(f"{LABELS[entity]} cannot be searched")

        search_fn, list_fn = searchers[entity]
        term = (term or "").strip()
        name = PRIMARY_SLICES[entity]
        if term:
            self._fetch(name, f"{LABELS[entity]} matching '{term}'", lambda: search_fn(term))
        else:
            self._fetch(name, LABELS[entity], list_fn)
