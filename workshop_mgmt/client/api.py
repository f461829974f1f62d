"""
HTTP client for the workshop management API.

One method per route. Every call returns the decoded JSON body; any non-2xx
response raises ApiError carrying the server's {"message": ...} text.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from workshop_mgmt.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class WorkshopApiClient:
    """
    Thin wrapper over a requests.Session.

    Any object exposing a requests-compatible request(method, url, json=,
    params=, timeout=) can be passed as session (e.g. an in-process test client).
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 30):
        self.base_url = (settings.api_url if base_url is None else base_url).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None,
                 params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(method, url, json=json, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"{method} {path} could not reach the server: {e}")
            # Status 0: no HTTP response was received
            raise ApiError(0, f"Could not reach the server: {e}") from e

        if response.status_code >= 400:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            message = message or f"API call failed: {response.status_code}"
            logger.debug(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(response.status_code, message)

        return response.json()

    # ============ Area In-Charge ============

    def list_aics(self) -> List[dict]:
        return self._request("GET", "/aics")

    def search_aics(self, term: str) -> List[dict]:
        return self._request("GET", "/aics/search", params={"term": term})

    def add_aic(self, payload: dict) -> dict:
        return self._request("POST", "/aics", json=payload)

    def update_aic(self, aic_id: int, payload: dict) -> dict:
        return self._request("PUT", f"/aics/{aic_id}", json=payload)

    def delete_aic(self, aic_id: int) -> dict:
        return self._request("DELETE", f"/aics/{aic_id}")

    # ============ Area ============

    def list_areas(self) -> List[dict]:
        return self._request("GET", "/aics/areas")

    def list_areas_by_aic(self, aic_id: int) -> List[dict]:
        return self._request("GET", f"/aics/{aic_id}/areas")

    def add_area(self, payload: dict) -> dict:
        return self._request("POST", "/aics/areas", json=payload)

    def delete_area(self, area_name: str) -> dict:
        return self._request("DELETE", f"/aics/areas/{quote(area_name, safe='')}")

    # ============ Workshop ============

    def list_workshops(self) -> List[dict]:
        return self._request("GET", "/workshops")

    def search_workshops(self, term: str) -> List[dict]:
        return self._request("GET", "/workshops/search", params={"term": term})

    def list_workshops_by_area(self, area_name: str) -> List[dict]:
        return self._request("GET", f"/workshops/area/{quote(area_name, safe='')}")

    def add_workshop(self, payload: dict) -> dict:
        return self._request("POST", "/workshops", json=payload)

    def update_workshop(self, wk_code: int, payload: dict) -> dict:
        return self._request("PUT", f"/workshops/{wk_code}", json=payload)

    def delete_workshop(self, wk_code: int) -> dict:
        return self._request("DELETE", f"/workshops/{wk_code}")

    # ============ Revenue ============

    def list_revenue(self) -> List[dict]:
        return self._request("GET", "/workshops/revenue")

    def list_revenue_by_workshop(self, wk_code: int) -> List[dict]:
        return self._request("GET", f"/workshops/{wk_code}/revenue")

    def add_revenue(self, payload: dict) -> dict:
        return self._request("POST", "/workshops/revenue", json=payload)

    def update_revenue(self, wk_code: int, year: int, quarter: int, payload: dict) -> dict:
        return self._request("PUT", f"/workshops/revenue/{wk_code}/{year}/{quarter}", json=payload)

    def delete_revenue(self, wk_code: int, year: int, quarter: int) -> dict:
        return self._request("DELETE", f"/workshops/revenue/{wk_code}/{year}/{quarter}")

    # ============ Workshop In-Charge ============

    def list_wics(self) -> List[dict]:
        return self._request("GET", "/wics")

    def search_wics(self, term: str) -> List[dict]:
        return self._request("GET", "/wics/search", params={"term": term})

    def list_wics_by_area_ic(self, aic_id: int) -> List[dict]:
        return self._request("GET", f"/wics/area/{aic_id}")

    def add_wic(self, payload: dict) -> dict:
        return self._request("POST", "/wics", json=payload)

    def update_wic(self, wic_id: int, payload: dict) -> dict:
        return self._request("PUT", f"/wics/{wic_id}", json=payload)

    def delete_wic(self, wic_id: int) -> dict:
        return self._request("DELETE", f"/wics/{wic_id}")

    # ============ Manages ============

    def list_manages(self) -> List[dict]:
        return self._request("GET", "/wics/manages")

    def list_manages_by_workshop(self, wk_code: int) -> List[dict]:
        return self._request("GET", f"/wics/manages/workshop/{wk_code}")

    def list_manages_by_wic(self, wic_id: int) -> List[dict]:
        return self._request("GET", f"/wics/manages/ic/{wic_id}")

    def add_manages(self, payload: dict) -> dict:
        return self._request("POST", "/wics/manages", json=payload)

    def delete_manages(self, wk_code: int, wic_id: int) -> dict:
        return self._request("DELETE", f"/wics/manages/{wk_code}/{wic_id}")
