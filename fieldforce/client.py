"""
Client-side data layer for the field force API.

``ApiClient.request`` is the single wrapper every caller goes through: it
unpacks the ``{success, data, error}`` envelope and never raises for HTTP or
transport failures. ``AppState`` holds what screens share (current user,
fetched collections, UI flags) as immutable snapshots; every ``with_*``
method returns a new snapshot.
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx

from fieldforce.logger import get_logger

logger = get_logger(__name__)

COLLECTION_KEYS = ("dealers", "pjps", "daily_tasks", "attendance", "reports")


@dataclass(frozen=True)
class ApiResult:
    success: bool
    data: Any = None
    error: Optional[str] = None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/") + "/api",
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> ApiResult:
        try:
            response = self._client.request(method, endpoint, json=json, params=params)
        except httpx.HTTPError as exc:
            logger.error("API error on %s: %s", endpoint, exc)
            return ApiResult(success=False, error=str(exc) or exc.__class__.__name__)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if response.is_error:
            error = body.get("error") or f"Request failed with status {response.status_code}"
            logger.warning("API error on %s: %s", endpoint, error)
            return ApiResult(success=False, error=error)
        return ApiResult(success=True, data=body.get("data"))

    def check_in(self, payload: Mapping[str, Any]) -> ApiResult:
        return self.request("/attendance/check-in", method="POST", json=payload)

    def check_out(self, payload: Mapping[str, Any]) -> ApiResult:
        return self.request("/attendance/check-out", method="POST", json=payload)

    def submit(self, endpoint: str, payload: Mapping[str, Any]) -> ApiResult:
        return self.request(f"/{endpoint.strip('/')}", method="POST", json=payload)

    def fetch(self, endpoint: str, **params: Any) -> ApiResult:
        query = {key: value for key, value in params.items() if value is not None}
        return self.request(f"/{endpoint.strip('/')}", params=query)

    def login(self, login_id: str, password: str) -> ApiResult:
        return self.request(
            "/auth/login", method="POST", json={"loginId": login_id.strip(), "password": password}
        )

    def get_user(self, user_id: int) -> ApiResult:
        return self.request(f"/users/{user_id}")

    def get_dealers_for_user(self, user_id: int) -> ApiResult:
        return self.request(f"/users/{user_id}/dealers")

    def get_brands(self) -> ApiResult:
        return self.request("/brands")


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class AppState:
    user: Optional[Mapping[str, Any]] = None
    dealers: tuple = ()
    pjps: tuple = ()
    daily_tasks: tuple = ()
    attendance: tuple = ()
    reports: tuple = ()
    flags: Mapping[str, bool] = field(default_factory=lambda: _freeze({}))

    def with_user(self, user: Optional[Mapping[str, Any]]) -> "AppState":
        return replace(self, user=None if user is None else _freeze(user))

    def with_collection(self, key: str, items) -> "AppState":
        if key not in COLLECTION_KEYS:
            raise KeyError(f"unknown collection: {key}")
        return replace(self, **{key: tuple(items)})

    def with_flag(self, name: str, value: bool) -> "AppState":
        return replace(self, flags=_freeze({**self.flags, name: value}))


FETCHES = (
    ("dealers", "dealers"),
    ("pjps", "pjp"),
    ("daily_tasks", "daily-tasks"),
)


def load_user_collections(client: ApiClient, state: AppState, user_id: int) -> AppState:
    """Fetch the per-user collections; a failed fetch leaves that key unchanged."""
    for key, endpoint in FETCHES:
        result = client.fetch(endpoint, userId=user_id)
        if result.success and result.data is not None:
            state = state.with_collection(key, result.data)
    return state
