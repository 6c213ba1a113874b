"""
Programmatic client for the marketplace API.

The session (current user and bearer token) lives on the client instance
only; a new instance starts logged out.
"""
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class MarketplaceAPIError(RuntimeError):
    def __init__(self, *, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class MarketplaceClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http: httpx.Client | None = None,
        timeout_s: float = 10.0,
    ):
        # Passing `http` (e.g. a FastAPI TestClient) reuses its base URL and transport.
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout_s)
        self._owns_http = http is None
        self.user: dict | None = None
        self.token: str | None = None

    def __enter__(self) -> "MarketplaceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _auth_headers(self) -> dict[str, str]:
        if not self.token:
            raise MarketplaceAPIError(status_code=401, message="Not logged in")
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, *, auth: bool = False, **kwargs: Any) -> Any:
        headers = self._auth_headers() if auth else {}
        r = self._http.request(method, f"/api{path}", headers=headers, **kwargs)
        if r.status_code >= 400:
            try:
                message = (r.json() or {}).get("error") or r.text
            except ValueError:
                message = r.text
            logger.debug("%s %s failed with %s: %s", method, path, r.status_code, message)
            raise MarketplaceAPIError(status_code=r.status_code, message=message)
        return r.json()

    def _start_session(self, payload: dict) -> dict:
        self.token = payload["token"]
        self.user = payload["user"]
        return self.user

    # -------------------- auth --------------------

    def register(self, *, name: str, email: str, password: str, role: str) -> dict:
        payload = self._request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        return self._start_session(payload)

    def login(self, email: str, password: str) -> dict:
        payload = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._start_session(payload)

    def logout(self) -> None:
        self.user = None
        self.token = None

    # -------------------- projects --------------------

    def list_projects(
        self,
        *,
        cost: str | None = None,
        difficulty: str | None = None,
        category: str | None = None,
    ) -> list[dict]:
        params = {k: v for k, v in {"cost": cost, "difficulty": difficulty, "category": category}.items() if v}
        return self._request("GET", "/projects", params=params)

    def get_project(self, project_id: int) -> dict:
        return self._request("GET", f"/projects/{project_id}")

    def create_project(self, **fields: Any) -> dict:
        return self._request("POST", "/projects", auth=True, json=fields)

    def my_projects(self) -> list[dict]:
        return self._request("GET", "/my-projects", auth=True)

    # -------------------- bids --------------------

    def create_bid(self, project_id: int, amount: Any, message: str | None = None) -> dict:
        return self._request(
            "POST",
            "/bids",
            auth=True,
            json={"project_id": project_id, "amount": amount, "message": message},
        )

    def list_bids(self, project_id: int) -> list[dict]:
        return self._request("GET", f"/projects/{project_id}/bids", auth=True)
