"""API client for the FocusHero backend."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from focushero.config import FOCUSHERO_API_URL
from focushero.models.session import Session, SessionCreate
from focushero.models.settings import Settings, SettingsUpdate

logger = logging.getLogger(__name__)


class FocusHeroAPIError(Exception):
    """Non-2xx response from the backend"""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class APIClient:
    """HTTP client for the FocusHero API."""

    def __init__(
        self,
        base_url: str = FOCUSHERO_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an HTTP request to the API. Requests are never retried."""
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        response = await client.request(method=method, url=url, json=json, params=params)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            logger.warning(f"{method} {url} failed with {response.status_code}: {detail}")
            raise FocusHeroAPIError(response.status_code, str(detail))
        return response

    async def get(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return await self.request("PUT", path, json=json)


class SessionsAPI:
    """Sessions API client; usable as the timer's session store."""

    def __init__(self, client: APIClient):
        self.client = client

    async def create(self, data: SessionCreate) -> Session:
        """Record a session."""
        payload = data.model_dump(mode="json", by_alias=True, exclude_unset=True)
        response = await self.client.post("/api/session", json=payload)
        return Session.model_validate(response.json())

    async def list(self) -> List[Session]:
        """List all sessions, newest first."""
        response = await self.client.get("/api/session")
        return [Session.model_validate(item) for item in response.json()]

    async def list_by_range(self, start_date: datetime, end_date: datetime) -> List[Session]:
        """List sessions started within [start_date, end_date]."""
        response = await self.client.get(
            "/api/session/date-range",
            params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
        )
        return [Session.model_validate(item) for item in response.json()]


class SettingsAPI:
    """Settings API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def get(self) -> Settings:
        response = await self.client.get("/api/settings")
        return Settings.model_validate(response.json())

    async def update(self, data: SettingsUpdate) -> Settings:
        payload = data.model_dump(mode="json", by_alias=True, exclude_unset=True)
        response = await self.client.put("/api/settings", json=payload)
        return Settings.model_validate(response.json())


class MotivationAPI:
    """Motivation API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def get(self) -> str:
        response = await self.client.get("/api/motivation")
        return response.json()["quote"]


class FocusHeroClient:
    """Entry point bundling the resource APIs over one connection."""

    def __init__(self, base_url: str = FOCUSHERO_API_URL, **kwargs: Any):
        self.api = APIClient(base_url, **kwargs)
        self.sessions = SessionsAPI(self.api)
        self.settings = SettingsAPI(self.api)
        self.motivation = MotivationAPI(self.api)

    async def close(self) -> None:
        await self.api.close()

    async def __aenter__(self) -> "FocusHeroClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
