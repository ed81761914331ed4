import time
import httpx
import logging
from typing import Optional
from gtraf_admin.core.config import settings
from gtraf_admin.core.metrics import upstream_requests, upstream_duration

logger = logging.getLogger(__name__)

CONTACT = "contact"
RESERVATION = "reservation"
PORTFOLIO = "portfolio"

DEFAULT_ORDERING = {
    CONTACT: "date_creation",
    RESERVATION: "date_heure_depart",
}


class UpstreamError(Exception):
    """The G-TRAF+ REST API failed or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GtrafApiClient:
    """Thin async client over the G-TRAF+ REST API.

    Every call opens its own ``httpx.AsyncClient``; ``transport`` lets tests
    plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        auth_url: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.auth_url = (auth_url or settings.AUTH_API_URL).rstrip("/")
        self.timeout = timeout or settings.API_TIMEOUT
        self.transport = transport

    async def _request(self, method: str, url: str, resource: str, **kwargs) -> dict:
        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            upstream_requests.labels(method=method, resource=resource, status="timeout").inc()
            logger.warning(f"Upstream timeout on {method} {url}")
            raise UpstreamError("Upstream API timed out")
        except httpx.HTTPError as e:
            upstream_requests.labels(method=method, resource=resource, status="error").inc()
            logger.warning(f"Upstream request error on {method} {url}: {e}")
            raise UpstreamError("Upstream API unreachable")
        finally:
            upstream_duration.labels(resource=resource).observe(time.time() - start_time)

        upstream_requests.labels(method=method, resource=resource, status=response.status_code).inc()

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not 200 <= response.status_code < 300:
            message = body.get("error") if isinstance(body, dict) else None
            logger.warning(f"Upstream {method} {url} returned {response.status_code}: {message}")
            raise UpstreamError(
                message or f"Upstream API returned {response.status_code}",
                status_code=response.status_code,
            )
        return body

    def _url(self, resource: str, suffix: str = "") -> str:
        return f"{self.base_url}/api/{resource}{suffix}"

    async def list_items(self, resource: str, limit: Optional[int] = None) -> list:
        params = {"sortBy": DEFAULT_ORDERING[resource], "order": "DESC"}
        if limit:
            params["limit"] = limit
        body = await self._request("GET", self._url(resource), resource, params=params)
        # Some endpoints answer with the bare list
        if isinstance(body, dict):
            body = body.get("data")
        return body if isinstance(body, list) else []

    async def create(self, resource: str, payload: dict) -> dict:
        return await self._request("POST", self._url(resource), resource, json=payload)

    async def update(self, resource: str, item_id: str, payload: dict) -> dict:
        return await self._request("PUT", self._url(resource, f"/{item_id}"), resource, json=payload)

    async def delete(self, resource: str, item_id: str) -> dict:
        return await self._request("DELETE", self._url(resource, f"/{item_id}"), resource)

    async def count(self, resource: str) -> int:
        body = await self._request("GET", self._url(resource, "/count"), resource)
        if not isinstance(body, dict):
            return 0
        count = body.get("count")
        if count is None and isinstance(body.get("data"), dict):
            count = body["data"].get("count")
        return int(count or 0)

    async def login(self, email: str, password: str) -> dict:
        return await self._request(
            "POST",
            f"{self.auth_url}/api/user/login",
            "user",
            json={"email": email, "mot_de_passe": password},
        )


def get_api_client() -> GtrafApiClient:
    return GtrafApiClient()
