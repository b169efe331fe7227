"""HTTP request executor for the real backend.

Builds '{base_url}/api{endpoint}' requests, attaches credentials from the
token provider, and turns every failure into an ApiError. It never retries
or recovers on its own; that is the resilience layer's job.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from alumlink.domain.interfaces.auth import TokenProvider
from alumlink.domain.models.common import Endpoint
from alumlink.domain.models.errors import (
    ApiError,
    HTTP_ERROR,
    NETWORK_ERROR,
    REQUEST_FAILED,
    UPLOAD_ERROR,
    UPLOAD_FAILED,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
HEALTH_ENDPOINT = Endpoint("/health")
DEV_TOKEN_HEADER = "x-dev-token"


def build_query_string(params: Optional[Mapping[str, Any]]) -> str:
    """Serializes a flat mapping into a query string, skipping None values."""
    if not params:
        return ""
    present = {key: value for key, value in params.items() if value is not None}
    return str(httpx.QueryParams(present))


class ApiClient:
    """Executes single requests against the backend's JSON API."""

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initializes the client.

        Args:
            base_url: Backend origin, e.g. 'http://localhost:5000'.
            token_provider: Source of credentials for outgoing requests.
            timeout: Transport-level request timeout in seconds.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self.base_url = base_url.rstrip('/')
        self.token_provider = token_provider
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        logger.info(f"ApiClient initialized for {self.base_url}{API_PREFIX} (timeout={timeout}s)")

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_url(self, endpoint: str) -> str:
        return f"{self.base_url}{API_PREFIX}{endpoint}"

    async def _auth_headers(self) -> Dict[str, str]:
        """Returns exactly one auth header, or none when no token is available."""
        token = await self.token_provider.get_auth_token()
        if not token:
            return {}
        if self.token_provider.is_local_identity_mode:
            return {DEV_TOKEN_HEADER: token}
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _error_from_response(response: httpx.Response, fallback_message: str, fallback_code: str) -> ApiError:
        status = response.status_code
        try:
            payload = response.json()
        except ValueError:
            return ApiError(f"HTTP error! status: {status}", status_code=status, code=HTTP_ERROR)

        error = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            return ApiError(fallback_message, status_code=status, code=fallback_code)
        return ApiError(
            error.get("message") or fallback_message,
            status_code=status,
            code=error.get("code") or fallback_code,
            details=error.get("details"),
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        return response.json()

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticate: bool = True,
    ) -> Any:
        """Sends one JSON request and returns the decoded response body.

        Args:
            endpoint: Path below the /api prefix, including any query string.
            method: HTTP method.
            body: JSON-serializable payload, or None for no body.
            headers: Extra headers; they override the JSON content type.
            authenticate: Attach credentials from the token provider.

        Returns:
            The decoded JSON body (None for an empty body). Not validated.

        Raises:
            ApiError: On any non-2xx status or transport failure.
        """
        url = self.build_url(endpoint)
        request_headers = {"Content-Type": "application/json", **(headers or {})}
        if authenticate:
            request_headers.update(await self._auth_headers())
        content = json.dumps(body) if body is not None else None

        try:
            response = await self._client.request(method, url, content=content, headers=request_headers)
            if not response.is_success:
                raise self._error_from_response(
                    response,
                    fallback_message=f"Request failed with status {response.status_code}",
                    fallback_code=REQUEST_FAILED,
                )
            return self._decode(response)
        except ApiError:
            raise
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"API request failed: {method} {endpoint}: {e}")
            raise ApiError(str(e) or type(e).__name__, status_code=0, code=NETWORK_ERROR) from e

    async def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None, authenticate: bool = True) -> Any:
        query = build_query_string(params)
        if query:
            separator = '&' if '?' in endpoint else '?'
            endpoint = f"{endpoint}{separator}{query}"
        return await self.request(endpoint, method="GET", authenticate=authenticate)

    async def post(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return await self.request(endpoint, method="POST", body=data)

    async def put(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return await self.request(endpoint, method="PUT", body=data)

    async def patch(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return await self.request(endpoint, method="PATCH", body=data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request(endpoint, method="DELETE")

    async def upload(self, endpoint: str, files: Any, data: Optional[Mapping[str, Any]] = None) -> Any:
        """Submits a multipart form. The transport sets the content type.

        Args:
            endpoint: Path below the /api prefix.
            files: httpx-style files mapping or list of (field, file) pairs.
            data: Plain form fields sent alongside the files.

        Raises:
            ApiError: UPLOAD_FAILED (or server code) on non-2xx, UPLOAD_ERROR on transport failure.
        """
        url = self.build_url(endpoint)
        headers = await self._auth_headers()
        try:
            response = await self._client.post(url, files=files, data=data, headers=headers)
            if not response.is_success:
                raise self._error_from_response(
                    response,
                    fallback_message=f"Upload failed with status {response.status_code}",
                    fallback_code=UPLOAD_FAILED,
                )
            return self._decode(response)
        except ApiError:
            raise
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Upload failed: {endpoint}: {e}")
            raise ApiError(str(e) or "Upload failed", status_code=0, code=UPLOAD_ERROR) from e

    async def check_backend_health(self) -> bool:
        """Probes the health endpoint without credentials. Never raises."""
        try:
            await self.get(HEALTH_ENDPOINT, authenticate=False)
            return True
        except ApiError as e:
            logger.error(f"Backend health check failed: {e.message}")
            return False
