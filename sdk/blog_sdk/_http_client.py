"""
Internal HTTP client for the Blog SDK.

This module maps each SDK operation onto the blog REST API and translates
HTTP failures into SDK errors. It is internal to the SDK; users should use
BlogClient instead.

Status mapping (see errors.py for the asymmetry with gRPC):
    401 -> UnauthorizedError(body)
    404 -> NotFoundError
    403 -> InvalidRequestError("Forbidden: body")
    409 -> InvalidRequestError(body)
    other non-2xx -> TransportError("HTTP <status>: body")
    delete answered with a 2xx other than 204 -> TransportError
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .errors import (
    InvalidRequestError,
    NotFoundError,
    SerializationError,
    TransportError,
    UnauthorizedError,
)
from .models import AuthResponse, Post, PostList
from .session import SessionState

logger = logging.getLogger(__name__)


def _error_text(response: httpx.Response) -> str:
    """Prefer the service's {"error": ...} message, fall back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text


def raise_for_status(response: httpx.Response) -> None:
    """Translate a non-2xx response into an SDK error."""
    status = response.status_code
    if 200 <= status < 300:
        return

    if status == httpx.codes.UNAUTHORIZED:
        raise UnauthorizedError(_error_text(response))
    if status == httpx.codes.NOT_FOUND:
        raise NotFoundError()
    if status == httpx.codes.FORBIDDEN:
        raise InvalidRequestError(f"Forbidden: {_error_text(response)}", status=status)
    if status == httpx.codes.CONFLICT:
        raise InvalidRequestError(_error_text(response), status=status)

    raise TransportError(f"HTTP {status}: {response.text}")


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SerializationError(f"invalid JSON body: {e}") from e


class HttpClient:
    """Internal HTTP client for the blog REST API.

    Owns one httpx.AsyncClient, shared by all concurrent calls, and reads
    the bearer token from the shared SessionState on every protected call.
    It never writes the session; BlogClient does that after register/login.

    This is an internal class - users should use BlogClient instead.
    """

    def __init__(
        self,
        base_url: str,
        session: SessionState,
        *,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Service root, e.g. "http://localhost:3000"
            session: Shared token holder
            timeout: Per-request timeout in seconds
            connect_timeout: TCP connect timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def connect(self) -> None:
        """Create the connection pool. No request is sent."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.debug(f"HTTP client ready for {self._base_url}")

    async def close(self) -> None:
        """Close the connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("HTTP client closed")

    async def __aenter__(self) -> HttpClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._client

    async def _auth_headers(self) -> dict[str, str]:
        authorization = await self._session.authorization()
        if authorization is None:
            return {}
        return {"Authorization": authorization}

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = False,
    ) -> httpx.Response:
        """Send one request and map non-2xx statuses to SDK errors."""
        client = self._ensure_connected()
        headers = await self._auth_headers() if authenticated else {}

        try:
            response = await client.request(
                method,
                path,
                json=json_body,
                params=params,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request failed: {e}", address=self._base_url) from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        raise_for_status(response)
        return response

    # Auth

    async def register(self, username: str, email: str, password: str) -> AuthResponse:
        """POST /api/auth/register."""
        response = await self._send(
            "POST",
            "/api/auth/register",
            json_body={"username": username, "email": email, "password": password},
        )
        return AuthResponse.from_dict(_decode_json(response))

    async def login(self, username: str, password: str) -> AuthResponse:
        """POST /api/auth/login."""
        response = await self._send(
            "POST",
            "/api/auth/login",
            json_body={"username": username, "password": password},
        )
        return AuthResponse.from_dict(_decode_json(response))

    # Posts

    async def create_post(self, title: str, content: str) -> Post:
        response = await self._send(
            "POST",
            "/api/protected/posts",
            json_body={"title": title, "content": content},
            authenticated=True,
        )
        return Post.from_dict(_decode_json(response))

    async def get_post(self, post_id: int) -> Post:
        response = await self._send("GET", f"/api/posts/{post_id}")
        return Post.from_dict(_decode_json(response))

    async def update_post(
        self,
        post_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> Post:
        """PUT /api/protected/posts/{id}. None fields are sent as null and left unchanged."""
        response = await self._send(
            "PUT",
            f"/api/protected/posts/{post_id}",
            json_body={"title": title, "content": content},
            authenticated=True,
        )
        return Post.from_dict(_decode_json(response))

    async def delete_post(self, post_id: int) -> None:
        """DELETE /api/protected/posts/{id}; only 204 No Content counts as deleted."""
        response = await self._send(
            "DELETE", f"/api/protected/posts/{post_id}", authenticated=True
        )
        if response.status_code != httpx.codes.NO_CONTENT:
            raise TransportError(
                f"HTTP {response.status_code}: expected 204 from delete",
                address=self._base_url,
            )

    async def list_posts(
        self,
        limit: int | None = None,
        offset: int | None = None,
    ) -> PostList:
        """GET /api/posts. Omitted parameters take the server defaults."""
        params: dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        response = await self._send("GET", "/api/posts", params=params)
        return PostList.from_dict(_decode_json(response))
