"""
Blog Client for Python SDK.

This module provides the main client interface:
- HttpTransport / GrpcTransport: Transport selector variants
- BlogClient: Unified client over either transport

Example:
    >>> async with BlogClient(HttpTransport("http://localhost:3000")) as blog:
    ...     await blog.login("alice", "secret")
    ...     post = await blog.create_post("Hello", "World")

Invariants:
    - The transport is fixed for the lifetime of a BlogClient
    - After register/login returns, every later call sees the new token
    - Reads never carry a token; post writes carry it when one is set
    - Errors are always BlogError subclasses, whichever transport failed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

from ._grpc_client import GrpcClient
from ._http_client import HttpClient
from .errors import TransportError, UnauthorizedError
from .models import AuthResponse, Post, PostList, PostPage, User
from .session import SessionState

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class HttpTransport:
    """HTTP transport with base URL (e.g. "http://localhost:3000")."""

    url: str


@dataclass(frozen=True)
class GrpcTransport:
    """gRPC transport with server address (e.g. "http://localhost:50051")."""

    address: str


Transport = Union[HttpTransport, GrpcTransport]


def to_page(limit: int | None, offset: int | None) -> tuple[int, int]:
    """Translate (limit, offset) into gRPC (page, page_size).

    A zero or missing limit falls back to DEFAULT_PAGE_SIZE; a missing
    offset is 0. Pages are 1-based.
    """
    page_size = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
    start = offset if offset and offset > 0 else 0
    return start // page_size + 1, page_size


def from_page(page: PostPage, limit: int | None, offset: int | None) -> PostList:
    """Reshape a gRPC page into the HTTP envelope, echoing the request."""
    return PostList(
        posts=list(page.posts),
        total=page.total_count,
        limit=limit if limit and limit > 0 else DEFAULT_PAGE_SIZE,
        offset=offset if offset and offset > 0 else 0,
    )


class BlogClient:
    """Client for the blog service over HTTP or gRPC.

    Callers see the same operations, results and errors whichever
    transport is selected. Safe to share between concurrent tasks.

    Example:
        >>> blog = await BlogClient.create(GrpcTransport("localhost:50051"))
        >>> page = await blog.list_posts(limit=5)
        >>> await blog.close()
    """

    def __init__(
        self,
        transport: Transport,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        **transport_options: Any,
    ) -> None:
        """Initialize client. Call connect() (or use create()) before use.

        Args:
            transport: Which transport to use and where the server is
            token: Optional token to start the session with
            timeout: Per-call timeout in seconds
            connect_timeout: Connection establishment timeout in seconds
            **transport_options: Passed through to the sub-client
                (e.g. transport= for HTTP, credentials= for gRPC)
        """
        self._transport = transport
        self._session = SessionState(token)
        self._connected = False

        self._client: HttpClient | GrpcClient
        match transport:
            case HttpTransport(url=url):
                self._client = HttpClient(
                    url,
                    self._session,
                    timeout=timeout,
                    connect_timeout=connect_timeout,
                    **transport_options,
                )
            case GrpcTransport(address=address):
                self._client = GrpcClient(
                    address,
                    self._session,
                    timeout=timeout,
                    connect_timeout=connect_timeout,
                    **transport_options,
                )
            case _:
                raise TypeError(f"Unsupported transport: {transport!r}")

    @classmethod
    async def create(cls, transport: Transport, **kwargs: Any) -> BlogClient:
        """Build and connect a client.

        Raises:
            TransportError: If the transport cannot establish connectivity
        """
        client = cls(transport, **kwargs)
        await client.connect()
        return client

    async def connect(self) -> None:
        """Connect to the server."""
        if self._connected:
            return

        try:
            await self._client.connect()
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(
                f"Failed to connect: {e}",
                address=self.transport_url,
            ) from e

        self._connected = True
        logger.info(f"Blog client connected ({self._describe()})")

    async def close(self) -> None:
        """Close the connection."""
        if self._connected:
            await self._client.close()
            self._connected = False

    async def __aenter__(self) -> BlogClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # Transport introspection

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def is_http(self) -> bool:
        return isinstance(self._transport, HttpTransport)

    @property
    def is_grpc(self) -> bool:
        return isinstance(self._transport, GrpcTransport)

    @property
    def transport_url(self) -> str:
        match self._transport:
            case HttpTransport(url=url):
                return url
            case GrpcTransport(address=address):
                return address

    def _describe(self) -> str:
        kind = "HTTP" if self.is_http else "gRPC"
        return f"{kind}: {self.transport_url}"

    # Session

    async def set_token(self, token: str) -> None:
        """Set the token used for authenticated requests."""
        await self._session.set(token)

    async def get_token(self) -> str | None:
        """Get the current token, or None."""
        return await self._session.get()

    async def clear_token(self) -> None:
        """Forget the current token."""
        await self._session.clear()

    async def logout(self) -> None:
        """End the session.

        The local token is always cleared. Over gRPC the server is told
        first; a token the server already rejects counts as logged out.
        HTTP has no logout endpoint, so it is local only.
        """
        try:
            match self._client:
                case GrpcClient():
                    if await self._session.get():
                        await self._client.logout()
                case HttpClient():
                    pass
        except UnauthorizedError as e:
            logger.info(f"Server already rejects the token ({e.detail}); clearing it locally")
        finally:
            await self._session.clear()

    async def _adopt_token(self, token: str) -> None:
        # Awaited inline so the next call from this caller sees the token.
        if token:
            await self._session.set(token)

    # Auth

    async def register(self, username: str, email: str, password: str) -> AuthResponse:
        """Register a new user.

        Returns:
            AuthResponse. Over gRPC the token is whatever the server put in
            the register response (typically empty) and the user record is
            built from the inputs plus the returned id.

        Raises:
            InvalidRequestError: HTTP, username/email taken (409)
            AlreadyExistsError: gRPC, username/email taken
        """
        logger.debug(f"Register called for username: {username}")

        match self._client:
            case HttpClient():
                response = await self._client.register(username, email, password)
            case GrpcClient():
                user_id, token = await self._client.register(username, email, password)
                response = AuthResponse(
                    token=token,
                    user=User(
                        id=user_id,
                        username=username,
                        email=email,
                        created_at=datetime.now(timezone.utc).isoformat(),
                    ),
                )

        await self._adopt_token(response.token)
        return response

    async def login(self, username: str, password: str) -> AuthResponse:
        """Log in and adopt the issued token.

        Raises:
            UnauthorizedError: Wrong credentials
        """
        logger.debug(f"Login called for username: {username}")

        match self._client:
            case HttpClient():
                response = await self._client.login(username, password)
            case GrpcClient():
                user, token = await self._client.login(username, password)
                response = AuthResponse(
                    token=token,
                    user=User(
                        id=user.id,
                        username=username,
                        email=user.email,
                        created_at=user.created_at,
                    ),
                )

        await self._adopt_token(response.token)
        return response

    # Posts

    async def create_post(self, title: str, content: str) -> Post:
        """Create a post (requires authentication).

        Raises:
            UnauthorizedError: No token set, or token rejected
        """
        return await self._client.create_post(str(title), str(content))

    async def get_post(self, post_id: int) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: No such post
        """
        return await self._client.get_post(int(post_id))

    async def update_post(
        self,
        post_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> Post:
        """Update a post (requires authentication, must be author).

        Fields left as None are not changed.
        """
        return await self._client.update_post(int(post_id), title, content)

    async def delete_post(self, post_id: int) -> None:
        """Delete a post (requires authentication, must be author)."""
        await self._client.delete_post(int(post_id))

    async def list_posts(
        self,
        limit: int | None = None,
        offset: int | None = None,
    ) -> PostList:
        """List posts with limit/offset pagination.

        Over gRPC the request becomes page = offset // limit + 1 with
        page_size = limit (limit defaults to 10 when zero or missing).
        """
        match self._client:
            case HttpClient():
                return await self._client.list_posts(limit, offset)
            case GrpcClient():
                page, page_size = to_page(limit, offset)
                if offset and offset % page_size:
                    logger.warning(
                        f"offset {offset} is not a multiple of limit {page_size}; "
                        f"gRPC returns page {page} starting at {(page - 1) * page_size}"
                    )
                result = await self._client.list_posts(page, page_size)
                return from_page(result, limit, offset)

    async def validate_token(self, token: str | None = None) -> tuple[bool, int]:
        """Check a token with the server (gRPC only).

        Args:
            token: Token to check; defaults to the session token

        Returns:
            Tuple of (valid, user_id)

        Raises:
            TransportError: On the HTTP transport, which has no such endpoint
        """
        match self._client:
            case GrpcClient():
                candidate = token if token is not None else await self._session.get()
                return await self._client.validate_token(candidate or "")
            case HttpClient():
                raise TransportError(
                    "token validation is only available over gRPC",
                    address=self.transport_url,
                )
