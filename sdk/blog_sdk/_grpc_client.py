"""
Internal gRPC client for the Blog SDK.

This module provides the low-level gRPC communication layer for the
AuthService and PostService RPC APIs. It is internal to the SDK and
should not be used directly by users.

Users should use BlogClient instead, which provides a clean Python API.

Status mapping (see errors.py for the asymmetry with HTTP):
    UNAUTHENTICATED -> UnauthorizedError(details)
    NOT_FOUND -> NotFoundError
    ALREADY_EXISTS -> AlreadyExistsError
    PERMISSION_DENIED -> ForbiddenError
    anything else -> TransportError("gRPC <CODE>: details")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import grpc
from grpc import aio as grpc_aio

from ._generated import (
    AuthServiceStub,
    PostServiceStub,
    # Request types
    CreatePostRequest,
    DeletePostRequest,
    GetPostRequest,
    ListPostsRequest,
    LoginRequest,
    LogoutRequest,
    RegisterRequest,
    UpdatePostRequest,
    ValidateTokenRequest,
)
from .errors import (
    AlreadyExistsError,
    BlogError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
)
from .models import Post, PostPage, User
from .session import SessionState

logger = logging.getLogger(__name__)

AUTHORIZATION_METADATA_KEY = "authorization"


def parse_target(address: str) -> tuple[str, bool]:
    """Split an address into a grpc target and a TLS flag.

    Accepts "host:port", "http://host:port" and "https://host:port".
    """
    if address.startswith("https://"):
        return address[len("https://"):].rstrip("/"), True
    if address.startswith("http://"):
        return address[len("http://"):].rstrip("/"), False
    return address.rstrip("/"), False


def map_rpc_error(error: grpc.RpcError, address: str | None = None) -> BlogError:
    """Translate a gRPC status into an SDK error."""
    code = error.code() if hasattr(error, "code") else grpc.StatusCode.UNKNOWN
    details = (error.details() if hasattr(error, "details") else None) or ""

    if code == grpc.StatusCode.UNAUTHENTICATED:
        return UnauthorizedError(details)
    if code == grpc.StatusCode.NOT_FOUND:
        return NotFoundError(details or "Resource not found")
    if code == grpc.StatusCode.ALREADY_EXISTS:
        return AlreadyExistsError(details)
    if code == grpc.StatusCode.PERMISSION_DENIED:
        return ForbiddenError(details)

    return TransportError(f"gRPC {code.name}: {details}", address=address)


def build_request(message_type: Any, **fields: Any) -> Any:
    """Construct a request message, rejecting values its fields cannot hold.

    Raises:
        InvalidRequestError: If a value is out of range or of the wrong type
            (an id past int64, a page number past int32)
    """
    try:
        return message_type(**fields)
    except (ValueError, TypeError) as e:
        raise InvalidRequestError(f"{message_type.DESCRIPTOR.name}: {e}") from e


class GrpcClient:
    """Internal gRPC client for the blog services.

    Holds one channel and a stub per service bound to it. Concurrent calls
    share the channel; nothing is dialed per call. The bearer token is
    read from the shared SessionState and attached as "authorization"
    metadata on protected calls. The session is never written here.

    This is an internal class - users should use BlogClient instead.
    """

    def __init__(
        self,
        address: str,
        session: SessionState,
        *,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        credentials: grpc.ChannelCredentials | None = None,
    ) -> None:
        """Initialize the gRPC client.

        Args:
            address: Server address ("host:port" or "http(s)://host:port")
            session: Shared token holder
            timeout: Per-call deadline in seconds
            connect_timeout: How long connect() waits for the channel
            credentials: Optional TLS credentials (implies TLS)
        """
        self._address = address
        self._target, self._secure = parse_target(address)
        self._session = session
        self._timeout = timeout
        self._connect_timeout = connect_timeout
        self._credentials = credentials
        self._channel: grpc_aio.Channel | None = None
        self._auth_stub: AuthServiceStub | None = None
        self._post_stub: PostServiceStub | None = None

    @property
    def address(self) -> str:
        return self._address

    async def connect(self) -> None:
        """Open the channel and wait until it is ready.

        Raises:
            TransportError: If the channel does not become ready in time
        """
        if self._channel is not None:
            return

        if self._secure or self._credentials:
            channel = grpc_aio.secure_channel(
                self._target,
                self._credentials or grpc.ssl_channel_credentials(),
            )
        else:
            channel = grpc_aio.insecure_channel(self._target)

        try:
            await asyncio.wait_for(channel.channel_ready(), timeout=self._connect_timeout)
        except asyncio.TimeoutError as e:
            await channel.close()
            raise TransportError(
                f"channel to {self._target} not ready after {self._connect_timeout}s",
                address=self._address,
            ) from e
        except BaseException:
            await channel.close()
            raise

        self._channel = channel
        self._auth_stub = AuthServiceStub(channel)
        self._post_stub = PostServiceStub(channel)
        logger.debug(f"Connected to blog gRPC server at {self._target}")

    async def close(self) -> None:
        """Close the channel."""
        if self._channel:
            await self._channel.close()
            self._channel = None
            self._auth_stub = None
            self._post_stub = None
            logger.debug("Disconnected from blog gRPC server")

    async def __aenter__(self) -> GrpcClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _ensure_connected(self) -> tuple[AuthServiceStub, PostServiceStub]:
        """Ensure we're connected and return the stubs."""
        if self._auth_stub is None or self._post_stub is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._auth_stub, self._post_stub

    async def _auth_metadata(self) -> tuple[tuple[str, str], ...]:
        authorization = await self._session.authorization()
        if authorization is None:
            return ()
        return ((AUTHORIZATION_METADATA_KEY, authorization),)

    async def _call(
        self,
        rpc: Any,
        request: Any,
        *,
        authenticated: bool = False,
    ) -> Any:
        """Perform one unary call and map RPC failures to SDK errors."""
        metadata = await self._auth_metadata() if authenticated else ()
        try:
            return await rpc(request, metadata=metadata, timeout=self._timeout)
        except grpc.RpcError as e:
            error = map_rpc_error(e, address=self._address)
            logger.debug(f"RPC failed with {error.code}: {error.message}")
            raise error from e

    # Auth

    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> tuple[int, str]:
        """Register a user.

        Returns:
            Tuple of (user_id, token); token is empty when the server issues none
        """
        auth, _ = self._ensure_connected()

        request = build_request(RegisterRequest, username=username, email=email, password=password)
        response = await self._call(auth.Register, request)

        return response.user_id, response.token

    async def login(self, username: str, password: str) -> tuple[User, str]:
        """Log in.

        Returns:
            Tuple of (user, token)

        Raises:
            InvalidRequestError: If the response carries no user
        """
        auth, _ = self._ensure_connected()

        request = build_request(LoginRequest, username=username, email="", password=password)
        response = await self._call(auth.Login, request)

        if not response.HasField("user"):
            raise InvalidRequestError("No user data in response")

        return User.from_proto(response.user), response.token

    async def logout(self) -> str:
        """Tell the server the current token is being discarded.

        Returns:
            Server message
        """
        auth, _ = self._ensure_connected()

        request = build_request(LogoutRequest, token=await self._session.get() or "")
        response = await self._call(auth.Logout, request, authenticated=True)

        if not response.success:
            raise TransportError(response.message or "logout rejected", address=self._address)
        return response.message

    async def validate_token(self, token: str) -> tuple[bool, int]:
        """Ask the server whether a token is valid.

        Returns:
            Tuple of (valid, user_id); user_id is 0 when invalid
        """
        auth, _ = self._ensure_connected()

        request = build_request(ValidateTokenRequest, token=token)
        response = await self._call(auth.ValidateToken, request)
        return response.valid, response.user_id

    # Posts

    async def create_post(self, title: str, content: str) -> Post:
        _, posts = self._ensure_connected()

        request = build_request(CreatePostRequest, title=title, content=content, published=True)
        response = await self._call(posts.CreatePost, request, authenticated=True)

        return Post.from_proto(response)

    async def get_post(self, post_id: int) -> Post:
        _, posts = self._ensure_connected()

        response = await self._call(posts.GetPost, build_request(GetPostRequest, id=post_id))
        return Post.from_proto(response)

    async def update_post(
        self,
        post_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> Post:
        """Update a post. Unset optional fields are left unchanged by the server."""
        _, posts = self._ensure_connected()

        fields: dict[str, Any] = {"id": post_id}
        if title is not None:
            fields["title"] = title
        if content is not None:
            fields["content"] = content
        request = build_request(UpdatePostRequest, **fields)

        response = await self._call(posts.UpdatePost, request, authenticated=True)
        return Post.from_proto(response)

    async def delete_post(self, post_id: int) -> None:
        """Delete a post.

        Raises:
            TransportError: If the server answers with success=false
        """
        _, posts = self._ensure_connected()

        response = await self._call(
            posts.DeletePost,
            build_request(DeletePostRequest, id=post_id),
            authenticated=True,
        )

        if not response.success:
            raise TransportError(response.message, address=self._address)

    async def list_posts(self, page: int, page_size: int) -> PostPage:
        """List one page of published posts."""
        _, posts = self._ensure_connected()

        request = build_request(
            ListPostsRequest, page=page, page_size=page_size, published_only=True
        )
        response = await self._call(posts.ListPosts, request)

        return PostPage(
            posts=[Post.from_proto(p) for p in response.posts],
            total_count=response.total_count,
            page=response.page,
            page_size=response.page_size,
            total_pages=response.total_pages,
        )
