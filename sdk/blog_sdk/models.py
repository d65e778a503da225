"""
Data transfer objects returned by BlogClient.

Values are produced by the remote service and never mutated locally.
Both transports decode into these same types; HTTP from JSON dicts,
gRPC from protobuf messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import SerializationError


def _require(data: Any, key: str, kind: type, what: str) -> Any:
    if not isinstance(data, dict):
        raise SerializationError(f"{what}: expected object, got {type(data).__name__}")
    if key not in data:
        raise SerializationError(f"{what}: missing field '{key}'")
    value = data[key]
    # bool is an int subclass; reject it for integer fields
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SerializationError(
            f"{what}: field '{key}' should be {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class User:
    """A registered account.

    Attributes:
        id: User ID
        username: Login name
        email: Email address
        created_at: Creation timestamp (RFC 3339)
    """

    id: int
    username: str
    email: str
    created_at: str

    @classmethod
    def from_dict(cls, data: Any) -> User:
        return cls(
            id=_require(data, "id", int, "user"),
            username=_require(data, "username", str, "user"),
            email=_require(data, "email", str, "user"),
            created_at=_require(data, "created_at", str, "user"),
        )

    @classmethod
    def from_proto(cls, message: Any) -> User:
        return cls(
            id=message.id,
            username=message.username,
            email=message.email,
            created_at=message.created_at,
        )


@dataclass(frozen=True)
class AuthResponse:
    """Result of register/login.

    Attributes:
        token: Bearer token, empty when the transport issues none
        user: The authenticated user
    """

    token: str
    user: User

    @classmethod
    def from_dict(cls, data: Any) -> AuthResponse:
        return cls(
            token=_require(data, "token", str, "auth response"),
            user=User.from_dict(_require(data, "user", dict, "auth response")),
        )


@dataclass(frozen=True)
class Post:
    """A blog post.

    Attributes:
        id: Post ID
        title: Title
        content: Body text
        author_id: ID of the user who created it
        created_at: Creation timestamp (RFC 3339)
        updated_at: Last update timestamp (RFC 3339)
    """

    id: int
    title: str
    content: str
    author_id: int
    created_at: str
    updated_at: str

    @classmethod
    def from_dict(cls, data: Any) -> Post:
        return cls(
            id=_require(data, "id", int, "post"),
            title=_require(data, "title", str, "post"),
            content=_require(data, "content", str, "post"),
            author_id=_require(data, "author_id", int, "post"),
            created_at=_require(data, "created_at", str, "post"),
            updated_at=_require(data, "updated_at", str, "post"),
        )

    @classmethod
    def from_proto(cls, message: Any) -> Post:
        return cls(
            id=message.id,
            title=message.title,
            content=message.content,
            author_id=message.author_id,
            created_at=message.created_at,
            updated_at=message.updated_at,
        )


@dataclass(frozen=True)
class PostList:
    """One page of posts, HTTP-shaped.

    Attributes:
        posts: Posts on this page
        total: Total number of posts in the store
        limit: Page size that was requested
        offset: Offset that was requested
    """

    posts: list[Post] = field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> PostList:
        raw_posts = _require(data, "posts", list, "post list")
        return cls(
            posts=[Post.from_dict(p) for p in raw_posts],
            total=_require(data, "total", int, "post list"),
            limit=_require(data, "limit", int, "post list"),
            offset=_require(data, "offset", int, "post list"),
        )


@dataclass(frozen=True)
class PostPage:
    """One page of posts, gRPC-shaped.

    The facade converts this into a PostList.
    """

    posts: list[Post]
    total_count: int
    page: int
    page_size: int
    total_pages: int
