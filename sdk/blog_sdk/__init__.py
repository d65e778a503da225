"""
Blog Python SDK - Client library for the blog service.

This SDK talks to the same blog backend over either of its two transports:
- BlogClient with HttpTransport (REST/JSON) or GrpcTransport (gRPC)
- Typed results (User, Post, PostList, AuthResponse)
- A single error hierarchy rooted at BlogError

Example:
    >>> from blog_sdk import BlogClient, GrpcTransport, HttpTransport
    >>>
    >>> async with BlogClient(HttpTransport("http://localhost:3000")) as blog:
    ...     await blog.login("alice", "secret")
    ...     post = await blog.create_post("Hello", "First post")
    ...     page = await blog.list_posts(limit=10, offset=0)
    >>>
    >>> # Same calls, different wire
    >>> async with BlogClient(GrpcTransport("http://localhost:50051")) as blog:
    ...     post = await blog.get_post(1)

Invariants:
    - Both transports return the same result types
    - A token adopted by register/login is seen by every later call
    - Every failure is a BlogError subclass

Version: 0.1.0
"""

__version__ = "0.1.0"

from .client import BlogClient, GrpcTransport, HttpTransport, Transport
from .errors import (
    AlreadyExistsError,
    BlogError,
    ErrorKind,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
    SerializationError,
    TransportError,
    UnauthorizedError,
)
from .models import AuthResponse, Post, PostList, User

__all__ = [
    # Version
    "__version__",
    # Client
    "BlogClient",
    "Transport",
    "HttpTransport",
    "GrpcTransport",
    # Models
    "User",
    "Post",
    "PostList",
    "AuthResponse",
    # Errors
    "BlogError",
    "ErrorKind",
    "UnauthorizedError",
    "NotFoundError",
    "ForbiddenError",
    "AlreadyExistsError",
    "InvalidRequestError",
    "TransportError",
    "SerializationError",
]
