# mypy: ignore-errors
"""Protobuf messages and gRPC stubs for the blog SDK.

Mirrors proto/blog.proto. This module is internal to the SDK.
Users should not import from here.
"""

from .blog_pb2 import (
    CreatePostRequest,
    DeletePostRequest,
    DeletePostResponse,
    GetPostRequest,
    ListPostsRequest,
    ListPostsResponse,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    LogoutResponse,
    Post,
    RegisterRequest,
    RegisterResponse,
    UpdatePostRequest,
    User,
    ValidateTokenRequest,
    ValidateTokenResponse,
)
from .blog_pb2_grpc import (
    AuthServiceStub,
    PostServiceStub,
    add_AuthServiceServicer_to_server,
    add_PostServiceServicer_to_server,
)

__all__ = [
    "User",
    "Post",
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "LogoutResponse",
    "ValidateTokenRequest",
    "ValidateTokenResponse",
    "CreatePostRequest",
    "GetPostRequest",
    "UpdatePostRequest",
    "DeletePostRequest",
    "DeletePostResponse",
    "ListPostsRequest",
    "ListPostsResponse",
    "AuthServiceStub",
    "PostServiceStub",
    "add_AuthServiceServicer_to_server",
    "add_PostServiceServicer_to_server",
]
