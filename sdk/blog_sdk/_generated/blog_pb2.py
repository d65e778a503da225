# mypy: ignore-errors
"""Protobuf message classes for the blog RPC API.

The file descriptor is assembled at import time from the tables below, which
mirror proto/blog.proto field for field. The resulting classes are ordinary
protobuf messages: same wire format and Python API as protoc output.
"""

from __future__ import annotations

from typing import NamedTuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_FDP = descriptor_pb2.FieldDescriptorProto

PACKAGE = "blog"


class _Field(NamedTuple):
    name: str
    number: int
    kind: int
    repeated: bool = False
    message: str | None = None
    optional: bool = False


def _scalar(name: str, number: int, kind: int, *, repeated: bool = False, optional: bool = False) -> _Field:
    return _Field(name, number, kind, repeated=repeated, optional=optional)


def _nested(name: str, number: int, message: str, *, repeated: bool = False) -> _Field:
    return _Field(name, number, _FDP.TYPE_MESSAGE, repeated=repeated, message=message)


_STR = _FDP.TYPE_STRING
_I32 = _FDP.TYPE_INT32
_I64 = _FDP.TYPE_INT64
_BOOL = _FDP.TYPE_BOOL

_MESSAGES: dict[str, list[_Field]] = {
    "User": [
        _scalar("id", 1, _I64),
        _scalar("username", 2, _STR),
        _scalar("email", 3, _STR),
        _scalar("full_name", 4, _STR),
        _scalar("bio", 5, _STR),
        _scalar("avatar_url", 6, _STR),
        _scalar("created_at", 7, _STR),
        _scalar("updated_at", 8, _STR),
    ],
    "Post": [
        _scalar("id", 1, _I64),
        _scalar("title", 2, _STR),
        _scalar("content", 3, _STR),
        _scalar("author_id", 4, _I64),
        _nested("author", 5, "User"),
        _scalar("tags", 6, _STR, repeated=True),
        _scalar("likes_count", 7, _I32),
        _scalar("views_count", 8, _I32),
        _scalar("created_at", 9, _STR),
        _scalar("updated_at", 10, _STR),
        _scalar("published", 11, _BOOL),
        _scalar("published_at", 12, _STR),
    ],
    # Auth
    "RegisterRequest": [
        _scalar("username", 1, _STR),
        _scalar("email", 2, _STR),
        _scalar("password", 3, _STR),
        _scalar("full_name", 4, _STR),
    ],
    "RegisterResponse": [
        _scalar("user_id", 1, _I64),
        _scalar("message", 2, _STR),
        _scalar("token", 3, _STR),
    ],
    "LoginRequest": [
        _scalar("username", 1, _STR),
        _scalar("email", 2, _STR),
        _scalar("password", 3, _STR),
    ],
    "LoginResponse": [
        _scalar("token", 1, _STR),
        _scalar("refresh_token", 2, _STR),
        _nested("user", 3, "User"),
        _scalar("expires_in", 4, _I64),
    ],
    "LogoutRequest": [
        _scalar("token", 1, _STR),
    ],
    "LogoutResponse": [
        _scalar("success", 1, _BOOL),
        _scalar("message", 2, _STR),
    ],
    "ValidateTokenRequest": [
        _scalar("token", 1, _STR),
    ],
    "ValidateTokenResponse": [
        _scalar("valid", 1, _BOOL),
        _scalar("user_id", 2, _I64),
        _nested("user", 3, "User"),
    ],
    # Posts
    "CreatePostRequest": [
        _scalar("title", 1, _STR),
        _scalar("content", 2, _STR),
        _scalar("author_id", 3, _I64),
        _scalar("tags", 4, _STR, repeated=True),
        _scalar("published", 5, _BOOL),
    ],
    "GetPostRequest": [
        _scalar("id", 1, _I64),
    ],
    "UpdatePostRequest": [
        _scalar("id", 1, _I64),
        _scalar("title", 2, _STR, optional=True),
        _scalar("content", 3, _STR, optional=True),
        _scalar("tags", 4, _STR, repeated=True),
        _scalar("published", 5, _BOOL, optional=True),
    ],
    "DeletePostRequest": [
        _scalar("id", 1, _I64),
        _scalar("token", 2, _STR),
    ],
    "DeletePostResponse": [
        _scalar("success", 1, _BOOL),
        _scalar("message", 2, _STR),
    ],
    "ListPostsRequest": [
        _scalar("page", 1, _I32),
        _scalar("page_size", 2, _I32),
        _scalar("author_username", 3, _STR),
        _scalar("tag", 4, _STR),
        _scalar("published_only", 5, _BOOL),
        _scalar("search_query", 6, _STR),
    ],
    "ListPostsResponse": [
        _nested("posts", 1, "Post", repeated=True),
        _scalar("total_count", 2, _I32),
        _scalar("page", 3, _I32),
        _scalar("page_size", 4, _I32),
        _scalar("total_pages", 5, _I32),
    ],
}

# service -> method -> (request, response)
SERVICES: dict[str, dict[str, tuple[str, str]]] = {
    "AuthService": {
        "Register": ("RegisterRequest", "RegisterResponse"),
        "Login": ("LoginRequest", "LoginResponse"),
        "Logout": ("LogoutRequest", "LogoutResponse"),
        "ValidateToken": ("ValidateTokenRequest", "ValidateTokenResponse"),
    },
    "PostService": {
        "CreatePost": ("CreatePostRequest", "Post"),
        "GetPost": ("GetPostRequest", "Post"),
        "UpdatePost": ("UpdatePostRequest", "Post"),
        "DeletePost": ("DeletePostRequest", "DeletePostResponse"),
        "ListPosts": ("ListPostsRequest", "ListPostsResponse"),
    },
}


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="blog.proto",
        package=PACKAGE,
        syntax="proto3",
    )

    for message_name, fields in _MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        for entry in fields:
            field = message.field.add(
                name=entry.name,
                number=entry.number,
                type=entry.kind,
                label=_FDP.LABEL_REPEATED if entry.repeated else _FDP.LABEL_OPTIONAL,
            )
            if entry.message:
                field.type_name = f".{PACKAGE}.{entry.message}"
            if entry.optional:
                # proto3 `optional` is a synthetic single-field oneof
                field.proto3_optional = True
                field.oneof_index = len(message.oneof_decl)
                message.oneof_decl.add(name=f"_{entry.name}")

    for service_name, methods in SERVICES.items():
        service = file_proto.service.add(name=service_name)
        for method_name, (request, response) in methods.items():
            service.method.add(
                name=method_name,
                input_type=f".{PACKAGE}.{request}",
                output_type=f".{PACKAGE}.{response}",
            )

    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file().SerializeToString())

DESCRIPTOR = _POOL.FindFileByName("blog.proto")


def _message_class(name: str):
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.{name}"))


User = _message_class("User")
Post = _message_class("Post")
RegisterRequest = _message_class("RegisterRequest")
RegisterResponse = _message_class("RegisterResponse")
LoginRequest = _message_class("LoginRequest")
LoginResponse = _message_class("LoginResponse")
LogoutRequest = _message_class("LogoutRequest")
LogoutResponse = _message_class("LogoutResponse")
ValidateTokenRequest = _message_class("ValidateTokenRequest")
ValidateTokenResponse = _message_class("ValidateTokenResponse")
CreatePostRequest = _message_class("CreatePostRequest")
GetPostRequest = _message_class("GetPostRequest")
UpdatePostRequest = _message_class("UpdatePostRequest")
DeletePostRequest = _message_class("DeletePostRequest")
DeletePostResponse = _message_class("DeletePostResponse")
ListPostsRequest = _message_class("ListPostsRequest")
ListPostsResponse = _message_class("ListPostsResponse")
