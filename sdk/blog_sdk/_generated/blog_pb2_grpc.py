# mypy: ignore-errors
"""Client stubs and server registration helpers for the blog RPC services.

Same shape as grpcio-tools output: one Stub class per service plus an
``add_<Service>Servicer_to_server`` helper.
"""

from __future__ import annotations

import grpc

from . import blog_pb2


def _method_path(service: str, method: str) -> str:
    return f"/{blog_pb2.PACKAGE}.{service}/{method}"


def _bind_stub(stub: object, channel: grpc.Channel, service: str) -> None:
    for method, (request, response) in blog_pb2.SERVICES[service].items():
        setattr(
            stub,
            method,
            channel.unary_unary(
                _method_path(service, method),
                request_serializer=getattr(blog_pb2, request).SerializeToString,
                response_deserializer=getattr(blog_pb2, response).FromString,
            ),
        )


def _add_servicer(servicer: object, server: grpc.Server, service: str) -> None:
    handlers = {}
    for method, (request, response) in blog_pb2.SERVICES[service].items():
        handlers[method] = grpc.unary_unary_rpc_method_handler(
            getattr(servicer, method),
            request_deserializer=getattr(blog_pb2, request).FromString,
            response_serializer=getattr(blog_pb2, response).SerializeToString,
        )
    generic_handler = grpc.method_handlers_generic_handler(
        f"{blog_pb2.PACKAGE}.{service}", handlers
    )
    server.add_generic_rpc_handlers((generic_handler,))


class AuthServiceStub:
    """Client stub for blog.AuthService.

    Attributes (unary-unary callables): Register, Login, Logout, ValidateToken.
    """

    def __init__(self, channel: grpc.Channel) -> None:
        _bind_stub(self, channel, "AuthService")


class PostServiceStub:
    """Client stub for blog.PostService.

    Attributes (unary-unary callables): CreatePost, GetPost, UpdatePost,
    DeletePost, ListPosts.
    """

    def __init__(self, channel: grpc.Channel) -> None:
        _bind_stub(self, channel, "PostService")


def add_AuthServiceServicer_to_server(servicer: object, server: grpc.Server) -> None:
    _add_servicer(servicer, server, "AuthService")


def add_PostServiceServicer_to_server(servicer: object, server: grpc.Server) -> None:
    _add_servicer(servicer, server, "PostService")
