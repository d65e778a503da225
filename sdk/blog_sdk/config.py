"""
Configuration for the Blog SDK command line client.

Uses pydantic-settings for environment variable loading (prefix BLOG_).
Command line flags override these values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from .client import GrpcTransport, HttpTransport, Transport


class ClientSettings(BaseSettings):
    """Client configuration loaded from environment."""

    # Server endpoints
    http_url: str = Field(default="http://localhost:3000", description="Blog HTTP API base URL")
    grpc_addr: str = Field(default="http://localhost:50051", description="Blog gRPC server address")
    use_grpc: bool = Field(default=False, description="Use gRPC instead of HTTP")

    # Timeouts
    request_timeout: float = Field(default=10.0, description="Per-request timeout seconds")
    connect_timeout: float = Field(default=5.0, description="Connection timeout seconds")

    # Session persistence
    token_file: Path = Field(
        default_factory=lambda: Path.home() / ".blog_token",
        description="Where the CLI keeps the bearer token",
    )

    log_level: str = Field(default="WARNING", description="Root log level")

    model_config = {"env_prefix": "BLOG_"}

    def transport(self, server: str | None = None) -> Transport:
        """Build the transport selector, optionally overriding the address."""
        if self.use_grpc:
            return GrpcTransport(server or self.grpc_addr)
        return HttpTransport(server or self.http_url)
