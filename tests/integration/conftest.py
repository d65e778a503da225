"""
Fixtures for cross-transport tests.

Each test using ``blog`` runs twice: once against the fake service over
HTTP and once over gRPC, both backed by a fresh in-memory store.
"""

import pytest
import pytest_asyncio

from blog_sdk import BlogClient
from tests.fake_blog import BlogStore, serve_grpc, serve_http


@pytest.fixture
def store():
    """Fresh in-memory blog store."""
    return BlogStore()


@pytest_asyncio.fixture(params=["http", "grpc"])
async def transport(request, store):
    """Serve the store over one protocol and yield the matching transport."""
    serve = serve_http if request.param == "http" else serve_grpc
    async with serve(store) as served:
        yield served


@pytest_asyncio.fixture
async def blog(transport):
    """Connected BlogClient for the current transport."""
    async with BlogClient(transport, timeout=5.0, connect_timeout=5.0) as client:
        yield client


@pytest_asyncio.fixture
async def author(blog):
    """Register and log in "alice"; returns the login response."""
    await blog.register("alice", "alice@example.com", "secret")
    return await blog.login("alice", "secret")
