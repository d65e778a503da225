"""
Unit tests for the blog-cli command line client.

The BlogClient is mocked; output is captured in a StringIO.
"""

import io
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from blog_sdk.cli import BlogCLI, build_parser, main, run, setup_logging, truncate
from blog_sdk.client import BlogClient, GrpcTransport, HttpTransport
from blog_sdk.config import ClientSettings
from blog_sdk.errors import NotFoundError, TransportError, UnauthorizedError
from blog_sdk.models import AuthResponse, Post, PostList, User
from blog_sdk.token_store import TokenStore

USER = User(id=3, username="alice", email="alice@example.com", created_at="c")
POST = Post(7, "Hello", "World", 3, "c", "u")


@pytest.fixture
def store(tmp_path):
    return TokenStore(tmp_path / "token")


@pytest.fixture
def client():
    return MagicMock(spec=BlogClient)


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def cli(client, store, out):
    return BlogCLI(client, store, out)


@pytest.fixture
def root_logger():
    """Restore root logging after setup_logging replaces its handlers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestParser:
    """Tests for argument parsing."""

    def test_list_defaults(self):
        args = build_parser().parse_args(["list"])
        assert (args.limit, args.offset) == (10, 0)
        assert args.grpc is False

    def test_global_flags(self):
        args = build_parser().parse_args(
            ["--grpc", "--server", "localhost:1", "--token-file", "/tmp/t", "get", "--id", "4"]
        )
        assert args.grpc is True
        assert args.server == "localhost:1"
        assert args.token_file == "/tmp/t"
        assert args.post_id == 4

    def test_update_fields_optional(self):
        args = build_parser().parse_args(["update", "-i", "2", "-t", "New"])
        assert args.title == "New"
        assert args.content is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    """Tests for BlogCLI commands."""

    @pytest.mark.asyncio
    async def test_login_saves_token(self, cli, client, store, out):
        client.login.return_value = AuthResponse(token="tok", user=USER)

        assert await cli.login("alice", "pw") == 0

        assert store.load() == "tok"
        assert "Login successful" in out.getvalue()

    @pytest.mark.asyncio
    async def test_register_without_token_saves_nothing(self, cli, client, store, out):
        client.register.return_value = AuthResponse(token="", user=USER)

        assert await cli.register("alice", "a@x", "pw") == 0

        assert store.load() is None
        assert "no token" in out.getvalue()

    @pytest.mark.asyncio
    async def test_load_saved_token(self, cli, client, store):
        store.save("saved")

        await cli.load_saved_token()

        client.set_token.assert_awaited_once_with("saved")

    @pytest.mark.asyncio
    async def test_load_without_saved_token(self, cli, client):
        await cli.load_saved_token()
        client.set_token.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unauthorized_hint(self, cli, client, out):
        client.create_post.side_effect = UnauthorizedError("Missing authorization header")

        assert await cli.create("Hello", "World") == 1

        assert "blog-cli login" in out.getvalue()

    @pytest.mark.asyncio
    async def test_not_found_hint(self, cli, client, out):
        client.get_post.side_effect = NotFoundError("Post not found")

        assert await cli.get(99) == 1

        assert "Post #99 not found" in out.getvalue()
        assert "'list'" in out.getvalue()

    @pytest.mark.asyncio
    async def test_other_errors(self, cli, client, out):
        client.list_posts.side_effect = TransportError("HTTP 500: boom")

        assert await cli.list(10, 0) == 1

        assert "List failed: Transport error: HTTP 500: boom" in out.getvalue()

    @pytest.mark.asyncio
    async def test_list(self, cli, client, out):
        client.list_posts.return_value = PostList(posts=[POST], total=1, limit=10, offset=0)

        assert await cli.list(10, 0) == 0

        assert "Found 1 posts (total: 1)" in out.getvalue()
        assert "[7] Hello" in out.getvalue()

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, cli, client):
        assert await cli.update(7, None, None) == 1
        client.update_post.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete(self, cli, client, out):
        assert await cli.delete(7) == 0
        client.delete_post.assert_awaited_once_with(7)
        assert "Post #7 deleted" in out.getvalue()

    @pytest.mark.asyncio
    async def test_logout_removes_file(self, cli, client, store):
        store.save("tok")

        assert await cli.logout() == 0

        client.logout.assert_awaited_once()
        assert store.load() is None

    @pytest.mark.asyncio
    async def test_failed_logout_still_removes_file(self, cli, client, store, out):
        store.save("tok")
        client.logout.side_effect = TransportError("gRPC UNAVAILABLE: down")

        assert await cli.logout() == 1

        assert store.load() is None
        assert "Logout failed" in out.getvalue()

    @pytest.mark.asyncio
    async def test_status(self, cli, store, out):
        assert await cli.status() == 1
        store.save("a" * 40)
        assert await cli.status() == 0
        assert "Length: 40 characters" in out.getvalue()


class TestRun:
    """Tests for run() wiring."""

    def args(self, *argv):
        return build_parser().parse_args(list(argv))

    @pytest.mark.asyncio
    async def test_status_does_not_connect(self, tmp_path, out):
        settings = ClientSettings(token_file=tmp_path / "token")
        with patch("blog_sdk.cli.BlogClient") as client_cls:
            client_cls.return_value.is_grpc = False
            code = await run(self.args("status"), settings, out)

        assert code == 1
        client_cls.return_value.connect.assert_not_called()

    @pytest.mark.asyncio
    async def test_grpc_flag_selects_grpc(self, tmp_path, out):
        settings = ClientSettings(token_file=tmp_path / "token", grpc_addr="g:1")
        with patch("blog_sdk.cli.BlogClient") as client_cls:
            instance = client_cls.return_value
            instance.connect = AsyncMock()
            instance.close = AsyncMock()
            instance.set_token = AsyncMock()
            instance.delete_post = AsyncMock()
            code = await run(self.args("--grpc", "delete", "--id", "1"), settings, out)

        assert code == 0
        assert client_cls.call_args.args[0] == GrpcTransport("g:1")
        instance.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_server_flag_overrides(self, tmp_path, out):
        settings = ClientSettings(token_file=tmp_path / "token", use_grpc=False)
        with patch("blog_sdk.cli.BlogClient") as client_cls:
            instance = client_cls.return_value
            instance.connect = AsyncMock(side_effect=TransportError("refused"))
            code = await run(self.args("--server", "http://x:9", "list"), settings, out)

        assert code == 1
        assert client_cls.call_args.args[0] == HttpTransport("http://x:9")
        assert "Could not connect" in out.getvalue()

    def test_main_exits_with_code(self, tmp_path, monkeypatch, root_logger):
        monkeypatch.setenv("BLOG_TOKEN_FILE", str(tmp_path / "token"))
        with pytest.raises(SystemExit) as exc_info:
            main(["status"])
        assert exc_info.value.code == 1


class TestHelpers:
    """Tests for small helpers."""

    def test_truncate(self):
        assert truncate("short") == "short"
        assert truncate("x" * 60) == "x" * 50 + "..."

    def test_setup_logging(self, root_logger):
        setup_logging("debug")
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_setup_logging_unknown_level(self, root_logger):
        setup_logging("chatty")
        assert root_logger.level == logging.WARNING
