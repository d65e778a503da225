"""
Command line client for the blog service.

Commands:
- register / login: Authenticate and save the token
- status / logout: Inspect or discard the saved token
- create / get / update / delete / list: Post operations

Usage:
    blog-cli register -u alice -e alice@example.com -p secret
    blog-cli --grpc --server http://localhost:50051 list --limit 5
    blog-cli update --id 3 --title "New title"

Invariants:
    - The saved token is loaded into the client before every command
    - Any BlogError exits with status 1
    - Settings come from BLOG_* environment variables; flags override them
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TextIO

from .client import BlogClient
from .config import ClientSettings
from .errors import BlogError, ErrorKind
from .models import Post
from .token_store import TokenStore

logger = logging.getLogger(__name__)

LOGIN_HINT = "blog-cli login --username <username> --password <password>"


def setup_logging(level_name: str) -> None:
    """Configure root logging for CLI runs."""
    level = getattr(logging, level_name.upper(), logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    # Reduce noise from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)


def truncate(text: str, max_len: int = 50) -> str:
    if len(text) <= max_len:
        return text
    return f"{text[:max_len]}..."


class BlogCLI:
    """Runs CLI commands against a connected BlogClient.

    Each command returns a process exit code and writes human-readable
    output to ``out``.
    """

    def __init__(self, client: BlogClient, store: TokenStore, out: TextIO | None = None) -> None:
        self.client = client
        self.store = store
        self.out = out or sys.stdout

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    def _print_post(self, post: Post, *, with_content: bool = True) -> None:
        self._print(f"   ID: {post.id}")
        self._print(f"   Title: {post.title}")
        if with_content:
            self._print(f"   Content: {post.content}")
        self._print(f"   Author ID: {post.author_id}")
        self._print(f"   Created: {post.created_at}")
        self._print(f"   Updated: {post.updated_at}")

    def _fail(self, action: str, error: BlogError, post_id: int | None = None) -> int:
        if error.kind is ErrorKind.NOT_FOUND and post_id is not None:
            self._print(f"Post #{post_id} not found")
            self._print("   Tip: Use 'list' to see available posts")
        elif error.kind is ErrorKind.UNAUTHORIZED:
            self._print(f"{action} failed: unauthorized ({error.message})")
            self._print(f"   Log in first: {LOGIN_HINT}")
        else:
            self._print(f"{action} failed: {error.message}")
        return 1

    async def load_saved_token(self) -> None:
        token = self.store.load()
        if token:
            await self.client.set_token(token)
            logger.info(f"Loaded token from {self.store.path}")

    async def _save_token(self, token: str) -> None:
        if token:
            self.store.save(token)
            self._print(f"Token saved to {self.store.path}")
        else:
            self._print("Server issued no token; run 'login' to get one")

    async def register(self, username: str, email: str, password: str) -> int:
        try:
            response = await self.client.register(username, email, password)
        except BlogError as e:
            return self._fail("Registration", e)

        self._print("Registration successful")
        self._print(f"   User ID: {response.user.id}")
        self._print(f"   Username: {response.user.username}")
        self._print(f"   Email: {response.user.email}")
        await self._save_token(response.token)
        return 0

    async def login(self, username: str, password: str) -> int:
        try:
            response = await self.client.login(username, password)
        except BlogError as e:
            return self._fail("Login", e)

        self._print("Login successful")
        self._print(f"   User ID: {response.user.id}")
        self._print(f"   Username: {response.user.username}")
        self._print(f"   Email: {response.user.email}")
        await self._save_token(response.token)
        return 0

    async def status(self) -> int:
        token = self.store.load()
        if token is None:
            self._print("No token found")
            self._print(f"   Please log in first: {LOGIN_HINT}")
            return 1

        self._print(f"Token file: {self.store.path}")
        self._print(f"   Token: {truncate(token, 20)}")
        self._print(f"   Length: {len(token)} characters")
        return 0

    async def logout(self) -> int:
        try:
            await self.client.logout()
        except BlogError as e:
            return self._fail("Logout", e)
        finally:
            # Cleared on failure too; the client has already dropped the token.
            removed = self.store.clear()

        self._print("Logged out" + ("" if removed else " (no saved token)"))
        return 0

    async def create(self, title: str, content: str) -> int:
        try:
            post = await self.client.create_post(title, content)
        except BlogError as e:
            return self._fail("Create", e)

        self._print("Post created")
        self._print_post(post, with_content=False)
        return 0

    async def get(self, post_id: int) -> int:
        try:
            post = await self.client.get_post(post_id)
        except BlogError as e:
            return self._fail("Get", e, post_id)

        self._print("Post retrieved:")
        self._print_post(post)
        return 0

    async def update(self, post_id: int, title: str | None, content: str | None) -> int:
        if title is None and content is None:
            self._print("Nothing to update: pass --title and/or --content")
            return 1

        try:
            post = await self.client.update_post(post_id, title, content)
        except BlogError as e:
            return self._fail("Update", e, post_id)

        self._print("Post updated")
        self._print_post(post)
        return 0

    async def delete(self, post_id: int) -> int:
        try:
            await self.client.delete_post(post_id)
        except BlogError as e:
            return self._fail("Delete", e, post_id)

        self._print(f"Post #{post_id} deleted")
        return 0

    async def list(self, limit: int, offset: int) -> int:
        try:
            page = await self.client.list_posts(limit, offset)
        except BlogError as e:
            return self._fail("List", e)

        self._print(f"Found {len(page.posts)} posts (total: {page.total})")
        if not page.posts:
            self._print("   No posts found")
            return 0

        for i, post in enumerate(page.posts, start=offset + 1):
            self._print(f"   {i}. [{post.id}] {post.title}")
            self._print(f"      Created: {post.created_at}")
            self._print(f"      Content: {truncate(post.content)}")
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blog-cli", description="Blog service client")
    parser.add_argument("--server", "-s", help="Server URL/address (overrides BLOG_HTTP_URL / BLOG_GRPC_ADDR)")
    parser.add_argument("--grpc", action="store_true", help="Use the gRPC transport")
    parser.add_argument("--token-file", help="Token file path (overrides BLOG_TOKEN_FILE)")
    parser.add_argument("--log-level", help="Log level (overrides BLOG_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_parser = subparsers.add_parser("register", help="Create an account")
    register_parser.add_argument("--username", "-u", required=True)
    register_parser.add_argument("--email", "-e", required=True)
    register_parser.add_argument("--password", "-p", required=True)

    login_parser = subparsers.add_parser("login", help="Log in and save the token")
    login_parser.add_argument("--username", "-u", required=True)
    login_parser.add_argument("--password", "-p", required=True)

    subparsers.add_parser("status", help="Show the saved token")
    subparsers.add_parser("logout", help="Discard the saved token")

    create_parser = subparsers.add_parser("create", help="Create a post")
    create_parser.add_argument("--title", "-t", required=True)
    create_parser.add_argument("--content", "-c", required=True)

    get_parser = subparsers.add_parser("get", help="Show a post")
    get_parser.add_argument("--id", "-i", type=int, required=True, dest="post_id")

    update_parser = subparsers.add_parser("update", help="Edit a post")
    update_parser.add_argument("--id", "-i", type=int, required=True, dest="post_id")
    update_parser.add_argument("--title", "-t")
    update_parser.add_argument("--content", "-c")

    delete_parser = subparsers.add_parser("delete", help="Delete a post")
    delete_parser.add_argument("--id", "-i", type=int, required=True, dest="post_id")

    list_parser = subparsers.add_parser("list", help="List posts")
    list_parser.add_argument("--limit", "-l", type=int, default=10)
    list_parser.add_argument("--offset", "-o", type=int, default=0)

    return parser


async def run(args: argparse.Namespace, settings: ClientSettings, out: TextIO | None = None) -> int:
    """Connect, execute one command, disconnect. Returns the exit code."""
    out = out or sys.stdout
    store = TokenStore(args.token_file or settings.token_file)
    if args.grpc:
        settings = settings.model_copy(update={"use_grpc": True})

    client = BlogClient(
        settings.transport(args.server),
        timeout=settings.request_timeout,
        connect_timeout=settings.connect_timeout,
    )
    cli = BlogCLI(client, store, out)

    if args.command == "status":
        return await cli.status()

    print(f"Connecting to {'gRPC' if client.is_grpc else 'HTTP'}: {client.transport_url}", file=out)
    try:
        await client.connect()
    except BlogError as e:
        print(f"Could not connect: {e.message}", file=out)
        return 1

    try:
        await cli.load_saved_token()

        if args.command == "register":
            return await cli.register(args.username, args.email, args.password)
        elif args.command == "login":
            return await cli.login(args.username, args.password)
        elif args.command == "logout":
            return await cli.logout()
        elif args.command == "create":
            return await cli.create(args.title, args.content)
        elif args.command == "get":
            return await cli.get(args.post_id)
        elif args.command == "update":
            return await cli.update(args.post_id, args.title, args.content)
        elif args.command == "delete":
            return await cli.delete(args.post_id)
        elif args.command == "list":
            return await cli.list(args.limit, args.offset)
        raise ValueError(f"Unknown command: {args.command}")
    finally:
        await client.close()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = ClientSettings()
    setup_logging(args.log_level or settings.log_level)

    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
