"""
Session state shared between BlogClient and its transport sub-clients.

One SessionState instance is created per BlogClient and handed by reference
to whichever sub-client is active, so a token written by either side is
the token every subsequent call reads.

Invariants:
    - The lock is held only for the read or write of the value,
      never across a network round trip
    - Tokens are never logged
"""

from __future__ import annotations

import asyncio

BEARER_PREFIX = "Bearer "


def bearer(token: str) -> str:
    """Format a token for the Authorization header / metadata entry."""
    return f"{BEARER_PREFIX}{token}"


class SessionState:
    """Lock-guarded holder of the current authentication token."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token or None
        self._lock = asyncio.Lock()

    async def get(self) -> str | None:
        async with self._lock:
            return self._token

    async def set(self, token: str) -> None:
        """Store a token. An empty string clears the session."""
        async with self._lock:
            self._token = token or None

    async def clear(self) -> None:
        async with self._lock:
            self._token = None

    async def authorization(self) -> str | None:
        """Current token formatted as a bearer credential, or None."""
        token = await self.get()
        return bearer(token) if token else None
