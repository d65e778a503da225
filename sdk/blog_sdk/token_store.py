"""
On-disk token persistence for command line use.

BlogClient itself never touches the filesystem; the CLI loads a token from
here into the client before a command and saves the new one after
register/login.

Invariants:
    - The token file is readable only by its owner (0600)
    - A missing or blank file means "no token"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_FILE_MODE = 0o600


class TokenStore:
    """Reads and writes a single bearer token file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def save(self, token: str) -> None:
        """Write the token, creating the file with owner-only permissions."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, TOKEN_FILE_MODE)
        with os.fdopen(fd, "w") as f:
            f.write(token)
        # O_CREAT mode is ignored for existing files
        os.chmod(self.path, TOKEN_FILE_MODE)
        logger.debug(f"Token saved to {self.path}")

    def load(self) -> str | None:
        """Return the stored token, or None if absent or blank."""
        try:
            token = self.path.read_text().strip()
        except FileNotFoundError:
            return None
        return token or None

    def clear(self) -> bool:
        """Remove the token file. Returns whether a file was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        logger.debug(f"Token file {self.path} removed")
        return True
