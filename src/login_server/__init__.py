"""Login gateway for the game client.

Authenticates account credentials against the game server's account table,
lists the account's characters, and hands the client the session and world
descriptors it needs to connect to the game server.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("login_server")
except PackageNotFoundError:
    __version__ = "0.1.0"
