"""
Login server configuration management.

Configuration is loaded from multiple sources with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The ServerConfig
dataclass provides typed access to all settings.

Usage:
    from login_server.config import config

    print(config.server.port)
    print(config.world.name)
    print(config.security.password_scheme)

Environment Variable Mapping:
    LOGIN_HOST                -> server.host
    LOGIN_PORT                -> server.port
    LOGIN_USE_HTTPS           -> tls.enabled
    LOGIN_TLS_CERT            -> tls.cert_file
    LOGIN_TLS_KEY             -> tls.key_file
    LOGIN_DB_PATH             -> database.path
    LOGIN_PASSWORD_SCHEME     -> security.password_scheme
    LOGIN_SESSION_KEY_SCHEME  -> security.session_key_scheme
    LOGIN_WORLD_NAME          -> world.name
    LOGIN_GAME_HOST           -> world.host
    LOGIN_GAME_PORT           -> world.port
    LOGIN_LOG_LEVEL           -> logging.level
"""

import configparser
import logging
import os
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/, data/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"

PASSWORD_SCHEMES = ("sha1", "sha256", "sha512")
SESSION_KEY_SCHEMES = ("opaque", "legacy")
WORLD_LOCATIONS = ("USA", "EUR", "BRA")
PVP_TYPES = ("pvp", "no-pvp", "pvp-enforced")


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Plain HTTP listener."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 80


@dataclass
class TlsSettings:
    """HTTPS listener. Replaces the plain listener when enabled."""

    enabled: bool = False
    port: int = 443
    cert_file: str = "local/cert.pem"
    key_file: str = "local/key.pem"

    @property
    def cert_path(self) -> Path:
        return _resolve(self.cert_file)

    @property
    def key_path(self) -> Path:
        return _resolve(self.key_file)


@dataclass
class DatabaseSettings:
    """Record store configuration."""

    path: str = "data/login.db"
    timeout_seconds: float = 5.0

    @property
    def absolute_path(self) -> Path:
        """Get absolute path to database file."""
        return _resolve(self.path)


@dataclass
class SecuritySettings:
    """Credential and session key schemes."""

    password_scheme: str = "sha1"
    session_key_scheme: Literal["opaque", "legacy"] = "opaque"


@dataclass
class WorldSettings:
    """
    The single game world advertised to clients.

    ``name`` must match the world name configured on the game server or the
    client will fail to connect.
    """

    name: str = "Canary"
    host: str = "localhost"
    port: int = 7172
    location: str = "BRA"
    pvp_type: str = "pvp"
    anticheat_protection: bool = False
    restricted_store: bool = False


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed"] = "detailed"


@dataclass
class ServerConfig:
    """
    Complete server configuration.

    Aggregates all settings sections. Access via the module-level `config`
    singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    tls: TlsSettings = field(default_factory=TlsSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    world: WorldSettings = field(default_factory=WorldSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @property
    def listen_port(self) -> int:
        """Port of whichever listener is active."""
        return self.tls.port if self.tls.enabled else self.server.port


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _resolve(path: str) -> Path:
    p = Path(path)
    if p.is_absolute():
        return p
    return PROJECT_ROOT / p


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _load_from_ini(parser: configparser.ConfigParser, cfg: ServerConfig) -> None:
    """Load configuration from parsed INI file into ServerConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # TLS section
    if parser.has_section("tls"):
        if parser.has_option("tls", "enabled"):
            cfg.tls.enabled = _parse_bool(parser.get("tls", "enabled"))
        if parser.has_option("tls", "port"):
            cfg.tls.port = parser.getint("tls", "port")
        if parser.has_option("tls", "cert_file"):
            cfg.tls.cert_file = parser.get("tls", "cert_file")
        if parser.has_option("tls", "key_file"):
            cfg.tls.key_file = parser.get("tls", "key_file")

    # Database section
    if parser.has_section("database"):
        if parser.has_option("database", "path"):
            cfg.database.path = parser.get("database", "path")
        if parser.has_option("database", "timeout_seconds"):
            cfg.database.timeout_seconds = parser.getfloat("database", "timeout_seconds")

    # Security section
    if parser.has_section("security"):
        if parser.has_option("security", "password_scheme"):
            val = parser.get("security", "password_scheme").lower()
            if val in PASSWORD_SCHEMES:
                cfg.security.password_scheme = val
        if parser.has_option("security", "session_key_scheme"):
            val = parser.get("security", "session_key_scheme").lower()
            if val in SESSION_KEY_SCHEMES:
                cfg.security.session_key_scheme = val  # type: ignore[assignment]

    # World section
    if parser.has_section("world"):
        if parser.has_option("world", "name"):
            cfg.world.name = parser.get("world", "name")
        if parser.has_option("world", "host"):
            cfg.world.host = parser.get("world", "host")
        if parser.has_option("world", "port"):
            cfg.world.port = parser.getint("world", "port")
        if parser.has_option("world", "location"):
            val = parser.get("world", "location").upper()
            if val in WORLD_LOCATIONS:
                cfg.world.location = val
        if parser.has_option("world", "pvp_type"):
            val = parser.get("world", "pvp_type").lower()
            if val in PVP_TYPES:
                cfg.world.pvp_type = val
        if parser.has_option("world", "anticheat_protection"):
            cfg.world.anticheat_protection = _parse_bool(
                parser.get("world", "anticheat_protection")
            )
        if parser.has_option("world", "restricted_store"):
            cfg.world.restricted_store = _parse_bool(parser.get("world", "restricted_store"))

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed"):
                cfg.logging.format = val  # type: ignore[assignment]


def _apply_env_overrides(cfg: ServerConfig) -> None:
    """Apply environment variable overrides to configuration."""
    if env_host := os.getenv("LOGIN_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("LOGIN_PORT"):
        cfg.server.port = int(env_port)

    if env_https := os.getenv("LOGIN_USE_HTTPS"):
        cfg.tls.enabled = _parse_bool(env_https)
    if env_cert := os.getenv("LOGIN_TLS_CERT"):
        cfg.tls.cert_file = env_cert
    if env_key := os.getenv("LOGIN_TLS_KEY"):
        cfg.tls.key_file = env_key

    if env_db := os.getenv("LOGIN_DB_PATH"):
        cfg.database.path = env_db

    if env_scheme := os.getenv("LOGIN_PASSWORD_SCHEME"):
        if env_scheme.lower() in PASSWORD_SCHEMES:
            cfg.security.password_scheme = env_scheme.lower()
    if env_key_scheme := os.getenv("LOGIN_SESSION_KEY_SCHEME"):
        if env_key_scheme.lower() in SESSION_KEY_SCHEMES:
            cfg.security.session_key_scheme = env_key_scheme.lower()  # type: ignore[assignment]

    if env_world := os.getenv("LOGIN_WORLD_NAME"):
        cfg.world.name = env_world
    if env_game_host := os.getenv("LOGIN_GAME_HOST"):
        cfg.world.host = env_game_host
    if env_game_port := os.getenv("LOGIN_GAME_PORT"):
        cfg.world.port = int(env_game_port)

    if env_log := os.getenv("LOGIN_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()


def load_config() -> ServerConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/server.ini
        3. config/server.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        ServerConfig: Fully populated configuration object.
    """
    cfg = ServerConfig()

    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    _apply_env_overrides(cfg)

    return cfg


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

config = load_config()


# =============================================================================
# LOGGING
# =============================================================================

_LOG_FORMATS = {
    "simple": "%(levelname)s %(message)s",
    "detailed": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
}


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure the root logger from the ``[logging]`` section."""
    settings = settings or config.logging
    level = logging.getLevelName(settings.level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMATS[settings.format], force=True)


# =============================================================================
# TEST HELPERS
# =============================================================================


class use_test_database:
    """
    Context manager for using a temporary test database.

    Usage:
        from login_server.config import use_test_database

        def test_something(tmp_path):
            with use_test_database(tmp_path / "test.db"):
                schema.init_database()

    Args:
        db_path: Path to the test database file
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self.original_path: str | None = None

    def __enter__(self) -> Path:
        self.original_path = config.database.path
        config.database.path = str(self.db_path)
        return self.db_path

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.original_path is not None:
            config.database.path = self.original_path
        return None
