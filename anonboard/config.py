"""
AnonBoard Configuration Module

Handles loading, validation, and management of configuration settings.
"""

import re
import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

# Use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class BoardConfig:
    """Board behaviour settings."""
    name: str = "AnonBoard"
    max_threads: int = 10  # threads per board listing
    reply_preview: int = 3  # replies shown per thread in a listing
    max_text_length: int = 0  # 0 = no limit
    name_pattern: str = ""  # empty = any non-empty name


@dataclass
class CryptoConfig:
    """Delete password hashing settings."""
    argon2_time_cost: int = 3
    argon2_memory_kb: int = 32768  # 32MB
    argon2_parallelism: int = 1


@dataclass
class WebConfig:
    """HTTP interface settings."""
    host: str = "127.0.0.1"
    port: int = 8080
    url_prefix: str = ""
    max_content_length: int = 65536
    debug: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: str = ""
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass
class Config:
    """Main configuration container."""
    board: BoardConfig = field(default_factory=BoardConfig)
    crypto: CryptoConfig = field(default_factory=CryptoConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        # Board validation
        if not self.board.name:
            errors.append("board.name cannot be empty")
        if self.board.max_threads < 1:
            errors.append("board.max_threads must be at least 1")
        if self.board.reply_preview < 0:
            errors.append("board.reply_preview cannot be negative")
        if self.board.max_text_length < 0:
            errors.append("board.max_text_length cannot be negative")
        try:
            re.compile(self.board.name_pattern)
        except re.error as e:
            errors.append(f"board.name_pattern is not a valid regex: {e}")

        # Crypto validation
        if self.crypto.argon2_time_cost < 1:
            errors.append("crypto.argon2_time_cost must be at least 1")
        if self.crypto.argon2_memory_kb < 8 * self.crypto.argon2_parallelism:
            errors.append("crypto.argon2_memory_kb must be at least 8 KB per lane")
        if self.crypto.argon2_parallelism < 1:
            errors.append("crypto.argon2_parallelism must be at least 1")

        # Web validation
        if not 0 < self.web.port < 65536:
            errors.append("web.port must be between 1 and 65535")
        if self.web.url_prefix and not self.web.url_prefix.startswith("/"):
            errors.append("web.url_prefix must start with '/'")

        # Logging validation
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.logging.level.upper() not in valid_levels:
            errors.append(f"logging.level must be one of: {valid_levels}")

        return errors

    def save(self, path: Path):
        """Save configuration to TOML file."""
        import toml  # For writing

        with open(path, "w") as f:
            toml.dump(self._to_dict(), f)

    def to_toml(self) -> str:
        """Render configuration as a TOML document."""
        import toml

        return toml.dumps(self._to_dict())

    def _to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)


def load_config(path: Path) -> Config:
    """Load configuration from TOML file."""
    config = Config()

    if not path.exists():
        return config

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Map TOML sections to config dataclasses
    if "board" in data:
        config.board = BoardConfig(**data["board"])

    if "crypto" in data:
        config.crypto = CryptoConfig(**data["crypto"])

    if "web" in data:
        config.web = WebConfig(**data["web"])

    if "logging" in data:
        config.logging = LoggingConfig(**data["logging"])

    return config


def create_default_config(path: Path):
    """Create a default configuration file."""
    config = Config()
    config.save(path)
