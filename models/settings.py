"""Runtime configuration loaded from environment variables.

Every setting can be supplied through a ``VSHELL_*`` environment variable or
a ``.env`` file in the working directory.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.paths import DEFAULT_HOME, canonicalize
from models.persistence import (
    DEFAULT_SNAPSHOT_KEY,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)


class ShellSettings(BaseSettings):
    """Configuration for the filesystem, shell and API.

    Args:
        storage: "file" persists snapshots to ``data_dir``, "memory" keeps them in-process.
        data_dir: Directory for the JSON snapshot store.
        snapshot_key: Key the tree snapshot is stored under.
        home: Home directory of the single user.
        username: User name shown in prompts and ``whoami``.
        hostname: Host name shown in prompts.
        system_name: Name reported by ``uname``.
        shell_name: Name used as prefix for "command not found" errors.
        log_level: Root logging level for the application.
    """

    model_config = SettingsConfigDict(
        env_prefix="VSHELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    storage: Literal["file", "memory"] = Field(default="file")
    data_dir: str = Field(default=".vshell")
    snapshot_key: str = Field(default=DEFAULT_SNAPSHOT_KEY, min_length=1)
    home: str = Field(default=DEFAULT_HOME)
    username: str = Field(default="user", min_length=1)
    hostname: str = Field(default="vshell", min_length=1)
    system_name: str = Field(default="VShellOS")
    shell_name: str = Field(default="bash")
    log_level: str = Field(default="INFO")

    @field_validator("home")
    @classmethod
    def validate_home(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"home must be an absolute path, got '{value}'")
        home = canonicalize(value)
        if home == "/":
            raise ValueError("home cannot be the root directory")
        return home

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{value}'")
        return level

    def create_store(self) -> KeyValueStore:
        if self.storage == "memory":
            return MemoryStore()
        return JsonFileStore(self.data_dir)
