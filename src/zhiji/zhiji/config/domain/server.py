"""HTTP server and storage configuration models."""

from pathlib import Path

from pydantic import BaseModel, Field


class ServerConfig(BaseModel, frozen=True):
    host: str = "127.0.0.1"
    port: int = Field(default=8787, ge=1, le=65535)
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"]
    )


class StorageConfig(BaseModel, frozen=True):
    path: Path = Path("zhiji.sqlite3")
