from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    hasher: str = Field(default="sha256", alias="MERKLE_HASHER")
    log_level: str = Field(default="INFO", alias="MERKLE_LOG_LEVEL")

    # Hex characters kept when log records abbreviate digests
    digest_preview: int = Field(default=16, alias="MERKLE_DIGEST_PREVIEW")

    # CLI refuses leaf files larger than this (bytes)
    max_leaf_bytes: int = Field(default=16 * 1024 * 1024, alias="MERKLE_MAX_LEAF_BYTES")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()  # load at import
