from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    hash_algorithm: str = Field(default="sha256", alias="LEMMA_HASH_ALGORITHM")

    # Re-check lemma/path shape after decoding instead of trusting the bytes
    strict_decode: bool = Field(default=False, alias="LEMMA_STRICT_DECODE")

    # Largest proof file the CLI will read (bytes)
    max_proof_bytes: int = Field(default=1048576, alias="LEMMA_MAX_PROOF_BYTES")

    log_level: str = Field(default="INFO", alias="LEMMA_LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()  # load at import
