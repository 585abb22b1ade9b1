"""Configuration management using Pydantic BaseSettings."""
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    # Lookup tables
    street_index_path: Path = Field(
        default_factory=lambda: DATA_DIR / "street_index.csv",
        alias="STREET_INDEX_PATH"
    )
    abbreviation_index_path: Path = Field(
        default_factory=lambda: DATA_DIR / "abbreviation_index.csv",
        alias="ABBREVIATION_INDEX_PATH"
    )

    # Range expansion
    max_range_expansion: int = Field(default=1000, ge=1, alias="ADDRCRUSH_MAX_RANGE_EXPANSION")
    strict_range_bounds: bool = Field(default=False, alias="ADDRCRUSH_STRICT_RANGE_BOUNDS")

    # Batch dedupe
    out_dir: Path = Field(default_factory=lambda: Path("./out"), alias="OUT_DIR")
    address_header_similarity_min: float = Field(default=80.0, alias="ADDRESS_HEADER_SIMILARITY_MIN")
    containment_min_length: Optional[int] = Field(default=None, ge=0, alias="CONTAINMENT_MIN_LENGTH")


# Global settings instance
settings = Settings()
