"""Configuration for answer evaluation and result storage.

The defaults reproduce the scoring rules the lesson content was written
against; tune them only for experiments.
"""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "drills.db"


class TranslationConfig(BaseModel):
    """Configuration for free-text translation scoring."""

    similarity_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    partial_credit: float = Field(default=0.5, ge=0.0, le=1.0)


class StorageConfig(BaseModel):
    """Configuration for result persistence."""

    history_limit: int = Field(default=10, ge=1)
    db_path: Path = DEFAULT_DB_PATH


class EngineConfig(BaseModel):
    """Master configuration for the exercise engine."""

    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
