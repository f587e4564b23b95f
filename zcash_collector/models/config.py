"""Configuration management using Pydantic settings."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CollectorConfig(BaseSettings):
    """Configuration for the zcash chain data tools."""

    # Logging Settings
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json|text)")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_max_size_mb: int = Field(default=100, description="Max log file size in MB")
    log_backup_count: int = Field(default=5, description="Number of log backups")

    # Output Settings
    output_dir: str = Field(default=".", description="Directory for exported blocks and metrics")
    json_indent: int = Field(default=4, ge=0, description="Indentation of written JSON files")

    model_config = SettingsConfigDict(
        env_prefix="ZCASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
