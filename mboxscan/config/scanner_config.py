"""Configuration models for mbox scanning."""

from pydantic import BaseModel, Field, field_validator, model_validator

from mboxscan.models.scan_result import MultipartPolicy

DEFAULT_INITIAL_BUFFER_SIZE = 4096
DEFAULT_MAX_BUFFER_SIZE = 64 * 1024 * 1024


class ScannerConfig(BaseModel):
    """Scanning mode and buffer sizing."""

    headers_only: bool = False
    initial_buffer_size: int = DEFAULT_INITIAL_BUFFER_SIZE
    max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE
    multipart_policy: MultipartPolicy = MultipartPolicy.TRUNCATE

    @field_validator("initial_buffer_size", "max_buffer_size")
    def validate_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Buffer size must be positive")
        return v

    @model_validator(mode="after")
    def validate_size_order(self) -> "ScannerConfig":
        if self.initial_buffer_size > self.max_buffer_size:
            raise ValueError("initial_buffer_size must not exceed max_buffer_size")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    json_output: bool = Field(default=False, alias="json")
    level: str = "WARNING"

    model_config = {"populate_by_name": True}

    @field_validator("level")
    def validate_level(cls, v: str) -> str:
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class ReportConfig(BaseModel):
    """Display settings for message summaries."""

    summary_template: str = "{offset:>10}  {sender} | {date} | {subject}"
    subject_max_length: int = 50

    @field_validator("subject_max_length")
    def validate_length(cls, v: int) -> int:
        if v < 4:
            raise ValueError("subject_max_length must be at least 4")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""

    schema_version: str = "1.0"
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @field_validator("schema_version")
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v
