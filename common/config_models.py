"""
Pydantic models for global configuration structure.
This module defines all the nested configuration models used by the Config class.
Each model corresponds to a section in the global_config.yaml file and provides
type validation and structure for the configuration data.
"""

from pydantic import BaseModel


class LoggingLocationConfig(BaseModel):
    """Location information display configuration for logging."""

    enabled: bool
    show_file: bool
    show_function: bool
    show_line: bool
    show_for_info: bool
    show_for_debug: bool
    show_for_warning: bool
    show_for_error: bool


class LoggingFormatConfig(BaseModel):
    """Logging format configuration."""

    show_time: bool
    show_session_id: bool
    location: LoggingLocationConfig


class LoggingLevelsConfig(BaseModel):
    """Logging level configuration."""

    debug: bool
    info: bool
    warning: bool
    error: bool
    critical: bool


class LoggingConfig(BaseModel):
    """Complete logging configuration."""

    verbose: bool
    format: LoggingFormatConfig
    levels: LoggingLevelsConfig


class ServerConfig(BaseModel):
    """Server configuration."""

    allowed_origins: list[str]


class DatabaseConfig(BaseModel):
    """Template storage database configuration."""

    uri: str
    echo: bool
    seed_file: str | None = None


class EditorConfig(BaseModel):
    """Editor session and live preview configuration."""

    preview_debounce_ms: int
    fit_margin: float
    default_picker_color: str
    notification_dismiss_seconds: int
    max_sessions: int


class ExportArchiveConfig(BaseModel):
    """Member names inside the exported zip archive."""

    html_file: str
    css_file: str
    combined_file: str
    readme_file: str


class ExportConfig(BaseModel):
    """Export configuration."""

    brand_name: str
    host_platform: str
    archive: ExportArchiveConfig
