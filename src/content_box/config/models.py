"""
Pydantic models for content box detection configuration.

Defines the configuration schema of the batch pipeline with validation,
defaults, and documentation. The detection heuristic's own constants are
fixed and deliberately not part of this schema.
"""

from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DirectoryConfig(BaseModel):
    """Directory configuration for the batch pipeline."""

    input_dir: str = Field(
        default="data/input",
        description="Directory containing scanned page images"
    )
    output_dir: str = Field(
        default="data/output",
        description="Directory for detection results"
    )
    debug_dir: Optional[str] = Field(
        default=None,
        description="Directory for debug images (defaults to <output_dir>/debug)"
    )

    @field_validator('input_dir', 'output_dir', 'debug_dir')
    @classmethod
    def validate_directory_path(cls, v):
        """Validate directory path format."""
        if v is None:
            return v
        if not v or not isinstance(v, str):
            raise ValueError("Directory path must be a non-empty string")
        return v.replace('\\', '/')  # Normalize path separators


class SourceConfig(BaseModel):
    """How source scans are interpreted."""

    default_dpi: float = Field(
        default=300.0,
        gt=0.0,
        description="Scan density assumed when the file does not record one"
    )
    read_dpi_from_metadata: bool = Field(
        default=True,
        description="Use the density stored in the image file when present"
    )
    rotation: float = Field(
        default=0.0,
        ge=-360.0,
        le=360.0,
        description="Rotation applied to the source before detection (degrees, clockwise)"
    )


class OutputConfig(BaseModel):
    """What the batch pipeline writes."""

    save_json: bool = Field(
        default=True,
        description="Write one JSON file with the detected box per image"
    )
    json_suffix: str = Field(
        default="_content_box.json",
        description="Suffix for per-image JSON files"
    )
    save_cropped: bool = Field(
        default=False,
        description="Write the image cropped to the detected box"
    )
    cropped_suffix: str = Field(
        default="_cropped.png",
        description="Suffix for cropped images"
    )
    summary_filename: str = Field(
        default="content_box_summary.json",
        description="File name of the batch summary"
    )


class DebugConfig(BaseModel):
    """Debug image output."""

    save_debug_images: bool = Field(
        default=False,
        description="Save the reference-resolution gray and binary images"
    )
    debug_image_format: str = Field(
        default="png",
        pattern="^(png|jpg|jpeg|tif|tiff)$",
        description="Image format for debug output"
    )
    debug_compression_quality: int = Field(
        default=95,
        ge=1,
        le=100,
        description="JPEG quality for debug output"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging setup."""

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Base logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich console output"
    )
    format_style: str = Field(
        default="detailed",
        pattern="^(simple|detailed|minimal)$",
        description="Logging format style"
    )


class Config(BaseModel):
    """Main configuration model for content box detection."""

    model_config = ConfigDict(
        extra="forbid",  # Prevent extra fields
        validate_assignment=True,  # Validate on assignment
        use_enum_values=True,  # Use enum values in serialization
    )

    directories: DirectoryConfig = Field(
        default_factory=DirectoryConfig,
        description="Directory configuration"
    )
    source: SourceConfig = Field(
        default_factory=SourceConfig,
        description="Source scan interpretation"
    )
    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Output configuration"
    )
    debug: DebugConfig = Field(
        default_factory=DebugConfig,
        description="Debug image configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )

    # Meta configuration
    version: str = Field(
        default="1.0.0",
        description="Configuration version"
    )
    description: Optional[str] = Field(
        default=None,
        description="Configuration description"
    )

    @property
    def input_dir(self) -> Path:
        return Path(self.directories.input_dir)

    @property
    def output_dir(self) -> Path:
        return Path(self.directories.output_dir)

    @property
    def debug_dir(self) -> Path:
        if self.directories.debug_dir:
            return Path(self.directories.debug_dir)
        return self.output_dir / "debug"
