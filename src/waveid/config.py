"""waveid configuration models.

Pydantic models for validating waveid.yaml configuration.
Config errors are caught at load time rather than in the middle of an encode.
"""

import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_SAMPLE_COUNT, DEFAULT_TARGET_SAMPLE_RATE

LENGTH_POLICIES = {"fit", "strict"}
OUT_OF_RANGE_POLICIES = {"reject", "truncate"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
LOG_FORMATS = {"json", "text"}


class CanonicalFormConfig(BaseModel):
    """Canonical audio form configuration.

    Attributes:
        target_sample_rate: Sample rate of canonical audio in Hz
        sample_count: Number of samples in canonical audio (fixes identifier size)
        length_policy: "fit" pads/truncates after resampling, "strict" rejects
            any length mismatch
    """

    target_sample_rate: int = Field(
        default=DEFAULT_TARGET_SAMPLE_RATE,
        description="Canonical sample rate in Hz",
        ge=1,
    )
    sample_count: int = Field(
        default=DEFAULT_SAMPLE_COUNT,
        description="Canonical sample count (identifier digit count)",
        ge=1,
    )
    length_policy: str = Field(
        default="fit",
        description="Length handling after resampling (fit or strict)",
    )

    @field_validator("length_policy")
    @classmethod
    def validate_length_policy(cls, v: str) -> str:
        """Ensure length policy is known."""
        v_lower = v.lower()
        if v_lower not in LENGTH_POLICIES:
            raise ValueError(f"Invalid length policy: {v}. Must be one of {LENGTH_POLICIES}")
        return v_lower


class IdentifierConfig(BaseModel):
    """Identifier decoding configuration.

    Attributes:
        out_of_range: "reject" raises on identifiers >= RADIX**sample_count,
            "truncate" keeps the low sample_count digits
    """

    out_of_range: str = Field(
        default="reject",
        description="Policy for identifiers outside the domain (reject or truncate)",
    )

    @field_validator("out_of_range")
    @classmethod
    def validate_out_of_range(cls, v: str) -> str:
        """Ensure out-of-range policy is known."""
        v_lower = v.lower()
        if v_lower not in OUT_OF_RANGE_POLICIES:
            raise ValueError(
                f"Invalid out-of-range policy: {v}. Must be one of {OUT_OF_RANGE_POLICIES}"
            )
        return v_lower


class LoggingConfig(BaseModel):
    """Diagnostics written to stderr by the waveid CLI.

    Identifiers and WAV data go to stdout or files; log records never mix
    with them. INFO reports the source format of each encoded clip and where
    outputs were written. DEBUG adds per-stage detail (resample ratios, peak
    values and bit lengths).

    Attributes:
        level: Minimum level of CLI diagnostics; --log-level overrides it
        format: "text" for a terminal, "json" for one record per line
    """

    level: str = Field(
        default="INFO",
        description="Minimum level of CLI diagnostics on stderr",
    )
    format: str = Field(
        default="text",
        description="Diagnostic record format (text or json lines)",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize the level name to upper case."""
        v_upper = v.upper()
        if v_upper not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {LOG_LEVELS}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in LOG_FORMATS:
            raise ValueError(f"Invalid log format: {v}. Must be one of {LOG_FORMATS}")
        return v_lower


class WaveIdConfig(BaseModel):
    """Complete waveid configuration.

    Example:
        >>> config = WaveIdConfig.from_yaml("configs/waveid.yaml")
        >>> config.canonical.sample_count
        48000
    """

    canonical: CanonicalFormConfig = Field(default_factory=CanonicalFormConfig)
    identifier: IdentifierConfig = Field(default_factory=IdentifierConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "WaveIdConfig":
        """Load configuration from YAML file with environment variable overrides.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated configuration

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValidationError: If configuration is invalid
            yaml.YAMLError: If YAML syntax is invalid
            ValueError: If the file or a section is not a mapping
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration file {config_path} must contain a mapping, "
                f"got {type(data).__name__}"
            )

        # An empty section ("canonical:" with nothing under it) loads as None
        data = {key: value for key, value in data.items() if value is not None}

        return cls.model_validate(_apply_env_overrides(data))

    @classmethod
    def from_yaml_with_defaults(cls, path: str | Path | None = None) -> "WaveIdConfig":
        """Load configuration from YAML or use defaults if no file is given.

        Environment overrides apply in both cases.
        """
        if path is not None and Path(path).exists():
            return cls.from_yaml(path)
        return cls.model_validate(_apply_env_overrides({}))


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name)
    if section is None:
        section = data[name] = {}
    elif not isinstance(section, dict):
        raise ValueError(
            f"Config section '{name}' must be a mapping, got {type(section).__name__}"
        )
    return section


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    if target_rate := os.getenv("WAVEID_TARGET_SAMPLE_RATE"):
        _section(data, "canonical")["target_sample_rate"] = int(target_rate)

    if sample_count := os.getenv("WAVEID_SAMPLE_COUNT"):
        _section(data, "canonical")["sample_count"] = int(sample_count)

    if length_policy := os.getenv("WAVEID_LENGTH_POLICY"):
        _section(data, "canonical")["length_policy"] = length_policy

    if out_of_range := os.getenv("WAVEID_OUT_OF_RANGE"):
        _section(data, "identifier")["out_of_range"] = out_of_range

    if log_level := os.getenv("WAVEID_LOG_LEVEL"):
        _section(data, "logging")["level"] = log_level

    return data
