"""Submission settings loaded from PROPOSAL_DESK_* environment variables or YAML."""

from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: poetry install"
    ) from e
from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from proposal_desk.errors import SettingsError

MB = 1024 * 1024


class SubmissionSettings(BaseSettings):
    """
    Endpoint, credentials and attachment limits for proposal submission.
    Unset fields fall back to PROPOSAL_DESK_<FIELD> environment variables, then defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROPOSAL_DESK_",
        env_file=None,
        extra="ignore",
        str_strip_whitespace=True,
    )

    api_url: str = Field(default="http://localhost:4000", description="Marketplace API base URL")
    token: Optional[str] = Field(default=None, description="Bearer token for the provider")

    max_attachments: int = Field(default=3, ge=0)
    max_attachment_bytes: int = Field(default=10 * MB, gt=0)
    max_attachment_mb: Optional[int] = Field(
        default=None,
        gt=0,
        description="Per-file limit in MB; overrides max_attachment_bytes when set",
    )
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    @model_validator(mode="after")
    def _sync_attachment_limit(self) -> "SubmissionSettings":
        if self.max_attachment_mb is not None:
            self.max_attachment_bytes = self.max_attachment_mb * MB
        else:
            self.max_attachment_mb = self.max_attachment_bytes // MB
        return self

    @classmethod
    def from_env(cls) -> "SubmissionSettings":
        """Settings from the environment only; invalid values raise SettingsError."""
        try:
            return cls()
        except ValidationError as e:
            raise SettingsError(f"Invalid submission settings from environment: {e}") from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SubmissionSettings":
        """Load settings from YAML. Supports nested (submission:) or flat structure."""
        try:
            raw = yaml.safe_load(Path(path).read_text())
        except yaml.YAMLError as e:
            raise SettingsError(f"Could not parse {path}: {e}") from e
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise SettingsError(f"Expected a mapping at the top of {path}, got {type(raw).__name__}")

        data = raw.get("submission", raw)
        if not isinstance(data, dict):
            raise SettingsError(f"Expected 'submission' in {path} to be a mapping")
        try:
            return cls(**{k: v for k, v in data.items() if k in cls.model_fields})
        except ValidationError as e:
            raise SettingsError(f"Invalid submission settings in {path}: {e}") from e
