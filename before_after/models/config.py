"""Configuration model for the before/after tool."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from before_after.models.capture import VIEWPORT_PRESETS, ViewportConfig

DEFAULT_UPLOAD_URL = "https://0x0.st"
UPLOAD_URL_ENV = "UPLOAD_URL"


class ToolConfig(BaseModel):
    # Capture
    viewport: ViewportConfig = "desktop"
    headless: bool = True
    settle_ms: int = 500
    selector_settle_ms: int = 200
    selector_timeout_ms: int = 5000

    # Output
    output_dir: str = "~/Downloads"
    labels: dict[str, str] = Field(
        default_factory=lambda: {"before": "Before", "after": "After"}
    )

    # Upload
    upload_url: Optional[str] = None

    @field_validator("labels")
    @classmethod
    def fill_default_labels(cls, v: dict[str, str]) -> dict[str, str]:
        return {"before": "Before", "after": "After", **v}

    @field_validator("viewport")
    @classmethod
    def known_preset(cls, v: ViewportConfig) -> ViewportConfig:
        if isinstance(v, str) and v not in VIEWPORT_PRESETS:
            raise ValueError(
                f"Unknown viewport preset '{v}' (expected one of: {', '.join(VIEWPORT_PRESETS)})"
            )
        return v

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir).expanduser()

    def resolved_upload_url(self, override: Optional[str] = None) -> str:
        """Pick the upload destination: explicit override, env, config, default."""
        return (
            override
            or os.environ.get(UPLOAD_URL_ENV)
            or self.upload_url
            or DEFAULT_UPLOAD_URL
        )

    @classmethod
    def from_env(cls, **overrides) -> "ToolConfig":
        """Build a config with the upload endpoint taken from UPLOAD_URL when set."""
        env_url = os.environ.get(UPLOAD_URL_ENV)
        if env_url:
            overrides["upload_url"] = env_url
        return cls(**overrides)

    @classmethod
    def load(cls, path: str | Path) -> "ToolConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
