"""Capture request/result data structures."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ViewportSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)


VIEWPORT_PRESETS: Mapping[str, ViewportSize] = MappingProxyType({
    "desktop": ViewportSize(width=1280, height=800),
    "tablet": ViewportSize(width=768, height=1024),
    "mobile": ViewportSize(width=375, height=812),
})

# Preset name or explicit dimensions
ViewportConfig = Union[str, ViewportSize]


class CaptureRequest(BaseModel):
    """A single page (or element) to capture."""
    model_config = ConfigDict(frozen=True)

    url: str
    selector: Optional[str] = None
    viewport: Optional[ViewportConfig] = None
    full_page: bool = False


class BeforeAfterRequest(BaseModel):
    """Two capture requests plus a viewport shared by both sides.

    Either side may be given as a bare URL string; it is normalized to a
    ``CaptureRequest`` here so nothing downstream has to check.
    """

    before: CaptureRequest
    after: CaptureRequest
    viewport: Optional[ViewportConfig] = None

    @field_validator("before", "after", mode="before")
    @classmethod
    def expand_url_shorthand(cls, v):
        if isinstance(v, str):
            return {"url": v}
        return v


@dataclass(frozen=True)
class CaptureResult:
    image: bytes
    viewport: ViewportSize
    url: str
    selector: Optional[str] = None
    full_page: bool = False


@dataclass(frozen=True)
class BeforeAfterResult:
    before: CaptureResult
    after: CaptureResult


@dataclass(frozen=True)
class FromImagesResult:
    markdown: str
    before_image: bytes
    after_image: bytes
