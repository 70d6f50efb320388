"""Markdown comparison table for PR comments, from image paths or bytes."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from before_after.models.capture import FromImagesResult

logger = logging.getLogger(__name__)

ImageInput = Union[bytes, str, os.PathLike]

DEFAULT_LABELS = {"before": "Before", "after": "After"}


def generate_markdown(before_label: str, after_label: str, before_ref: str, after_ref: str) -> str:
    """Render the two-column before/after table (header, alignment, image row)."""
    return (
        f"| {before_label} | {after_label} |\n"
        "|:------:|:-----:|\n"
        f"| ![{before_label}]({before_ref}) | ![{after_label}]({after_ref}) |"
    )


def _load_image(image: ImageInput, placeholder: str) -> tuple[bytes, str]:
    """Return (bytes, markdown reference) for one input.

    Raw bytes are returned as-is with a placeholder reference; paths are
    read relative to the working directory and referenced as given.
    """
    if isinstance(image, (bytes, bytearray, memoryview)):
        return image, placeholder
    path = Path(image)
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")
    logger.debug("Reading image %s", path.resolve())
    return path.read_bytes(), os.fspath(image)


def from_images(
    before: ImageInput,
    after: ImageInput,
    labels: Optional[dict[str, str]] = None,
) -> FromImagesResult:
    """Build a comparison table from existing images."""
    labels = {**DEFAULT_LABELS, **(labels or {})}
    before_image, before_ref = _load_image(before, "before.png")
    after_image, after_ref = _load_image(after, "after.png")
    markdown = generate_markdown(labels["before"], labels["after"], before_ref, after_ref)
    return FromImagesResult(markdown=markdown, before_image=before_image, after_image=after_image)
