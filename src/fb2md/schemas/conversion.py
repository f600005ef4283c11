"""Conversion output model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Final conversion output."""

    summary: str
    sections_tree: str
    content: str
    output_path: str | None = None
    image_paths: list[str] = Field(default_factory=list)
