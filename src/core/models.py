"""
Value types shared by the workflow components.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_MODEL_FORMAT = "glb"
DEFAULT_MODEL_FILENAME = f"model.{DEFAULT_MODEL_FORMAT}"


@dataclass(frozen=True)
class SelectedImage:
    """
    The image chosen by the user.

    Instances are never mutated; a new selection creates a new instance.
    """

    data: bytes = field(repr=False)
    mime_type: str
    name: str
    source_path: Path | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path, mime_type: str) -> SelectedImage:
        """Read an image file from disk."""
        return cls(data=path.read_bytes(), mime_type=mime_type, name=path.name, source_path=path)


@dataclass(frozen=True)
class ConversionResult:
    """
    Successful outcome of a single conversion attempt.

    Failures are raised as errors instead of being returned.
    """

    data: bytes = field(repr=False)
    media_type: str
    suggested_filename: str = DEFAULT_MODEL_FILENAME

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class SaveRequest:
    """A client-side save of in-memory bytes under a filename."""

    filename: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class Notice:
    """A transient user-visible message."""

    level: str  # 'info', 'success', 'warning', 'error'
    title: str
    message: str
