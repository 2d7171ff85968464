"""
Image file validation and QMimeData parsing utilities.

This module provides reusable functions for validating image files and
extracting file paths from QMimeData objects in drag-and-drop operations.
"""

from pathlib import Path
from urllib.parse import unquote

from PySide6.QtCore import QMimeData, QMimeDatabase
from PySide6.QtGui import QImageReader

from .errors import UnsupportedTypeError
from .models import SelectedImage

IMAGE_MIME_PREFIX = "image/"


def extract_local_paths_from_mimedata(mime: QMimeData) -> list[Path]:
    """
    Extract local file paths from QMimeData object.

    Handles URL decoding, deduplication, and filters out non-local URLs and directories.

    Args:
        mime: QMimeData object from drag-and-drop operation

    Returns:
        List of unique local file paths

    Raises:
        ValueError: If mime data doesn't contain URLs
    """
    if not mime.hasUrls():
        raise ValueError("QMimeData does not contain URLs")

    paths = []
    seen_paths = set()

    for url in mime.urls():
        if not url.isLocalFile():
            continue

        try:
            local_path = unquote(url.toLocalFile())
            path = Path(local_path).resolve()

            if path.is_dir() or not path.exists():
                continue

            path_str = str(path)
            if path_str not in seen_paths:
                seen_paths.add(path_str)
                paths.append(path)

        except (OSError, ValueError):
            # Skip paths that can't be resolved or are invalid
            continue

    return paths


def declared_mime_type(path: Path) -> str:
    """
    Return the MIME type declared by a file's name.

    Only the extension is consulted, the same way a browser fills in
    ``File.type``; the file content is not sniffed.
    """
    mime_db = QMimeDatabase()
    return mime_db.mimeTypeForFile(str(path), QMimeDatabase.MatchMode.MatchExtension).name()


def is_image_mime_type(mime_type: str) -> bool:
    return mime_type.lower().startswith(IMAGE_MIME_PREFIX)


def is_image_file(path: Path) -> bool:
    """
    Check if a file is an image based on its declared MIME type.

    Args:
        path: Path to the file to check

    Returns:
        True if the file exists and declares an image type, False otherwise
    """
    if not path.exists() or not path.is_file():
        return False
    return is_image_mime_type(declared_mime_type(path))


def validate_single_image_source(paths: list[Path]) -> tuple[Path | None, str | None]:
    """
    Validate that exactly one image file is provided.

    Args:
        paths: List of file paths to validate

    Returns:
        Tuple of (valid_image_path, error_message).
        If validation succeeds: (Path, None)
        If validation fails: (None, error_message)
    """
    if not paths:
        return None, "No files provided"

    if len(paths) > 1:
        return None, f"Multiple files provided ({len(paths)}). Please select only one image."

    path = paths[0]

    if not is_image_file(path):
        file_type = path.suffix.lower() if path.suffix else "unknown type"
        return None, f"File is not an image (detected: {file_type}). Please select an image file."

    return path, None


def load_selected_image(path: Path) -> SelectedImage:
    """
    Read an image file into a SelectedImage.

    Raises:
        UnsupportedTypeError: If the file does not declare an image type
        OSError: If the file cannot be read
    """
    mime_type = declared_mime_type(path)
    if not is_image_mime_type(mime_type):
        raise UnsupportedTypeError(
            f"{path.name} is not an image. Supported formats: JPG, PNG, WEBP",
            mime_type=mime_type,
        )
    return SelectedImage.from_path(path, mime_type)


def image_file_filter() -> str:
    """Build a QFileDialog name filter listing the image formats Qt can read."""
    extensions = sorted({fmt.data().decode("ascii").lower() for fmt in QImageReader.supportedImageFormats()})
    patterns = " ".join(f"*.{ext}" for ext in extensions) or "*.jpg *.jpeg *.png *.webp"
    return f"Images ({patterns});;All Files (*)"
