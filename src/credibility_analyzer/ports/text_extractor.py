"""
TextExtractor Port
==================

Abstract interface for optical text extraction from images.
The OCR engine itself is an external collaborator.
"""

from __future__ import annotations

import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path

from credibility_analyzer.domain.errors import InvalidInputError

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024


def validate_image_file(path: Path, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES) -> Path:
    """
    Check that path points to an image of acceptable size.

    Raises:
        InvalidInputError: For a missing file, a non-image MIME type,
            or a file above max_bytes.
    """
    if not path.is_file():
        raise InvalidInputError(f"Image file not found: {path.name}")

    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type is None or not mime_type.startswith("image/"):
        raise InvalidInputError(f"Unsupported file type for {path.name}; please select an image.")

    size = path.stat().st_size
    if size > max_bytes:
        raise InvalidInputError(
            f"Image is too large ({size} bytes); the limit is {max_bytes} bytes."
        )
    return path


class TextExtractor(ABC):
    """Port for extracting text from an image file."""

    @abstractmethod
    async def extract_text(self, image: Path) -> str:
        """
        Extract text from an image.

        Args:
            image: Path to a validated image file.

        Returns:
            Extracted text (may be empty).

        Raises:
            InvalidInputError: If the image cannot be processed.
        """
        ...
