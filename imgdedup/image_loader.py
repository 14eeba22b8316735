"""Image loading backends that decode images and optionally shrink them."""

from __future__ import annotations

import io
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO

from PIL import Image


class ImageLoadError(OSError):
    """Raised when an image cannot be read or decoded."""


@dataclass
class LoadResult:
    """A decoded image together with information about how it was loaded."""

    image: Image.Image
    original_dimensions: tuple[int, int]
    was_resized: bool
    load_time_ms: int


class ImageLoaderBackend(ABC):
    """Interface shared by all image loading strategies."""

    @abstractmethod
    def load_from_bytes(self, data: bytes) -> LoadResult:
        """Decode an image held in memory, guessing its format."""

    @abstractmethod
    def load_from_path(self, path: str | os.PathLike[str]) -> LoadResult:
        """Decode the image stored at a path."""

    @abstractmethod
    def load_with_format(self, data: bytes, image_format: str) -> LoadResult:
        """Decode an image held in memory as the given format, e.g. "PNG"."""

    @abstractmethod
    def strategy_name(self) -> str:
        """Name of the loading strategy."""

    def max_supported_pixels(self) -> int | None:
        """Largest supported pixel count, or None when unlimited."""
        return None

    def estimate_memory_usage(self, width: int, height: int) -> int:
        """Estimated bytes needed for an RGBA8 image of the given size."""
        return width * height * 4


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _decode(source: str | os.PathLike[str] | BinaryIO, formats: list[str] | None = None) -> Image.Image:
    with Image.open(source, formats=formats) as img:
        img.load()
        return img.copy()


_DECODE_ERRORS = (OSError, ValueError, KeyError, SyntaxError, Image.DecompressionBombError)


class StandardImageLoader(ImageLoaderBackend):
    """Decodes images with Pillow, shrinking any larger than ``max_dimension``."""

    def __init__(self, max_dimension: int | None = None) -> None:
        self._max_dimension = max_dimension

    @property
    def max_dimension(self) -> int | None:
        return self._max_dimension

    def _resize_if_needed(self, image: Image.Image) -> tuple[Image.Image, bool]:
        max_dim = self._max_dimension
        if max_dim is None:
            return image, False
        width, height = image.size
        if width <= max_dim and height <= max_dim:
            return image, False
        ratio = max_dim / max(width, height)
        new_size = (max(1, int(width * ratio)), max(1, int(height * ratio)))
        return image.resize(new_size, Image.Resampling.LANCZOS), True

    def _finish(self, image: Image.Image, start: float) -> LoadResult:
        original = image.size
        final, was_resized = self._resize_if_needed(image)
        return LoadResult(
            image=final,
            original_dimensions=original,
            was_resized=was_resized,
            load_time_ms=_elapsed_ms(start),
        )

    def load_from_bytes(self, data: bytes) -> LoadResult:
        start = time.perf_counter()
        try:
            image = _decode(io.BytesIO(data))
        except _DECODE_ERRORS as exc:
            raise ImageLoadError(f"Failed to load image from memory: {exc}") from exc
        return self._finish(image, start)

    def load_from_path(self, path: str | os.PathLike[str]) -> LoadResult:
        start = time.perf_counter()
        try:
            image = _decode(path)
        except _DECODE_ERRORS as exc:
            raise ImageLoadError(
                f"Failed to load image from path: {os.fspath(path)}: {exc}"
            ) from exc
        return self._finish(image, start)

    def load_with_format(self, data: bytes, image_format: str) -> LoadResult:
        start = time.perf_counter()
        format_name = image_format.upper()
        Image.init()
        if format_name not in Image.OPEN:
            raise ImageLoadError(f"Failed to load image with format: {image_format}: unsupported format")
        try:
            image = _decode(io.BytesIO(data), [format_name])
        except _DECODE_ERRORS as exc:
            raise ImageLoadError(
                f"Failed to load image with format: {image_format}: {exc}"
            ) from exc
        return self._finish(image, start)

    def strategy_name(self) -> str:
        if self._max_dimension is not None:
            return "Standard with size limit"
        return "Standard"

    def max_supported_pixels(self) -> int | None:
        if self._max_dimension is None:
            return None
        return self._max_dimension * self._max_dimension

    def estimate_memory_usage(self, width: int, height: int) -> int:
        max_dim = self._max_dimension
        if max_dim is not None:
            width = min(width, max_dim)
            height = min(height, max_dim)
        # RGBA8 plus the same again as working space.
        return width * height * 4 * 2

    def __repr__(self) -> str:
        return f"StandardImageLoader(max_dimension={self._max_dimension})"