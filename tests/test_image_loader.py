import copy
import io

import pytest
from PIL import Image

from imgdedup.image_loader import (
    ImageLoadError,
    ImageLoaderBackend,
    LoadResult,
    StandardImageLoader,
)


def _png_bytes(width, height):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height)).save(buffer, format="PNG")
    return buffer.getvalue()


def _save_png(path, width, height):
    Image.new("RGB", (width, height)).save(path)
    return path


class _FakeLoader(ImageLoaderBackend):
    def __init__(self, result):
        self.result = result
        self.calls = []

    def load_from_bytes(self, data):
        self.calls.append(data)
        return self.result

    def load_from_path(self, path):
        return self.result

    def load_with_format(self, data, image_format):
        return self.load_from_bytes(data)

    def strategy_name(self):
        return "test"


class _WideLoader(_FakeLoader):
    def estimate_memory_usage(self, width, height):
        return width * height * 8


def _tiny_result():
    return LoadResult(
        image=Image.new("RGB", (1, 1)),
        original_dimensions=(1, 1),
        was_resized=False,
        load_time_ms=10,
    )


def test_load_result_creation():
    result = LoadResult(
        image=Image.new("RGB", (100, 100)),
        original_dimensions=(200, 150),
        was_resized=True,
        load_time_ms=50,
    )
    assert result.original_dimensions == (200, 150)
    assert result.was_resized
    assert result.load_time_ms == 50
    assert result.image.width == 100
    assert result.image.height == 100


def test_load_result_repr():
    result = LoadResult(
        image=Image.new("RGB", (50, 50)),
        original_dimensions=(100, 100),
        was_resized=False,
        load_time_ms=25,
    )
    text = repr(result)
    assert "100" in text
    assert "25" in text


def test_load_result_copy():
    original = LoadResult(
        image=Image.new("RGB", (25, 25)),
        original_dimensions=(50, 50),
        was_resized=True,
        load_time_ms=10,
    )
    cloned = copy.copy(original)
    assert cloned.original_dimensions == original.original_dimensions
    assert cloned.was_resized == original.was_resized
    assert cloned.load_time_ms == original.load_time_ms
    assert cloned.image.size == original.image.size


def test_custom_backend_delegates():
    expected = LoadResult(
        image=Image.new("RGB", (32, 32)),
        original_dimensions=(64, 64),
        was_resized=True,
        load_time_ms=15,
    )
    loader = _FakeLoader(expected)
    result = loader.load_with_format(b"test_data", "PNG")
    assert loader.calls == [b"test_data"]
    assert result.original_dimensions == (64, 64)
    assert result.was_resized
    assert result.load_time_ms == 15
    assert loader.strategy_name() == "test"


def test_default_memory_estimation():
    loader = _FakeLoader(_tiny_result())
    assert loader.estimate_memory_usage(100, 100) == 40000
    assert loader.estimate_memory_usage(1920, 1080) == 8294400
    assert loader.max_supported_pixels() is None


def test_overridden_memory_estimation():
    loader = _WideLoader(_tiny_result())
    assert loader.estimate_memory_usage(1000, 1000) == 8000000


def test_load_from_path(tmp_path):
    path = _save_png(tmp_path / "test.png", 100, 100)
    loader = StandardImageLoader()
    result = loader.load_from_path(path)
    assert result.original_dimensions == (100, 100)
    assert not result.was_resized
    assert result.image.size == (100, 100)
    assert loader.strategy_name() == "Standard"


def test_load_with_resize(tmp_path):
    path = _save_png(tmp_path / "large_test.png", 300, 200)
    loader = StandardImageLoader(150)
    result = loader.load_from_path(path)
    assert result.original_dimensions == (300, 200)
    assert result.was_resized
    assert result.image.width <= 150
    assert result.image.height <= 150
    assert result.image.size == (150, 100)
    assert loader.strategy_name() == "Standard with size limit"


def test_small_image_not_resized_with_limit():
    loader = StandardImageLoader(150)
    result = loader.load_from_bytes(_png_bytes(100, 40))
    assert not result.was_resized
    assert result.image.size == (100, 40)


def test_load_from_bytes():
    loader = StandardImageLoader()
    result = loader.load_from_bytes(_png_bytes(10, 10))
    assert result.original_dimensions == (10, 10)
    assert not result.was_resized


def test_load_from_invalid_bytes():
    loader = StandardImageLoader()
    with pytest.raises(ImageLoadError):
        loader.load_from_bytes(b"this is not an image")


def test_load_from_nonexistent_path(tmp_path):
    loader = StandardImageLoader()
    with pytest.raises(ImageLoadError, match="Failed to load image from path"):
        loader.load_from_path(tmp_path / "nonexistent" / "image.png")


def test_load_with_invalid_format():
    loader = StandardImageLoader()
    with pytest.raises(ImageLoadError):
        loader.load_with_format(b"invalid image data", "PNG")


def test_load_with_unknown_format_name():
    loader = StandardImageLoader()
    with pytest.raises(ImageLoadError, match="unsupported format"):
        loader.load_with_format(_png_bytes(4, 4), "NOT_A_FORMAT")


def test_load_with_wrong_format():
    loader = StandardImageLoader()
    with pytest.raises(ImageLoadError):
        loader.load_with_format(_png_bytes(4, 4), "JPEG")


def test_max_supported_pixels():
    assert StandardImageLoader().max_supported_pixels() is None
    assert StandardImageLoader(100).max_supported_pixels() == 10000


def test_estimate_memory_usage():
    assert StandardImageLoader().estimate_memory_usage(100, 100) == 100 * 100 * 8
    assert StandardImageLoader(50).estimate_memory_usage(100, 100) == 50 * 50 * 8


def test_load_with_format_success():
    loader = StandardImageLoader()
    result = loader.load_with_format(_png_bytes(20, 20), "PNG")
    assert result.original_dimensions == (20, 20)
    assert result.load_time_ms >= 0


def test_load_with_format_is_case_insensitive():
    loader = StandardImageLoader()
    result = loader.load_with_format(_png_bytes(7, 3), "png")
    assert result.original_dimensions == (7, 3)