"""Average and difference perceptual hashes."""

from __future__ import annotations

import time

import numpy as np
from PIL import Image

from imgdedup.hashing import HashAlgorithm, HashResult, PerceptualHashBackend


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class AverageHasher(PerceptualHashBackend):
    """Sets a bit for every pixel brighter than the image's mean brightness."""

    def __init__(self, size: int = 8) -> None:
        self._size = size
        self._algorithm = HashAlgorithm.average(size)

    @property
    def size(self) -> int:
        return self._size

    def generate_hash(self, image: Image.Image) -> HashResult:
        start = time.perf_counter()
        size = self._size
        gray = image.resize((size, size), Image.Resampling.LANCZOS).convert("L")
        pixels = np.asarray(gray, dtype=np.uint32)
        average = int(pixels.sum()) // (size * size)
        hash_data = np.packbits(pixels > average).tobytes()
        return HashResult(
            hash_data=hash_data,
            hash_size_bits=size * size,
            algorithm=self._algorithm,
            computation_time_ms=_elapsed_ms(start),
            source_dimensions=image.size,
        )

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def algorithm_name(self) -> str:
        return "Average Hash"

    def __repr__(self) -> str:
        return f"AverageHasher(size={self._size})"


class DifferenceHasher(PerceptualHashBackend):
    """Sets a bit wherever a pixel is brighter than its right-hand neighbour."""

    def __init__(self, size: int = 8) -> None:
        self._size = size
        self._algorithm = HashAlgorithm.difference(size)

    @property
    def size(self) -> int:
        return self._size

    def generate_hash(self, image: Image.Image) -> HashResult:
        start = time.perf_counter()
        size = self._size
        gray = image.resize((size + 1, size), Image.Resampling.LANCZOS).convert("L")
        pixels = np.asarray(gray, dtype=np.int32)
        bits = pixels[:, :-1] > pixels[:, 1:]
        hash_data = np.packbits(bits.ravel()).tobytes()
        return HashResult(
            hash_data=hash_data,
            hash_size_bits=size * size,
            algorithm=self._algorithm,
            computation_time_ms=_elapsed_ms(start),
            source_dimensions=image.size,
        )

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def algorithm_name(self) -> str:
        return "Difference Hash"

    def __repr__(self) -> str:
        return f"DifferenceHasher(size={self._size})"