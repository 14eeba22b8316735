"""DCT-based perceptual hash."""

from __future__ import annotations

import time
from functools import lru_cache

import numpy as np
from PIL import Image

from imgdedup.hashing import HashAlgorithm, HashResult, PerceptualHashBackend


@lru_cache(maxsize=None)
def _dct_matrix(n: int) -> np.ndarray:
    k = np.arange(n)[:, None]
    i = np.arange(n)[None, :]
    matrix = np.cos(np.pi * (2 * i + 1) * k / (2 * n))
    matrix[0] /= np.sqrt(2.0)
    matrix *= np.sqrt(2.0 / n)
    return matrix


class DctHasher(PerceptualHashBackend):
    """Hashes the low-frequency DCT coefficients against their mean."""

    def __init__(self, size: int = 8, quality_factor: float = 1.0) -> None:
        self._size = size
        self._quality_factor = quality_factor
        self._algorithm = HashAlgorithm.dct(size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def quality_factor(self) -> float:
        return self._quality_factor

    def generate_hash(self, image: Image.Image) -> HashResult:
        start = time.perf_counter()
        size = self._size
        side = size * 2
        gray = (
            image.convert("RGB")
            .resize((side, side), Image.Resampling.LANCZOS)
            .convert("L")
        )
        pixels = np.asarray(gray, dtype=np.float64)
        matrix = _dct_matrix(side)
        coefficients = (matrix @ pixels @ matrix.T)[:size, :size]
        bits = coefficients > coefficients.mean()
        hash_data = np.packbits(bits.ravel()).tobytes()
        return HashResult(
            hash_data=hash_data,
            hash_size_bits=size * size,
            algorithm=self._algorithm,
            computation_time_ms=int((time.perf_counter() - start) * 1000),
            source_dimensions=image.size,
        )

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def algorithm_name(self) -> str:
        return "DCT (Discrete Cosine Transform)"

    def __repr__(self) -> str:
        return f"DctHasher(size={self._size}, quality_factor={self._quality_factor})"