"""Core perceptual hash types: algorithms, hash results and the backend interface."""

from __future__ import annotations

import base64
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass

from PIL import Image


class HashKind(enum.Enum):
    """Family of perceptual hash algorithm."""

    DCT = "DCT"
    AVERAGE = "Average"
    DIFFERENCE = "Difference"


@dataclass(frozen=True)
class HashAlgorithm:
    """A hash algorithm together with its hash size."""

    kind: HashKind
    size: int

    @classmethod
    def dct(cls, size: int) -> HashAlgorithm:
        return cls(HashKind.DCT, size)

    @classmethod
    def average(cls, size: int) -> HashAlgorithm:
        return cls(HashKind.AVERAGE, size)

    @classmethod
    def difference(cls, size: int) -> HashAlgorithm:
        return cls(HashKind.DIFFERENCE, size)

    def __str__(self) -> str:
        return f"{self.kind.value} {{ size: {self.size} }}"


class HashComparisonError(ValueError):
    """Raised when two hashes cannot be compared."""


@dataclass(frozen=True)
class HashResult:
    """The outcome of hashing one image."""

    hash_data: bytes
    hash_size_bits: int
    algorithm: HashAlgorithm
    computation_time_ms: int
    source_dimensions: tuple[int, int]

    def to_base64(self) -> str:
        return base64.b64encode(self.hash_data).decode("ascii")

    def to_hex(self) -> str:
        return self.hash_data.hex()

    def to_bits(self) -> str:
        return "".join(f"{byte:08b}" for byte in self.hash_data)

    def to_u64(self) -> int:
        """The first eight bytes as a big-endian integer, zero padded on the right."""
        return int.from_bytes(self.hash_data[:8].ljust(8, b"\0"), "big")

    def __str__(self) -> str:
        return (
            f"Hash({self.algorithm}, {self.hash_size_bits} bits, "
            f"{self.computation_time_ms}ms): {self.to_hex()}"
        )


class PerceptualHashBackend(ABC):
    """Interface shared by all perceptual hash implementations."""

    @abstractmethod
    def generate_hash(self, image: Image.Image) -> HashResult:
        """Compute the hash of an image."""

    def calculate_distance(self, hash1: HashResult, hash2: HashResult) -> int:
        """Hamming distance between two hashes of the same algorithm and size."""
        if hash1.algorithm != hash2.algorithm:
            raise HashComparisonError("Cannot compare hashes from different algorithms")
        if len(hash1.hash_data) != len(hash2.hash_data):
            raise HashComparisonError("Cannot compare hashes of different sizes")
        return sum((a ^ b).bit_count() for a, b in zip(hash1.hash_data, hash2.hash_data))

    def are_similar(self, hash1: HashResult, hash2: HashResult, threshold: int) -> bool:
        return self.calculate_distance(hash1, hash2) <= threshold

    @property
    @abstractmethod
    def algorithm(self) -> HashAlgorithm:
        """The algorithm this backend uses."""

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Human-readable algorithm name."""

    def recommended_threshold(self) -> int:
        algorithm = self.algorithm
        divisor = {
            HashKind.DCT: 4,
            HashKind.AVERAGE: 8,
            HashKind.DIFFERENCE: 6,
        }[algorithm.kind]
        return algorithm.size // divisor

    def computational_complexity(self) -> int:
        """Relative cost on a 1-10 scale, 10 being the heaviest."""
        return {
            HashKind.AVERAGE: 2,
            HashKind.DIFFERENCE: 3,
            HashKind.DCT: 7,
        }[self.algorithm.kind]


@dataclass(frozen=True)
class ComparisonResult:
    """The outcome of comparing two hashes."""

    distance: int
    similarity_percentage: float
    is_similar: bool
    threshold_used: int
    algorithm: HashAlgorithm

    @classmethod
    def from_distance(
        cls,
        distance: int,
        threshold: int,
        algorithm: HashAlgorithm,
        hash_size_bits: int,
    ) -> ComparisonResult:
        if hash_size_bits == 0:
            similarity = 0.0
        else:
            similarity = max(0.0, 100.0 * (1.0 - distance / hash_size_bits))
        return cls(
            distance=distance,
            similarity_percentage=similarity,
            is_similar=distance <= threshold,
            threshold_used=threshold,
            algorithm=algorithm,
        )