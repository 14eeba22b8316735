"""Configurations for the average, DCT and difference hash algorithms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from imgdedup.algorithm_config import (
    AlgorithmConfig,
    ConfigError,
    ParameterInfo,
    ParameterKind,
)
from imgdedup.average_hash import AverageHasher, DifferenceHasher
from imgdedup.dct_hash import DctHasher

_MAX_SIZE = 64


def _size_parameter() -> ParameterInfo:
    return ParameterInfo(
        name="size",
        kind=ParameterKind.INTEGER,
        description="Hash size (typically 8, 16, or 32)",
        default_value="8",
        required=True,
        minimum=1,
        maximum=_MAX_SIZE,
    )


def _validate_size(size: int) -> None:
    if size == 0:
        raise ConfigError("Size must be greater than 0")
    if size > _MAX_SIZE:
        raise ConfigError("Size must be 64 or less for performance reasons")


@dataclass
class AverageConfig(AlgorithmConfig):
    """Settings for the average hash."""

    algorithm_name: ClassVar[str] = "average"
    description: ClassVar[str] = (
        "Average Hash - Fast algorithm based on average pixel brightness. "
        "Good for basic duplicate detection."
    )

    size: int = field(default=8, metadata={"required": True})

    def create_hasher(self) -> AverageHasher:
        return AverageHasher(self.size)

    def validate(self) -> None:
        _validate_size(self.size)

    @classmethod
    def parameter_info(cls) -> list[ParameterInfo]:
        return [_size_parameter()]


@dataclass
class DctConfig(AlgorithmConfig):
    """Settings for the DCT hash."""

    algorithm_name: ClassVar[str] = "dct"
    description: ClassVar[str] = (
        "DCT (Discrete Cosine Transform) based perceptual hash. "
        "High accuracy but computationally expensive."
    )

    size: int = field(default=8, metadata={"required": True})
    quality_factor: float = 1.0

    def create_hasher(self) -> DctHasher:
        return DctHasher(self.size, self.quality_factor)

    def validate(self) -> None:
        _validate_size(self.size)
        if not 0.0 < self.quality_factor <= 1.0:
            raise ConfigError("Quality factor must be between 0.0 and 1.0")

    @classmethod
    def parameter_info(cls) -> list[ParameterInfo]:
        return [
            _size_parameter(),
            ParameterInfo(
                name="quality_factor",
                kind=ParameterKind.FLOAT,
                description="Quality factor for hash generation (0.0-1.0)",
                default_value="1.0",
                required=False,
                minimum=0.0,
                maximum=1.0,
            ),
        ]


@dataclass
class DifferenceConfig(AlgorithmConfig):
    """Settings for the difference hash."""

    algorithm_name: ClassVar[str] = "difference"
    description: ClassVar[str] = (
        "Difference Hash - Based on adjacent pixel differences. "
        "Good for detecting structural changes and edge patterns."
    )

    size: int = field(default=8, metadata={"required": True})

    def create_hasher(self) -> DifferenceHasher:
        return DifferenceHasher(self.size)

    def validate(self) -> None:
        _validate_size(self.size)

    @classmethod
    def parameter_info(cls) -> list[ParameterInfo]:
        return [_size_parameter()]