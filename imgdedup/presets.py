"""Preset settings bundles that pick a hash algorithm and processing limits."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from imgdedup.average_hash import AverageHasher
from imgdedup.dct_hash import DctHasher
from imgdedup.hash_configs import AverageConfig, DctConfig
from imgdedup.hashing import PerceptualHashBackend


@dataclass(frozen=True)
class BuilderSettings:
    """Settings for assembling a processing pipeline, with range checks."""

    image_size_limit: int = 1024
    hash_size: int = 8
    concurrent_tasks: int = 4
    buffer_size: int = 100
    batch_size: int = 50
    quiet_mode: bool = False

    def is_valid(self) -> bool:
        """True when every setting lies within its permitted range."""
        return (
            self.image_size_limit > 0
            and 4 <= self.hash_size <= 256
            and 0 < self.concurrent_tasks <= 1024
            and 0 < self.buffer_size <= 100_000
            and 0 < self.batch_size <= 10_000
        )

    def description(self) -> str:
        verbosity = "Quiet" if self.quiet_mode else "Verbose"
        precision = "high-precision" if self.hash_size >= 16 else "fast"
        return f"{verbosity} {precision} configuration"


@dataclass(frozen=True)
class PresetConfig(ABC):
    """A named bundle of limits together with the hasher it uses."""

    quiet_mode: ClassVar[bool]

    image_size_limit: int = 1024
    hash_size: int = 8
    concurrent_tasks: int = 4
    buffer_size: int = 100
    batch_size: int = 50

    @abstractmethod
    def create_perceptual_hash(self) -> PerceptualHashBackend:
        """Build the hasher this preset uses."""

    def builder_settings(self) -> BuilderSettings:
        """The preset expressed as builder settings."""
        return BuilderSettings(
            image_size_limit=self.image_size_limit,
            hash_size=self.hash_size,
            concurrent_tasks=self.concurrent_tasks,
            buffer_size=self.buffer_size,
            batch_size=self.batch_size,
            quiet_mode=self.quiet_mode,
        )


@dataclass(frozen=True)
class HighPrecisionConfig(PresetConfig):
    """DCT hashing with progress reporting enabled."""

    quiet_mode: ClassVar[bool] = False

    image_size_limit: int = 2048
    hash_size: int = 32
    concurrent_tasks: int = 8
    buffer_size: int = 500
    batch_size: int = 100

    def create_perceptual_hash(self) -> DctHasher:
        return DctConfig(size=self.hash_size, quality_factor=1.0).create_hasher()


@dataclass(frozen=True)
class FastConfig(PresetConfig):
    """Average hashing with progress reporting silenced."""

    quiet_mode: ClassVar[bool] = True

    image_size_limit: int = 1024
    hash_size: int = 8
    concurrent_tasks: int = 16
    buffer_size: int = 1000
    batch_size: int = 200

    def create_perceptual_hash(self) -> AverageHasher:
        return AverageConfig(size=self.hash_size).create_hasher()