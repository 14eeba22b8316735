"""Factories that create ready-to-use components with fixed settings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from imgdedup.average_hash import AverageHasher
from imgdedup.dct_hash import DctHasher
from imgdedup.hash_configs import AverageConfig, DctConfig
from imgdedup.image_loader import StandardImageLoader

T = TypeVar("T")


class ComponentCreationError(RuntimeError):
    """Raised when a factory cannot build its component."""


class ComponentFactory(ABC, Generic[T]):
    """Builds one kind of component."""

    product: ClassVar[type]
    _description: ClassVar[str]

    @abstractmethod
    def create(self) -> T:
        """Build the component."""

    def try_create(self) -> T:
        """Build the component, raising ComponentCreationError on failure."""
        return self.create()

    def type_name(self) -> str:
        return f"{self.product.__module__}.{self.product.__qualname__}"

    def description(self) -> str:
        return self._description


class StandardImageLoaderFactory(ComponentFactory[StandardImageLoader]):
    """Creates the standard image loader."""

    product = StandardImageLoader
    _description = "標準画像ローダー - サイズ制限付き"

    def create(self) -> StandardImageLoader:
        return StandardImageLoader()


@dataclass(frozen=True)
class AverageHashFactory(ComponentFactory[AverageHasher]):
    """Creates an average hasher of a fixed size."""

    size: int = 8

    product: ClassVar[type] = AverageHasher
    _description: ClassVar[str] = "平均ハッシュアルゴリズム"

    def create(self) -> AverageHasher:
        return AverageConfig(size=self.size).create_hasher()

    def try_create(self) -> AverageHasher:
        try:
            return AverageConfig(size=self.size).create_hasher()
        except Exception as exc:
            raise ComponentCreationError(
                f"Failed to create AverageHasher with size {self.size}: {exc}"
            ) from exc


@dataclass(frozen=True)
class DctHashFactory(ComponentFactory[DctHasher]):
    """Creates a DCT hasher of a fixed size with full quality."""

    size: int = 8

    product: ClassVar[type] = DctHasher
    _description: ClassVar[str] = "DCTハッシュアルゴリズム"

    def create(self) -> DctHasher:
        return DctConfig(size=self.size, quality_factor=1.0).create_hasher()

    def try_create(self) -> DctHasher:
        try:
            return DctConfig(size=self.size, quality_factor=1.0).create_hasher()
        except Exception as exc:
            raise ComponentCreationError(
                f"Failed to create DctHasher with size {self.size}: {exc}"
            ) from exc