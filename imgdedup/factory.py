"""Builds perceptual hashers from algorithm names, configurations or JSON."""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import cache
from typing import Any

from imgdedup.algorithm_config import (
    AlgorithmConfig,
    AlgorithmRegistry,
    ConfigError,
    DynamicAlgorithmConfig,
)
from imgdedup.hash_configs import AverageConfig, DctConfig, DifferenceConfig
from imgdedup.hashing import PerceptualHashBackend

_BUILTIN_CONFIGS: dict[str, type[AlgorithmConfig]] = {
    "dct": DctConfig,
    "average": AverageConfig,
    "difference": DifferenceConfig,
}


def _parse_dynamic_config(text: str) -> DynamicAlgorithmConfig:
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"JSON parse error: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError("JSON parse error: expected an object")
    if "algorithm" not in data:
        raise ConfigError("JSON parse error: missing field `algorithm`")
    if "parameters" not in data:
        raise ConfigError("JSON parse error: missing field `parameters`")
    algorithm = data["algorithm"]
    if not isinstance(algorithm, str):
        raise ConfigError("JSON parse error: `algorithm` must be a string")
    return DynamicAlgorithmConfig(algorithm=algorithm, parameters=data["parameters"])


class AlgorithmFactory:
    """Creates hashers for the built-in average, DCT and difference algorithms."""

    def __init__(self) -> None:
        self._registry = AlgorithmRegistry()
        for config_cls in _BUILTIN_CONFIGS.values():
            self._registry.register(config_cls)

    def create_hasher(self, config: DynamicAlgorithmConfig) -> PerceptualHashBackend:
        """Build a hasher from a named algorithm and its parameters."""
        return self._registry.create_hasher(config)

    def create_hasher_by_name(self, algorithm: str) -> PerceptualHashBackend:
        """Build a hasher with the default settings of the named algorithm."""
        try:
            config_cls = _BUILTIN_CONFIGS[algorithm]
        except KeyError:
            raise ConfigError(f"Unknown algorithm: {algorithm}") from None
        return config_cls.default_config().create_hasher()

    def available_algorithms(self) -> list[str]:
        return self._registry.available_algorithms()

    def get_description(self, algorithm: str) -> str | None:
        return self._registry.get_description(algorithm)

    def create_hasher_from_json(self, text: str) -> PerceptualHashBackend:
        """Build a hasher from a JSON object with `algorithm` and `parameters`."""
        return self.create_hasher(_parse_dynamic_config(text))


@cache
def get_algorithm_factory() -> AlgorithmFactory:
    """The shared factory, created on first use."""
    return AlgorithmFactory()


def create_hasher(algorithm: str) -> PerceptualHashBackend:
    return get_algorithm_factory().create_hasher_by_name(algorithm)


def create_hasher_from_json(text: str) -> PerceptualHashBackend:
    return get_algorithm_factory().create_hasher_from_json(text)


def create_hasher_from_config(config: DynamicAlgorithmConfig) -> PerceptualHashBackend:
    return get_algorithm_factory().create_hasher(config)