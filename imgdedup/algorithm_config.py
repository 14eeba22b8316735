"""Configuration objects for perceptual hash algorithms and a registry to build them."""

from __future__ import annotations

import dataclasses
import enum
import json
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from imgdedup.hashing import PerceptualHashBackend

_U32_MAX = 2**32 - 1

_TYPE_NAMES: dict[str, type] = {"int": int, "float": float, "str": str, "bool": bool}

ConfigT = TypeVar("ConfigT", bound="AlgorithmConfig")


class ConfigError(ValueError):
    """Raised when an algorithm configuration is malformed or invalid."""


class ParameterKind(enum.Enum):
    """The type of a configuration parameter."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    PATH = "path"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ParameterInfo:
    """Describes one configuration parameter, e.g. for building a command line."""

    name: str
    kind: ParameterKind
    description: str
    default_value: str | None = None
    required: bool = False
    minimum: int | float | None = None
    maximum: int | float | None = None


def _field_type(fld: dataclasses.Field) -> Any:
    declared = fld.type
    if isinstance(declared, str):
        return _TYPE_NAMES.get(declared.strip())
    return declared


def _coerce(name: str, value: Any, expected: Any) -> Any:
    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"invalid type for `{name}`: expected an integer")
        if not 0 <= value <= _U32_MAX:
            raise ConfigError(f"invalid value for `{name}`: {value} is out of range")
        return value
    if expected is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"invalid type for `{name}`: expected a number")
        return float(value)
    if expected is str:
        if not isinstance(value, str):
            raise ConfigError(f"invalid type for `{name}`: expected a string")
        return value
    if expected is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"invalid type for `{name}`: expected a boolean")
        return value
    return value


class AlgorithmConfig(ABC):
    """Base for dataclass configurations that build a perceptual hasher.

    Subclasses are dataclasses; fields carrying ``metadata={"required": True}``
    must be present when a configuration is read from JSON or a mapping.
    """

    algorithm_name: ClassVar[str]
    description: ClassVar[str]

    @abstractmethod
    def create_hasher(self) -> PerceptualHashBackend:
        """Build the hasher this configuration describes."""

    @abstractmethod
    def validate(self) -> None:
        """Raise ConfigError if the configuration is not usable."""

    @classmethod
    @abstractmethod
    def parameter_info(cls) -> list[ParameterInfo]:
        """Describe the parameters this configuration accepts."""

    def to_json(self) -> str:
        return json.dumps(dataclasses.asdict(self), indent=2, ensure_ascii=False)  # type: ignore[call-overload]

    @classmethod
    def from_json(cls: type[ConfigT], text: str) -> ConfigT:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"JSON parse error: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls: type[ConfigT], data: Any) -> ConfigT:
        if not isinstance(data, Mapping):
            raise ConfigError(f"expected an object of parameters for {cls.__name__}")
        values: dict[str, Any] = {}
        for fld in dataclasses.fields(cls):  # type: ignore[arg-type]
            if fld.name not in data:
                if fld.metadata.get("required"):
                    raise ConfigError(f"missing field `{fld.name}`")
                continue
            values[fld.name] = _coerce(fld.name, data[fld.name], _field_type(fld))
        return cls(**values)

    @classmethod
    def default_config(cls: type[ConfigT]) -> ConfigT:
        return cls()


@dataclass
class DynamicAlgorithmConfig:
    """An algorithm chosen by name with its parameters kept as plain data."""

    algorithm: str
    parameters: dict[str, Any] = field(default_factory=dict)


_Creator = Callable[[Any], PerceptualHashBackend]


class AlgorithmRegistry:
    """Maps algorithm names to the configurations that build them."""

    def __init__(self) -> None:
        self._creators: dict[str, _Creator] = {}
        self._descriptions: dict[str, str] = {}
        self._parameter_infos: dict[str, list[ParameterInfo]] = {}

    def register(self, config_cls: type[AlgorithmConfig]) -> None:
        name = config_cls.algorithm_name

        def create(parameters: Any) -> PerceptualHashBackend:
            try:
                config = config_cls.from_dict(parameters)
            except ConfigError as exc:
                raise ConfigError(f"parameter parse error: {exc}") from exc
            config.validate()
            return config.create_hasher()

        self._creators[name] = create
        self._descriptions[name] = config_cls.description
        self._parameter_infos[name] = config_cls.parameter_info()

    def create_hasher(self, config: DynamicAlgorithmConfig) -> PerceptualHashBackend:
        try:
            creator = self._creators[config.algorithm]
        except KeyError:
            raise ConfigError(f"Unknown algorithm: {config.algorithm}") from None
        return creator(config.parameters)

    def available_algorithms(self) -> list[str]:
        return list(self._creators)

    def get_description(self, algorithm: str) -> str | None:
        return self._descriptions.get(algorithm)

    def get_parameter_info(self, algorithm: str) -> list[ParameterInfo] | None:
        return self._parameter_infos.get(algorithm)


def create_default_registry() -> AlgorithmRegistry:
    """An empty registry; algorithms are registered by the caller."""
    return AlgorithmRegistry()