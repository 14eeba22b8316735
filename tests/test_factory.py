import pytest
from PIL import Image

from imgdedup.algorithm_config import ConfigError, DynamicAlgorithmConfig
from imgdedup.average_hash import AverageHasher, DifferenceHasher
from imgdedup.dct_hash import DctHasher
from imgdedup.factory import (
    AlgorithmFactory,
    create_hasher,
    create_hasher_from_config,
    create_hasher_from_json,
    get_algorithm_factory,
)


def test_algorithm_factory_creation():
    factory = AlgorithmFactory()
    algorithms = factory.available_algorithms()
    assert "dct" in algorithms
    assert "average" in algorithms
    assert "difference" in algorithms


@pytest.mark.parametrize(
    "name, expected_type",
    [("dct", DctHasher), ("average", AverageHasher), ("difference", DifferenceHasher)],
)
def test_create_hasher_by_name(name, expected_type):
    factory = AlgorithmFactory()
    hasher = factory.create_hasher_by_name(name)
    assert isinstance(hasher, expected_type)
    assert hasher.algorithm.size == 8


def test_create_hasher_by_unknown_name():
    factory = AlgorithmFactory()
    with pytest.raises(ConfigError, match="Unknown algorithm: unknown"):
        factory.create_hasher_by_name("unknown")


def test_create_hasher_from_config():
    factory = AlgorithmFactory()
    config = DynamicAlgorithmConfig("dct", {"size": 16, "quality_factor": 0.9})
    hasher = factory.create_hasher(config)
    assert isinstance(hasher, DctHasher)
    assert hasher.size == 16
    assert hasher.quality_factor == pytest.approx(0.9)


def test_create_hasher_from_config_unknown_algorithm():
    factory = AlgorithmFactory()
    with pytest.raises(ConfigError):
        factory.create_hasher(DynamicAlgorithmConfig("nope", {"size": 8}))


def test_create_hasher_from_config_invalid_size():
    factory = AlgorithmFactory()
    with pytest.raises(ConfigError):
        factory.create_hasher(DynamicAlgorithmConfig("average", {"size": 0}))


def test_create_hasher_from_json():
    factory = AlgorithmFactory()
    text = """{
        "algorithm": "average",
        "parameters": {
            "size": 8
        }
    }"""
    hasher = factory.create_hasher_from_json(text)
    assert isinstance(hasher, AverageHasher)
    assert hasher.size == 8


def test_create_hasher_from_malformed_json():
    factory = AlgorithmFactory()
    with pytest.raises(ConfigError):
        factory.create_hasher_from_json("{not json")


def test_create_hasher_from_json_missing_parameters():
    factory = AlgorithmFactory()
    with pytest.raises(ConfigError):
        factory.create_hasher_from_json('{"algorithm": "average"}')


def test_get_description():
    factory = AlgorithmFactory()
    assert factory.get_description("average").startswith("Average Hash")
    assert factory.get_description("missing") is None


def test_global_factory():
    factory = get_algorithm_factory()
    assert factory.available_algorithms()
    assert get_algorithm_factory() is factory


def test_convenience_functions():
    hasher1 = create_hasher("dct")
    assert isinstance(hasher1, DctHasher)

    text = """{
        "algorithm": "average",
        "parameters": {
            "size": 16
        }
    }"""
    hasher2 = create_hasher_from_json(text)
    assert isinstance(hasher2, AverageHasher)
    assert hasher2.size == 16

    hasher3 = create_hasher_from_config(DynamicAlgorithmConfig("difference", {"size": 8}))
    assert isinstance(hasher3, DifferenceHasher)
    assert hasher3.size == 8


def test_created_hasher_produces_hash():
    hasher = create_hasher("average")
    result = hasher.generate_hash(Image.new("RGB", (32, 32)))
    assert result.hash_size_bits == 64
    assert len(result.hash_data) == 8