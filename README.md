# imgdedup

This package computes perceptual hashes of images. You compare two hashes by Hamming distance, and a small distance means the images look alike.

It uses Pillow and NumPy. Every call is synchronous.

## Installation

```
pip install .
```

To also get the test dependency (pytest):

```
pip install ".[test]"
```

## Hash algorithms

Each hasher takes a Pillow `Image` and returns a `HashResult`. Every hasher implements `imgdedup.hashing.PerceptualHashBackend`.

| Class | Module | How it works |
|---|---|---|
| `AverageHasher(size=8)` | `imgdedup.average_hash` | Shrinks the image to `size`×`size` greyscale. A bit is set for each pixel brighter than the integer mean. |
| `DifferenceHasher(size=8)` | `imgdedup.average_hash` | Shrinks the image to (`size`+1)×`size` greyscale. A bit is set where a pixel is brighter than its right-hand neighbour. |
| `DctHasher(size=8, quality_factor=1.0)` | `imgdedup.dct_hash` | Shrinks the image to a 2·`size` square and takes its 2-D DCT. The top-left `size`×`size` coefficients are compared with their mean. `quality_factor` is stored on the hasher but does not change the hash. |

```python
from PIL import Image

from imgdedup.dct_hash import DctHasher

hasher = DctHasher(8, 1.0)
first = hasher.generate_hash(Image.open("a.png"))
second = hasher.generate_hash(Image.open("b.png"))

print(first)                 # Hash(DCT { size: 8 }, 64 bits, 0ms): ...
print(first.to_hex())
print(hasher.calculate_distance(first, second))
print(hasher.are_similar(first, second, hasher.recommended_threshold()))
```

Every backend also provides:

- `algorithm`: a `HashAlgorithm`, which holds a `HashKind` and a size.
- `algorithm_name`: the algorithm's name as text.
- `recommended_threshold()`: the size divided by 4 for DCT, by 8 for average and by 6 for difference.
- `computational_complexity()`: 7 for DCT, 2 for average and 3 for difference.

## Hash results

`HashResult` is a frozen dataclass. It holds the raw `hash_data` bytes, `hash_size_bits`, the `algorithm`, `computation_time_ms` and the `source_dimensions` of the image. It can render the hash in four forms:

- `to_hex()`: the hash as hex.
- `to_base64()`: the hash as standard Base64.
- `to_bits()`: the hash as a string of `0` and `1`.
- `to_u64()`: the first eight bytes as a big-endian integer, padded with zeros on the right.

`calculate_distance` counts the bits that differ between two hashes. Both hashes must come from the same algorithm with the same size. Any other pair raises `HashComparisonError`, which is a subclass of `ValueError`.

`ComparisonResult.from_distance(distance, threshold, algorithm, hash_size_bits)` builds a result from a distance. The result holds the similarity percentage, which never goes below 0, and sets `is_similar` to `distance <= threshold`.

## Configurations

`imgdedup.hash_configs` defines three dataclass configurations: `AverageConfig`, `DifferenceConfig` and `DctConfig`. Each one has:

- `algorithm_name`: one of `"average"`, `"difference"` or `"dct"`.
- `description`
- `create_hasher()`
- `validate()`: raises `ConfigError` unless the size is between 1 and 64. For `DctConfig`, `quality_factor` must also be in (0, 1].
- `parameter_info()`: returns a list of `ParameterInfo`.
- `to_json()`, `from_json()`, `from_dict()` and `default_config()`.

Reading a configuration requires `size`. `quality_factor` is optional and defaults to `1.0`.

```python
from imgdedup.hash_configs import DctConfig

config = DctConfig.from_json('{"size": 16}')
config.validate()
hasher = config.create_hasher()
```

`imgdedup.algorithm_config` provides the base class `AlgorithmConfig`, plus `ConfigError`, `ParameterInfo` and `ParameterKind`. It also defines `DynamicAlgorithmConfig`, which pairs an algorithm name with its parameters.

`AlgorithmRegistry` maps algorithm names to configuration classes. Its hashers are built with validation. `create_default_registry()` returns an empty registry.

## Choosing an algorithm by name

`imgdedup.factory` offers these ways to build a hasher:

- `create_hasher(name)`: builds a hasher with default settings.
- `create_hasher_from_json(text)`: takes an object with `algorithm` and `parameters`. Parameters are validated.
- `create_hasher_from_config(config)`: takes a `DynamicAlgorithmConfig`. Parameters are validated.

Unknown names and bad parameters raise `ConfigError`.

```python
from imgdedup.factory import create_hasher, create_hasher_from_json, get_algorithm_factory

hasher = create_hasher("average")
hasher = create_hasher_from_json('{"algorithm": "dct", "parameters": {"size": 16}}')
print(get_algorithm_factory().available_algorithms())   # ['dct', 'average', 'difference']
```

## Loading images

`imgdedup.image_loader.StandardImageLoader(max_dimension=None)` decodes images in three ways:

- `load_from_bytes(data)`
- `load_from_path(path)`
- `load_with_format(data, "PNG")`

If `max_dimension` is set, any image larger than that is shrunk with Lanczos resampling, and the aspect ratio is kept.

Each call returns a `LoadResult` with these fields:

- `image`
- `original_dimensions`
- `was_resized`
- `load_time_ms`

Failures raise `ImageLoadError`, which is a subclass of `OSError`.

The loader also has `strategy_name()`, `max_supported_pixels()` and `estimate_memory_usage(width, height)`. For `estimate_memory_usage`, the dimensions are first capped at `max_dimension`, and the estimate is 8 bytes per pixel.

## Component factories and presets

`imgdedup.components` has small factories that build components with fixed settings:

- `StandardImageLoaderFactory()`
- `AverageHashFactory(size)`
- `DctHashFactory(size)`

Each factory has `create()`, `try_create()`, `type_name()` and `description()`. `try_create()` reports failures as `ComponentCreationError`.

`imgdedup.presets` has ready-made bundles of settings:

- `HighPrecisionConfig`: a DCT hasher, with `quiet_mode = False` and by default hash size 32.
- `FastConfig`: an average hasher, with `quiet_mode = True` and by default hash size 8.

Each preset builds its hasher with `create_perceptual_hash()`. It can be turned into `BuilderSettings` with `builder_settings()`. `BuilderSettings.is_valid()` checks each value's range, and `description()` names the kind of setup, for example `"Quiet fast configuration"`.

## What this package does not do

This package is a library only. It has:

- no command-line tool,
- no directory scanning,
- no hash database or other storage,
- no duplicate grouping,
- no concurrent processing pipeline,
- no progress reporting.

The concurrency, buffer, batch and quiet-mode values in the presets are plain settings. Nothing in the package acts on them.