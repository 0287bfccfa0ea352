# src/txbench/generators/__init__.py
"""Random generators for key choice, operation choice and transaction length."""

from txbench.generators.base import IntegerGenerator, fnv_hash64
from txbench.generators.discrete import DiscreteGenerator
from txbench.generators.integer import CounterGenerator, UniformIntegerGenerator
from txbench.generators.zipfian import (
    ZIPFIAN_CONSTANT,
    ScrambledZipfianGenerator,
    SkewedLatestGenerator,
    ZipfianGenerator,
)

__all__ = [
    "ZIPFIAN_CONSTANT",
    "CounterGenerator",
    "DiscreteGenerator",
    "IntegerGenerator",
    "ScrambledZipfianGenerator",
    "SkewedLatestGenerator",
    "UniformIntegerGenerator",
    "ZipfianGenerator",
    "fnv_hash64",
]
