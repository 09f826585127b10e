"""Reproducible random numbers for driving draws."""

from __future__ import annotations

import random

import numpy as np


def seed_everything(seed: int) -> None:
    """Seed Python's and NumPy's global generators."""
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def draw_number(rng: np.random.Generator, bits: int = 128) -> int:
    """Uniform random int in ``[0, 2**bits)`` built from *rng*'s bytes."""
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")
    n_bytes = (bits + 7) // 8
    value = int.from_bytes(rng.bytes(n_bytes), "big")
    return value >> (n_bytes * 8 - bits)
