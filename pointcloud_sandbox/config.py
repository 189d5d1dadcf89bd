"""Seed configuration for reproducible noise jitter."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np


# //1.- Seed driving the jitter applied when noise is enabled.
@dataclass(frozen=True)
class NoiseSeed:
    """``value`` of ``None`` means fresh entropy on every run."""

    value: Optional[int] = None

    # //2.- Build from a mapping such as the ``noise`` section of a scene file.
    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, object]] = None) -> "NoiseSeed":
        if not payload or payload.get("seed") is None:
            return cls()
        return cls(value=int(payload["seed"]))

    # //3.- Allow overriding the seed through the environment for scripted runs.
    @classmethod
    def from_environment(cls, prefix: str = "POINTCLOUD") -> "NoiseSeed":
        raw = os.getenv(f"{prefix}_NOISE_SEED")
        if raw is None or not raw.strip():
            return cls()
        try:
            return cls(value=int(raw))
        except ValueError as exc:
            raise ValueError(f"{prefix}_NOISE_SEED must be an integer, got {raw!r}") from exc

    # //4.- Numpy generator without touching global RNG state.
    def create_generator(self) -> np.random.Generator:
        if self.value is None:
            return np.random.default_rng()
        return np.random.default_rng(np.uint64(self.value & ((1 << 64) - 1)))


# //5.- Resolve the effective seed: explicit value, then mapping, then environment.
def load_noise_seed(
    explicit: Optional[int] = None,
    mapping: Optional[Mapping[str, object]] = None,
    *,
    env_prefix: str = "POINTCLOUD",
) -> NoiseSeed:
    if explicit is not None:
        return NoiseSeed(value=int(explicit))
    env_seed = NoiseSeed.from_environment(prefix=env_prefix)
    if env_seed.value is not None:
        return env_seed
    return NoiseSeed.from_mapping(mapping)
