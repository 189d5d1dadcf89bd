"""Immutable 4x4 transforms stored in column-major order.

Every combinator returns a fresh matrix; nothing is ever mutated in place.
Conventions follow the live viewport: right-handed view space with the
camera looking down ``-z`` and a ``[0, 1]`` clip-space depth range.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Mat4:
    """Sixteen floats, column-major (``elements[col * 4 + row]``)."""

    elements: Tuple[float, ...]

    def __post_init__(self) -> None:
        values = tuple(float(value) for value in self.elements)
        if len(values) != 16:
            raise ValueError(f"Mat4 needs 16 elements, got {len(values)}")
        object.__setattr__(self, "elements", values)

    def __matmul__(self, other: "Mat4") -> "Mat4":
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4.from_array(self.to_array() @ other.to_array())

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        return self.elements[col * 4 + row]

    def to_array(self) -> np.ndarray:
        """Return a fresh 4x4 array indexed ``[row, col]``."""

        return np.array(self.elements, dtype=float).reshape((4, 4), order="F")

    @staticmethod
    def from_array(array: np.ndarray) -> "Mat4":
        return Mat4(tuple(np.asarray(array, dtype=float).flatten(order="F")))

    @staticmethod
    def from_rows(rows: Sequence[Sequence[float]]) -> "Mat4":
        return Mat4.from_array(np.array(rows, dtype=float))

    def transform(self, vector: Iterable[float]) -> Tuple[float, float, float, float]:
        result = self.to_array() @ np.array(tuple(vector), dtype=float)
        return float(result[0]), float(result[1]), float(result[2]), float(result[3])

    @staticmethod
    def identity() -> "Mat4":
        return Mat4.from_array(np.identity(4))

    @staticmethod
    def translation(tx: float, ty: float, tz: float) -> "Mat4":
        return Mat4.from_rows(
            (
                (1.0, 0.0, 0.0, tx),
                (0.0, 1.0, 0.0, ty),
                (0.0, 0.0, 1.0, tz),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def rotation_x(angle: float) -> "Mat4":
        c = math.cos(angle)
        s = math.sin(angle)
        return Mat4.from_rows(
            (
                (1.0, 0.0, 0.0, 0.0),
                (0.0, c, -s, 0.0),
                (0.0, s, c, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def rotation_y(angle: float) -> "Mat4":
        c = math.cos(angle)
        s = math.sin(angle)
        return Mat4.from_rows(
            (
                (c, 0.0, s, 0.0),
                (0.0, 1.0, 0.0, 0.0),
                (-s, 0.0, c, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def perspective(fov_y: float, aspect: float, near: float, far: float) -> "Mat4":
        """Perspective projection mapping view depth ``[near, far]`` onto ``[0, 1]``."""

        if aspect <= 0:
            raise ValueError("aspect must be positive")
        if not 0 < near < far:
            raise ValueError("near and far must satisfy 0 < near < far")
        f = 1.0 / math.tan(fov_y / 2.0)
        range_inv = 1.0 / (near - far)
        return Mat4.from_rows(
            (
                (f / aspect, 0.0, 0.0, 0.0),
                (0.0, f, 0.0, 0.0),
                (0.0, 0.0, far * range_inv, far * near * range_inv),
                (0.0, 0.0, -1.0, 0.0),
            )
        )
