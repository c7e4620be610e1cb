"""Module defining the Plane value type.

A plane is stored as a unit normal ``n`` and an offset ``d`` such that every
point ``p`` on the plane satisfies ``dot(n, p) == d``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

_LOGGER = logging.getLogger(__name__)

# Degenerate when |cross(u, v)| <= eps * |u| * |v| (vanishing sine between edges).
DEGENERATE_SINE_EPS = 1e-12


def is_degenerate(u: Any, v: Any) -> Any:
    """Return True where edge vectors `u` and `v` span no area.

    Works on single vectors (shape (3,)) and on stacks (shape (n, 3)); NaN or
    infinite edges count as degenerate.
    """
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    length = np.linalg.norm(np.cross(u, v), axis=-1)
    scale = np.linalg.norm(u, axis=-1) * np.linalg.norm(v, axis=-1)
    return ~(length > DEGENERATE_SINE_EPS * scale)


def as_point(value: Any, name: str = "point") -> NDArray[Any]:
    """Return `value` as a float array of shape (3,).

    Raises:
        ValueError: If `value` does not hold exactly three components.
    """
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        _LOGGER.error("%s must have shape (3,), got %s", name, arr.shape)
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    return arr


@dataclass(frozen=True, eq=False)
class Plane:
    """Infinite plane in 3D.

    Attributes:
        normal (NDArray[Any]): Unit normal, shape (3,).
        d (float): Offset along the normal, ``dot(normal, p)`` for any ``p`` on
            the plane.
    """

    normal: NDArray[Any]
    d: float

    @classmethod
    def from_points(
        cls, a: NDArray[Any], b: NDArray[Any], c: NDArray[Any]
    ) -> Optional[Plane]:
        """Build the plane through three points.

        The normal follows the right-hand rule ``cross(b - a, c - a)``.

        Returns:
            The plane, or None if the points are collinear.
        """
        a = as_point(a, "a")
        u = as_point(b, "b") - a
        v = as_point(c, "c") - a
        n = np.cross(u, v)
        length = float(np.linalg.norm(n))
        if is_degenerate(u, v):
            _LOGGER.debug("Plane.from_points: collinear points (|n|=%.3e)", length)
            return None
        normal = n / length
        return cls(normal=normal, d=float(np.dot(normal, a)))

    def signed_distance(self, point: NDArray[Any]) -> float:
        """Signed distance of `point` from the plane (positive on the normal side)."""
        return float(np.dot(self.normal, point)) - self.d

    def distance_to(self, point: NDArray[Any]) -> float:
        """Unsigned distance of `point` from the plane."""
        return abs(self.signed_distance(point))

    def project(self, point: NDArray[Any]) -> NDArray[Any]:
        """Orthogonal projection of `point` onto the plane."""
        p = as_point(point)
        return p - self.signed_distance(p) * self.normal

    def __repr__(self) -> str:
        """Return a string representation of the plane."""
        return f"Plane(normal={self.normal.tolist()}, d={self.d})"
