"""Per-face geometry computed on demand from a `MeshQuery`.

Nothing here is cached: every call re-reads the face's vertices so results
always reflect the current mesh state.
"""
from __future__ import annotations

import logging
import operator
from typing import Any, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import DegenerateFaceError, FaceIndexError
from .mesh import MeshQuery
from .plane import Plane, as_point

_LOGGER = logging.getLogger(__name__)

Triangle = Tuple[NDArray[Any], NDArray[Any], NDArray[Any]]


def check_face_index(mesh: MeshQuery, face_index: int) -> int:
    """Validate `face_index` against ``mesh.face_count()`` and return it as int.

    Raises:
        TypeError: If `face_index` is not an integer (floats are not truncated).
        FaceIndexError: If the index lies outside ``[0, face_count)``.
    """
    n = int(mesh.face_count())
    idx = operator.index(face_index)
    if not 0 <= idx < n:
        _LOGGER.error("Face index out of range: %d (face_count=%d)", idx, n)
        raise FaceIndexError(idx, n)
    return idx


def face_vertices(mesh: MeshQuery, face_index: int) -> Triangle:
    """Return the three vertex positions of a face, in corner order."""
    idx = check_face_index(mesh, face_index)
    p1, p2, p3 = (
        as_point(mesh.vertex_position(mesh.face_vertex(idx, corner)), "vertex")
        for corner in range(3)
    )
    return p1, p2, p3


def centroid(mesh: MeshQuery, face_index: int) -> NDArray[Any]:
    """Arithmetic mean of a face's three vertex positions."""
    p1, p2, p3 = face_vertices(mesh, face_index)
    return (p1 + p2 + p3) / 3.0


def plane_of(mesh: MeshQuery, face_index: int) -> Optional[Plane]:
    """Plane through a face's vertices, or None if the face is degenerate."""
    return Plane.from_points(*face_vertices(mesh, face_index))


def face_plane(mesh: MeshQuery, face_index: int) -> Plane:
    """Plane through a face's vertices.

    Raises:
        DegenerateFaceError: If the face has zero area.
    """
    plane = plane_of(mesh, face_index)
    if plane is None:
        _LOGGER.error("face_plane: face %d is degenerate.", int(face_index))
        raise DegenerateFaceError(int(face_index))
    return plane


def barycentric(
    point: NDArray[Any],
    p1: NDArray[Any],
    p2: NDArray[Any],
    p3: NDArray[Any],
) -> Tuple[float, float, float]:
    """Barycentric weights of `point` with respect to triangle (p1, p2, p3).

    The point is assumed to lie in the triangle's plane (project it first
    otherwise). Weights satisfy ``alpha + beta + gamma == 1`` and
    ``point == alpha * p1 + beta * p2 + gamma * p3``.

    Returns:
        Tuple[float, float, float]: (alpha, beta, gamma).

    Raises:
        DegenerateFaceError: If the triangle has zero area.
    """
    # https://math.stackexchange.com/a/544947
    u = p2 - p1
    v = p3 - p1
    w = point - p1
    n = np.cross(u, v)
    nn = float(np.dot(n, n))
    if nn == 0.0 or not np.isfinite(nn):
        raise DegenerateFaceError()

    gamma = float(np.dot(np.cross(u, w), n)) / nn
    beta = float(np.dot(np.cross(w, v), n)) / nn
    alpha = 1.0 - beta - gamma
    return alpha, beta, gamma
