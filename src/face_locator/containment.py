"""Point-in-triangle test used to decide which face a point stands on.

A point is contained by a face when its projection onto the face's plane has
barycentric weights within ``[-epsilon, 1 + epsilon]`` and the point is not
below the plane by more than ``plane_slack``. The plane test is one-sided: a
point any distance above the face still counts, which is what ground snapping
needs for characters standing or falling onto a surface.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from .config import Tolerances, config
from .errors import DegenerateFaceError
from .geometry import barycentric, check_face_index, face_vertices
from .mesh import MeshQuery
from .plane import Plane, as_point

_LOGGER = logging.getLogger(__name__)


def contains(
    point: Any,
    face_index: int,
    mesh: MeshQuery,
    *,
    tolerances: Optional[Tolerances] = None,
) -> bool:
    """Return True if `point` lies above/within face `face_index`.

    Args:
        point: Query point in the mesh's local space, shape (3,).
        face_index: Face to test, in ``[0, mesh.face_count())``.
        mesh: Mesh to query.
        tolerances: Overrides the globally configured tolerances.

    Raises:
        FaceIndexError: If `face_index` is out of range.
        DegenerateFaceError: If the face has zero area. Such a face cannot
            contain any point.
    """
    tol = config.resolve(tolerances)
    p = as_point(point)
    idx = check_face_index(mesh, face_index)

    p1, p2, p3 = face_vertices(mesh, idx)
    plane = Plane.from_points(p1, p2, p3)
    if plane is None:
        _LOGGER.debug("contains: face %d is degenerate.", idx)
        raise DegenerateFaceError(idx)
    face_normal = as_point(mesh.face_normal(idx), "face normal")

    try:
        alpha, beta, gamma = barycentric(plane.project(p), p1, p2, p3)
    except DegenerateFaceError as exc:
        raise DegenerateFaceError(idx) from exc

    below_plane = float(np.dot(face_normal, p)) - plane.d < -tol.plane_slack
    lo = -tol.epsilon
    hi = 1.0 + tol.epsilon
    inside = (
        not below_plane
        and lo <= alpha <= hi
        and lo <= beta <= hi
        and lo <= gamma <= hi
    )

    _LOGGER.debug(
        "contains: face=%d point=%s weights=(%.6g, %.6g, %.6g) below=%s -> %s",
        idx,
        p.tolist(),
        alpha,
        beta,
        gamma,
        below_plane,
        inside,
    )
    return inside


def weights(point: Any, face_index: int, mesh: MeshQuery) -> NDArray[Any]:
    """Barycentric weights (alpha, beta, gamma) of `point` projected onto a face.

    Raises:
        FaceIndexError: If `face_index` is out of range.
        DegenerateFaceError: If the face has zero area.
    """
    p = as_point(point)
    idx = check_face_index(mesh, face_index)
    p1, p2, p3 = face_vertices(mesh, idx)
    plane = Plane.from_points(p1, p2, p3)
    if plane is None:
        raise DegenerateFaceError(idx)
    return np.asarray(barycentric(plane.project(p), p1, p2, p3))
