"""Face search over a whole mesh.

Both searches are a linear scan over every face of the mesh, re-reading face
geometry on each call:

  - `nearest_face`: face whose centroid is closest to a point.
  - `standing_face`: among the faces containing a point, the one whose
    centroid is closest.

Ties always resolve to the lowest face index.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import euclidean, sqeuclidean

from .config import Tolerances, config
from .containment import contains
from .errors import DegenerateFaceError, EmptyMeshError
from .geometry import centroid
from .mesh import MeshQuery
from .plane import as_point

_LOGGER = logging.getLogger(__name__)

NO_FACE = -1


@dataclass(frozen=True, eq=False)
class FaceResult:
    """Outcome of a face search.

    Compares by value: two results are equal when their indices match and
    their positions are element-wise equal. Unpacks as ``index, position``.

    Attributes:
        index (int): Winning face index, or -1 when no face qualified.
        position (NDArray[Any]): Centroid of the winning face, or the origin
            when no face qualified.
    """

    index: int
    position: NDArray[Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", int(self.index))
        object.__setattr__(self, "position", as_point(self.position, "position"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FaceResult):
            return NotImplemented
        return self.index == other.index and bool(
            np.array_equal(self.position, other.position)
        )

    def __hash__(self) -> int:
        return hash((self.index, tuple(self.position.tolist())))

    def __iter__(self) -> Iterator[Any]:
        yield self.index
        yield self.position

    @classmethod
    def none(cls) -> FaceResult:
        """Sentinel returned when no face contains the query point."""
        return cls(NO_FACE, np.zeros(3))

    @property
    def found(self) -> bool:
        return self.index != NO_FACE

    def to_dict(self) -> Dict[str, Any]:
        """Plain-value form for hosts that marshal results."""
        return {"index": int(self.index), "position": self.position.tolist()}


def nearest_face(point: Any, mesh: MeshQuery) -> FaceResult:
    """Return the face whose centroid is nearest to `point`.

    Raises:
        EmptyMeshError: If the mesh has no faces.
    """
    p = as_point(point)
    n_faces = int(mesh.face_count())
    if n_faces == 0:
        _LOGGER.error("nearest_face: mesh has no faces.")
        raise EmptyMeshError("nearest_face")

    best_index = 0
    best_position = centroid(mesh, 0)
    best_distance = euclidean(best_position, p)
    for face_index in range(1, n_faces):
        position = centroid(mesh, face_index)
        distance = euclidean(position, p)
        if distance < best_distance:
            best_index = face_index
            best_position = position
            best_distance = distance

    _LOGGER.debug(
        "nearest_face: point=%s -> face=%d (distance=%.6g, scanned=%d)",
        p.tolist(),
        best_index,
        best_distance,
        n_faces,
    )
    return FaceResult(best_index, best_position)


def containing_faces(
    point: Any,
    mesh: MeshQuery,
    *,
    tolerances: Optional[Tolerances] = None,
) -> List[FaceResult]:
    """Return every face containing `point`, in face-index order.

    Degenerate faces are skipped since they cannot contain any point.
    """
    tol = config.resolve(tolerances)
    p = as_point(point)
    found: List[FaceResult] = []
    for face_index in range(int(mesh.face_count())):
        try:
            inside = contains(p, face_index, mesh, tolerances=tol)
        except DegenerateFaceError:
            _LOGGER.debug("containing_faces: skipping degenerate face %d", face_index)
            continue
        if inside:
            found.append(FaceResult(face_index, centroid(mesh, face_index)))
    return found


def standing_face(
    point: Any,
    mesh: MeshQuery,
    *,
    tolerances: Optional[Tolerances] = None,
    on_miss: Optional[Callable[[NDArray[Any]], None]] = None,
) -> FaceResult:
    """Return the containing face whose centroid is nearest to `point`.

    Distances are compared squared. When no face contains the point, the
    `FaceResult.none()` sentinel is returned, a warning is logged and
    `on_miss` (if given) is called with the point.
    """
    p = as_point(point)
    candidates = containing_faces(p, mesh, tolerances=tolerances)

    if not candidates:
        _LOGGER.warning("standing_face: no containing face for point %s", p.tolist())
        if on_miss is not None:
            on_miss(p)
        return FaceResult.none()

    best = candidates[0]
    if len(candidates) > 1:
        best_distance = sqeuclidean(best.position, p)
        for candidate in candidates[1:]:
            distance = sqeuclidean(candidate.position, p)
            if distance < best_distance:
                best = candidate
                best_distance = distance

    _LOGGER.debug(
        "standing_face: point=%s -> face=%d (candidates=%s)",
        p.tolist(),
        best.index,
        [c.index for c in candidates],
    )
    return best
