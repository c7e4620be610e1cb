"""Host-facing facade for the face queries.

`FaceHelper` bundles the four operations a host application calls when
snapping characters or props to ground meshes. It holds no mesh state; the
mesh is passed to every call and must stay unchanged for its duration.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from numpy.typing import NDArray

from .config import Tolerances, config
from .containment import contains
from .geometry import centroid
from .mesh import MeshQuery
from .search import FaceResult, nearest_face, standing_face

_LOGGER = logging.getLogger(__name__)


class FaceHelper:
    """Locate faces of a triangle mesh relative to a point.

    Args:
        tolerances (Optional[Tolerances]): Fixed tolerances for this helper.
            If None, the globally configured ones are read on every call.
        on_miss (Optional[Callable]): Called with the query point whenever
            `get_standing_face` finds no containing face.
    """

    def __init__(
        self,
        tolerances: Optional[Tolerances] = None,
        on_miss: Optional[Callable[[NDArray[Any]], None]] = None,
    ) -> None:
        self._tolerances = tolerances
        self.on_miss = on_miss
        _LOGGER.info("Face helper initialized!")

    @property
    def tolerances(self) -> Tolerances:
        """Tolerances this helper applies (fixed or current global)."""
        return config.resolve(self._tolerances)

    def is_inside_triangle(
        self, point: Any, face_index: int, mesh: MeshQuery
    ) -> bool:
        """Return True if `point` lies above/within face `face_index`.

        Raises:
            FaceIndexError: If `face_index` is out of range.
            DegenerateFaceError: If the face has zero area.
        """
        return contains(point, face_index, mesh, tolerances=self._tolerances)

    def get_closest_face(self, position: Any, mesh: MeshQuery) -> FaceResult:
        """Return the face whose centroid is nearest to `position`.

        Raises:
            EmptyMeshError: If the mesh has no faces.
        """
        return nearest_face(position, mesh)

    def get_standing_face(self, position: Any, mesh: MeshQuery) -> FaceResult:
        """Return the face `position` stands on, or ``FaceResult.none()``."""
        return standing_face(
            position, mesh, tolerances=self._tolerances, on_miss=self.on_miss
        )

    def get_face_position(self, face_index: int, mesh: MeshQuery) -> NDArray[Any]:
        """Return the centroid of face `face_index`."""
        return centroid(mesh, face_index)


def is_inside_triangle(point: Any, face_index: int, mesh: MeshQuery) -> bool:
    """Module-level `FaceHelper.is_inside_triangle` using global tolerances."""
    return contains(point, face_index, mesh)


def get_closest_face(position: Any, mesh: MeshQuery) -> FaceResult:
    """Module-level `FaceHelper.get_closest_face`."""
    return nearest_face(position, mesh)


def get_standing_face(position: Any, mesh: MeshQuery) -> FaceResult:
    """Module-level `FaceHelper.get_standing_face` using global tolerances."""
    return standing_face(position, mesh)


def get_face_position(face_index: int, mesh: MeshQuery) -> NDArray[Any]:
    """Module-level `FaceHelper.get_face_position`."""
    return centroid(mesh, face_index)
