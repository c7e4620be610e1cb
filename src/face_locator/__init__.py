"""The face_locator package finds which triangle of a mesh a point stands on.

This package offers:
  - Barycentric point-in-triangle tests with a one-sided plane check.
  - Nearest-face search by centroid distance.
  - Standing-face search: the nearest face that contains a point.

Submodules:
  - config: Tolerances, logging level and environment helpers.
  - containment: Point-in-triangle test.
  - errors: Named error conditions.
  - face_helper: FaceHelper facade and module-level operations.
  - geometry: Per-face centroid, plane and barycentric weights.
  - mesh: MeshQuery interface and TriangleMesh adapter.
  - plane: Plane value type.
  - search: FaceResult, nearest_face, standing_face.

Classes:
  FaceHelper, FaceResult, MeshQuery, Plane, Tolerances, TriangleMesh
"""

from .config import (
    config,
    configure,
    use,
    tolerances,
    set_log_level,
    Tolerances,
)

from face_locator.errors import (
    DegenerateFaceError,
    EmptyMeshError,
    FaceIndexError,
    FaceLocatorError,
)
from face_locator.plane import Plane
from face_locator.mesh import MeshQuery, TriangleMesh
from face_locator.geometry import barycentric, centroid, face_plane, plane_of
from face_locator.containment import contains
from face_locator.search import (
    FaceResult,
    containing_faces,
    nearest_face,
    standing_face,
)
from face_locator.face_helper import (
    FaceHelper,
    get_closest_face,
    get_face_position,
    get_standing_face,
    is_inside_triangle,
)

__all__ = [
    # Core classes
    "FaceHelper",
    "FaceResult",
    "MeshQuery",
    "Plane",
    "Tolerances",
    "TriangleMesh",
    # Operations
    "is_inside_triangle",
    "get_closest_face",
    "get_standing_face",
    "get_face_position",
    "contains",
    "containing_faces",
    "nearest_face",
    "standing_face",
    "centroid",
    "plane_of",
    "face_plane",
    "barycentric",
    # Errors
    "FaceLocatorError",
    "DegenerateFaceError",
    "EmptyMeshError",
    "FaceIndexError",
    # Configuration
    "config",
    "configure",
    "use",
    "tolerances",
    "set_log_level",
]
