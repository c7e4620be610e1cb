"""Module defining the mesh query interface and a triangle-mesh adapter.

This module provides:
  - `MeshQuery`, the narrow read-only interface the face queries run against.
  - `TriangleMesh`, an indexed triangle list backed by NumPy arrays, with
    loading and export through meshio.

Any other mesh representation (half-edge structure, engine mesh tool) can be
queried by implementing the four `MeshQuery` methods.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

import meshio
import numpy as np
from numpy.typing import NDArray

from .errors import FaceIndexError
from .plane import as_point, is_degenerate

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class MeshQuery(Protocol):
    """Read-only view of a triangulated mesh.

    Face and vertex indices are 0-based. Every call reflects the mesh state
    at call time; callers must not mutate the mesh during a query.
    """

    def face_count(self) -> int:
        """Number of triangular faces (>= 0)."""
        ...

    def face_vertex(self, face_index: int, corner: int) -> int:
        """Mesh-global vertex index for corner 0, 1 or 2 of a face."""
        ...

    def vertex_position(self, vertex_index: int) -> NDArray[Any]:
        """Position of a vertex, shape (3,)."""
        ...

    def face_normal(self, face_index: int) -> NDArray[Any]:
        """Unit normal of a face, shape (3,)."""
        ...


class TriangleMesh:
    """Indexed triangle mesh implementing `MeshQuery`.

    Geometry is never cached: normals are recomputed from the current vertex
    positions on every call, so edits made through `set_vertex` are visible
    to the next query.

    Args:
        verts (NDArray[Any]): Vertex coordinates (n_nodes×3).
        connectivity (NDArray[Any]): Triangle indices (n_triangles×3).

    Attributes:
        verts (NDArray[Any]): Vertex array, shape (n_nodes, 3).
        connectivity (NDArray[Any]): Triangle indices, shape (n_triangles, 3).
    """

    verts: NDArray[Any]
    connectivity: NDArray[Any]

    def __init__(self, verts: Any, connectivity: Any) -> None:
        """Initialize mesh from vertex and connectivity arrays.

        Raises:
            ValueError: If the arrays have the wrong shape or the connectivity
                references vertices that do not exist.
        """
        verts_arr = np.array(verts, dtype=float)
        conn_arr = np.asarray(connectivity, dtype=int)
        if verts_arr.size == 0:
            verts_arr = verts_arr.reshape(0, 3)
        if conn_arr.size == 0:
            conn_arr = conn_arr.reshape(0, 3)

        if verts_arr.ndim != 2 or verts_arr.shape[1] != 3:
            _LOGGER.error("TriangleMesh: verts has shape %s", verts_arr.shape)
            raise ValueError(f"verts must have shape (n, 3), got {verts_arr.shape}")
        if conn_arr.ndim != 2 or conn_arr.shape[1] != 3:
            _LOGGER.error("TriangleMesh: connectivity has shape %s", conn_arr.shape)
            raise ValueError(
                f"connectivity must have shape (m, 3), got {conn_arr.shape}"
            )
        if conn_arr.size and (
            conn_arr.min() < 0 or conn_arr.max() >= verts_arr.shape[0]
        ):
            _LOGGER.error(
                "TriangleMesh: connectivity references vertices outside [0, %d)",
                verts_arr.shape[0],
            )
            raise ValueError("connectivity references non-existent vertices")

        self.verts = verts_arr
        self.connectivity = conn_arr

        n_degenerate = int(np.count_nonzero(self._degenerate_mask()))
        if n_degenerate:
            _LOGGER.warning(
                "TriangleMesh: %d degenerate triangle(s) with ~zero area.",
                n_degenerate,
            )

        _LOGGER.info(
            "TriangleMesh initialized with %d vertices and %d triangles",
            self.verts.shape[0],
            self.connectivity.shape[0],
        )

    @classmethod
    def from_file(cls, filename: str) -> TriangleMesh:
        """Read a triangle mesh from any format meshio understands.

        Non-triangle cell blocks (lines, quads, ...) are ignored.

        Args:
            filename (str): Path to the mesh file (.obj, .stl, .ply, .vtu, ...).

        Raises:
            ValueError: If the file holds no triangle cells.
        """
        m = meshio.read(filename)
        blocks = [cb.data for cb in m.cells if cb.type == "triangle"]
        if not blocks:
            _LOGGER.error("from_file: no triangle cells in '%s'", filename)
            raise ValueError(f"No triangle cells found in {filename!r}")
        connectivity = np.concatenate(blocks, axis=0)
        _LOGGER.info(
            "Loaded mesh from %s with %d vertices and %d triangles",
            filename,
            len(m.points),
            len(connectivity),
        )
        # 2-D formats may store (n, 2) points; lift them into the z=0 plane.
        points = np.asarray(m.points, dtype=float)
        if points.ndim == 2 and points.shape[1] == 2:
            points = np.column_stack([points, np.zeros(len(points))])
        return cls(points, connectivity)

    def write(
        self,
        filename: str,
        cell_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Export this mesh (and optional per-face data) through meshio.

        Args:
            filename: Output path; the format follows the extension
                (e.g., ``"ground.vtu"``).
            cell_data: Optional dict of per-face arrays (shape (n_tris,) or
                (n_tris, k)), for instance standing-face labels.

        Raises:
            ValueError: If provided data have incompatible lengths.
        """
        cells: List[Tuple[str, NDArray[Any]]] = [("triangle", self.connectivity)]
        m = meshio.Mesh(points=self.verts, cells=cells)

        if cell_data:
            n_tris = self.face_count()
            normalized: Dict[str, List[NDArray[Any]]] = {}
            for name, arr in cell_data.items():
                arr_np = np.asarray(arr)
                if arr_np.shape[0] != n_tris:
                    msg = (
                        f"cell_data['{name}'] length {arr_np.shape[0]} "
                        f"!= n_tris {n_tris}"
                    )
                    _LOGGER.error("write: %s", msg)
                    raise ValueError(msg)
                normalized[name] = [arr_np]
            m.cell_data = normalized

        try:
            m.write(filename)
        except Exception:
            _LOGGER.exception("write failed for '%s'.", filename)
            raise
        _LOGGER.info(
            "Mesh written to '%s' (nodes=%d, tris=%d, cell_data=%d)",
            filename,
            self.verts.shape[0],
            self.connectivity.shape[0],
            0 if not cell_data else len(cell_data),
        )

    # ---- MeshQuery ----------------------------------------------------------
    def face_count(self) -> int:
        return int(self.connectivity.shape[0])

    def vertex_count(self) -> int:
        return int(self.verts.shape[0])

    def face_vertex(self, face_index: int, corner: int) -> int:
        self._check_face(face_index)
        if corner not in (0, 1, 2):
            raise IndexError(f"Triangle corner must be 0, 1 or 2, got {corner}")
        return int(self.connectivity[face_index, corner])

    def vertex_position(self, vertex_index: int) -> NDArray[Any]:
        if not 0 <= vertex_index < self.verts.shape[0]:
            _LOGGER.error(
                "vertex_position: vertex index out of range: %d", vertex_index
            )
            raise IndexError(
                f"Vertex index {vertex_index} out of range for "
                f"{self.verts.shape[0]} vertices."
            )
        return self.verts[vertex_index].copy()

    def face_normal(self, face_index: int) -> NDArray[Any]:
        """Unit normal ``cross(b - a, c - a)`` of a face; zero if degenerate."""
        self._check_face(face_index)
        a, b, c = self.verts[self.connectivity[face_index]]
        n = np.cross(b - a, c - a)
        if is_degenerate(b - a, c - a):
            _LOGGER.debug(
                "face_normal: face %d is degenerate; returning zero normal.",
                face_index,
            )
            return np.zeros(3)
        return n / float(np.linalg.norm(n))

    # ---- Editing ------------------------------------------------------------
    def set_vertex(self, vertex_index: int, position: Any) -> None:
        """Move a vertex; later queries see the new position."""
        if not 0 <= vertex_index < self.verts.shape[0]:
            raise IndexError(
                f"Vertex index {vertex_index} out of range for "
                f"{self.verts.shape[0]} vertices."
            )
        self.verts[vertex_index] = as_point(position, "position")
        _LOGGER.debug(
            "set_vertex: vertex %d -> %s",
            vertex_index,
            self.verts[vertex_index].tolist(),
        )

    def _check_face(self, face_index: int) -> None:
        n = self.face_count()
        if not 0 <= face_index < n:
            _LOGGER.error("Face index out of range: %d (face_count=%d)", face_index, n)
            raise FaceIndexError(face_index, n)

    def _degenerate_mask(self) -> NDArray[Any]:
        if self.connectivity.shape[0] == 0:
            return np.zeros(0, dtype=bool)
        a = self.verts[self.connectivity[:, 0]]
        b = self.verts[self.connectivity[:, 1]]
        c = self.verts[self.connectivity[:, 2]]
        return is_degenerate(b - a, c - a)

    def __repr__(self) -> str:
        return f"TriangleMesh(n_verts={self.vertex_count()}, n_faces={self.face_count()})"
