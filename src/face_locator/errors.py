"""Exceptions raised by face-locator queries."""

from __future__ import annotations

from typing import Optional


class FaceLocatorError(Exception):
    """Base class for all face-locator errors."""


class DegenerateFaceError(FaceLocatorError, ValueError):
    """A face has zero area (collinear vertices) and defines no plane.

    A degenerate face cannot contain any point.
    """

    def __init__(self, face_index: Optional[int] = None, message: str = "") -> None:
        self.face_index = face_index
        if not message:
            if face_index is None:
                message = "Degenerate triangle: vertices are collinear."
            else:
                message = f"Face {face_index} is degenerate: vertices are collinear."
        super().__init__(message)


class FaceIndexError(FaceLocatorError, IndexError):
    """A face index lies outside ``[0, face_count)``."""

    def __init__(self, face_index: int, face_count: int) -> None:
        self.face_index = face_index
        self.face_count = face_count
        super().__init__(
            f"Face index {face_index} out of range for mesh with {face_count} face(s)."
        )


class EmptyMeshError(FaceLocatorError, ValueError):
    """A search that needs at least one face was given a mesh with none."""

    def __init__(self, operation: str = "query") -> None:
        self.operation = operation
        super().__init__(f"Cannot run {operation} on a mesh with zero faces.")
