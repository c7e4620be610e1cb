"""Drop a few characters onto a bumpy terrain and report the faces they land on.

Builds a height-field terrain, finds the standing face under each character,
snaps it to the face's plane and writes the terrain with a per-face hit count
to ``terrain.vtu`` (open it in ParaView).
"""
import logging

import numpy as np

from face_locator import FaceHelper, TriangleMesh, face_plane, set_log_level


def make_terrain(n: int = 12, size: float = 10.0) -> TriangleMesh:
    xs = np.linspace(0.0, size, n + 1)
    xx, yy = np.meshgrid(xs, xs, indexing="ij")
    zz = 0.5 * np.sin(xx) * np.cos(0.7 * yy)
    verts = np.column_stack([xx.ravel(), yy.ravel(), zz.ravel()])

    tris = []
    for i in range(n):
        for j in range(n):
            a = i * (n + 1) + j
            b = a + (n + 1)
            tris.append([a, b, b + 1])
            tris.append([a, b + 1, a + 1])
    return TriangleMesh(verts, np.array(tris))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    set_log_level("INFO")

    terrain = make_terrain()
    helper = FaceHelper(on_miss=lambda p: print(f"  {p.tolist()} is off the map"))
    hits = np.zeros(terrain.face_count(), dtype=int)

    characters = np.array(
        [
            [2.5, 3.1, 4.0],
            [7.2, 1.4, 0.6],
            [5.0, 5.0, -0.02],
            [14.0, 2.0, 1.0],
        ]
    )
    for position in characters:
        result = helper.get_standing_face(position, terrain)
        if not result.found:
            continue
        hits[result.index] += 1
        plane = face_plane(terrain, result.index)
        snapped = plane.project(position)
        print(
            f"  {position.tolist()} stands on face {result.index}; "
            f"snapped to {np.round(snapped, 3).tolist()}"
        )

    closest = helper.get_closest_face(characters[-1], terrain)
    print(f"  nearest face to the stray character: {closest.index}")

    terrain.write("terrain.vtu", cell_data={"hits": hits})


if __name__ == "__main__":
    main()
