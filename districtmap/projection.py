"""World-to-screen projection for label placement.

The rendering layer calls ``project`` once per frame with its current
camera; nothing here schedules frames or touches a display.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class ScreenPoint(NamedTuple):
    x: float
    y: float
    depth: float
    visible: bool


@dataclass(frozen=True)
class CameraState:
    """Column-vector view and projection matrices plus viewport size."""
    view_matrix: np.ndarray
    projection_matrix: np.ndarray
    width: float
    height: float


def perspective_matrix(fov_deg: float, aspect: float,
                       near: float, far: float) -> np.ndarray:
    """OpenGL-style perspective projection (vertical field of view)."""
    f = 1.0 / math.tan(math.radians(fov_deg) / 2)
    return np.array([
        [f / aspect, 0, 0, 0],
        [0, f, 0, 0],
        [0, 0, (far + near) / (near - far), 2 * far * near / (near - far)],
        [0, 0, -1, 0],
    ], dtype=np.float64)


def look_at(eye, target, up=(0.0, 1.0, 0.0)) -> np.ndarray:
    """View matrix for a camera at ``eye`` looking towards ``target``."""
    eye = np.asarray(eye, dtype=np.float64)
    forward = np.asarray(target, dtype=np.float64) - eye
    forward /= np.linalg.norm(forward)
    side = np.cross(forward, up)
    side /= np.linalg.norm(side)
    true_up = np.cross(side, forward)

    view = np.eye(4)
    view[0, :3] = side
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[:3, 3] = -view[:3, :3] @ eye
    return view


def project(world_point, camera: CameraState) -> ScreenPoint:
    """Project a world-space point to viewport pixels.

    Points behind the camera or beyond the far plane are not visible.
    """
    p = np.append(np.asarray(world_point, dtype=np.float64)[:3], 1.0)
    clip = camera.projection_matrix @ camera.view_matrix @ p
    w = clip[3]
    if w == 0:
        return ScreenPoint(math.nan, math.nan, math.inf, False)

    ndc = clip[:3] / w
    x = (ndc[0] * 0.5 + 0.5) * camera.width
    y = (-ndc[1] * 0.5 + 0.5) * camera.height
    return ScreenPoint(float(x), float(y), float(ndc[2]),
                       bool(w > 0 and ndc[2] < 1))


def label_positions(solids, camera: CameraState) -> list:
    """(name, ScreenPoint) for each solid's label anchor, in input order."""
    return [(solid.name, project(solid.label_anchor, camera)) for solid in solids]
