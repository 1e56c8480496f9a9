from __future__ import annotations
from typing import NamedTuple

import numpy as np

from ..config.settings import settings
from .kinematics import is_rotation_batch
from .validation import InvalidInputError, as_rotation_series

__all__ = ["ElevationAngles", "segment_axis", "orientation_to_elevation"]


class ElevationAngles(NamedTuple):
    """Sagittal (alpha) and frontal (beta) elevation angles in degrees, each (N,)."""

    alpha: np.ndarray
    beta: np.ndarray


def segment_axis(R_seg: np.ndarray) -> np.ndarray:
    """Long axis (distal -> proximal) of each segment in lab coordinates, (N,3)."""
    return as_rotation_series(R_seg)[:, :, 1]


def orientation_to_elevation(R_seg, check_rotation: bool | None = None) -> ElevationAngles:
    """Project segment orientations onto the sagittal and frontal planes.

    The segment Y axis is the proximal-minus-distal direction, so the
    marker-based elevation formulas apply to it directly:
    - alpha = atan2(-y_x, y_y)  (sagittal, XY plane of the ISB lab frame)
    - beta  = atan2( y_z, y_y)  (frontal, YZ plane)

    With ``check_rotation`` (default: ``settings.check_rotations``) every
    matrix must be a proper rotation.
    """
    M = as_rotation_series(R_seg)
    if check_rotation is None:
        check_rotation = settings.check_rotations
    if check_rotation:
        ok = is_rotation_batch(M, atol=settings.rotation_atol)
        if not np.all(ok):
            bad = np.flatnonzero(~ok)
            raise InvalidInputError(
                f"{bad.size} of {M.shape[0]} matrices are not proper rotations "
                f"(first at sample {int(bad[0])})"
            )
    axis = M[:, :, 1]
    alpha = np.rad2deg(np.arctan2(-axis[:, 0], axis[:, 1]))
    beta = np.rad2deg(np.arctan2(axis[:, 2], axis[:, 1]))
    return ElevationAngles(alpha=alpha, beta=beta)
