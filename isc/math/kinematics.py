from __future__ import annotations
from typing import NamedTuple

import numpy as np

from ..config.constants import EULER_SEQ, ROTATION_ATOL
from .conventions import signed_joint_angles
from .validation import (
    InvalidInputError,
    Side,
    as_angle_series,
    check_same_length,
    normalize_side,
)

__all__ = [
    "SegmentOrientations",
    "axis_R_batch",
    "euler_to_R_batch",
    "compose_R_batch",
    "is_rotation_batch",
    "joint_rotation",
    "joint_to_orientation",
]


class SegmentOrientations(NamedTuple):
    """Global (lab <- segment) orientations, each (N,3,3)."""

    thigh: np.ndarray
    shank: np.ndarray
    foot: np.ndarray


def axis_R_batch(axis: str, th: np.ndarray) -> np.ndarray:
    """Elementary rotations (T,3,3) about a principal axis by angles ``th`` (rad)."""
    th = np.asarray(th, dtype=float)
    c, s = np.cos(th), np.sin(th)
    zeros = np.zeros_like(c)
    ones = np.ones_like(c)
    ax = str(axis).upper()
    if ax == "X":
        rows = [[ones, zeros, zeros], [zeros, c, -s], [zeros, s, c]]
    elif ax == "Y":
        rows = [[c, zeros, s], [zeros, ones, zeros], [-s, zeros, c]]
    elif ax == "Z":
        rows = [[c, -s, zeros], [s, c, zeros], [zeros, zeros, ones]]
    else:
        raise InvalidInputError(f"Unknown rotation axis {axis!r}")
    return np.stack([np.stack(r, axis=1) for r in rows], axis=1)


def euler_to_R_batch(angles_deg: np.ndarray, seq: str = EULER_SEQ) -> np.ndarray:
    """Intrinsic Euler angles (N,3) in degrees -> rotation matrices (N,3,3).

    ``seq`` names the axes in application order, each about the already
    rotated frame: "ZXY" gives Rz(a) @ Rx(b) @ Ry(c), the same matrices as
    scipy's ``Rotation.from_euler("ZXY", ...)``.
    """
    A = np.asarray(angles_deg, dtype=float)
    if len(seq) != 3:
        raise InvalidInputError(f"Euler sequence must have 3 axes, got {seq!r}")
    th = np.deg2rad(A)
    Rm = axis_R_batch(seq[0], th[:, 0])
    for k in (1, 2):
        Rm = compose_R_batch(Rm, axis_R_batch(seq[k], th[:, k]))
    return Rm


def compose_R_batch(R_parent: np.ndarray, R_local: np.ndarray) -> np.ndarray:
    """Per-sample post-multiplication R_parent[t] @ R_local[t]."""
    return np.einsum("tij,tjk->tik", R_parent, R_local)


def is_rotation_batch(Rm: np.ndarray, atol: float = ROTATION_ATOL) -> np.ndarray:
    """Boolean (N,) mask of proper rotations (R R^T = I, det = +1)."""
    M = np.asarray(Rm, dtype=float)
    if M.ndim == 2:
        M = M[None, ...]
    RRt = np.einsum("tij,tkj->tik", M, M)
    ortho = np.all(np.abs(RRt - np.eye(3)) <= atol, axis=(1, 2))
    proper = np.abs(np.linalg.det(M) - 1.0) <= atol
    return ortho & proper


def joint_rotation(angles_deg, joint: str, side: str | Side) -> np.ndarray:
    """Local joint rotation (N,3,3) from clinical angles in degrees."""
    return euler_to_R_batch(signed_joint_angles(angles_deg, joint, side))


def joint_to_orientation(pelvis, hip, knee, ankle, side: str | Side) -> SegmentOrientations:
    """Chain pelvis/hip/knee/ankle angles into thigh, shank and foot orientations.

    Inputs are (N,3) joint angles in degrees (Plug-in-Gait columns):
    - pelvis: [tilt, obliquity, rotation]
    - hip, knee: [flexion, adduction, rotation]
    - ankle: [dorsiflexion, inversion, rotation]

    Global orientations compose intrinsically along the chain:
    thigh = pelvis @ hip, shank = thigh @ knee, foot = shank @ ankle.
    """
    s = normalize_side(side)
    P = as_angle_series(pelvis, "pelvis")
    H = as_angle_series(hip, "hip")
    K = as_angle_series(knee, "knee")
    A = as_angle_series(ankle, "ankle")
    check_same_length(pelvis=P, hip=H, knee=K, ankle=A)

    Rp = joint_rotation(P, "pelvis", s)
    Rh = joint_rotation(H, "hip", s)
    Rk = joint_rotation(K, "knee", s)
    # Ankle offset is folded into the dorsiflexion angle (Rz(90) @ Rz(d) == Rz(90 + d))
    Ra = joint_rotation(A, "ankle", s)

    R_thigh = compose_R_batch(Rp, Rh)
    R_shank = compose_R_batch(R_thigh, Rk)
    R_foot = compose_R_batch(R_shank, Ra)
    return SegmentOrientations(thigh=R_thigh, shank=R_shank, foot=R_foot)
