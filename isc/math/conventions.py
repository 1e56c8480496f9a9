from __future__ import annotations
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..config.constants import ANKLE_DORSIFLEXION_OFFSET_DEG, EULER_SEQ
from .validation import InvalidInputError, Side, as_angle_series, normalize_side

__all__ = [
    "JointConvention",
    "JOINT_CONVENTIONS",
    "signed_joint_angles",
    "convention_table",
]


@dataclass(frozen=True)
class JointConvention:
    """Mapping from clinical joint angles to signed intrinsic Euler angles.

    - components: clinical names of the input columns, in input order
    - order: input column feeding each rotation of ``EULER_SEQ`` (Z, X', Y'')
    - left / right: sign applied to each rotation, in rotation order
    - offsets_deg: constant added after the sign, in rotation order
    """

    joint: str
    components: tuple[str, str, str]
    order: tuple[int, int, int]
    left: tuple[float, float, float]
    right: tuple[float, float, float]
    offsets_deg: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def signs(self, side: str | Side) -> np.ndarray:
        s = normalize_side(side)
        return np.asarray(self.left if s is Side.LEFT else self.right, dtype=float)


# Plug-in-Gait joint angles onto ISB segment frames (X forward, Y up, Z right).
# Ankle columns are [dorsiflexion, inversion, rotation] but rotate Z, X', Y''
# as dorsiflexion, rotation, inversion.
JOINT_CONVENTIONS: dict[str, JointConvention] = {
    "pelvis": JointConvention(
        joint="pelvis",
        components=("tilt", "obliquity", "rotation"),
        order=(0, 1, 2),
        left=(-1.0, 1.0, 1.0),
        right=(-1.0, -1.0, 1.0),
    ),
    "hip": JointConvention(
        joint="hip",
        components=("flexion", "adduction", "rotation"),
        order=(0, 1, 2),
        left=(1.0, -1.0, -1.0),
        right=(1.0, 1.0, 1.0),
    ),
    "knee": JointConvention(
        joint="knee",
        components=("flexion", "adduction", "rotation"),
        order=(0, 1, 2),
        left=(-1.0, -1.0, -1.0),
        right=(-1.0, 1.0, 1.0),
    ),
    "ankle": JointConvention(
        joint="ankle",
        components=("dorsiflexion", "inversion", "rotation"),
        order=(0, 2, 1),
        left=(1.0, -1.0, -1.0),
        right=(1.0, 1.0, -1.0),
        offsets_deg=(ANKLE_DORSIFLEXION_OFFSET_DEG, 0.0, 0.0),
    ),
}


def _convention(joint: str) -> JointConvention:
    try:
        return JOINT_CONVENTIONS[str(joint).lower()]
    except KeyError:
        raise InvalidInputError(
            f"Unknown joint {joint!r}. Expected one of {sorted(JOINT_CONVENTIONS)}"
        ) from None


def signed_joint_angles(angles_deg, joint: str, side: str | Side) -> np.ndarray:
    """Reorder, sign and offset raw joint angles for the ZXY rotation builder.

    angles_deg: (N,3) clinical angles in degrees, columns as in
    ``JOINT_CONVENTIONS[joint].components``. Returns (N,3) degrees in
    rotation order. The input array is not modified.
    """
    conv = _convention(joint)
    A = as_angle_series(angles_deg, name=conv.joint)
    return A[:, list(conv.order)] * conv.signs(side) + np.asarray(conv.offsets_deg)


def convention_table() -> pd.DataFrame:
    """Tabulate the sign/offset convention, one row per joint component."""
    rows = []
    for conv in JOINT_CONVENTIONS.values():
        for k, col in enumerate(conv.order):
            rows.append(
                {
                    "joint": conv.joint,
                    "component": conv.components[col],
                    "axis": EULER_SEQ[k],
                    "left_sign": conv.left[k],
                    "right_sign": conv.right[k],
                    "offset_deg": conv.offsets_deg[k],
                }
            )
    return pd.DataFrame(rows)
