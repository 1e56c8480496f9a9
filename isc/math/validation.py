from __future__ import annotations
from enum import Enum

import numpy as np

from ..config.constants import SIDE_LEFT, SIDE_RIGHT

__all__ = [
    "InvalidInputError",
    "Side",
    "normalize_side",
    "as_angle_series",
    "as_signal",
    "as_rotation_series",
    "check_same_length",
]


class InvalidInputError(ValueError):
    """Raised for malformed shapes, mismatched lengths or unknown options."""


class Side(str, Enum):
    LEFT = SIDE_LEFT
    RIGHT = SIDE_RIGHT


def normalize_side(side: str | Side) -> Side:
    """Map ``"L"``/``"R"`` (any case) or a ``Side`` member onto ``Side``."""
    if isinstance(side, Side):
        return side
    if isinstance(side, str):
        key = side.strip().upper()
        for s in Side:
            if s.value == key:
                return s
    raise InvalidInputError(
        f"Invalid side {side!r}. Expected one of {[s.value for s in Side]}"
    )


def _as_float_array(x, name: str) -> np.ndarray:
    try:
        return np.asarray(x, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name}: not numeric ({exc})") from exc


def as_angle_series(x, name: str = "angles") -> np.ndarray:
    """Coerce to an (N,3) float array; a single (3,) sample becomes (1,3)."""
    A = _as_float_array(x, name)
    if A.ndim == 1 and A.shape[0] == 3:
        A = A[None, :]
    if A.ndim != 2 or A.shape[1] != 3:
        raise InvalidInputError(f"{name}: expected shape (N,3), got {A.shape}")
    return A


def as_signal(x, name: str = "signal") -> np.ndarray:
    """Coerce to a 1-D float array; (N,1) column vectors are flattened."""
    a = _as_float_array(x, name)
    if a.ndim == 2 and a.shape[1] == 1:
        a = a[:, 0]
    if a.ndim != 1:
        raise InvalidInputError(f"{name}: expected a 1-D series, got shape {a.shape}")
    return a


def as_rotation_series(R, name: str = "orientation") -> np.ndarray:
    """Coerce to a (N,3,3) float array; a single (3,3) matrix becomes (1,3,3)."""
    M = _as_float_array(R, name)
    if M.ndim == 2:
        M = M[None, ...]
    if M.ndim != 3 or M.shape[1:] != (3, 3):
        raise InvalidInputError(f"{name}: expected shape (N,3,3), got {M.shape}")
    return M


def check_same_length(**arrays: np.ndarray) -> int:
    """Return the shared sample count or raise if any series differs."""
    lengths = {k: int(np.shape(v)[0]) for k, v in arrays.items()}
    if len(set(lengths.values())) > 1:
        raise InvalidInputError(f"Sample counts differ: {lengths}")
    return next(iter(lengths.values()), 0)
