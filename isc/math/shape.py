"""Shape of the thigh/shank/foot elevation-angle loop.

The three sagittal elevation angles covary along a plane during gait (the
planar law of intersegmental coordination). The loop is described by a
principal component analysis of the (N,3) [thigh, shank, foot] series:

- LI     = 100 * l1 / (l1 + l2 + l3)          linearity index
- PI     = 100 * (l1 + l2) / (l1 + l2 + l3)   planarity index
- PVPC2  = 100 * l2 / (l1 + l2 + l3)          loop width
- Eccent = sqrt(1 - l2**2 / l1**2)            ellipse eccentricity
- u3                                          normal of the plane, foot cosine >= 0
- u3t                                         thigh direction cosine of u3

Refs:
- Borghese NA, Bianchi L, Lacquaniti F. Kinematic determinants of human
  locomotion. J Physiol. 1996;494(3):863-879.
- Israeli-Korn S et al. Intersegmental coordination patterns are
  differently affected in Parkinson's disease and cerebellar ataxia.
  J Neurophysiol. 2019;121(2):672-689.

Degenerate input (no variance) yields NaN ratios; they are returned as is.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, NamedTuple

import numpy as np
from scipy.stats import pearsonr

from ..config import constants as C
from .validation import InvalidInputError, as_signal, check_same_length

logger = logging.getLogger(__name__)

__all__ = [
    "ShapeMetric",
    "PrincipalComponents",
    "PrincipalAxes",
    "PearsonResult",
    "principal_components",
    "linearity_index",
    "planarity_index",
    "pvpc2",
    "eccentricity",
    "pearson",
    "principal_axes",
    "plane_normal",
    "plane_normal_thigh",
    "quantify_shape",
]


class ShapeMetric(str, Enum):
    LI = C.METRIC_LI
    PI = C.METRIC_PI
    PVPC2 = C.METRIC_PVPC2
    ECCENT = C.METRIC_ECCENT
    PEARSON = C.METRIC_PEARSON
    U = C.METRIC_U
    U3 = C.METRIC_U3
    U3T = C.METRIC_U3T


class PrincipalAxes(NamedTuple):
    u1: np.ndarray
    u2: np.ndarray
    u3: np.ndarray


class PearsonResult(NamedTuple):
    r: float
    p: float


@dataclass(frozen=True)
class PrincipalComponents:
    """PCA of the [thigh, shank, foot] elevation angles.

    - eigenvalues: (3,) variances along each component, descending
    - eigenvectors: (3,3) unit components as columns [u1, u2, u3],
      coordinates ordered [thigh, shank, foot]; u3 has a non-negative
      foot coordinate
    - mean: (3,) column means removed before the decomposition
    """

    eigenvalues: np.ndarray
    eigenvectors: np.ndarray
    mean: np.ndarray

    @property
    def axes(self) -> PrincipalAxes:
        V = self.eigenvectors
        return PrincipalAxes(u1=V[:, 0].copy(), u2=V[:, 1].copy(), u3=V[:, 2].copy())

    def _ratio(self, num: np.ndarray) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(100.0) * num / np.sum(self.eigenvalues))

    def linearity_index(self) -> float:
        return self._ratio(self.eigenvalues[0])

    def planarity_index(self) -> float:
        return self._ratio(self.eigenvalues[0] + self.eigenvalues[1])

    def pvpc2(self) -> float:
        return self._ratio(self.eigenvalues[1])

    def eccentricity(self) -> float:
        l1, l2 = self.eigenvalues[0], self.eigenvalues[1]
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.sqrt(1.0 - l2**2 / l1**2))


def _stack(thigh, shank, foot) -> np.ndarray:
    t = as_signal(thigh, "thigh")
    s = as_signal(shank, "shank")
    f = as_signal(foot, "foot")
    n = check_same_length(thigh=t, shank=s, foot=f)
    if n < 2:
        raise InvalidInputError(f"Need at least 2 samples, got {n}")
    return np.column_stack([t, s, f])


def principal_components(thigh, shank, foot) -> PrincipalComponents:
    """Eigen-decomposition of the sample covariance of the three series.

    Component signs: the largest-magnitude coordinate of u1 and u2 is
    positive; u3 is flipped so its foot coordinate is non-negative.
    """
    X = _stack(thigh, shank, foot)
    mu = X.mean(axis=0)
    Xc = X - mu
    # constant columns must centre to exact zeros
    Xc[:, np.ptp(X, axis=0) == 0] = 0.0
    cov = (Xc.T @ Xc) / (X.shape[0] - 1)
    w, V = np.linalg.eigh(cov)
    # eigh is ascending
    w = np.clip(w[::-1], 0.0, None)
    V = V[:, ::-1].copy()
    for k in range(2):
        if V[np.argmax(np.abs(V[:, k])), k] < 0:
            V[:, k] = -V[:, k]
    if V[2, 2] < 0:
        V[:, 2] = -V[:, 2]
    return PrincipalComponents(eigenvalues=w, eigenvectors=V, mean=mu)


def linearity_index(thigh, shank, foot) -> float:
    return principal_components(thigh, shank, foot).linearity_index()


def planarity_index(thigh, shank, foot) -> float:
    return principal_components(thigh, shank, foot).planarity_index()


def pvpc2(thigh, shank, foot) -> float:
    """Percentage of variance on the second component (loop width)."""
    return principal_components(thigh, shank, foot).pvpc2()


def eccentricity(thigh, shank, foot) -> float:
    return principal_components(thigh, shank, foot).eccentricity()


def pearson(thigh, shank, foot) -> PearsonResult:
    """Pearson r and two-sided p between foot and shank; thigh is validated only."""
    X = _stack(thigh, shank, foot)
    r, p = pearsonr(X[:, 2], X[:, 1])
    return PearsonResult(r=float(r), p=float(p))


def principal_axes(thigh, shank, foot) -> PrincipalAxes:
    return principal_components(thigh, shank, foot).axes


def plane_normal(thigh, shank, foot) -> np.ndarray:
    return principal_components(thigh, shank, foot).axes.u3


def plane_normal_thigh(thigh, shank, foot) -> float:
    """Thigh direction cosine of u3 ("rotation about u3")."""
    return float(plane_normal(thigh, shank, foot)[0])


_METRICS: dict[ShapeMetric, Callable[..., Any]] = {
    ShapeMetric.LI: linearity_index,
    ShapeMetric.PI: planarity_index,
    ShapeMetric.PVPC2: pvpc2,
    ShapeMetric.ECCENT: eccentricity,
    ShapeMetric.PEARSON: pearson,
    ShapeMetric.U: principal_axes,
    ShapeMetric.U3: plane_normal,
    ShapeMetric.U3T: plane_normal_thigh,
}


def _metric(metric: str | ShapeMetric) -> ShapeMetric:
    if isinstance(metric, ShapeMetric):
        return metric
    for m in ShapeMetric:
        if m.value == metric:
            return m
    raise InvalidInputError(
        f"Unknown metric {metric!r}. Expected one of {[m.value for m in ShapeMetric]}"
    )


def quantify_shape(thigh, shank, foot, metric: str | ShapeMetric = ShapeMetric.PI):
    """Compute one ISC shape metric from the sagittal elevation angles.

    Return type depends on the metric: float for LI, PI, PVPC2, Eccent and
    u3t; ``PearsonResult`` for Pearson; ``PrincipalAxes`` for U; a (3,)
    array for u3. Series need at least 2 samples; shorter input raises
    ``InvalidInputError``.
    """
    m = _metric(metric)
    out = _METRICS[m](thigh, shank, foot)
    value = out.r if isinstance(out, PearsonResult) else out
    if isinstance(value, float) and not np.isfinite(value):
        logger.warning("%s is not finite (degenerate elevation angles)", m.value)
    return out
