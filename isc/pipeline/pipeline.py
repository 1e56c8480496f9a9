from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

import numpy as np
import pandas as pd

from ..config.constants import SCALAR_METRICS, SEGMENTS
from ..math.elevation import ElevationAngles, orientation_to_elevation
from ..math.kinematics import SegmentOrientations, joint_to_orientation
from ..math.shape import ShapeMetric, quantify_shape
from ..math.validation import Side, normalize_side

logger = logging.getLogger(__name__)

__all__ = ["IscResult", "run_isc_pipeline", "elevation_table", "shape_summary"]


@dataclass
class IscResult:
    side: Side
    orientations: SegmentOrientations
    elevations: Dict[str, ElevationAngles]
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_samples(self) -> int:
        return int(self.orientations.thigh.shape[0])


def run_isc_pipeline(
    pelvis,
    hip,
    knee,
    ankle,
    side: str | Side,
    metrics: Optional[Iterable[str | ShapeMetric]] = None,
    check_rotation: Optional[bool] = None,
) -> IscResult:
    """Joint angles -> segment orientations -> elevation angles -> ISC metrics.

    One trial, one side. ``metrics`` defaults to the scalar metrics
    (LI, PI, PVPC2, Eccent, u3t). Metric values are computed from the
    sagittal (alpha) elevation angles of thigh, shank and foot.
    """
    s = normalize_side(side)
    orient = joint_to_orientation(pelvis, hip, knee, ankle, s)
    logger.debug("side=%s samples=%d", s.value, orient.thigh.shape[0])

    elev = {
        name: orientation_to_elevation(R_seg, check_rotation=check_rotation)
        for name, R_seg in zip(SEGMENTS, orient)
    }

    wanted = list(SCALAR_METRICS) if metrics is None else list(metrics)
    out: Dict[str, Any] = {}
    for m in wanted:
        key = m.value if isinstance(m, ShapeMetric) else str(m)
        out[key] = quantify_shape(
            elev["thigh"].alpha, elev["shank"].alpha, elev["foot"].alpha, m
        )

    scalars = {k: v for k, v in out.items() if isinstance(v, float)}
    if scalars:
        logger.info(
            "ISC %s: %s",
            s.value,
            ", ".join(f"{k}={v:.3f}" for k, v in scalars.items()),
        )
    return IscResult(side=s, orientations=orient, elevations=elev, metrics=out)


def elevation_table(result: IscResult) -> pd.DataFrame:
    """One row per sample with ``<segment>_alpha`` / ``<segment>_beta`` columns (deg)."""
    cols: Dict[str, np.ndarray] = {}
    for name in SEGMENTS:
        ea = result.elevations[name]
        cols[f"{name}_alpha"] = ea.alpha
        cols[f"{name}_beta"] = ea.beta
    df = pd.DataFrame(cols)
    df.index.name = "sample"
    return df


def shape_summary(result: IscResult) -> pd.Series:
    """Scalar metrics of ``result`` as a Series named after the side."""
    vals = {k: v for k, v in result.metrics.items() if isinstance(v, float)}
    return pd.Series(vals, name=result.side.value, dtype=float)
