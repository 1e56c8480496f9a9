"""Anatomical constants, identifiers and tolerances for the ISC pipeline."""
from __future__ import annotations

# Sides
SIDE_LEFT = "L"
SIDE_RIGHT = "R"

# Segments of the kinematic chain (proximal -> distal)
SEGMENTS = ("thigh", "shank", "foot")

# Foot frame sits 90 deg from the shank in anatomical neutral
ANKLE_DORSIFLEXION_OFFSET_DEG = 90.0

# Intrinsic Euler sequence shared by all joints (flexion Z, ad/abduction X, rotation Y)
EULER_SEQ = "ZXY"

# Shape metric identifiers
METRIC_LI = "LI"
METRIC_PI = "PI"
METRIC_PVPC2 = "PVPC2"
METRIC_ECCENT = "Eccent"
METRIC_PEARSON = "Pearson"
METRIC_U = "U"
METRIC_U3 = "u3"
METRIC_U3T = "u3t"
SCALAR_METRICS = (METRIC_LI, METRIC_PI, METRIC_PVPC2, METRIC_ECCENT, METRIC_U3T)

# Numerical tolerances
ROTATION_ATOL = 1e-6
