from __future__ import annotations
import numpy as np
import pytest


@pytest.fixture
def gait_angles():
    """Smooth, gait-like joint angles over one cycle (101 samples, degrees)."""
    ph = np.linspace(0.0, 2.0 * np.pi, 101)
    pelvis = np.column_stack([10.0 + 2.0 * np.sin(2 * ph), 3.0 * np.sin(ph), np.zeros_like(ph)])
    hip = np.column_stack([15.0 + 25.0 * np.cos(ph), 4.0 * np.sin(ph), 5.0 * np.sin(ph + 0.3)])
    knee = np.column_stack([30.0 - 28.0 * np.cos(2 * ph + 0.4), 2.0 * np.sin(ph), 6.0 * np.cos(ph)])
    ankle = np.column_stack([5.0 + 12.0 * np.sin(ph - 0.8), 4.0 * np.cos(ph), 3.0 * np.sin(ph)])
    return {"pelvis": pelvis, "hip": hip, "knee": knee, "ankle": ankle}
