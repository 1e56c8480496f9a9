from __future__ import annotations
import numpy as np
import pytest
from scipy.spatial.transform import Rotation as R

from isc.math.elevation import orientation_to_elevation, segment_axis
from isc.math.kinematics import joint_to_orientation
from isc.math.validation import InvalidInputError


def test_identity_is_vertical():
    alpha, beta = orientation_to_elevation(np.eye(3))
    np.testing.assert_allclose(alpha, [0.0], atol=1e-12)
    np.testing.assert_allclose(beta, [0.0], atol=1e-12)


def test_sagittal_tilt_changes_alpha_only():
    Rs = R.from_euler("z", np.array([10.0, 25.0, -40.0])[:, None], degrees=True).as_matrix()
    ea = orientation_to_elevation(Rs)
    np.testing.assert_allclose(ea.alpha, [10.0, 25.0, -40.0], atol=1e-10)
    np.testing.assert_allclose(ea.beta, 0.0, atol=1e-10)


def test_frontal_tilt_changes_beta_only():
    Rs = R.from_euler("x", np.array([15.0, -20.0])[:, None], degrees=True).as_matrix()
    ea = orientation_to_elevation(Rs)
    np.testing.assert_allclose(ea.beta, [15.0, -20.0], atol=1e-10)
    np.testing.assert_allclose(ea.alpha, 0.0, atol=1e-10)


def test_rotation_about_long_axis_is_ignored():
    Rs = R.from_euler("ZXY", [[20.0, 5.0, 0.0], [20.0, 5.0, 70.0]], degrees=True).as_matrix()
    ea = orientation_to_elevation(Rs)
    assert ea.alpha[0] == pytest.approx(ea.alpha[1], abs=1e-10)
    assert ea.beta[0] == pytest.approx(ea.beta[1], abs=1e-10)


def test_segment_axis_is_second_column():
    Rs = R.from_euler("ZXY", [[30.0, 10.0, -5.0]], degrees=True).as_matrix()
    np.testing.assert_allclose(segment_axis(Rs), Rs[:, :, 1])


def test_neutral_foot_points_forward():
    z = np.zeros((4, 3))
    out = joint_to_orientation(z, z, z, z, "L")
    ea = orientation_to_elevation(out.foot)
    np.testing.assert_allclose(ea.alpha, 90.0, atol=1e-12)
    np.testing.assert_allclose(ea.beta, 0.0, atol=1e-12)


def test_malformed_matrices_rejected():
    with pytest.raises(InvalidInputError):
        orientation_to_elevation(np.zeros((5, 3, 2)))
    with pytest.raises(InvalidInputError):
        orientation_to_elevation(np.zeros((3,)))


def test_rotation_check_is_opt_in():
    M = np.stack([np.eye(3), 2.0 * np.eye(3)])
    ea = orientation_to_elevation(M, check_rotation=False)
    assert ea.alpha.shape == (2,)
    with pytest.raises(InvalidInputError, match="not proper rotations"):
        orientation_to_elevation(M, check_rotation=True)
